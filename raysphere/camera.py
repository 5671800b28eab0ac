"""
Camera module for generating primary rays.

The camera is a pinhole looking through a planar viewport spanned by
`horizontal` and `vertical` from `lower_left_corner`.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera with a fixed planar viewport."""

    def __init__(
        self,
        origin: Point3 = None,
        lower_left_corner: Point3 = None,
        horizontal: Vec3 = None,
        vertical: Vec3 = None
    ):
        """Create a camera.

        The defaults give a 2:1 viewport one unit in front of the origin,
        looking down -Z.

        Args:
            origin: Eye position
            lower_left_corner: Lower-left corner of the viewport
            horizontal: Full width of the viewport
            vertical: Full height of the viewport
        """
        self.origin = origin if origin is not None else Point3(0, 0, 0)
        self.lower_left_corner = (
            lower_left_corner if lower_left_corner is not None else Point3(-2, -1, -1)
        )
        self.horizontal = horizontal if horizontal is not None else Vec3(4, 0, 0)
        self.vertical = vertical if vertical is not None else Vec3(0, 2, 0)

    @classmethod
    def from_look_at(
        cls,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = None,
        vfov: float = 90.0,
        aspect_ratio: float = 2.0
    ) -> Camera:
        """Build the viewport from a position, a target and a field of view.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
        """
        vup = vup if vup is not None else Vec3(0, 1, 0)
        half_height = math.tan(math.radians(vfov) / 2)
        half_width = aspect_ratio * half_height

        # Orthonormal camera basis
        w = (look_from - look_at).unit_vector()  # Points backward from camera
        u = vup.cross(w).unit_vector()           # Points right
        v = w.cross(u)                           # Points up

        return cls(
            origin=look_from,
            lower_left_corner=look_from - u * half_width - v * half_height - w,
            horizontal=u * (2 * half_width),
            vertical=v * (2 * half_height),
        )

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through the image plane.

        Args:
            u: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            v: Vertical coordinate [0, 1] (0 = bottom, 1 = top)

        Returns:
            A ray from the camera origin with an unnormalized direction.
            Coordinates outside [0, 1] extrapolate past the viewport.
        """
        direction = (
            self.lower_left_corner
            + self.horizontal * u
            + self.vertical * v
            - self.origin
        )
        return Ray(self.origin, direction)

    def __repr__(self) -> str:
        return (f"Camera(origin={self.origin}, "
                f"looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})")
