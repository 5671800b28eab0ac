"""
Geometric shapes for the ray tracer.

Each shape implements the Hittable interface with a `hit` method. Spheres
are the only primitive; HittableList aggregates them and resolves the
nearest intersection along a ray.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, TYPE_CHECKING
import math

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        t: The ray parameter at intersection
        point: The intersection point in world space
        normal: The outward unit normal at the intersection. It is not
            flipped when the ray starts inside the object.
        material: The material at the hit point
    """
    t: float = 0.0
    point: Point3 = field(default_factory=Point3)
    normal: Vec3 = field(default_factory=Vec3)
    material: Optional[Material] = None


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            t_min: Exclusive lower bound on t (avoids self-intersection)
            t_max: Exclusive upper bound on t

        Returns:
            HitRecord if intersection found, None otherwise
        """
        pass


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere, expected to be > 0
            material: Material for shading
        """
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        Substituting P = ray(t) into (P-C)·(P-C) = r² gives
        t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0. With b = d·(O-C)
        the roots are (-b ± sqrt(b² - ac)) / a.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = ray.direction.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius

        discriminant = b * b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # A zero-length direction gives a = 0 and NaN roots, which never pass
        # the interval test
        with np.errstate(divide='ignore', invalid='ignore'):
            a = np.float64(a)
            roots = (float((-b - sqrtd) / a), float((-b + sqrtd) / a))

        # Nearer root first
        for root in roots:
            if t_min < root < t_max:
                point = ray.point_at_parameter(root)
                return HitRecord(
                    t=root,
                    point=point,
                    normal=(point - self.center) / self.radius,
                    material=self.material,
                )

        return None

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class HittableList(Hittable):
    """A collection of hittable objects."""

    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: list[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the list."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Find the closest intersection among all objects."""
        closest_hit: Optional[HitRecord] = None
        closest_so_far = t_max

        for obj in self.objects:
            hit_record = obj.hit(ray, t_min, closest_so_far)
            if hit_record is not None:
                closest_hit = hit_record
                closest_so_far = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)
