"""
Materials describing how light scatters off a surface.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation.

    scattered_ray is None when the material absorbs the incoming ray.
    """
    attenuation: Color
    scattered_ray: Optional[Ray] = None

    @property
    def absorbed(self) -> bool:
        return self.scattered_ray is None


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit_record: HitRecord,
                rng: Optional[np.random.Generator] = None) -> ScatterResult:
        """Compute the attenuation and the scattered ray.

        Args:
            ray_in: The incoming ray
            hit_record: Intersection that produced the scatter event
            rng: Random source for stochastic materials

        Returns:
            ScatterResult; its scattered_ray is None if the ray is absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit_record: HitRecord,
                rng: Optional[np.random.Generator] = None) -> ScatterResult:
        point = hit_record.point
        target = point + hit_record.normal + Vec3.random_in_unit_sphere(rng)
        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(point, target - point),
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Surface roughness, clamped to [0, 1] (0 = mirror)
        """
        self.albedo = albedo
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in: Ray, hit_record: HitRecord,
                rng: Optional[np.random.Generator] = None) -> ScatterResult:
        normal = hit_record.normal
        direction = ray_in.direction.reflect(normal)
        if self.fuzz > 0:
            direction = direction + Vec3.random_in_unit_sphere(rng) * self.fuzz

        # Reflections pointing into the surface are absorbed
        if direction.dot(normal) <= 0:
            return ScatterResult(attenuation=self.albedo)

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(hit_record.point, direction),
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"
