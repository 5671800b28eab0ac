"""Built-in scenes."""

from __future__ import annotations
from .vec3 import Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal


def create_canonical_scene() -> HittableList:
    """Four spheres: diffuse center, large ground, fuzzy gold and rough silver metals."""
    world = HittableList()

    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.8, 0.3, 0.3))))
    world.add(Sphere(Point3(0, -100.5, -1), 100, Lambertian(Color(0.8, 0.8, 0.0))))
    world.add(Sphere(Point3(1, 0, -1), 0.5, Metal(Color(0.8, 0.6, 0.2), 0.3)))
    world.add(Sphere(Point3(-1, 0, -1), 0.5, Metal(Color(0.8, 0.8, 0.8), 1.0)))

    return world


def create_canonical_camera() -> Camera:
    return Camera()

