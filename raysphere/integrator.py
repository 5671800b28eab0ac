"""
Color integrator: traces a camera ray through the scene.

A path bounces off materials until it escapes to the sky, is absorbed, or
reaches the depth limit. The color returned is the sky color seen at the end
of the path multiplied by every attenuation collected on the way.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from .vec3 import Color
from .ray import Ray
from .shapes import Hittable

# Lower bound on t for secondary rays, avoids shadow acne
T_MIN = 0.001
MAX_DEPTH = 50

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Color:
    """Vertical gradient from white (looking down) to sky blue (looking up)."""
    unit_direction = ray.direction.unit_vector()
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * WHITE + t * SKY_BLUE


def get_color(
    ray: Ray,
    world: Hittable,
    depth: int = 0,
    rng: Optional[np.random.Generator] = None,
    max_depth: int = MAX_DEPTH
) -> Color:
    """Compute the color carried back along a ray.

    Equivalent to the recursion
    ``attenuation * get_color(scattered, world, depth + 1)``, unrolled into a
    loop that keeps the running attenuation product.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Number of bounces already taken by this path
        rng: Random source passed to material scattering
        max_depth: Bounce count at which the path returns black

    Returns:
        The linear (pre-gamma) color for this ray
    """
    throughput = Color(1.0, 1.0, 1.0)

    while True:
        hit_record = world.hit(ray, T_MIN, float('inf'))

        if hit_record is None:
            return throughput * sky_color(ray)

        if hit_record.material is None:
            # No material, shade by normal
            return throughput * (hit_record.normal + Color(1, 1, 1)) * 0.5

        result = hit_record.material.scatter(ray, hit_record, rng)
        if depth >= max_depth or result.scattered_ray is None:
            return Color(0.0, 0.0, 0.0)

        throughput = throughput * result.attenuation
        ray = result.scattered_ray
        depth += 1
