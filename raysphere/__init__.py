"""
raysphere - A small Python path tracer for sphere scenes

Renders spheres with diffuse and metal materials using:
- Monte Carlo anti-aliasing
- Recursive light-path sampling with a sky gradient background
- Gamma 2 encoded PPM/PNG output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color, dot, unit_vector, reflect
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, Lambertian, Metal, ScatterResult
from .camera import Camera
from .integrator import get_color, sky_color, MAX_DEPTH, T_MIN
from .image import Pixel, ImageBuffer
from .errors import RayTracerError, OutsideImageBufferError
from .renderer import Renderer, RenderSettings
from .scenes import create_canonical_scene, create_canonical_camera
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
