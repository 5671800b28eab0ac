"""
Scene description language parser.

Supports a YAML (or JSON) scene description with:
- Camera configuration
- Render settings
- Materials library
- Spheres with materials

Example scene file:
```yaml
camera:
  lower_left_corner: [-2, -1, -1]
  horizontal: [4, 0, 0]
  vertical: [0, 2, 0]

render:
  width: 400
  height: 200
  samples: 100
  max_depth: 50
  seed: 7

materials:
  ground:
    type: lambertian
    albedo: [0.8, 0.8, 0.0]

  gold:
    type: metal
    albedo: [0.8, 0.6, 0.2]
    fuzz: 0.3

objects:
  - type: sphere
    center: [0, -100.5, -1]
    radius: 100
    material: ground

  - type: sphere
    center: [1, 0, -1]
    radius: 0.5
    material: gold
```

The camera may instead be given as `look_from`, `look_at`, `vup`, `vfov`
and `aspect_ratio`.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal
from .renderer import RenderSettings
from .errors import RayTracerError

logger = logging.getLogger(__name__)


class SceneParseError(RayTracerError):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        if path.suffix == '.json':
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e
        else:
            import yaml
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SceneParseError(f"Invalid YAML in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.info("Loading scene from %s", filepath)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene must be a mapping, got {type(data).__name__}")

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'camera' in data:
            self._parse_camera(data['camera'])
        else:
            self.camera = Camera()

        if 'render' in data:
            self._parse_settings(data['render'])
        else:
            self.settings = RenderSettings()

        logger.debug(
            "Parsed %d material(s) and %d object(s)",
            len(self.materials), len(self.objects)
        )
        return self.objects, self.camera, self.settings

    @staticmethod
    def _require_mapping(data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"{what} must be a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def _parse_float(value: Any, what: str) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid number for {what}: {value!r}") from e

    @staticmethod
    def _parse_int(value: Any, what: str) -> int:
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid integer for {what}: {value!r}") from e

    def _parse_components(self, values: Any, what: str) -> Tuple[float, float, float]:
        x, y, z = values
        return (
            self._parse_float(x, what),
            self._parse_float(y, what),
            self._parse_float(z, what),
        )

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an {x, y, z} mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*self._parse_components(data, "vector component"))
        elif isinstance(data, dict):
            return Vec3(*self._parse_components(
                (data.get('x', 0), data.get('y', 0), data.get('z', 0)),
                "vector component"
            ))
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an {r, g, b} mapping or a #rrggbb string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*self._parse_components(data, "color component"))
        elif isinstance(data, dict):
            return Color(*self._parse_components(
                (data.get('r', 0), data.get('g', 0), data.get('b', 0)),
                "color component"
            ))
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_material(self, mat_data: Any) -> Material:
        mat_data = self._require_mapping(mat_data, "Material")
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
            return Lambertian(albedo)

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            fuzz = self._parse_float(mat_data.get('fuzz', 0.0), "fuzz")
            return Metal(albedo, fuzz)

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Any) -> None:
        """Parse materials section."""
        materials_data = self._require_mapping(materials_data, "'materials' section")
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: Any) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError(
                f"'objects' section must be a list, got {type(objects_data).__name__}"
            )
        for obj_data in objects_data:
            obj_data = self._require_mapping(obj_data, "Object")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = self._parse_float(obj_data.get('radius', 1.0), "radius")
            if not radius > 0:
                raise SceneParseError(f"Sphere radius must be positive, got {radius}")
            self.objects.add(Sphere(center, radius, material))

    def _parse_camera(self, camera_data: Any) -> None:
        """Parse camera section."""
        camera_data = self._require_mapping(camera_data, "'camera' section")
        if 'look_from' in camera_data:
            self.camera = Camera.from_look_at(
                look_from=self._parse_vec3(camera_data['look_from']),
                look_at=self._parse_vec3(camera_data.get('look_at', [0, 0, -1])),
                vup=self._parse_vec3(camera_data.get('vup', [0, 1, 0])),
                vfov=self._parse_float(camera_data.get('vfov', 90), "vfov"),
                aspect_ratio=self._parse_float(camera_data.get('aspect_ratio', 2.0), "aspect_ratio")
            )
            return

        self.camera = Camera(
            origin=self._parse_vec3(camera_data.get('origin', [0, 0, 0])),
            lower_left_corner=self._parse_vec3(camera_data.get('lower_left_corner', [-2, -1, -1])),
            horizontal=self._parse_vec3(camera_data.get('horizontal', [4, 0, 0])),
            vertical=self._parse_vec3(camera_data.get('vertical', [0, 2, 0]))
        )

    def _parse_settings(self, settings_data: Any) -> None:
        """Parse render settings section."""
        settings_data = self._require_mapping(settings_data, "'render' section")
        seed = settings_data.get('seed')
        self.settings = RenderSettings(
            width=self._parse_int(settings_data.get('width', 400), "width"),
            height=self._parse_int(settings_data.get('height', 200), "height"),
            samples_per_pixel=self._parse_int(settings_data.get('samples', 100), "samples"),
            max_depth=self._parse_int(settings_data.get('max_depth', 50), "max_depth"),
            tile_size=self._parse_int(settings_data.get('tile_size', 32), "tile_size"),
            num_threads=self._parse_int(settings_data.get('threads', 1), "threads"),
            seed=self._parse_int(seed, "seed") if seed is not None else None
        )


def load_scene(filepath: str) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
