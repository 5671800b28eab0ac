"""Tests for the scene description parser."""

import json
from pathlib import Path

import pytest

from raysphere.vec3 import Vec3, Point3, Color
from raysphere.camera import Camera
from raysphere.shapes import Sphere
from raysphere.materials import Lambertian, Metal
from raysphere.renderer import RenderSettings
from raysphere.errors import RayTracerError
from raysphere.scene_parser import SceneParser, SceneParseError, load_scene, parse_scene

SCENES_DIR = Path(__file__).resolve().parent.parent / "scenes"


def minimal_scene(**overrides):
    data = {
        'materials': {
            'red': {'type': 'lambertian', 'albedo': [0.8, 0.3, 0.3]},
        },
        'objects': [
            {'type': 'sphere', 'center': [0, 0, -1], 'radius': 0.5, 'material': 'red'},
        ],
    }
    data.update(overrides)
    return data


class TestParseDict:
    """Test parsing from dictionaries."""

    def test_minimal_scene(self):
        world, camera, settings = parse_scene(minimal_scene())

        assert len(world) == 1
        sphere = world.objects[0]
        assert isinstance(sphere, Sphere)
        assert sphere.center == Point3(0, 0, -1)
        assert sphere.radius == 0.5
        assert isinstance(sphere.material, Lambertian)
        assert sphere.material.albedo == Color(0.8, 0.3, 0.3)

    def test_defaults(self):
        world, camera, settings = parse_scene({})

        assert len(world) == 0
        assert camera.lower_left_corner == Camera().lower_left_corner
        assert settings == RenderSettings()

    def test_metal_fuzz_clamped(self):
        data = minimal_scene(materials={'m': {'type': 'metal', 'albedo': [1, 1, 1], 'fuzz': 2.0}})
        data['objects'][0]['material'] = 'm'
        world, _, _ = parse_scene(data)

        material = world.objects[0].material
        assert isinstance(material, Metal)
        assert material.fuzz == 1.0

    def test_inline_material(self):
        data = minimal_scene()
        data['objects'][0]['material'] = {'type': 'metal', 'albedo': '#ff0000', 'fuzz': 0.1}
        world, _, _ = parse_scene(data)

        material = world.objects[0].material
        assert isinstance(material, Metal)
        assert material.albedo == Color(1, 0, 0)

    def test_shared_material_instance(self):
        data = minimal_scene()
        data['objects'].append({'center': [1, 0, -1], 'radius': 0.5, 'material': 'red'})
        world, _, _ = parse_scene(data)

        assert world.objects[0].material is world.objects[1].material

    def test_vec3_mapping(self):
        data = minimal_scene()
        data['objects'][0]['center'] = {'x': 1, 'y': 2}
        world, _, _ = parse_scene(data)
        assert world.objects[0].center == Vec3(1, 2, 0)

    def test_viewport_camera(self):
        data = minimal_scene(camera={
            'lower_left_corner': [-1, -1, -1],
            'horizontal': [2, 0, 0],
            'vertical': [0, 2, 0],
        })
        _, camera, _ = parse_scene(data)
        assert camera.get_ray(0.5, 0.5).direction == Vec3(0, 0, -1)
        assert camera.origin == Point3(0, 0, 0)

    def test_look_at_camera(self):
        data = minimal_scene(camera={
            'look_from': [0, 0, 0],
            'look_at': [0, 0, -1],
            'vfov': 90,
            'aspect_ratio': 2.0,
        })
        _, camera, _ = parse_scene(data)
        assert camera.lower_left_corner == Point3(-2, -1, -1)

    def test_render_settings(self):
        data = minimal_scene(render={
            'width': 64, 'height': 32, 'samples': 8, 'max_depth': 10, 'seed': 99,
        })
        _, _, settings = parse_scene(data)
        assert settings.width == 64
        assert settings.height == 32
        assert settings.samples_per_pixel == 8
        assert settings.max_depth == 10
        assert settings.seed == 99


class TestParseErrors:
    """Test malformed scene descriptions."""

    def test_unknown_material_type(self):
        with pytest.raises(SceneParseError, match="Unknown material type"):
            parse_scene(minimal_scene(materials={'x': {'type': 'dielectric'}}))

    def test_unknown_material_reference(self):
        data = minimal_scene()
        data['objects'][0]['material'] = 'missing'
        with pytest.raises(SceneParseError, match="Unknown material"):
            parse_scene(data)

    def test_unknown_object_type(self):
        data = minimal_scene(objects=[{'type': 'plane'}])
        with pytest.raises(SceneParseError, match="Unknown object type"):
            parse_scene(data)

    def test_bad_vector(self):
        data = minimal_scene()
        data['objects'][0]['center'] = [1, 2]
        with pytest.raises(SceneParseError, match="3 components"):
            parse_scene(data)

    def test_bad_color_string(self):
        data = minimal_scene(materials={'x': {'type': 'lambertian', 'albedo': 'red'}})
        with pytest.raises(SceneParseError):
            parse_scene(data)

    @pytest.mark.parametrize("radius", [0, -1.5])
    def test_non_positive_radius(self, radius):
        data = minimal_scene()
        data['objects'][0]['radius'] = radius
        with pytest.raises(SceneParseError, match="radius"):
            parse_scene(data)

    def test_non_numeric_vector_component(self):
        data = minimal_scene()
        data['objects'][0]['center'] = ['a', 0, 0]
        with pytest.raises(SceneParseError, match="vector component"):
            parse_scene(data)

    def test_non_numeric_color_component(self):
        data = minimal_scene(materials={'red': {'albedo': {'r': 'lots'}}})
        with pytest.raises(SceneParseError, match="color component"):
            parse_scene(data)

    @pytest.mark.parametrize("radius", ['big', None, [1]])
    def test_non_numeric_radius(self, radius):
        data = minimal_scene()
        data['objects'][0]['radius'] = radius
        with pytest.raises(SceneParseError, match="radius"):
            parse_scene(data)

    def test_non_numeric_fuzz(self):
        data = minimal_scene(materials={'red': {'type': 'metal', 'fuzz': 'rough'}})
        with pytest.raises(SceneParseError, match="fuzz"):
            parse_scene(data)

    @pytest.mark.parametrize("key", ['width', 'samples', 'seed', 'threads'])
    def test_non_numeric_render_setting(self, key):
        with pytest.raises(SceneParseError, match=key):
            parse_scene(minimal_scene(render={key: 'many'}))

    @pytest.mark.parametrize("section", ['materials', 'camera', 'render'])
    @pytest.mark.parametrize("value", [None, [1, 2], 'text'])
    def test_section_not_a_mapping(self, section, value):
        with pytest.raises(SceneParseError, match="mapping"):
            parse_scene(minimal_scene(**{section: value}))

    @pytest.mark.parametrize("value", [None, {'a': 1}, 'text'])
    def test_objects_not_a_list(self, value):
        with pytest.raises(SceneParseError, match="list"):
            parse_scene(minimal_scene(objects=value))

    def test_material_entry_not_a_mapping(self):
        with pytest.raises(SceneParseError, match="Material must be a mapping"):
            parse_scene(minimal_scene(materials={'red': 'lambertian'}))

    @pytest.mark.parametrize("entry", ['sphere', 3, None])
    def test_object_entry_not_a_mapping(self, entry):
        with pytest.raises(SceneParseError, match="Object must be a mapping"):
            parse_scene(minimal_scene(objects=[entry]))

    def test_scene_not_a_mapping(self):
        with pytest.raises(SceneParseError, match="mapping"):
            parse_scene(['not', 'a', 'scene'])

    def test_is_raytracer_error(self):
        with pytest.raises(RayTracerError):
            parse_scene(minimal_scene(objects=[{'type': 'cube'}]))


class TestParseFile:
    """Test loading scene files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError, match="not found"):
            load_scene(str(tmp_path / "nope.yaml"))

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(minimal_scene()))

        world, _, _ = load_scene(str(path))
        assert len(world) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text("{not json")
        with pytest.raises(SceneParseError, match="Invalid JSON"):
            load_scene(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("objects: [unclosed")
        with pytest.raises(SceneParseError, match="Invalid YAML"):
            load_scene(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(SceneParseError, match="mapping"):
            load_scene(str(path))

    def test_bundled_four_spheres(self):
        world, camera, settings = load_scene(str(SCENES_DIR / "four_spheres.yaml"))

        assert len(world) == 4
        assert settings.width == 400
        assert settings.height == 200
        assert camera.horizontal == Vec3(4, 0, 0)

        fuzzes = sorted(s.material.fuzz for s in world if isinstance(s.material, Metal))
        assert fuzzes == [0.3, 1.0]
        ground = max(world, key=lambda s: s.radius)
        assert ground.center == Point3(0, -100.5, -1)

    def test_parser_instance_reusable_state(self):
        parser = SceneParser()
        parser.parse_dict(minimal_scene())
        assert 'red' in parser.materials
        assert len(parser.objects) == 1
