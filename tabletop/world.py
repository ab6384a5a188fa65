# world.py
import json
import logging
import math
from pathlib import Path

from tabletop.errors import ConfigurationError
from tabletop.gameobjects.mesh import Mesh
from tabletop.gameobjects.object import GameObject
from tabletop.gameobjects.primitives import (
    create_cube_mesh,
    create_cube_pepper_mesh,
    create_debug_cube_mesh,
    create_plane_mesh,
)
from tabletop.gameobjects.round_primitives import (
    create_circle_shaker_cap_mesh,
    create_cylinder_mesh,
    create_prism_shaker_body_mesh,
    create_sphere_mesh,
)
from tabletop.gameobjects.transform import Transform

logger = logging.getLogger(__name__)

DEFAULT_TEXTURE_DIR = "textures"

SHAPE_TABLE = {
    "plane": create_plane_mesh,
    "cube": create_cube_mesh,
    "cube_pepper": create_cube_pepper_mesh,
    "shaker_cap": create_circle_shaker_cap_mesh,
    "shaker_body": create_prism_shaker_body_mesh,
    "cylinder": create_cylinder_mesh,
    "sphere": create_sphere_mesh,
    "debug_cube": create_debug_cube_mesh,
}

# disc-projected UVs, no tiling
NO_REPEAT_SHAPES = {"shaker_cap"}
UNTEXTURED_SHAPES = {"debug_cube"}

# the object shader has exactly these two lights
LIGHT_NAMES = ("key", "fill")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def check_vector(label: str, value) -> list[float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3 or not all(map(_is_number, value)):
        raise ConfigurationError(f"{label} must be a list of 3 numbers, got {value!r}")
    return [float(c) for c in value]


def check_rotation(label: str, rotation) -> dict:
    """
    Validate an object's ``{"angle", "axis"}`` rotation entry.

    :raises ConfigurationError: If the angle is not a number or the axis is not a non-zero 3-vector
    """
    if not isinstance(rotation, dict):
        raise ConfigurationError(f"Rotation of {label} must be an object with 'angle' and 'axis'")
    if not _is_number(rotation.get("angle", 0.0)):
        raise ConfigurationError(f"Rotation angle of {label} must be a number")
    axis = check_vector(f"Rotation axis of {label}", rotation.get("axis", [0.0, 1.0, 0.0]))
    if not any(axis):
        raise ConfigurationError(f"Rotation axis of {label} must be non-zero")
    return rotation


def check_lights(lights) -> dict:
    """
    Validate the level's light table. Every given light must be complete, since
    it replaces the renderer's default of the same name.

    :raises ConfigurationError: On unknown light names or missing/invalid fields
    """
    if not isinstance(lights, dict):
        raise ConfigurationError("'lights' must be an object keyed by light name")
    for name, light in lights.items():
        if name not in LIGHT_NAMES:
            raise ConfigurationError(f"Unknown light {name!r}, expected one of {LIGHT_NAMES}")
        if not isinstance(light, dict):
            raise ConfigurationError(f"Light {name!r} must be an object")
        check_vector(f"Light {name!r} position", light.get("position"))
        check_vector(f"Light {name!r} color", light.get("color"))
        if not _is_number(light.get("intensity")):
            raise ConfigurationError(f"Light {name!r} intensity must be a number")
    return lights


class MeshRegistry:
    """
    Generates each configured mesh on first request and keeps it.

    Generation may upload textures, so ``get`` must not be called before a GL
    context exists unless a custom ``loader`` is supplied.
    """

    def __init__(self, texture_dir: str = DEFAULT_TEXTURE_DIR, loader=None):
        self.texture_dir = texture_dir
        self.loader = loader
        self._entries: dict[str, dict] = {}
        self._meshes: dict[str, Mesh] = {}

    def register(self, name: str, entry: dict):
        if name in self._entries:
            raise ConfigurationError(f"Duplicate mesh name: {name}")
        shape = entry.get("shape")
        if shape not in SHAPE_TABLE:
            raise ConfigurationError(f"Unknown shape for mesh {name!r}: {shape!r}")
        if shape not in UNTEXTURED_SHAPES and not entry.get("texture"):
            raise ConfigurationError(f"Mesh {name!r} needs a texture file")
        if shape in NO_REPEAT_SHAPES and "repeat" in entry:
            raise ConfigurationError(f"Shape {shape!r} does not take a repeat factor")
        self._entries[name] = dict(entry)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def get(self, name: str) -> Mesh:
        """
        Return the mesh registered under ``name``, generating it if needed.

        :param name: The name of the mesh entry
        :raises ConfigurationError: If the name is unknown or its parameters are invalid
        """
        if name not in self._meshes:
            if name not in self._entries:
                raise ConfigurationError(f"Unknown mesh asset: {name}")
            self._meshes[name] = self._build(name, self._entries[name])
        return self._meshes[name]

    def _build(self, name: str, entry: dict) -> Mesh:
        shape = entry["shape"]
        generator = SHAPE_TABLE[shape]
        params = entry.get("params", {})
        if not isinstance(params, dict):
            raise ConfigurationError(f"'params' of mesh {name!r} must be an object")

        logger.info("Building mesh %s (%s)", name, shape)
        if shape in UNTEXTURED_SHAPES:
            return generator()

        args = [self.texture_dir, entry["texture"], bool(entry.get("gamma", False))]
        if shape not in NO_REPEAT_SHAPES:
            args.append(entry.get("repeat", 1.0))

        try:
            return generator(*args, loader=self.loader, **params)
        except TypeError as err:
            raise ConfigurationError(f"Bad parameters for mesh {name!r}: {err}") from err


class World:
    def __init__(self, level_path: str | None = None, loader=None):
        """
        Scene loaded from a JSON level file.

        :param level_path: Path to the level file
        :param loader: Texture acquisition callable handed to every generator
        """
        self.loader = loader
        self.meshes = MeshRegistry(loader=loader)
        self.placements: list[dict] = []
        self.objects: list[GameObject] = []
        self.lights: dict[str, dict] = {}
        if level_path:
            self.load_level(level_path)

    def load_level(self, level_path: str):
        """
        Read mesh definitions, placements and lights. Nothing is generated yet.

        :param level_path: Path to the level file
        :raises FileNotFoundError: If the file does not exist
        :raises ConfigurationError: If the file content is malformed
        """
        path = Path(level_path)
        if not path.exists():
            raise FileNotFoundError(f"Level file not found: {level_path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as err:
                raise ConfigurationError(f"Level file is not valid JSON: {err}") from err

        texture_dir = data.get("texture_dir", DEFAULT_TEXTURE_DIR)
        # relative texture dirs resolve against the level file
        texture_path = Path(texture_dir)
        if not texture_path.is_absolute():
            texture_path = path.parent / texture_path
        self.meshes = MeshRegistry(texture_dir=str(texture_path), loader=self.loader)

        for entry in data.get("meshes", []):
            name = entry.get("name")
            if not name:
                raise ConfigurationError("Mesh entry without a name")
            self.meshes.register(name, entry)

        self.placements = []
        for entry in data.get("objects", []):
            mesh_name = entry.get("mesh")
            if mesh_name not in self.meshes:
                raise ConfigurationError(f"Object refers to unknown mesh: {mesh_name!r}")
            label = repr(mesh_name)
            check_rotation(label, entry.get("rotation", {}))
            for key in ("position", "scale", "color"):
                if key in entry:
                    check_vector(f"{key.capitalize()} of {label}", entry[key])
            self.placements.append(entry)

        self.lights = check_lights(data.get("lights", {}))
        logger.info(
            "Loaded level %s: %d meshes, %d objects",
            level_path, len(self.meshes.names), len(self.placements),
        )

    def build(self) -> list[GameObject]:
        """
        Generate every placed mesh and create the scene objects.

        Must run after the GL context exists when the default texture loader
        is used.
        """
        self.objects = []
        for entry in self.placements:
            rotation = entry.get("rotation", {})
            transform = Transform(
                position=entry.get("position", [0, 0, 0]),
                rotation_degrees=rotation.get("angle", 0.0),
                rotation_axis=rotation.get("axis", [0, 1, 0]),
                scale=entry.get("scale", [1, 1, 1]),
            )
            mesh = self.meshes.get(entry["mesh"])
            self.objects.append(
                GameObject(
                    name=entry["mesh"],
                    mesh=mesh,
                    transform=transform,
                    color=entry.get("color", [1.0, 1.0, 1.0]),
                )
            )
        return self.objects
