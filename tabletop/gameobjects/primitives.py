"""
Flat-faced primitives: the table plane and the cube family.

Every generator returns an immutable ``Mesh``. Textured generators call
texture acquisition exactly once; the debug cube never does.
"""
import logging
import math
import numbers

from tabletop.errors import ConfigurationError
from tabletop.gameobjects.mesh import Mesh, Vertex
from tabletop.gameobjects.texture import acquire_diffuse

logger = logging.getLogger(__name__)


# =========================
# Parameter checks
# =========================


def check_repeat_factor(texture_repeat_factor: float) -> float:
    if isinstance(texture_repeat_factor, bool) or not isinstance(texture_repeat_factor, numbers.Real):
        raise ConfigurationError(
            f"texture_repeat_factor must be a number, got {texture_repeat_factor!r}"
        )
    value = float(texture_repeat_factor)
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(
            f"texture_repeat_factor must be a positive finite number, got {texture_repeat_factor!r}"
        )
    return value


def check_count(name: str, value: int, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value


def check_length(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    length = float(value)
    if not math.isfinite(length) or length <= 0.0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")
    return length


def log_generated(shape: str, mesh: Mesh) -> Mesh:
    logger.debug(
        "Generated %s mesh: %d vertices, %d triangles, %d textures",
        shape, mesh.vertex_count, mesh.triangle_count, len(mesh.textures),
    )
    return mesh


# =========================
# Plane
# =========================


def create_plane_mesh(directory: str, file_name: str, gamma: bool = False,
                      texture_repeat_factor: float = 1.0, *, loader=None) -> Mesh:
    """
    Unit quad in the XZ plane facing +Y, used for the table top.

    :param directory: Texture directory
    :param file_name: Texture file inside ``directory``
    :param gamma: Upload the texture as sRGB
    :param texture_repeat_factor: How many times the texture tiles across the quad
    :param loader: Texture acquisition callable, defaults to ``load_texture``
    """
    r = check_repeat_factor(texture_repeat_factor)

    up = (0.0, 1.0, 0.0)
    vertices = [
        Vertex((-0.5, 0.0,  0.5), up, (0.0, r)),
        Vertex(( 0.5, 0.0,  0.5), up, (r,   r)),
        Vertex(( 0.5, 0.0, -0.5), up, (r,   0.0)),
        Vertex((-0.5, 0.0, -0.5), up, (0.0, 0.0)),
    ]
    indices = [
        0, 1, 3,
        1, 2, 3,
    ]

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("plane", Mesh(vertices, indices, [texture]))


# =========================
# Cube family
# =========================

# Four corners per face, no sharing, so every face keeps a flat normal.
CUBE_FACES = (
    # ---------- Bottom (-Y) 0 1 2 3 ----------
    ((0.0, -1.0, 0.0), ((-0.5, -0.5, -0.5), ( 0.5, -0.5, -0.5), ( 0.5, -0.5,  0.5), (-0.5, -0.5,  0.5))),
    # ---------- Top (+Y) 4 5 6 7 ----------
    ((0.0,  1.0, 0.0), ((-0.5,  0.5, -0.5), ( 0.5,  0.5, -0.5), ( 0.5,  0.5,  0.5), (-0.5,  0.5,  0.5))),
    # ---------- Front (+Z) 8 9 10 11 ----------
    ((0.0, 0.0,  1.0), ((-0.5, -0.5,  0.5), ( 0.5, -0.5,  0.5), ( 0.5,  0.5,  0.5), (-0.5,  0.5,  0.5))),
    # ---------- Back (-Z) 12 13 14 15 ----------
    ((0.0, 0.0, -1.0), ((-0.5, -0.5, -0.5), ( 0.5, -0.5, -0.5), ( 0.5,  0.5, -0.5), (-0.5,  0.5, -0.5))),
    # ---------- Left (-X) 16 17 18 19 ----------
    ((-1.0, 0.0, 0.0), ((-0.5, -0.5, -0.5), (-0.5, -0.5,  0.5), (-0.5,  0.5,  0.5), (-0.5,  0.5, -0.5))),
    # ---------- Right (+X) 20 21 22 23 ----------
    (( 1.0, 0.0, 0.0), (( 0.5, -0.5, -0.5), ( 0.5, -0.5,  0.5), ( 0.5,  0.5,  0.5), ( 0.5,  0.5, -0.5))),
)

BOTTOM, TOP, FRONT, BACK, LEFT, RIGHT = range(6)

# Draw order front, back, left, right, top, bottom; each pair winds outward.
CUBE_INDICES = (
    # Front
    8, 9, 10,
    10, 11, 8,
    # Back
    14, 13, 12,
    12, 15, 14,
    # Left
    16, 17, 18,
    18, 19, 16,
    # Right
    20, 23, 22,
    22, 21, 20,
    # Top
    6, 5, 4,
    4, 7, 6,
    # Bottom
    2, 3, 0,
    0, 1, 2,
)


def _full_wrap_uvs(r: float):
    return ((0.0, 0.0), (r, 0.0), (r, r), (0.0, r))


def _cube_vertices(face_uvs) -> list[Vertex]:
    vertices = []
    for (normal, corners), uvs in zip(CUBE_FACES, face_uvs):
        for corner, uv in zip(corners, uvs):
            vertices.append(Vertex(corner, normal, uv))
    return vertices


def create_cube_mesh(directory: str, file_name: str, gamma: bool = False,
                     texture_repeat_factor: float = 1.0, *, loader=None) -> Mesh:
    """
    Unit cube centred on the origin with the texture on all six faces.

    :param directory: Texture directory
    :param file_name: Texture file inside ``directory``
    :param gamma: Upload the texture as sRGB
    :param texture_repeat_factor: Tiles per face edge
    :param loader: Texture acquisition callable, defaults to ``load_texture``
    """
    r = check_repeat_factor(texture_repeat_factor)
    vertices = _cube_vertices([_full_wrap_uvs(r)] * len(CUBE_FACES))

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("cube", Mesh(vertices, CUBE_INDICES, [texture]))


def create_cube_pepper_mesh(directory: str, file_name: str, gamma: bool = False,
                            texture_repeat_factor: float = 1.0, *, loader=None) -> Mesh:
    """
    Cube with a printed label on the left and right faces only.

    Bottom, top, front and back put all four corners on texel (0, 0), so they
    render as the label's corner colour instead of a copy of the label.
    """
    r = check_repeat_factor(texture_repeat_factor)

    flat = ((0.0, 0.0),) * 4
    face_uvs = [flat] * len(CUBE_FACES)
    face_uvs[LEFT] = ((r, 0.0), (0.0, 0.0), (0.0, r), (r, r))
    face_uvs[RIGHT] = _full_wrap_uvs(r)
    vertices = _cube_vertices(face_uvs)

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("pepper cube", Mesh(vertices, CUBE_INDICES, [texture]))


def create_debug_cube_mesh() -> Mesh:
    """Untextured unit cube for light markers and other debug drawing."""
    vertices = _cube_vertices([_full_wrap_uvs(1.0)] * len(CUBE_FACES))
    return log_generated("debug cube", Mesh(vertices, CUBE_INDICES, []))
