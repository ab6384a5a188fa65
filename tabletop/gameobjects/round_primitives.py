"""
Round primitives: shaker cap, octagonal shaker body, cylinder and sphere.

Rings of angular samples are laid out with x = r*cos(a), z = r*sin(a), so
increasing angle runs clockwise seen from +Y. Fans and quads below are ordered
to stay counter-clockwise from outside.
"""
import math

from tabletop.gameobjects.mesh import Mesh, Vertex
from tabletop.gameobjects.primitives import (
    check_count,
    check_length,
    check_repeat_factor,
    log_generated,
)
from tabletop.gameobjects.texture import acquire_diffuse

PRISM_SIDES = 8

UP = (0.0, 1.0, 0.0)
DOWN = (0.0, -1.0, 0.0)

# Caps sample one texel so they render in a single flat colour.
FLAT_CAP_UV = (0.5, 0.5)


def _ring_point(radius: float, angle: float) -> tuple[float, float]:
    return radius * math.cos(angle), radius * math.sin(angle)


def _radial_normal(x: float, z: float) -> tuple[float, float, float]:
    length = math.hypot(x, z)
    return x / length, 0.0, z / length


# =========================
# Shaker cap
# =========================


def create_circle_shaker_cap_mesh(directory: str, file_name: str, gamma: bool = False, *,
                                  segments: int = 32, radius: float = 0.5,
                                  cap_height: float = 0.2, loader=None) -> Mesh:
    """
    Short closed disc used as a shaker lid.

    Each ring holds ``segments`` rim samples followed by a closing vertex that
    repeats angle 0. The closing vertex anchors that face's triangle fan, so
    no separate centre vertex is allocated. UVs project x/z straight into the
    texture (``u = x*0.5 + 0.5``), which is why there is no repeat factor.

    :param directory: Texture directory
    :param file_name: Texture file inside ``directory``
    :param gamma: Upload the texture as sRGB
    :param segments: Rim samples per ring
    :param radius: Disc radius
    :param cap_height: Height of the top ring above y = 0
    :param loader: Texture acquisition callable, defaults to ``load_texture``
    """
    n = check_count("segments", segments, 3)
    radius = check_length("radius", radius)
    cap_height = check_length("cap_height", cap_height)

    angle_increment = 360.0 / n
    vertices = []

    for y, normal in ((cap_height, UP), (0.0, DOWN)):
        for i in range(n):
            x, z = _ring_point(radius, math.radians(angle_increment * i))
            vertices.append(Vertex((x, y, z), normal, (x * 0.5 + 0.5, z * 0.5 + 0.5)))

        # closing vertex, angle 0 again
        x, z = _ring_point(radius, 0.0)
        vertices.append(Vertex((x, y, z), normal, (x * 0.5 + 0.5, z * 0.5 + 0.5)))

    top_anchor = n
    bottom_start = n + 1
    bottom_anchor = bottom_start + n
    indices = []

    # top face
    for i in range(n):
        indices += [top_anchor, (i + 1) % n, i]

    # bottom face
    for i in range(n):
        indices += [bottom_anchor, bottom_start + i, bottom_start + (i + 1) % n]

    # side wall
    for i in range(n):
        nxt = (i + 1) % n
        indices += [i, nxt, bottom_start + nxt]
        indices += [i, bottom_start + nxt, bottom_start + i]

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("shaker cap", Mesh(vertices, indices, [texture]))


# =========================
# Shaker body
# =========================


def create_prism_shaker_body_mesh(directory: str, file_name: str, gamma: bool = False,
                                  texture_repeat_factor: float = 1.0, *,
                                  radius: float = 0.5, height: float = 1.0,
                                  loader=None) -> Mesh:
    """
    Octagonal prism standing on y = 0 with the label wrapped around its sides.

    Side vertices come in (bottom, top) pairs, so vertex ``2*i`` is the bottom
    of side ``i`` and ``2*i + 1`` its top. U advances by ``repeat/8`` per side.
    """
    r = check_repeat_factor(texture_repeat_factor)
    radius = check_length("radius", radius)
    height = check_length("height", height)

    angle_increment = 360.0 / PRISM_SIDES
    u_increment = r / PRISM_SIDES
    vertices = []

    for i in range(PRISM_SIDES):
        x, z = _ring_point(radius, math.radians(angle_increment * i))
        normal = _radial_normal(x, z)
        u = u_increment * i
        for y in (0.0, height):
            vertices.append(Vertex((x, y, z), normal, (u, y / height * r)))

    bottom_center = len(vertices)
    vertices.append(Vertex((0.0, 0.0, 0.0), DOWN, (0.5, 0.5)))
    top_center = len(vertices)
    vertices.append(Vertex((0.0, height, 0.0), UP, (0.5, 0.5)))

    indices = []
    for i in range(PRISM_SIDES):
        bottom, top = i * 2, i * 2 + 1
        next_bottom, next_top = ((i + 1) % PRISM_SIDES) * 2, ((i + 1) % PRISM_SIDES) * 2 + 1
        indices += [bottom, next_top, next_bottom]
        indices += [bottom, top, next_top]

    for i in range(PRISM_SIDES):
        indices += [i * 2, ((i + 1) % PRISM_SIDES) * 2, bottom_center]

    for i in range(PRISM_SIDES):
        indices += [top_center, 1 + ((i + 1) % PRISM_SIDES) * 2, 1 + i * 2]

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("shaker body", Mesh(vertices, indices, [texture]))


# =========================
# Cylinder
# =========================


def create_cylinder_mesh(directory: str, file_name: str, gamma: bool = False,
                         texture_repeat_factor: float = 1.0, *,
                         sector_count: int = 36, radius: float = 0.5,
                         half_height: float = 0.5, loader=None) -> Mesh:
    """
    Smooth cylinder centred on the origin, label on the side, flat-coloured caps.

    Layout:
      * ``2*(sector_count + 1)`` side vertices, (top, bottom) per sector, the
        last pair being the closing sector at angle 0 with UV (0, 0)
      * top cap centre followed by ``sector_count`` perimeter vertices
      * bottom cap centre followed by ``sector_count`` perimeter vertices

    :param directory: Texture directory
    :param file_name: Texture file inside ``directory``
    :param gamma: Upload the texture as sRGB
    :param texture_repeat_factor: Label repeats around the circumference
    :param sector_count: Angular resolution
    :param radius: Cylinder radius
    :param half_height: Caps sit at +/- half_height
    :param loader: Texture acquisition callable, defaults to ``load_texture``
    """
    r = check_repeat_factor(texture_repeat_factor)
    n = check_count("sector_count", sector_count, 3)
    radius = check_length("radius", radius)
    half_height = check_length("half_height", half_height)

    sector_step = 2 * math.pi / n
    vertices = []

    # ---------- side ----------
    for i in range(n):
        x, z = _ring_point(radius, i * sector_step)
        normal = _radial_normal(x, z)
        u = i / n * r
        vertices.append(Vertex((x,  half_height, z), normal, (u, 1.0)))
        vertices.append(Vertex((x, -half_height, z), normal, (u, 0.0)))

    # closing sector sits on sector 0 but samples (0, 0)
    x, z = _ring_point(radius, 0.0)
    normal = _radial_normal(x, z)
    vertices.append(Vertex((x,  half_height, z), normal, (0.0, 0.0)))
    vertices.append(Vertex((x, -half_height, z), normal, (0.0, 0.0)))

    indices = []
    for i in range(n - 1):
        k1 = i * 2
        k2 = k1 + 1
        indices += [k1, k1 + 2, k2]
        indices += [k2, k1 + 2, k2 + 2]

    # last sector joins back onto sector 0
    k1 = (n - 1) * 2
    k2 = k1 + 1
    indices += [k1, 0, k2]
    indices += [k2, 0, 1]

    # ---------- caps ----------
    for y, normal in ((half_height, UP), (-half_height, DOWN)):
        center = len(vertices)
        vertices.append(Vertex((0.0, y, 0.0), normal, FLAT_CAP_UV))
        for i in range(n):
            x, z = _ring_point(radius, i * sector_step)
            vertices.append(Vertex((x, y, z), normal, FLAT_CAP_UV))

        for i in range(n):
            rim = center + 1 + i
            next_rim = center + 1 + (i + 1) % n
            if y > 0:
                indices += [center, next_rim, rim]
            else:
                indices += [center, rim, next_rim]

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("cylinder", Mesh(vertices, indices, [texture]))


# =========================
# Sphere
# =========================


def create_sphere_mesh(directory: str, file_name: str, gamma: bool = False,
                       texture_repeat_factor: float = 1.0, *,
                       stacks: int = 36, slices: int = 18, radius: float = 0.5,
                       loader=None) -> Mesh:
    """
    UV sphere centred on the origin with its poles on the Z axis.

    Rows run from +90 to -90 degrees latitude, each holding ``slices + 1``
    vertices so the texture seam has its own column. The first and last bands
    only emit the triangle that does not touch the collapsed pole row twice.
    """
    r = check_repeat_factor(texture_repeat_factor)
    stacks = check_count("stacks", stacks, 2)
    slices = check_count("slices", slices, 3)
    radius = check_length("radius", radius)

    vertices = []
    for i in range(stacks + 1):
        stack_angle = math.pi / 2 - i * math.pi / stacks
        xy = radius * math.cos(stack_angle)
        z = radius * math.sin(stack_angle)

        for j in range(slices + 1):
            slice_angle = j * 2 * math.pi / slices
            x = xy * math.cos(slice_angle)
            y = xy * math.sin(slice_angle)
            length = math.sqrt(x * x + y * y + z * z)
            normal = (x / length, y / length, z / length)
            s = j / slices
            t = i / stacks
            vertices.append(Vertex((x, y, z), normal, (s * r, t * r)))

    indices = []
    for i in range(stacks):
        k1 = i * (slices + 1)
        k2 = k1 + slices + 1
        for j in range(slices):
            if i != 0:
                indices += [k1 + j, k2 + j, k1 + j + 1]
            if i != stacks - 1:
                indices += [k1 + j + 1, k2 + j, k2 + j + 1]

    texture = acquire_diffuse(directory, file_name, gamma, loader)
    return log_generated("sphere", Mesh(vertices, indices, [texture]))
