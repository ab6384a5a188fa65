from dataclasses import dataclass, field

import numpy as np

from tabletop.gameobjects.texture import TextureRef

# position(3) + normal(3) + uv(2)
VERTEX_STRIDE = 8


@dataclass(frozen=True)
class Vertex:
    position: tuple[float, float, float]
    normal: tuple[float, float, float]
    tex_coords: tuple[float, float]

    def __post_init__(self):
        object.__setattr__(self, "position", tuple(float(c) for c in self.position))
        object.__setattr__(self, "normal", tuple(float(c) for c in self.normal))
        object.__setattr__(self, "tex_coords", tuple(float(c) for c in self.tex_coords))


@dataclass(frozen=True)
class Mesh:
    """
    CPU-side mesh: vertices, triangle indices and the textures it samples.

    Sequences are stored as tuples, so a mesh cannot be changed after the
    generator hands it out. Renderers read it through ``interleaved()`` and
    ``index_array()``.
    """

    vertices: tuple[Vertex, ...]
    indices: tuple[int, ...]
    textures: tuple[TextureRef, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "indices", tuple(int(i) for i in self.indices))
        object.__setattr__(self, "textures", tuple(self.textures))

        assert len(self.indices) % 3 == 0, \
            f"index count {len(self.indices)} is not a multiple of 3"
        assert all(0 <= i < len(self.vertices) for i in self.indices), \
            "index out of range for vertex buffer"

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def has_textures(self) -> bool:
        return len(self.textures) > 0

    def triangles(self):
        """Yield index triples, one per triangle."""
        for i in range(0, len(self.indices), 3):
            yield self.indices[i], self.indices[i + 1], self.indices[i + 2]

    # -------------------------------------------------
    # numpy views for upload
    # -------------------------------------------------
    @property
    def positions(self) -> np.ndarray:
        return self._column(lambda v: v.position, 3)

    @property
    def normals(self) -> np.ndarray:
        return self._column(lambda v: v.normal, 3)

    @property
    def tex_coords(self) -> np.ndarray:
        return self._column(lambda v: v.tex_coords, 2)

    def interleaved(self) -> np.ndarray:
        """
        Flat float32 buffer [pos(3), normal(3), uv(2)] per vertex.

        :return: Array of length ``vertex_count * VERTEX_STRIDE``
        :rtype: np.ndarray
        """
        vertices = np.zeros((self.vertex_count, VERTEX_STRIDE), dtype=np.float32)
        vertices[:, 0:3] = self.positions
        vertices[:, 3:6] = self.normals
        vertices[:, 6:8] = self.tex_coords
        return vertices.reshape(-1)

    def index_array(self) -> np.ndarray:
        return np.asarray(self.indices, dtype=np.uint32)

    def _column(self, attr, width: int) -> np.ndarray:
        out = np.array([attr(v) for v in self.vertices], dtype=np.float32)
        out = out.reshape(-1, width)
        out.flags.writeable = False
        return out
