import ctypes

from OpenGL import GL

from tabletop.gameobjects.mesh import VERTEX_STRIDE, Mesh


class GPUMesh:
    def __init__(self, mesh: Mesh):
        """
        Upload a generated mesh into a VAO with vertex and index buffers.

        Layout: position (location 0), normal (location 1), uv (location 2).

        :param mesh: The mesh to upload; it is only read
        """
        self.mesh = mesh
        self.index_count = len(mesh.indices)
        # sentinel handles are left out so the shader falls back to colour
        self.texture_ids = [t.handle for t in mesh.textures if not t.is_missing]

        vertices = mesh.interleaved()
        indices = mesh.index_array()

        self.vao = GL.glGenVertexArrays(1)
        self.vbo = GL.glGenBuffers(1)
        self.ebo = GL.glGenBuffers(1)

        GL.glBindVertexArray(self.vao)

        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, self.vbo)
        GL.glBufferData(GL.GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL.GL_STATIC_DRAW)

        GL.glBindBuffer(GL.GL_ELEMENT_ARRAY_BUFFER, self.ebo)
        GL.glBufferData(GL.GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices, GL.GL_STATIC_DRAW)

        stride = VERTEX_STRIDE * 4

        # position (location = 0)
        GL.glEnableVertexAttribArray(0)
        GL.glVertexAttribPointer(0, 3, GL.GL_FLOAT, GL.GL_FALSE, stride, ctypes.c_void_p(0))

        # normal (location = 1)
        GL.glEnableVertexAttribArray(1)
        GL.glVertexAttribPointer(1, 3, GL.GL_FLOAT, GL.GL_FALSE, stride, ctypes.c_void_p(3 * 4))

        # uv (location = 2)
        GL.glEnableVertexAttribArray(2)
        GL.glVertexAttribPointer(2, 2, GL.GL_FLOAT, GL.GL_FALSE, stride, ctypes.c_void_p(6 * 4))

        GL.glBindVertexArray(0)

    @property
    def textured(self) -> bool:
        return len(self.texture_ids) > 0

    def bind_textures(self) -> bool:
        """
        Bind each texture to consecutive units. Returns False, binding
        nothing, when the mesh has no usable texture.
        """
        if not self.textured:
            return False
        for unit, tex_id in enumerate(self.texture_ids):
            GL.glActiveTexture(GL.GL_TEXTURE0 + unit)
            GL.glBindTexture(GL.GL_TEXTURE_2D, tex_id)
        return True

    def draw(self):
        GL.glBindVertexArray(self.vao)
        GL.glDrawElements(GL.GL_TRIANGLES, self.index_count, GL.GL_UNSIGNED_INT, None)
        GL.glBindVertexArray(0)

    def release(self):
        GL.glDeleteBuffers(2, [self.vbo, self.ebo])
        GL.glDeleteVertexArrays(1, [self.vao])
