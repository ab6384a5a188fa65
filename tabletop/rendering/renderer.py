import logging
from pathlib import Path
from typing import Optional

from OpenGL import GL

from tabletop.gameobjects.gpu_mesh import GPUMesh

logger = logging.getLogger(__name__)

SHADER_DIR = Path(__file__).parent / "shader"

# =========================
# Shader Utils
# =========================


def load_shader(name: str) -> str:
    """
    Read a GLSL source file shipped in the ``shader`` directory.

    :param name: File name, e.g. ``object.vert``
    :return: The source code of the shader as a string
    """
    with open(SHADER_DIR / name, "r", encoding="utf-8") as f:
        return f.read()


def compile_shader(source: str, shader_type: int) -> int:
    """Compile a GLSL shader from source and return the handle.

    :param source: The shader source code as a single string.
    :param shader_type: GL.GL_VERTEX_SHADER or GL.GL_FRAGMENT_SHADER.
    :raises RuntimeError: On compilation failure.
    """
    shader = GL.glCreateShader(shader_type)
    if shader is None or shader == 0:
        raise RuntimeError("Failed to create shader")
    GL.glShaderSource(shader, source)
    GL.glCompileShader(shader)
    if not GL.glGetShaderiv(shader, GL.GL_COMPILE_STATUS):
        info = GL.glGetShaderInfoLog(shader).decode()
        raise RuntimeError(f"Shader compilation failed: {info}")
    return shader


def link_program(vertex_src: str, fragment_src: str) -> int:
    """Link a GLSL program from vertex and fragment sources.

    :raises RuntimeError: On linking failure.
    """
    program = GL.glCreateProgram()
    if program is None or program == 0:
        raise RuntimeError("Failed to create program")
    vs = compile_shader(vertex_src, GL.GL_VERTEX_SHADER)
    fs = compile_shader(fragment_src, GL.GL_FRAGMENT_SHADER)
    GL.glAttachShader(program, vs)
    GL.glAttachShader(program, fs)
    GL.glLinkProgram(program)
    if not GL.glGetProgramiv(program, GL.GL_LINK_STATUS):
        info = GL.glGetProgramInfoLog(program).decode()
        raise RuntimeError(f"Program linking failed: {info}")
    # Shaders can be deleted once linked
    GL.glDeleteShader(vs)
    GL.glDeleteShader(fs)
    return program


# =========================
# Renderer
# =========================

# key light from the left in blue, white fill from the front
DEFAULT_LIGHTS = {
    "key": {"position": [-11.0, 4.0, -1.0], "color": [0.0, 0.4, 1.0], "intensity": 1.0},
    "fill": {"position": [-2.0, 3.0, 13.0], "color": [1.0, 1.0, 1.0], "intensity": 0.7},
}


class Renderer:
    def __init__(self, lights: Optional[dict] = None):
        """
        Lit, textured object pass for generated meshes.

        :param lights: ``{"key": {...}, "fill": {...}}`` with position, color, intensity
        """
        self.program = link_program(load_shader("object.vert"), load_shader("object.frag"))
        self.lights = dict(DEFAULT_LIGHTS)
        if lights:
            self.lights.update(lights)

        self._uniforms = {
            name: GL.glGetUniformLocation(self.program, name)
            for name in (
                "u_model", "u_view", "u_proj", "u_view_pos",
                "u_color", "u_texture", "u_use_texture", "u_unlit",
            )
        }
        for prefix in ("keyLight", "fillLight"):
            for field in ("position", "color", "intensity"):
                name = f"{prefix}.{field}"
                self._uniforms[name] = GL.glGetUniformLocation(self.program, name)

        self._gpu_meshes: dict[int, GPUMesh] = {}
        GL.glEnable(GL.GL_DEPTH_TEST)

    def gpu_mesh(self, mesh) -> GPUMesh:
        """Upload ``mesh`` once and reuse the buffers for every instance."""
        key = id(mesh)
        if key not in self._gpu_meshes:
            self._gpu_meshes[key] = GPUMesh(mesh)
        return self._gpu_meshes[key]

    def begin_frame(self, camera, aspect: float):
        GL.glClearColor(0.0, 0.0, 0.0, 1.0)
        GL.glClear(GL.GL_COLOR_BUFFER_BIT | GL.GL_DEPTH_BUFFER_BIT)
        GL.glUseProgram(self.program)

        u = self._uniforms
        GL.glUniformMatrix4fv(u["u_view"], 1, GL.GL_TRUE, camera.get_view_matrix())
        GL.glUniformMatrix4fv(u["u_proj"], 1, GL.GL_TRUE, camera.get_projection_matrix(aspect))
        GL.glUniform3f(u["u_view_pos"], *camera.position)
        GL.glUniform1i(u["u_texture"], 0)

        for key, prefix in (("key", "keyLight"), ("fill", "fillLight")):
            light = self.lights[key]
            GL.glUniform3f(u[f"{prefix}.position"], *light["position"])
            GL.glUniform3f(u[f"{prefix}.color"], *light["color"])
            GL.glUniform1f(u[f"{prefix}.intensity"], light["intensity"])

    def draw_object(self, obj, unlit: bool = False):
        """
        Draw one placed mesh with its model matrix.

        Meshes without a usable texture draw in the object's flat colour.

        :param obj: GameObject to draw
        :param unlit: Skip lighting (debug markers)
        """
        u = self._uniforms
        gpu = self.gpu_mesh(obj.mesh)

        GL.glUniformMatrix4fv(u["u_model"], 1, GL.GL_TRUE, obj.transform.matrix())
        GL.glUniform3f(u["u_color"], *obj.color)
        GL.glUniform1i(u["u_unlit"], int(unlit))
        GL.glUniform1i(u["u_use_texture"], int(gpu.bind_textures()))

        gpu.draw()

    def release(self):
        for gpu in self._gpu_meshes.values():
            gpu.release()
        self._gpu_meshes.clear()
        GL.glDeleteProgram(self.program)
