from unittest import mock

import pytest

from tabletop.gameobjects.mesh import Mesh
from tabletop.gameobjects.primitives import create_cube_mesh, create_debug_cube_mesh
from tabletop.gameobjects.texture import MISSING_TEXTURE

try:
    from tabletop.gameobjects import gpu_mesh
except (ImportError, OSError, AttributeError) as err:  # no usable libGL
    pytest.skip(f"OpenGL unavailable: {err}", allow_module_level=True)


@pytest.fixture
def fake_gl(monkeypatch):
    gl = mock.MagicMock()
    monkeypatch.setattr(gpu_mesh, "GL", gl)
    return gl


class TestGPUMesh:

    def test_uploads_interleaved_buffers(self, fake_gl):
        mesh = create_debug_cube_mesh()
        gpu = gpu_mesh.GPUMesh(mesh)
        assert gpu.index_count == 36
        sizes = [c.args[1] for c in fake_gl.glBufferData.call_args_list]
        assert sizes == [24 * 8 * 4, 36 * 4]
        assert fake_gl.glVertexAttribPointer.call_count == 3

    def test_untextured_mesh_binds_nothing(self, fake_gl):
        gpu = gpu_mesh.GPUMesh(create_debug_cube_mesh())
        assert not gpu.bind_textures()
        fake_gl.glBindTexture.assert_not_called()

    def test_missing_texture_binds_nothing(self, fake_gl):
        mesh = create_cube_mesh("t", "gone.jpg", False, 1.0, loader=lambda p, g: MISSING_TEXTURE)
        gpu = gpu_mesh.GPUMesh(mesh)
        assert not gpu.textured
        assert not gpu.bind_textures()
        fake_gl.glBindTexture.assert_not_called()

    def test_binds_loaded_texture(self, fake_gl, loader):
        mesh = create_cube_mesh("t", "box.jpg", False, 1.0, loader=loader)
        gpu = gpu_mesh.GPUMesh(mesh)
        assert gpu.bind_textures()
        fake_gl.glBindTexture.assert_called_once_with(fake_gl.GL_TEXTURE_2D, 7)

    def test_draws_all_indices(self, fake_gl):
        mesh = Mesh(create_debug_cube_mesh().vertices, (0, 1, 2))
        gpu = gpu_mesh.GPUMesh(mesh)
        gpu.draw()
        args = fake_gl.glDrawElements.call_args.args
        assert args[1] == 3


class TestRenderer:

    @pytest.fixture
    def renderer(self, fake_gl, monkeypatch):
        from tabletop.rendering import renderer

        monkeypatch.setattr(renderer, "GL", fake_gl)
        return renderer.Renderer(lights={"fill": {
            "position": [0.0, 5.0, 0.0], "color": [1.0, 1.0, 1.0], "intensity": 0.5,
        }})

    def test_shader_sources_ship_with_package(self):
        from tabletop.rendering.renderer import load_shader

        assert "#version 330 core" in load_shader("object.vert")
        assert "u_use_texture" in load_shader("object.frag")

    def test_scene_lights_override_defaults(self, renderer):
        assert renderer.lights["fill"]["intensity"] == 0.5
        assert renderer.lights["key"]["color"] == [0.0, 0.4, 1.0]

    def test_instances_share_one_upload(self, renderer, fake_gl):
        from tabletop.gameobjects.camera import OrbitCamera
        from tabletop.gameobjects.object import GameObject
        from tabletop.gameobjects.transform import Transform

        mesh = create_debug_cube_mesh()
        objects = [
            GameObject("a", mesh, Transform(position=(0, 0, 0))),
            GameObject("b", mesh, Transform(position=(2, 0, 0)), color=(1.0, 0.0, 0.0)),
        ]
        renderer.begin_frame(OrbitCamera(), 1.5)
        for obj in objects:
            renderer.draw_object(obj)

        assert fake_gl.glGenVertexArrays.call_count == 1
        assert fake_gl.glDrawElements.call_count == 2
        fake_gl.glUniform1i.assert_any_call(renderer._uniforms["u_use_texture"], 0)
