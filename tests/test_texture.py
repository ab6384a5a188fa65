"""Tests for texture acquisition; nothing here needs a GL context."""

import logging
import os
from unittest import mock

import pygame

from tabletop.gameobjects.texture import (
    DIFFUSE,
    MISSING_TEXTURE,
    acquire_diffuse,
    load_texture,
    texture_path,
)


class TestTexturePath:

    def test_joins_directory_and_file(self):
        assert texture_path("textures", "salt.jpg") == os.path.join("textures", "salt.jpg")


class TestLoadTexture:

    def test_missing_file_returns_sentinel(self, tmp_path, caplog):
        path = str(tmp_path / "nope.png")
        with caplog.at_level(logging.WARNING, logger="tabletop.gameobjects.texture"):
            handle = load_texture(path)
        assert handle == MISSING_TEXTURE
        assert "Texture failed to load at path" in caplog.text
        assert path in caplog.text

    def test_corrupt_file_returns_sentinel(self, tmp_path, caplog):
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not a png")
        with caplog.at_level(logging.WARNING, logger="tabletop.gameobjects.texture"):
            handle = load_texture(str(path), gamma=True)
        assert handle == MISSING_TEXTURE
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def _write_png(self, tmp_path):
        path = tmp_path / "red.png"
        surface = pygame.Surface((4, 2))
        surface.fill((255, 0, 0))
        pygame.image.save(surface, str(path))
        return str(path)

    def test_uploads_decoded_image(self, tmp_path, monkeypatch):
        import tabletop.gameobjects.texture as texture

        gl = mock.MagicMock()
        gl.glGenTextures.return_value = 5
        monkeypatch.setattr(texture, "GL", gl)

        assert load_texture(self._write_png(tmp_path)) == 5
        args = gl.glTexImage2D.call_args.args
        assert args[2] is gl.GL_RGBA
        assert args[3:5] == (4, 2)
        assert len(args[-1]) == 4 * 2 * 4
        gl.glGenerateMipmap.assert_called_once()
        gl.glTexParameteri.assert_any_call(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)

    def test_gamma_uploads_srgb(self, tmp_path, monkeypatch):
        import tabletop.gameobjects.texture as texture

        gl = mock.MagicMock()
        monkeypatch.setattr(texture, "GL", gl)

        load_texture(self._write_png(tmp_path), gamma=True)
        assert gl.glTexImage2D.call_args.args[2] is gl.GL_SRGB_ALPHA


class TestAcquireDiffuse:

    def test_wraps_loader_result(self, loader):
        ref = acquire_diffuse("textures", "salt.jpg", False, loader)
        assert loader.calls == [(os.path.join("textures", "salt.jpg"), False)]
        assert ref.handle == 7
        assert ref.kind == DIFFUSE == "texture_diffuse"
        assert ref.source_path == os.path.join("textures", "salt.jpg")
        assert not ref.is_missing

    def test_passes_gamma(self, loader):
        acquire_diffuse("textures", "salt.jpg", True, loader)
        assert loader.calls[0][1] is True

    def test_missing_texture_still_builds_mesh(self):
        from tabletop.gameobjects.primitives import create_plane_mesh

        mesh = create_plane_mesh(
            "textures", "gone.jpg", False, 1.0, loader=lambda path, gamma: MISSING_TEXTURE
        )
        assert mesh.vertex_count == 4
        assert mesh.textures[0].is_missing

    def test_default_loader_is_load_texture(self, monkeypatch):
        import tabletop.gameobjects.texture as texture

        calls = []
        monkeypatch.setattr(texture, "load_texture", lambda path, gamma: calls.append(path) or 42)
        ref = acquire_diffuse("dir", "a.png", False)
        assert ref.handle == 42
        assert calls == [os.path.join("dir", "a.png")]
