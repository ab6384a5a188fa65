import logging
import os
from dataclasses import dataclass

import pygame
from OpenGL import GL

logger = logging.getLogger(__name__)

# GL texture name 0 is "no texture"; returned when an image cannot be decoded.
MISSING_TEXTURE = 0

DIFFUSE = "texture_diffuse"


@dataclass(frozen=True)
class TextureRef:
    handle: int
    kind: str
    source_path: str

    @property
    def is_missing(self) -> bool:
        return self.handle == MISSING_TEXTURE


def texture_path(directory: str, file_name: str) -> str:
    return os.path.join(directory, file_name)


def decode_image(path: str) -> tuple[int, int, bytes]:
    """
    Decode an image file into bottom-up RGBA rows, the order GL expects.

    :param path: Path to a PNG/JPG file
    :return: (width, height, rgba_bytes)
    :raises FileNotFoundError: If the file does not exist
    :raises pygame.error: If the file is not a readable image
    """
    surface = pygame.image.load(path)
    width, height = surface.get_size()
    image_data = pygame.image.tostring(surface, "RGBA", True)
    return width, height, image_data


def load_texture(path: str, gamma: bool = False) -> int:
    """
    Load a PNG/JPG texture from disk and upload it to OpenGL.
    Returns the OpenGL texture ID, or MISSING_TEXTURE if the image
    could not be decoded.

    A GL context must be current before this is called.

    :param path: Path to the image file
    :param gamma: Store the texels as sRGB so sampling linearises them
    """
    try:
        width, height, image_data = decode_image(path)
    except (pygame.error, OSError) as err:
        logger.warning("Texture failed to load at path: %s (%s)", path, err)
        return MISSING_TEXTURE

    internal_format = GL.GL_SRGB_ALPHA if gamma else GL.GL_RGBA

    tex_id = GL.glGenTextures(1)
    GL.glBindTexture(GL.GL_TEXTURE_2D, tex_id)
    GL.glTexImage2D(
        GL.GL_TEXTURE_2D,
        0,
        internal_format,
        width,
        height,
        0,
        GL.GL_RGBA,
        GL.GL_UNSIGNED_BYTE,
        image_data,
    )
    GL.glGenerateMipmap(GL.GL_TEXTURE_2D)

    # UVs past 1.0 tile
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_WRAP_S, GL.GL_REPEAT)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_WRAP_T, GL.GL_REPEAT)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_MIN_FILTER, GL.GL_LINEAR_MIPMAP_LINEAR)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_MAG_FILTER, GL.GL_LINEAR)

    GL.glBindTexture(GL.GL_TEXTURE_2D, 0)
    logger.debug("Loaded texture %s (%dx%d) as id %s", path, width, height, tex_id)
    return int(tex_id)


def acquire_diffuse(directory: str, file_name: str, gamma: bool, loader=None) -> TextureRef:
    """Run texture acquisition once and wrap the handle for a mesh."""
    if loader is None:
        loader = load_texture
    path = texture_path(directory, file_name)
    handle = loader(path, gamma)
    return TextureRef(handle=handle, kind=DIFFUSE, source_path=path)
