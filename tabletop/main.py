import argparse
import logging
from pathlib import Path

import pygame
from OpenGL import GL

from tabletop.gameobjects.camera import OrbitCamera
from tabletop.gameobjects.object import GameObject
from tabletop.gameobjects.primitives import create_debug_cube_mesh
from tabletop.gameobjects.transform import Transform
from tabletop.input import InputState
from tabletop.rendering.renderer import Renderer
from tabletop.world import World

logger = logging.getLogger("tabletop")

DEFAULT_SCENE = Path(__file__).resolve().parent / "assets" / "scene.json"

WIDTH, HEIGHT = 1400, 800
ORBIT_SPEED = 60.0  # degrees per second
ZOOM_SPEED = 8.0    # units per second


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Procedural tabletop scene viewer")
    parser.add_argument("--scene", default=str(DEFAULT_SCENE), help="Path to the scene JSON file")
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log mesh generation details")
    return parser.parse_args(argv)


def light_markers(lights: dict) -> list[GameObject]:
    marker = create_debug_cube_mesh()
    return [
        GameObject(
            name=f"{key}_light",
            mesh=marker,
            transform=Transform(position=light["position"], scale=(0.5, 0.5, 0.5)),
            color=light["color"],
        )
        for key, light in lights.items()
    ]


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # config errors surface before a window opens
    world = World(args.scene)

    # ====================
    # Pygame / OpenGL init
    # ====================

    pygame.init()
    pygame.display.set_caption("Tabletop")

    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
    pygame.display.gl_set_attribute(
        pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE
    )

    pygame.display.set_mode((args.width, args.height), pygame.OPENGL | pygame.DOUBLEBUF)
    GL.glViewport(0, 0, args.width, args.height)

    version = GL.glGetString(GL.GL_VERSION)
    if version:
        logger.info("OpenGL: %s", version.decode())

    # ====================
    # Scene
    # ====================

    # textures upload here, so the context must exist first
    scene_objects = world.build()
    renderer = Renderer(lights=world.lights)
    markers = light_markers(renderer.lights)

    clock = pygame.time.Clock()
    input_state = InputState()
    camera = OrbitCamera(target=(-1.5, -2.5, 0.0), distance=12.0, yaw=-70.0, pitch=20.0)
    aspect = args.width / args.height
    show_lights = False

    # ====================
    # Main Loop
    # ====================

    running = True
    while running:
        dt = clock.tick(60) / 1000.0

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False

        actions = input_state.update()
        if actions["quit"]:
            running = False
        if actions["toggle_lights"]:
            show_lights = not show_lights
        if actions["toggle_projection"]:
            camera.toggle_projection()

        d_yaw = (actions["orbit_right"] - actions["orbit_left"]) * ORBIT_SPEED * dt
        d_pitch = (actions["orbit_up"] - actions["orbit_down"]) * ORBIT_SPEED * dt
        camera.orbit(d_yaw, d_pitch)
        camera.zoom((actions["zoom_in"] - actions["zoom_out"]) * ZOOM_SPEED * dt)

        renderer.begin_frame(camera, aspect)
        for obj in scene_objects:
            renderer.draw_object(obj)
        if show_lights:
            for marker in markers:
                renderer.draw_object(marker, unlit=True)

        pygame.display.flip()

    renderer.release()
    pygame.quit()


if __name__ == "__main__":
    main()
