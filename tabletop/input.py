import pygame


class InputState:
    """
    Maps held keys to orbit-camera actions.

    - Orbit & zoom: continuous (hold)
    - Light markers, projection: edge-triggered (press once)
    """

    def __init__(self):
        self.actions = {
            "orbit_left": False,
            "orbit_right": False,
            "orbit_up": False,
            "orbit_down": False,
            "zoom_in": False,
            "zoom_out": False,
            "toggle_lights": False,
            "toggle_projection": False,
            "quit": False,
        }

        # previous key state for edge detection
        self._prev_toggle_lights = False
        self._prev_toggle_projection = False

    def update(self, keys=None):
        if keys is None:
            keys = pygame.key.get_pressed()

        self.actions["orbit_left"] = bool(keys[pygame.K_a] or keys[pygame.K_LEFT])
        self.actions["orbit_right"] = bool(keys[pygame.K_d] or keys[pygame.K_RIGHT])
        self.actions["orbit_up"] = bool(keys[pygame.K_w] or keys[pygame.K_UP])
        self.actions["orbit_down"] = bool(keys[pygame.K_s] or keys[pygame.K_DOWN])
        self.actions["zoom_in"] = bool(keys[pygame.K_e])
        self.actions["zoom_out"] = bool(keys[pygame.K_q])
        self.actions["quit"] = bool(keys[pygame.K_ESCAPE])

        toggle_now = bool(keys[pygame.K_l])
        self.actions["toggle_lights"] = toggle_now and not self._prev_toggle_lights
        self._prev_toggle_lights = toggle_now

        toggle_now = bool(keys[pygame.K_p])
        self.actions["toggle_projection"] = toggle_now and not self._prev_toggle_projection
        self._prev_toggle_projection = toggle_now

        return self.actions
