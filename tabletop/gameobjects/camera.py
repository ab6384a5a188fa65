import math

import numpy as np


def normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    return v / n if n > 0 else v


def look_at(eye, center, up) -> np.ndarray:
    """
    Row-major view matrix looking from ``eye`` towards ``center``.

    :param eye: The camera position
    :param center: The point the camera is looking at
    :param up: The up vector
    """
    eye = np.asarray(eye, dtype=np.float32)
    f = normalize(np.asarray(center, dtype=np.float32) - eye)
    s = normalize(np.cross(f, np.asarray(up, dtype=np.float32)))
    u = np.cross(s, f)

    view = np.identity(4, dtype=np.float32)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye)
    view[1, 3] = -np.dot(u, eye)
    view[2, 3] = np.dot(f, eye)
    return view


def perspective(fov_degrees: float, aspect: float, near=0.1, far=100.0) -> np.ndarray:
    f = 1.0 / math.tan(math.radians(fov_degrees) / 2.0)

    proj = np.zeros((4, 4), dtype=np.float32)
    proj[0, 0] = f / aspect
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[2, 3] = (2 * far * near) / (near - far)
    proj[3, 2] = -1.0
    return proj


def orthographic(half_width: float, half_height: float, near=0.1, far=100.0) -> np.ndarray:
    proj = np.identity(4, dtype=np.float32)
    proj[0, 0] = 1.0 / half_width
    proj[1, 1] = 1.0 / half_height
    proj[2, 2] = -2.0 / (far - near)
    proj[2, 3] = -(far + near) / (far - near)
    return proj


class OrbitCamera:
    """Circles a target point; yaw/pitch in degrees, distance in world units."""

    def __init__(self, target=(0.0, 0.0, 0.0), distance=12.0, yaw=0.0, pitch=25.0, fov=45.0):
        self.target = np.array(target, dtype=np.float32)
        self.distance = distance
        self.yaw = yaw
        self.pitch = pitch
        self.fov = fov
        self.is_orthographic = False

    def orbit(self, d_yaw: float, d_pitch: float):
        self.yaw = (self.yaw + d_yaw) % 360.0
        self.pitch = max(-89.0, min(89.0, self.pitch + d_pitch))

    def zoom(self, amount: float, minimum=1.0, maximum=60.0):
        self.distance = max(minimum, min(maximum, self.distance - amount))

    @property
    def position(self) -> np.ndarray:
        yaw, pitch = math.radians(self.yaw), math.radians(self.pitch)
        offset = np.array([
            math.cos(pitch) * math.sin(yaw),
            math.sin(pitch),
            math.cos(pitch) * math.cos(yaw),
        ], dtype=np.float32)
        return self.target + offset * self.distance

    def get_view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target, (0.0, 1.0, 0.0))

    def toggle_projection(self):
        self.is_orthographic = not self.is_orthographic

    def get_projection_matrix(self, aspect: float) -> np.ndarray:
        """
        Perspective by default. The orthographic view frames the same slab
        that the perspective frustum shows at the target distance.
        """
        if self.is_orthographic:
            half_height = self.distance * math.tan(math.radians(self.fov) / 2.0)
            return orthographic(half_height * aspect, half_height)
        return perspective(self.fov, aspect)
