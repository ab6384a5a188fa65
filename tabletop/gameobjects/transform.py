import math

import numpy as np


def axis_angle_matrix(angle_degrees: float, axis) -> np.ndarray:
    """
    4x4 rotation about an arbitrary axis (Rodrigues), row-major.

    :param angle_degrees: Rotation angle in degrees
    :param axis: Rotation axis, need not be normalised
    """
    m = np.identity(4, dtype=np.float32)
    if angle_degrees == 0.0:
        return m

    a = np.asarray(axis, dtype=np.float64)
    length = np.linalg.norm(a)
    if length == 0.0:
        raise ValueError("rotation axis must be non-zero")
    x, y, z = a / length

    theta = math.radians(angle_degrees)
    c, s = math.cos(theta), math.sin(theta)
    t = 1.0 - c

    m[:3, :3] = [
        [t * x * x + c,     t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c,     t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return m


class Transform:
    def __init__(self, position=(0, 0, 0), rotation_degrees=0.0,
                 rotation_axis=(0, 1, 0), scale=(1, 1, 1)):
        """
        Placement of a mesh in the scene: translate * rotate * scale.

        :param position: World position
        :param rotation_degrees: Angle about ``rotation_axis``
        :param rotation_axis: Axis for the rotation
        :param scale: Per-axis scale
        """
        self.position = np.array(position, dtype=np.float32)
        self.rotation_degrees = float(rotation_degrees)
        self.rotation_axis = np.array(rotation_axis, dtype=np.float32)
        self.scale = np.array(scale, dtype=np.float32)

    def matrix(self) -> np.ndarray:
        s = np.diag([*self.scale, 1.0]).astype(np.float32)
        r = axis_angle_matrix(self.rotation_degrees, self.rotation_axis)

        m = r @ s
        m[:3, 3] = self.position
        return m
