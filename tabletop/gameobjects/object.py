from tabletop.gameobjects.mesh import Mesh
from tabletop.gameobjects.transform import Transform


class GameObject:
    def __init__(self, name: str, mesh: Mesh, transform: Transform, color=(1.0, 1.0, 1.0)):
        """
        A placed instance of a generated mesh.

        :param name: Name of the mesh entry this object draws
        :param mesh: The generated mesh
        :param transform: Where the mesh sits in the scene
        :param color: Flat colour used when the mesh has no usable texture
        """
        self.name = name
        self.mesh = mesh
        self.transform = transform
        self.color = tuple(color)
