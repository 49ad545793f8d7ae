from typing import TypeVar

import numpy as np
from scipy.spatial.transform import Rotation

from bsp_painter.types.mesh import PolygonMesh
from bsp_painter.types.polygon import Polygon


Transformable = TypeVar('Transformable', Polygon, PolygonMesh, np.ndarray)
class HomogeneousTransform:
    def __init__(self, matrix=None):
        if matrix is None:
            self.matrix = np.eye(4)
        else:
            matrix = np.asarray(matrix, dtype=np.float64)
            if matrix.shape != (4, 4):
                raise ValueError(f"Matrix must be of shape (4, 4), got {matrix.shape}")
            self.matrix = matrix

    def apply(self, x: Transformable) -> Transformable:
        if isinstance(x, Polygon):
            return self._apply_polygon(x)
        elif isinstance(x, PolygonMesh):
            return self._apply_mesh(x)
        elif isinstance(x, np.ndarray):
            return self._apply_ndarray(x)
        else:
            raise ValueError(f"Unsupported type for matrix multiplication: {type(x)}")

    @staticmethod
    def random_rotation(seed: int | None = None):
        matrix = np.eye(4)
        matrix[:3, :3] = Rotation.random(None, seed).as_matrix()
        return HomogeneousTransform(matrix)

    def _apply_ndarray(self, points: np.ndarray) -> np.ndarray:
        if points.shape[-1] != 3:
            raise ValueError(f"Points must have shape (..., 3), got {points.shape}")

        # Convert points to homogeneous coordinates by adding a 1 in the last dimension
        homogeneous_coordinates = np.concatenate([points, np.ones(points.shape[:-1])[..., None]], axis=-1)
        transformed_points_homogeneous = homogeneous_coordinates @ self.matrix.T

        # Convert back to 3D coordinates
        transformed_points = transformed_points_homogeneous[..., :3] / transformed_points_homogeneous[..., 3, np.newaxis]

        return transformed_points

    def _apply_polygon(self, polygon: Polygon) -> Polygon:
        # plane is re-derived from the moved vertices
        return Polygon(self._apply_ndarray(polygon.vertices))

    def _apply_mesh(self, mesh: PolygonMesh) -> PolygonMesh:
        return PolygonMesh(self._apply_ndarray(mesh.points), mesh.faces)
