from typing import Iterator, Sequence

import numpy as np

from bsp_painter.classify import plane_from_three_points
from bsp_painter.types.types import PLANE_THICKNESS_EPS, Plane
from bsp_painter.vector import Vec3


class Polygon:
    """
    Convex planar polygon: an ordered ring of at least three vertices plus the
    plane it lies in.

    The plane is derived from the first three vertices when the polygon is
    created from raw points. Fragments produced by splitting pass their
    parent's plane in unchanged.
    """
    vertices: np.ndarray  # (N, 3), read-only
    plane: Plane

    def __init__(self, vertices: np.ndarray | Sequence[Sequence[float]], plane: Plane | None = None):
        vertices = np.array(vertices, dtype=np.float64)
        if len(vertices.shape) != 2 or vertices.shape[-1] != 3:
            raise ValueError(f"Polygon vertices must have shape (N, 3), got {vertices.shape}")
        if vertices.shape[0] < 3:
            raise ValueError(f"Polygon needs at least 3 vertices, got {vertices.shape[0]}")
        vertices.setflags(write=False)

        self.vertices = vertices
        if plane is None:
            plane = plane_from_three_points(vertices[0], vertices[1], vertices[2])
        self.plane = plane

    @staticmethod
    def from_points(points: Sequence[Sequence[float]]) -> 'Polygon':
        return Polygon(points)

    def __len__(self) -> int:
        return self.vertices.shape[0]

    def __iter__(self) -> Iterator[Vec3]:
        return iter(self.vertices)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return self.plane == other.plane and bool(np.array_equal(self.vertices, other.vertices))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Polygon({len(self)} vertices, {self.plane!r})"

    def is_planar(self, epsilon: float = PLANE_THICKNESS_EPS) -> bool:
        """True if every vertex lies within epsilon of the cached plane."""
        distances = self.vertices @ self.plane.normal - self.plane.d
        return bool(np.all(np.abs(distances) <= epsilon))

    def area(self) -> float:
        rolled = np.roll(self.vertices, -1, axis=0)
        vector_area = 0.5 * np.cross(self.vertices, rolled).sum(axis=0)
        return float(np.linalg.norm(vector_area))
