from typing import Iterable, NamedTuple, Sequence

import numpy as np

from bsp_painter.types.polygon import Polygon

# Corner indices of each face; bit 0 of an index selects max x, bit 1 max y, bit 2 max z.
BOX_FACE_CORNERS = (
    (0, 4, 6, 2),
    (1, 3, 7, 5),
    (0, 1, 5, 4),
    (2, 6, 7, 3),
    (0, 2, 3, 1),
    (4, 5, 7, 6),
)


class BoundingBox(NamedTuple):
    x_start: float
    x_end: float
    y_start: float
    y_end: float
    z_start: float
    z_end: float

    @classmethod
    def from_min_max(cls, min_coords: Sequence[float], max_coords: Sequence[float]) -> 'BoundingBox':
        if len(min_coords) != 3 or len(max_coords) != 3:
            raise ValueError("Both min_coords and max_coords must have exactly 3 values")

        for min_val, max_val, dim in zip(min_coords, max_coords, ['x', 'y', 'z']):
            if min_val > max_val:
                raise ValueError(f"Min {dim} coordinate ({min_val}) must not exceed max {dim} coordinate ({max_val})")

        return cls(
            x_start=float(min_coords[0]),
            x_end=float(max_coords[0]),
            y_start=float(min_coords[1]),
            y_end=float(max_coords[1]),
            z_start=float(min_coords[2]),
            z_end=float(max_coords[2])
        )

    @classmethod
    def from_center_extents(cls, center: Sequence[float], half_extents: Sequence[float]) -> 'BoundingBox':
        center = np.asarray(center, dtype=np.float64)
        half_extents = np.asarray(half_extents, dtype=np.float64)
        if center.shape != (3,) or half_extents.shape != (3,):
            raise ValueError("center and half_extents must have exactly 3 values")
        if np.any(half_extents <= 0):
            raise ValueError(f"Half extents must be positive, got {half_extents}")
        return cls.from_min_max(center - half_extents, center + half_extents)

    @classmethod
    def from_polygons(cls, polygons: Iterable[Polygon]) -> 'BoundingBox':
        points = [polygon.vertices for polygon in polygons]
        if not points:
            raise ValueError("Can't bound an empty polygon collection")
        points = np.concatenate(points)
        return cls.from_min_max(points.min(axis=0), points.max(axis=0))

    @property
    def min(self) -> np.ndarray:
        return np.array([self.x_start, self.y_start, self.z_start])

    @property
    def max(self) -> np.ndarray:
        return np.array([self.x_end, self.y_end, self.z_end])

    def corner(self, index: int) -> np.ndarray:
        if not 0 <= index < 8:
            raise ValueError(f"Corner index must be in [0, 8), got {index}")
        return np.array([
            self.x_end if index & 1 else self.x_start,
            self.y_end if index & 2 else self.y_start,
            self.z_end if index & 4 else self.z_start,
        ])

    def faces(self) -> list[Polygon]:
        """
        The six quadrilateral faces of the box.

        With the plane convention of `plane_from_three_points` each face's
        front side is the inside of the box.
        """
        return [Polygon([self.corner(i) for i in corners]) for corners in BOX_FACE_CORNERS]


def box_faces(center: Sequence[float], half_extents: Sequence[float]) -> list[Polygon]:
    return BoundingBox.from_center_extents(center, half_extents).faces()
