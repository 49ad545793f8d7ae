from enum import Enum

import numpy as np

from bsp_painter.vector import Vec3, as_vec3, dot, length, scale

Point3D = tuple[float, float, float]

# Half-thickness of the slab around a plane inside which points count as on it.
PLANE_THICKNESS_EPS = 1e-6


class DegeneratePolygonError(ValueError):
    """Raised when three points do not span a plane (collinear or coincident)."""


class PointSide(Enum):
    FRONT = "front"
    BACK = "back"
    COPLANAR = "coplanar"


class PolygonSide(Enum):
    FRONT = "front"
    BACK = "back"
    COPLANAR = "coplanar"
    SPANNING = "spanning"


class Plane:
    """
    Plane through all points p with dot(normal, p) == d.

    The front half-space is dot(normal, p) > d.
    """
    normal: Vec3
    d: float

    __slots__ = ('normal', 'd')

    def __init__(self, normal: Vec3 | Point3D, d: float):
        normal = as_vec3(normal)
        magnitude = length(normal)
        if not np.isclose(magnitude, 1, rtol=0, atol=PLANE_THICKNESS_EPS):
            raise ValueError(f"Unable to construct plane: normal vector has magnitude {magnitude} instead of 1.")
        object.__setattr__(self, 'normal', normal)
        object.__setattr__(self, 'd', float(d))

    def __setattr__(self, name, value):
        raise AttributeError("Plane is immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Plane):
            return NotImplemented
        return self.d == other.d and bool(np.array_equal(self.normal, other.normal))

    def __hash__(self) -> int:
        return hash((tuple(self.normal.tolist()), self.d))

    def __repr__(self) -> str:
        n = self.normal
        return f"Plane(normal=({n[0]:g}, {n[1]:g}, {n[2]:g}), d={self.d:g})"

    def signed_distance(self, p: Vec3) -> float:
        return dot(self.normal, p) - self.d

    def flipped(self) -> 'Plane':
        return Plane(scale(self.normal, -1.0), -self.d)
