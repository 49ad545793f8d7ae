from typing import TYPE_CHECKING

from bsp_painter.types.types import (
    PLANE_THICKNESS_EPS,
    DegeneratePolygonError,
    Plane,
    PointSide,
    PolygonSide,
)
from bsp_painter.vector import Vec3, cross, dot, length, normalize, subtract

if TYPE_CHECKING:
    from bsp_painter.types.polygon import Polygon


def plane_from_three_points(a: Vec3, b: Vec3, c: Vec3) -> Plane:
    """
    Plane through a, b and c.

    The normal is cross(c - a, b - a): this operand order decides which side
    of a wound polygon is its front.

    Raises:
        DegeneratePolygonError: if the points are collinear or coincident
    """
    d0 = subtract(b, a)
    d1 = subtract(c, a)
    n = cross(d1, d0)
    # |n| = |d0| |d1| sin(angle), so compare the sine rather than the raw area
    edge_product = length(d0) * length(d1)
    if edge_product == 0.0 or length(n) <= PLANE_THICKNESS_EPS * edge_product:
        raise DegeneratePolygonError(f"Points {a}, {b}, {c} do not span a plane")
    n = normalize(n)
    return Plane(n, dot(a, n))


def classify_point(plane: Plane, p: Vec3, epsilon: float = PLANE_THICKNESS_EPS) -> PointSide:
    distance = plane.signed_distance(p)
    if distance > epsilon:
        return PointSide.FRONT
    elif distance < -epsilon:
        return PointSide.BACK
    return PointSide.COPLANAR


def classify_polygon(plane: Plane, polygon: 'Polygon', epsilon: float = PLANE_THICKNESS_EPS) -> PolygonSide:
    front_count = 0
    back_count = 0
    for p in polygon.vertices:
        side = classify_point(plane, p, epsilon)
        if side is PointSide.FRONT:
            front_count += 1
        elif side is PointSide.BACK:
            back_count += 1

        if front_count and back_count:
            return PolygonSide.SPANNING

    if front_count:
        return PolygonSide.FRONT
    if back_count:
        return PolygonSide.BACK
    return PolygonSide.COPLANAR
