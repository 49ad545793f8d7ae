import logging
from typing import NamedTuple, Optional

from bsp_painter.classify import classify_point, classify_polygon
from bsp_painter.types.polygon import Polygon
from bsp_painter.types.types import PLANE_THICKNESS_EPS, Plane, PointSide, PolygonSide
from bsp_painter.vector import Vec3, dot, lerp, subtract

logger = logging.getLogger(__name__)

# Below this |dot(n, b - a)| a segment is treated as parallel to the plane.
PARALLEL_EPS = 1e-12


class SplitResult(NamedTuple):
    front: Optional[Polygon]
    back: Optional[Polygon]


def intersect_segment_plane(a: Vec3, b: Vec3, plane: Plane) -> Optional[Vec3]:
    """
    Point where the segment a->b crosses the plane, or None if it doesn't
    (including when the segment runs parallel to the plane).
    """
    denominator = dot(plane.normal, subtract(b, a))
    if abs(denominator) <= PARALLEL_EPS:
        return None

    t = (plane.d - dot(plane.normal, a)) / denominator
    if 0.0 <= t <= 1.0:
        return lerp(a, b, t)
    return None


def _fragment(vertices: list[Vec3], parent: Polygon, side: str) -> Optional[Polygon]:
    if len(vertices) < 3:
        logger.debug(f"Dropping {side} fragment with {len(vertices)} vertices of {parent!r}")
        return None
    return Polygon(vertices, plane=parent.plane)


def split_polygon(plane: Plane, polygon: Polygon, epsilon: float = PLANE_THICKNESS_EPS) -> SplitResult:
    """
    Clip `polygon` against `plane` into a front and a back fragment.

    Polygons lying entirely on one side come back unchanged on that side with
    None on the other; coplanar polygons go to the front. A spanning polygon
    is cut by walking its vertex ring as a closed loop. Both fragments keep
    the parent's plane. A fragment left with fewer than three vertices is
    dropped and returned as None.
    """
    side = classify_polygon(plane, polygon, epsilon)
    if side is PolygonSide.FRONT or side is PolygonSide.COPLANAR:
        return SplitResult(polygon, None)
    if side is PolygonSide.BACK:
        return SplitResult(None, polygon)

    front_vertices: list[Vec3] = []
    back_vertices: list[Vec3] = []

    previous = polygon.vertices[-1]
    previous_side = classify_point(plane, previous, epsilon)

    for current in polygon.vertices:
        current_side = classify_point(plane, current, epsilon)

        if current_side is PointSide.FRONT:
            if previous_side is PointSide.BACK:
                crossing = intersect_segment_plane(previous, current, plane)
                if crossing is not None:
                    front_vertices.append(crossing)
                    back_vertices.append(crossing)
            front_vertices.append(current)

        elif current_side is PointSide.BACK:
            if previous_side is PointSide.FRONT:
                crossing = intersect_segment_plane(previous, current, plane)
                if crossing is not None:
                    front_vertices.append(crossing)
                    back_vertices.append(crossing)
            elif previous_side is PointSide.COPLANAR:
                # closes the edge shared with the front fragment
                back_vertices.append(previous)
            back_vertices.append(current)

        else:
            front_vertices.append(current)
            if previous_side is PointSide.BACK:
                back_vertices.append(current)

        previous = current
        previous_side = current_side

    return SplitResult(
        _fragment(front_vertices, polygon, "front"),
        _fragment(back_vertices, polygon, "back"),
    )
