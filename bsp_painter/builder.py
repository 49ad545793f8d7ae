"""
Build a BSP tree from a collection of convex planar polygons.

Each node is split by the plane of one of its polygons; which one is decided
by a pluggable selector (`first_polygon` by default, `least_splits` as an
alternative). Polygons coplanar with the splitter stay in the node, the rest
are sent to the front or back subtree, cutting any polygon that spans the
plane.
"""

import logging
from typing import Callable, Iterable, Sequence

from bsp_painter.classify import classify_polygon
from bsp_painter.split import split_polygon
from bsp_painter.types.node import LEAF, BSPTree, Internal, count_nodes, depth
from bsp_painter.types.polygon import Polygon
from bsp_painter.types.types import PLANE_THICKNESS_EPS, Plane, PolygonSide

logger = logging.getLogger(__name__)

SplitterSelector = Callable[[Sequence[Polygon]], int]


def first_polygon(polygons: Sequence[Polygon]) -> int:
    return 0


def least_splits(polygons: Sequence[Polygon], epsilon: float = PLANE_THICKNESS_EPS) -> int:
    """
    Pick the polygon whose plane cuts the fewest other polygons, preferring
    the most even front/back split on ties and the lowest index after that.
    O(n^2) classifications per node.
    """
    best_index = 0
    best_score = None
    for i, candidate in enumerate(polygons):
        cuts = front = back = 0
        for polygon in polygons:
            side = classify_polygon(candidate.plane, polygon, epsilon)
            if side is PolygonSide.SPANNING:
                cuts += 1
            elif side is PolygonSide.FRONT:
                front += 1
            elif side is PolygonSide.BACK:
                back += 1
        score = (cuts, abs(front - back))
        if best_score is None or score < best_score:
            best_index, best_score = i, score
    return best_index


SELECTORS: dict[str, SplitterSelector] = {
    'first': first_polygon,
    'least-splits': least_splits,
}


def polygons_from_vertex_rings(rings: Iterable[Sequence[Sequence[float]]]) -> list[Polygon]:
    """
    Raises:
        DegeneratePolygonError: if a ring's first three vertices don't span a plane
    """
    return [Polygon(ring) for ring in rings]


def partition(
        plane: Plane,
        polygons: Iterable[Polygon],
        epsilon: float = PLANE_THICKNESS_EPS,
        ) -> tuple[list[Polygon], list[Polygon], list[Polygon]]:
    """
    Sort polygons into (coplanar, front, back) relative to `plane`, splitting
    those that span it.
    """
    coplanar: list[Polygon] = []
    front: list[Polygon] = []
    back: list[Polygon] = []
    for polygon in polygons:
        side = classify_polygon(plane, polygon, epsilon)
        if side is PolygonSide.COPLANAR:
            coplanar.append(polygon)
        elif side is PolygonSide.FRONT:
            front.append(polygon)
        elif side is PolygonSide.BACK:
            back.append(polygon)
        else:
            front_fragment, back_fragment = split_polygon(plane, polygon, epsilon)
            if front_fragment is not None:
                front.append(front_fragment)
            if back_fragment is not None:
                back.append(back_fragment)
    return coplanar, front, back


def _validate(polygons: Sequence[Polygon], epsilon: float) -> None:
    for i, polygon in enumerate(polygons):
        if not isinstance(polygon, Polygon):
            raise ValueError(f"Input {i} is not a Polygon: {type(polygon)}")
        if not polygon.is_planar(epsilon):
            raise ValueError(f"Polygon {i} has vertices off its plane by more than {epsilon}")


_PARTITION = 0
_ASSEMBLE = 1


def build(
        polygons: Iterable[Polygon],
        select_splitter: SplitterSelector = first_polygon,
        epsilon: float = PLANE_THICKNESS_EPS,
        ) -> BSPTree:
    """
    Build an immutable BSP tree. An empty collection yields LEAF.

    The tree is built with an explicit work stack rather than recursion, so
    its depth is not bounded by the interpreter's recursion limit. Front
    subtrees are completed before back subtrees.

    Raises:
        ValueError: if an input is not a Polygon or is not planar within epsilon
    """
    polygons = list(polygons)
    _validate(polygons, epsilon)

    results: list[BSPTree] = []
    work: list[tuple] = [(_PARTITION, polygons)]
    while work:
        task, payload = work.pop()

        if task == _ASSEMBLE:
            plane, coplanar = payload
            back_node = results.pop()
            front_node = results.pop()
            results.append(Internal(plane, front_node, back_node, tuple(coplanar)))
            continue

        if not payload:
            results.append(LEAF)
            continue

        splitter = payload[select_splitter(payload)]
        plane = splitter.plane
        coplanar, front, back = partition(plane, payload, epsilon)
        if not any(p is splitter for p in coplanar):
            # the splitter must land in its own node
            raise ValueError(f"Splitting polygon {splitter!r} is not coplanar with its own plane")
        logger.debug(f"Node {plane!r}: {len(coplanar)} coplanar, {len(front)} front, {len(back)} back")

        work.append((_ASSEMBLE, (plane, coplanar)))
        work.append((_PARTITION, back))
        work.append((_PARTITION, front))

    tree = results.pop()
    internal, leaves = count_nodes(tree)
    logger.info(f"Built BSP tree from {len(polygons)} polygons: {internal} internal nodes, {leaves} leaves, depth {depth(tree)}")
    return tree
