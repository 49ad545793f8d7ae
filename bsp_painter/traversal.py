"""
Viewer-dependent traversal of a BSP tree.

`traverse` reports internal nodes pre-order, descending first into the
subtree on the viewer's side of each splitting plane. Leaves produce no
visit by default, so traversing a bare Leaf never calls the visitor; pass
`visit_leaves=True` to get one event per leaf as well. `ordered_polygons`
flattens the coplanar polygons into a draw order, front-to-back or
back-to-front (painter's algorithm).
"""

from enum import Enum
from typing import Callable, Iterator

from bsp_painter.types.node import BSPTree, Internal
from bsp_painter.types.polygon import Polygon
from bsp_painter.types.types import Plane
from bsp_painter.vector import Vec3, as_vec3, dot

Visitor = Callable[[BSPTree], None]


class DrawOrder(Enum):
    FRONT_TO_BACK = "front-to-back"
    BACK_TO_FRONT = "back-to-front"


def viewer_in_front(plane: Plane, viewer: Vec3) -> bool:
    return dot(plane.normal, viewer) > plane.d


def iter_visits(node: BSPTree, viewer: Vec3, visit_leaves: bool = False) -> Iterator[BSPTree]:
    viewer = as_vec3(viewer)
    stack = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, Internal):
            if visit_leaves:
                yield current
            continue

        yield current
        if viewer_in_front(current.plane, viewer):
            near, far = current.front, current.back
        else:
            near, far = current.back, current.front
        stack.append(far)
        stack.append(near)


def traverse(node: BSPTree, viewer: Vec3, visit: Visitor, visit_leaves: bool = False) -> None:
    """
    Call `visit` once per internal node, parent before children. If the
    viewer is strictly in front of a node's plane its front subtree is
    visited before its back subtree, otherwise the back subtree goes first.

    Leaves are skipped unless `visit_leaves` is set. The visitor receives the
    node itself; `Internal.polygons` holds the polygons resident at it.
    """
    for current in iter_visits(node, viewer, visit_leaves):
        visit(current)


def ordered_polygons(
        node: BSPTree,
        viewer: Vec3,
        order: DrawOrder = DrawOrder.FRONT_TO_BACK,
        ) -> Iterator[Polygon]:
    """
    Yield every polygon in the tree sorted by distance class from the viewer.

    FRONT_TO_BACK: near subtree, node polygons, far subtree.
    BACK_TO_FRONT: far subtree, node polygons, near subtree.
    """
    viewer = as_vec3(viewer)
    # entries are either subtrees still to expand or polygon tuples ready to emit
    stack: list[BSPTree | tuple[Polygon, ...]] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, tuple):
            yield from current
            continue
        if not isinstance(current, Internal):
            continue

        if viewer_in_front(current.plane, viewer):
            near, far = current.front, current.back
        else:
            near, far = current.back, current.front
        if order is DrawOrder.BACK_TO_FRONT:
            near, far = far, near
        stack.append(far)
        stack.append(current.polygons)
        stack.append(near)
