from dataclasses import dataclass
from typing import Iterator, Union

from bsp_painter.types.polygon import Polygon
from bsp_painter.types.types import Plane


@dataclass(frozen=True)
class Leaf:
    pass


@dataclass(frozen=True)
class Internal:
    plane: Plane
    front: 'BSPTree'
    back: 'BSPTree'
    polygons: tuple[Polygon, ...]  # coplanar with `plane`


BSPTree = Union[Leaf, Internal]

LEAF = Leaf()


def count_nodes(node: BSPTree) -> tuple[int, int]:
    """Returns (internal node count, leaf count)."""
    internal = leaves = 0
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Internal):
            internal += 1
            stack.append(current.back)
            stack.append(current.front)
        else:
            leaves += 1
    return internal, leaves


def depth(node: BSPTree) -> int:
    """Number of internal nodes on the longest root-to-leaf path."""
    deepest = 0
    stack = [(node, 0)]
    while stack:
        current, level = stack.pop()
        if isinstance(current, Internal):
            stack.append((current.back, level + 1))
            stack.append((current.front, level + 1))
        else:
            deepest = max(deepest, level)
    return deepest


def iter_polygons(node: BSPTree) -> Iterator[Polygon]:
    """All polygon fragments stored in the tree, pre-order, front before back."""
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Internal):
            yield from current.polygons
            stack.append(current.back)
            stack.append(current.front)
