"""
Build a BSP tree from a box (or an OBJ file) and log the order in which its
nodes are visited from a viewer position.

Usage:
    $ python -m bsp_painter.main --viewer 10 10 0
    $ python -m bsp_painter.main --obj scene.obj --splitter least-splits --order back-to-front
"""

import argparse
import logging
from pathlib import Path

from bsp_painter.builder import SELECTORS, build
from bsp_painter.traversal import DrawOrder, iter_visits, ordered_polygons
from bsp_painter.types.bounding_box_3d import BoundingBox, box_faces
from bsp_painter.types.homogeneous_transform import HomogeneousTransform
from bsp_painter.types.mesh import PolygonMesh
from bsp_painter.types.node import Internal, iter_polygons
from bsp_painter.types.polygon import Polygon

logger = logging.getLogger(__name__)


def load_polygons(args: argparse.Namespace) -> list[Polygon]:
    transform = None
    if args.rotate_seed is not None:
        transform = HomogeneousTransform.random_rotation(args.rotate_seed)

    if args.obj is not None:
        mesh = PolygonMesh.from_obj(args.obj)
        if transform is not None:
            mesh = transform.apply(mesh)
        polygons = mesh.to_polygons()
        logger.info(f"Loaded {len(polygons)} polygons from {args.obj}")
    else:
        polygons = box_faces(args.center, args.half_extents)
        if transform is not None:
            polygons = [transform.apply(polygon) for polygon in polygons]

    if polygons:
        bounds = BoundingBox.from_polygons(polygons)
        logger.info(f"Input bounds {bounds.min} to {bounds.max}")
    return polygons


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a BSP tree and report its viewer-dependent visit order")
    parser.add_argument('--obj', type=Path, default=None, help="OBJ file with planar convex faces (default: a box)")
    parser.add_argument('--center', type=float, nargs=3, default=[0.0, 0.0, 0.0], metavar=('X', 'Y', 'Z'))
    parser.add_argument('--half-extents', type=float, nargs=3, default=[5.0, 5.0, 5.0], metavar=('X', 'Y', 'Z'))
    parser.add_argument('--viewer', type=float, nargs=3, default=[10.0, 10.0, 0.0], metavar=('X', 'Y', 'Z'))
    parser.add_argument('--splitter', choices=sorted(SELECTORS), default='first')
    parser.add_argument('--order', choices=[o.value for o in DrawOrder], default=DrawOrder.FRONT_TO_BACK.value)
    parser.add_argument('--rotate-seed', type=int, default=None, help="Randomly rotate the input with this seed")
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    polygons = load_polygons(args)
    tree = build(polygons, select_splitter=SELECTORS[args.splitter])
    fragments = sum(1 for _ in iter_polygons(tree))
    logger.info(f"{len(polygons)} input polygons became {fragments} fragments")

    for node in iter_visits(tree, args.viewer, visit_leaves=True):
        if isinstance(node, Internal):
            logger.info(f"node {node.plane!r} with {len(node.polygons)} polygons")
        else:
            logger.info("leaf")

    order = DrawOrder(args.order)
    for i, polygon in enumerate(ordered_polygons(tree, args.viewer, order)):
        logger.info(f"{order.value} #{i}: {polygon!r}, area {polygon.area():.3f}")


if __name__ == "__main__":
    main()
