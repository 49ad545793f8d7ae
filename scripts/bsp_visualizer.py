#!/usr/bin/env python3
"""
bsp_visualizer.py – show the fragments of a BSP tree coloured by draw order.

Usage
-----
$ python scripts/bsp_visualizer.py --viewer 10 10 0 [scene.obj]

Fragments nearest the viewer are red, the farthest blue. With no OBJ file the
default box is used.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
import trimesh

from bsp_painter.builder import SELECTORS, build
from bsp_painter.traversal import DrawOrder, ordered_polygons
from bsp_painter.types.bounding_box_3d import box_faces
from bsp_painter.types.mesh import PolygonMesh


def main() -> None:
    parser = argparse.ArgumentParser(description="Display BSP fragments coloured by front-to-back order.")
    parser.add_argument("obj", metavar="OBJ", type=Path, nargs="?", help="path to an .obj file")
    parser.add_argument("--viewer", type=float, nargs=3, default=[10.0, 10.0, 0.0])
    parser.add_argument("--splitter", choices=sorted(SELECTORS), default="first")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    polygons = PolygonMesh.from_obj(args.obj).to_polygons() if args.obj else box_faces((0, 0, 0), (5, 5, 5))
    tree = build(polygons, select_splitter=SELECTORS[args.splitter])
    fragments = list(ordered_polygons(tree, args.viewer, DrawOrder.FRONT_TO_BACK))

    scene = trimesh.Scene()
    for rank, fragment in enumerate(fragments):
        tm = PolygonMesh.from_polygons([fragment]).as_trimesh()
        t = rank / max(len(fragments) - 1, 1)
        tm.visual.face_colors = np.array([255 * (1 - t), 64, 255 * t, 200], dtype=np.uint8)
        scene.add_geometry(tm, geom_name=f"fragment-{rank}")
    scene.add_geometry(trimesh.PointCloud([args.viewer]), geom_name="viewer")

    scene.show(flags={'cull': False})


if __name__ == "__main__":
    main()
