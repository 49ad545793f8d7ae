import unittest

import numpy as np
from numpy.testing import assert_array_almost_equal

from bsp_painter.builder import build
from bsp_painter.classify import classify_point, classify_polygon, plane_from_three_points
from bsp_painter.types.bounding_box_3d import box_faces
from bsp_painter.types.node import count_nodes
from bsp_painter.types.polygon import Polygon
from bsp_painter.types.types import (
    PLANE_THICKNESS_EPS,
    DegeneratePolygonError,
    Plane,
    PointSide,
    PolygonSide,
)
from bsp_painter.vector import dot, length, vec3


class TestPlaneFromThreePoints(unittest.TestCase):

    def test_unit_normal_through_all_points(self):
        rng = np.random.default_rng(3)
        for _ in range(20):
            a, b, c = (vec3(*rng.uniform(-100, 100, size=3)) for _ in range(3))
            plane = plane_from_three_points(a, b, c)
            self.assertLess(abs(length(plane.normal) - 1), PLANE_THICKNESS_EPS)
            for p in (a, b, c):
                self.assertAlmostEqual(dot(p, plane.normal), plane.d, places=8)

    def test_winding_sets_front(self):
        # cross(c - a, b - a): counter-clockwise in xy seen from +z faces -z
        plane = plane_from_three_points(vec3(0, 0, 0), vec3(1, 0, 0), vec3(0, 1, 0))
        assert_array_almost_equal(plane.normal, [0, 0, -1])
        self.assertEqual(plane.d, 0.0)

        offset = plane_from_three_points(vec3(0, 0, 2), vec3(0, 1, 2), vec3(1, 0, 2))
        assert_array_almost_equal(offset.normal, [0, 0, 1])
        self.assertAlmostEqual(offset.d, 2.0)

    def test_degenerate_points(self):
        with self.assertRaises(DegeneratePolygonError):
            plane_from_three_points(vec3(0, 0, 0), vec3(1, 1, 1), vec3(2, 2, 2))
        with self.assertRaises(DegeneratePolygonError):
            plane_from_three_points(vec3(1, 1, 1), vec3(1, 1, 1), vec3(0, 0, 0))

    def test_small_triangles_are_not_degenerate(self):
        for size in (5e-4, 1e-6, 1e-9):
            plane = plane_from_three_points(vec3(0, 0, 0), vec3(size, 0, 0), vec3(0, size, 0))
            assert_array_almost_equal(plane.normal, [0, 0, -1])
        with self.assertRaises(DegeneratePolygonError):
            plane_from_three_points(vec3(0, 0, 0), vec3(1e-4, 0, 0), vec3(2e-4, 1e-12, 0))

    def test_sub_millimetre_box_builds(self):
        faces = box_faces((0, 0, 0), (4e-4, 4e-4, 4e-4))
        self.assertEqual(len(faces), 6)
        tree = build(faces)
        self.assertEqual(count_nodes(tree), (6, 7))

    def test_plane_requires_unit_normal(self):
        with self.assertRaises(ValueError):
            Plane((0, 0, 2), 1.0)

    def test_flipped(self):
        plane = Plane((0, 1, 0), 3.0)
        flipped = plane.flipped()
        assert_array_almost_equal(flipped.normal, [0, -1, 0])
        self.assertEqual(flipped.d, -3.0)
        self.assertEqual(flipped.flipped(), plane)


class TestClassifyPoint(unittest.TestCase):

    def setUp(self):
        self.plane = Plane((0, 0, 1), 1.0)

    def test_sides(self):
        self.assertIs(classify_point(self.plane, vec3(0, 0, 2)), PointSide.FRONT)
        self.assertIs(classify_point(self.plane, vec3(0, 0, 0)), PointSide.BACK)
        self.assertIs(classify_point(self.plane, vec3(5, -5, 1)), PointSide.COPLANAR)

    def test_points_within_epsilon_are_coplanar(self):
        for offset in (0.9e-6, -0.9e-6, 1e-9, -1e-12):
            self.assertIs(classify_point(self.plane, vec3(3, 4, 1 + offset)), PointSide.COPLANAR)
        self.assertIs(classify_point(self.plane, vec3(0, 0, 1 + 1e-5)), PointSide.FRONT)
        self.assertIs(classify_point(self.plane, vec3(0, 0, 1 - 1e-5)), PointSide.BACK)

    def test_custom_epsilon(self):
        self.assertIs(classify_point(self.plane, vec3(0, 0, 1.05), epsilon=0.1), PointSide.COPLANAR)


class TestClassifyPolygon(unittest.TestCase):

    def setUp(self):
        self.plane = Plane((1, 0, 0), 0.0)

    def square_at_x(self, x):
        return Polygon([[x, 0, 0], [x, 1, 0], [x, 1, 1], [x, 0, 1]])

    def test_front_back_coplanar(self):
        self.assertIs(classify_polygon(self.plane, self.square_at_x(2)), PolygonSide.FRONT)
        self.assertIs(classify_polygon(self.plane, self.square_at_x(-2)), PolygonSide.BACK)
        self.assertIs(classify_polygon(self.plane, self.square_at_x(0)), PolygonSide.COPLANAR)

    def test_spanning(self):
        polygon = Polygon([[-1, 0, 0], [1, 0, 0], [1, 0, 1], [-1, 0, 1]])
        self.assertIs(classify_polygon(self.plane, polygon), PolygonSide.SPANNING)

    def test_touching_vertices_do_not_span(self):
        triangle = Polygon([[0, 0, 0], [2, 0, 0], [0, 0, 1]])
        self.assertIs(classify_polygon(self.plane, triangle), PolygonSide.FRONT)
        triangle = Polygon([[0, 0, 0], [0, 0, 1], [-2, 0, 0]])
        self.assertIs(classify_polygon(self.plane, triangle), PolygonSide.BACK)


if __name__ == "__main__":
    unittest.main()
