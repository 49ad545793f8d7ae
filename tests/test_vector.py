import unittest

import numpy as np
from numpy.testing import assert_array_almost_equal

from bsp_painter.vector import as_vec3, cross, dot, length, lerp, normalize, scale, subtract, vec3


class TestVectorKernel(unittest.TestCase):

    def test_arithmetic(self):
        a = vec3(1, 2, 3)
        b = vec3(4, 5, 6)
        assert_array_almost_equal(subtract(b, a), [3, 3, 3])
        assert_array_almost_equal(scale(a, 2), [2, 4, 6])
        self.assertAlmostEqual(dot(a, b), 32.0)
        self.assertIsInstance(dot(a, b), float)

    def test_cross_is_right_handed(self):
        assert_array_almost_equal(cross(vec3(1, 0, 0), vec3(0, 1, 0)), [0, 0, 1])
        assert_array_almost_equal(cross(vec3(0, 1, 0), vec3(1, 0, 0)), [0, 0, -1])

    def test_lerp(self):
        a = vec3(0, 0, 0)
        b = vec3(10, -10, 2)
        assert_array_almost_equal(lerp(a, b, 0.0), a)
        assert_array_almost_equal(lerp(a, b, 1.0), b)
        assert_array_almost_equal(lerp(a, b, 0.25), [2.5, -2.5, 0.5])

    def test_length_and_normalize(self):
        v = vec3(3, 4, 12)
        self.assertAlmostEqual(length(v), 13.0)
        self.assertAlmostEqual(length(normalize(v)), 1.0)

    def test_normalize_zero_is_not_finite(self):
        n = normalize(vec3(0, 0, 0))
        self.assertFalse(np.all(np.isfinite(n)))

    def test_vectors_are_read_only(self):
        v = subtract(vec3(1, 1, 1), vec3(0, 0, 0))
        with self.assertRaises(ValueError):
            v[0] = 5.0

    def test_as_vec3_copies_writeable_input(self):
        source = np.array([1.0, 2.0, 3.0])
        v = as_vec3(source)
        source[0] = 100.0
        self.assertEqual(v[0], 1.0)
        with self.assertRaises(ValueError):
            as_vec3([1, 2])


if __name__ == "__main__":
    unittest.main()
