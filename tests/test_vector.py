"""Tests for the Vec3 primitive and its degeneracy guards."""

from __future__ import annotations

import math
import unittest

from gcodemesh.geometry import Vec3, UP, angle_between


class TestVec3Arithmetic(unittest.TestCase):

    def test_add_sub_scale(self):
        a = Vec3(1.0, 2.0, 3.0)
        b = Vec3(0.5, -1.0, 2.0)
        self.assertEqual(a + b, Vec3(1.5, 1.0, 5.0))
        self.assertEqual(a - b, Vec3(0.5, 3.0, 1.0))
        self.assertEqual(a * 2.0, Vec3(2.0, 4.0, 6.0))
        self.assertEqual(2.0 * a, Vec3(2.0, 4.0, 6.0))
        self.assertEqual(-a, Vec3(-1.0, -2.0, -3.0))

    def test_dot_and_cross(self):
        x = Vec3(1.0, 0.0, 0.0)
        y = Vec3(0.0, 1.0, 0.0)
        self.assertEqual(x.dot(y), 0.0)
        self.assertEqual(x.cross(y), UP)
        # Right-hand side of a +X move is -Y
        self.assertEqual(x.cross(UP), Vec3(0.0, -1.0, 0.0))

    def test_normalize_unit_length(self):
        v = Vec3(3.0, 4.0, 12.0).normalize()
        self.assertAlmostEqual(v.length, 1.0)
        self.assertTrue(v.is_well_defined())


class TestDegenerateVectors(unittest.TestCase):

    def test_zero_vector_normalizes_to_nan(self):
        """Zero-length normalize does not raise, it flags itself."""
        v = Vec3(0.0, 0.0, 0.0).normalize()
        self.assertFalse(v.is_well_defined())
        self.assertTrue(math.isnan(v.x))

    def test_opposite_blend_is_not_well_defined(self):
        a = Vec3(1.0, 0.0, 0.0)
        self.assertFalse((a + (-a)).normalize().is_well_defined())

    def test_infinite_component_not_well_defined(self):
        self.assertFalse(Vec3(float("inf"), 0.0, 0.0).is_well_defined())

    def test_angle_between(self):
        a = Vec3(1.0, 0.0, 0.0)
        b = Vec3(0.0, 1.0, 0.0)
        self.assertAlmostEqual(angle_between(a, b), math.pi / 2)
        self.assertAlmostEqual(angle_between(a, a), 0.0)

    def test_angle_out_of_domain_is_none(self):
        """Rounding past ±1 returns None instead of raising."""
        a = Vec3(1.0000001, 0.0, 0.0)
        b = Vec3(1.0, 0.0, 0.0)
        self.assertIsNone(angle_between(a, b))
        nan = Vec3(0.0, 0.0, 0.0).normalize()
        self.assertIsNone(angle_between(nan, b))
