"""Tests for the polygon geometry helpers.

Validates:
  - Vertex-mean centroid (including a repeated closing vertex)
  - Ray-casting containment with vertex / edge slack
  - Signed distance sign convention and +inf sentinel
  - Containment and signed distance agree
  - shapely-backed outline validation
"""

from __future__ import annotations

import math
import unittest

from shapely.geometry import Point, Polygon

from plantpack.config import DEFAULT_TOLERANCE, Tolerance
from plantpack.geometry import (
    points_equal,
    distinct_vertex_count,
    is_degenerate,
    polygon_area,
    polygon_bounds,
    polygon_centroid,
    point_in_polygon,
    signed_distance_to_boundary,
    validate_outline,
)
from tests.bed_fixtures import SQUARE, L_BED


class TestTolerance(unittest.TestCase):

    def test_default_values(self):
        self.assertEqual(DEFAULT_TOLERANCE.equal_point, 1e-9)
        self.assertEqual(DEFAULT_TOLERANCE.equal_vector, 1e-9)
        self.assertAlmostEqual(DEFAULT_TOLERANCE.ring_gap, 2e-9)

    def test_rejects_non_positive(self):
        with self.assertRaises(ValueError):
            Tolerance(equal_point=0.0)
        with self.assertRaises(ValueError):
            Tolerance(equal_vector=-1.0)


class TestPointEquality(unittest.TestCase):

    def test_within_tolerance(self):
        self.assertTrue(points_equal((1.0, 1.0), (1.0 + 1e-10, 1.0)))
        self.assertFalse(points_equal((1.0, 1.0), (1.0 + 1e-6, 1.0)))

    def test_custom_tolerance(self):
        tol = Tolerance(equal_point=0.01)
        self.assertTrue(points_equal((0, 0), (0.005, 0.005), tol))

    def test_distinct_and_degenerate(self):
        self.assertEqual(distinct_vertex_count(SQUARE), 4)
        self.assertFalse(is_degenerate(SQUARE))
        self.assertTrue(is_degenerate([(0, 0), (1, 1), (0, 0)]))
        self.assertTrue(is_degenerate([]))


class TestCentroid(unittest.TestCase):

    def test_vertex_mean_counts_closing_vertex(self):
        # (0+10+10+0+0)/5 = 4 on both axes, not the area centroid (5, 5)
        cx, cy = polygon_centroid(SQUARE)
        self.assertAlmostEqual(cx, 4.0)
        self.assertAlmostEqual(cy, 4.0)

    def test_open_square_is_centered(self):
        cx, cy = polygon_centroid(SQUARE[:-1])
        self.assertAlmostEqual(cx, 5.0)
        self.assertAlmostEqual(cy, 5.0)

    def test_empty_raises(self):
        with self.assertRaises(ValueError):
            polygon_centroid([])


class TestContainment(unittest.TestCase):

    def test_interior_and_exterior(self):
        self.assertTrue(point_in_polygon(5, 5, SQUARE))
        self.assertFalse(point_in_polygon(15, 5, SQUARE))
        self.assertFalse(point_in_polygon(-0.1, 5, SQUARE))

    def test_vertex_and_edge_are_inside(self):
        self.assertTrue(point_in_polygon(0, 0, SQUARE))
        self.assertTrue(point_in_polygon(10, 10, SQUARE))
        self.assertTrue(point_in_polygon(10, 5, SQUARE))   # right edge
        self.assertTrue(point_in_polygon(5, 0, SQUARE))    # bottom edge

    def test_concave_notch_is_outside(self):
        self.assertTrue(point_in_polygon(4, 4, L_BED))
        self.assertFalse(point_in_polygon(14, 14, L_BED))

    def test_degenerate_contains_nothing(self):
        self.assertFalse(point_in_polygon(0.5, 0, [(0, 0), (1, 0)]))

    def test_matches_shapely(self):
        poly = Polygon(L_BED)
        for x in range(-2, 23, 3):
            for y in range(-2, 23, 3):
                px, py = x + 0.37, y + 0.61
                self.assertEqual(
                    point_in_polygon(px, py, L_BED),
                    poly.contains(Point(px, py)),
                    f"mismatch at ({px}, {py})",
                )


class TestSignedDistance(unittest.TestCase):

    def test_inside_is_negative(self):
        self.assertAlmostEqual(signed_distance_to_boundary(5, 5, SQUARE), -5.0)
        self.assertAlmostEqual(signed_distance_to_boundary(2, 5, SQUARE), -2.0)

    def test_outside_is_positive(self):
        self.assertAlmostEqual(signed_distance_to_boundary(13, 5, SQUARE), 3.0)
        self.assertAlmostEqual(
            signed_distance_to_boundary(13, 14, SQUARE), 5.0)

    def test_on_boundary_is_zero(self):
        self.assertEqual(abs(signed_distance_to_boundary(10, 5, SQUARE)), 0.0)

    def test_degenerate_is_infinite(self):
        d = signed_distance_to_boundary(0, 0, [(0, 0), (1, 0), (0, 0)])
        self.assertTrue(math.isinf(d) and d > 0)

    def test_consistent_with_containment(self):
        for poly in (SQUARE, L_BED):
            for x in range(-3, 24, 2):
                for y in range(-3, 24, 2):
                    inside = point_in_polygon(x, y, poly)
                    d = signed_distance_to_boundary(x, y, poly)
                    self.assertEqual(inside, d <= 0, f"at ({x}, {y})")


class TestAreaBoundsValidation(unittest.TestCase):

    def test_area_and_bounds(self):
        self.assertAlmostEqual(polygon_area(SQUARE), 100.0)
        self.assertAlmostEqual(abs(polygon_area(L_BED)), 20 * 8 + 8 * 12)
        self.assertEqual(polygon_bounds(L_BED), (0.0, 0.0, 20.0, 20.0))

    def test_valid_outline(self):
        self.assertEqual(validate_outline(SQUARE), [])
        self.assertEqual(validate_outline(L_BED), [])

    def test_bowtie_is_not_simple(self):
        bowtie = [(0, 0), (10, 10), (10, 0), (0, 10)]
        errors = validate_outline(bowtie)
        self.assertTrue(any("not simple" in e for e in errors), errors)

    def test_too_few_vertices(self):
        errors = validate_outline([(0, 0), (1, 1)])
        self.assertEqual(len(errors), 1)
        self.assertIn("distinct vertices", errors[0])

    def test_min_area(self):
        errors = validate_outline(SQUARE, min_area=200.0)
        self.assertTrue(any("area" in e for e in errors), errors)


if __name__ == "__main__":
    unittest.main()
