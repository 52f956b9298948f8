"""
Pure-Python polygon geometry utilities.

A polygon is a list of (x, y) vertices describing a closed loop.  The
closing vertex may or may not be repeated; every edge walk wraps the
last vertex back to the first.
"""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import Polygon as ShapelyPolygon
from shapely.validation import explain_validity

from plantpack.config import DEFAULT_TOLERANCE, Tolerance

Vertex = tuple[float, float]  # (x, y)
Outline = list[Vertex]


# ── point equality ──────────────────────────────────────────────────


def points_equal(a: Sequence[float], b: Sequence[float],
                 tolerance: Tolerance | None = None) -> bool:
    """True when *a* and *b* are within ``tolerance.equal_point``."""
    tol = tolerance or DEFAULT_TOLERANCE
    return math.hypot(a[0] - b[0], a[1] - b[1]) <= tol.equal_point


def distinct_vertex_count(outline: Sequence[Vertex],
                          tolerance: Tolerance | None = None) -> int:
    """Number of geometrically distinct vertices."""
    distinct: list[Vertex] = []
    for v in outline:
        if not any(points_equal(v, d, tolerance) for d in distinct):
            distinct.append(v)
    return len(distinct)


def is_degenerate(outline: Sequence[Vertex],
                  tolerance: Tolerance | None = None) -> bool:
    """True if the polygon has fewer than 3 distinct vertices."""
    distinct: list[Vertex] = []
    for v in outline:
        if not any(points_equal(v, d, tolerance) for d in distinct):
            distinct.append(v)
            if len(distinct) >= 3:
                return False
    return True


# ── core primitives ─────────────────────────────────────────────────


def polygon_area(outline: Sequence[Vertex]) -> float:
    """Signed area via shoelace formula (positive = CCW)."""
    n = len(outline)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x0, y0 = outline[i]
        x1, y1 = outline[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2.0


def polygon_bounds(outline: Sequence[Vertex]) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y)."""
    xs = [v[0] for v in outline]
    ys = [v[1] for v in outline]
    return min(xs), min(ys), max(xs), max(ys)


def polygon_centroid(outline: Sequence[Vertex]) -> Vertex:
    """Arithmetic mean of the listed vertices.

    Not area-weighted: a repeated closing vertex counts twice, and densely
    sampled arcs pull the result toward themselves.
    """
    if not outline:
        raise ValueError("Cannot take the centroid of an empty polygon")
    n = len(outline)
    sx = sum(v[0] for v in outline)
    sy = sum(v[1] for v in outline)
    return (sx / n, sy / n)


def point_in_polygon(x: float, y: float, outline: Sequence[Vertex],
                     tolerance: Tolerance | None = None) -> bool:
    """Ray-casting point-in-polygon test.

    Points on a vertex or on an edge (within tolerance) count as inside.
    Degenerate polygons contain nothing.
    """
    tol = tolerance or DEFAULT_TOLERANCE
    if is_degenerate(outline, tol):
        return False
    n = len(outline)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = outline[i]
        xj, yj = outline[j]
        if points_equal((xi, yi), (x, y), tol):
            return True
        if _point_segment_dist(x, y, xj, yj, xi, yi) <= tol.equal_point:
            return True
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def signed_distance_to_boundary(x: float, y: float, outline: Sequence[Vertex],
                                tolerance: Tolerance | None = None) -> float:
    """Distance from a point to the nearest edge, negative when inside.

    Returns +inf for a degenerate polygon (no usable boundary).
    """
    tol = tolerance or DEFAULT_TOLERANCE
    if is_degenerate(outline, tol):
        return float("inf")
    d = _min_dist_to_boundary(x, y, outline)
    if point_in_polygon(x, y, outline, tol):
        return -d
    return d


# ── distance helpers ────────────────────────────────────────────────


def _min_dist_to_boundary(px: float, py: float,
                          outline: Sequence[Vertex]) -> float:
    """Minimum distance from point to polygon boundary."""
    min_d = float("inf")
    n = len(outline)
    for i in range(n):
        v1 = outline[i]
        v2 = outline[(i + 1) % n]
        d = _point_segment_dist(px, py, v1[0], v1[1], v2[0], v2[1])
        if d < min_d:
            min_d = d
    return min_d


def _point_segment_dist(
    px: float, py: float,
    x1: float, y1: float,
    x2: float, y2: float,
) -> float:
    dx, dy = x2 - x1, y2 - y1
    if dx == 0 and dy == 0:
        return math.hypot(px - x1, py - y1)
    t = max(0.0, min(1.0, ((px - x1) * dx + (py - y1) * dy) / (dx * dx + dy * dy)))
    proj_x = x1 + t * dx
    proj_y = y1 + t * dy
    return math.hypot(px - proj_x, py - proj_y)


# ── outline validation ──────────────────────────────────────────────


def validate_outline(
    outline: Sequence[Vertex],
    min_area: float = 0.0,
    tolerance: Tolerance | None = None,
) -> list[str]:
    """
    Check that a polygon is usable as a planting boundary.

    Returns a list of error strings (empty = valid).
    """
    errors: list[str] = []

    n_distinct = distinct_vertex_count(outline, tolerance)
    if n_distinct < 3:
        errors.append(
            f"Outline has only {n_distinct} distinct vertices; need at least 3."
        )
        return errors

    area = abs(polygon_area(outline))
    if area <= min_area:
        errors.append(
            f"Polygon area is {area:.3f}; need more than {min_area:.3f}."
        )

    poly = ShapelyPolygon(outline)
    if not poly.is_valid:
        errors.append(f"Polygon is not simple: {explain_validity(poly)}.")

    return errors
