"""Main packing engine: greedy growth from a central seed circle."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from plantpack.config import DEFAULT_TOLERANCE, Tolerance
from plantpack.geometry.polygon import (
    Vertex, Outline,
    is_degenerate, point_in_polygon, polygon_centroid,
    signed_distance_to_boundary,
)

from .models import (
    PlantCircle, PackedLayout,
    RING_SAMPLES, MAX_ITERATIONS, VERTEX_SEED_DIVISOR,
)


log = logging.getLogger(__name__)


# ── Placement predicate ────────────────────────────────────────────


def can_place(
    center: Vertex,
    radius: float,
    placed: Sequence[PlantCircle],
    polygon: Outline,
    tolerance: Tolerance | None = None,
) -> bool:
    """Check whether a circle fits inside the polygon without overlap.

    The inward clearance (distance to the boundary from inside) plus the
    point tolerance must cover the radius, and no placed circle may be
    overlapped by more than the tolerance.
    """
    tol = tolerance or DEFAULT_TOLERANCE

    candidate = PlantCircle(center, radius)
    for other in placed:
        if candidate.overlaps(other, tol):
            return False

    clearance = -signed_distance_to_boundary(center[0], center[1], polygon, tol)
    return clearance + tol.equal_point >= radius


# ── Candidate generation ───────────────────────────────────────────


def generate_candidates(
    placed: Sequence[PlantCircle],
    polygon: Outline,
    min_radius: float,
    tolerance: Tolerance | None = None,
) -> list[Vertex]:
    """Trial centers for the next placement, inside the polygon.

    Around each placed circle: ``RING_SAMPLES`` points on a ring just wide
    enough for the smallest radius to sit tangent.  With nothing placed,
    the first vertex and every ``n // 10``-th vertex instead.

    Duplicates are dropped, keeping first occurrence.
    """
    tol = tolerance or DEFAULT_TOLERANCE
    candidates: list[Vertex] = []

    if not placed:
        n = len(polygon)
        if n == 0:
            return []
        candidates.append(polygon[0])
        stride = max(1, n // VERTEX_SEED_DIVISOR)
        for i in range(0, n, stride):
            candidates.append(polygon[i])
    else:
        for circle in placed:
            ring = circle.radius + min_radius + tol.ring_gap
            cx, cy = circle.center
            for i in range(RING_SAMPLES):
                angle = (2 * math.pi / RING_SAMPLES) * i
                candidates.append((
                    cx + ring * math.cos(angle),
                    cy + ring * math.sin(angle),
                ))

    inside = [p for p in candidates
              if point_in_polygon(p[0], p[1], polygon, tol)]
    return list(dict.fromkeys(inside))


# ── Main packing function ─────────────────────────────────────────


def pack_circles(
    polygon: Outline,
    radii: Sequence[float],
    tolerance: Tolerance | None = None,
    *,
    max_iterations: int = MAX_ITERATIONS,
) -> PackedLayout:
    """Pack circles of the given radii into a polygon.

    A seed circle goes at the vertex centroid (or, failing that, at the
    first vertex).  Each growth iteration then proposes points around
    every placed circle, sorts them by distance to the centroid, and
    places the first radius (in caller order) that fits anywhere.

    Parameters
    ----------
    polygon : Outline
        Closed boundary polygon.
    radii : sequence of float
        Plant radii in priority order.  Not re-sorted.
    tolerance : Tolerance, optional
        Comparison slack (default ``DEFAULT_TOLERANCE``).
    max_iterations : int
        Cap on growth iterations (default 5000).

    Returns
    -------
    PackedLayout
        Circles in placement order.  May be empty; packing never raises.
    """
    tol = tolerance or DEFAULT_TOLERANCE
    outline = [(float(x), float(y)) for x, y in polygon]

    usable: list[float] = []
    for r in radii:
        r = float(r)
        if math.isfinite(r) and r > 0:
            usable.append(r)
        else:
            log.warning("Ignoring unusable radius %r", r)
    radii_t = tuple(usable)

    if not usable:
        log.warning("No usable radii; nothing to pack")
        return PackedLayout(circles=(), polygon=outline, radii=radii_t)
    if is_degenerate(outline, tol):
        log.warning("Boundary polygon is degenerate (%d points); nothing to pack",
                    len(outline))
        return PackedLayout(circles=(), polygon=outline, radii=radii_t)

    placed: list[PlantCircle] = []
    centroid = polygon_centroid(outline)
    min_radius = min(usable)

    # ── 1. Seed circle ────────────────────────────────────────────
    for anchor, label in ((centroid, "centroid"), (outline[0], "first vertex")):
        for r in usable:
            if can_place(anchor, r, placed, outline, tol):
                placed.append(PlantCircle(anchor, r))
                log.info("Seed circle at %s (%.2f, %.2f) R=%.2f",
                         label, anchor[0], anchor[1], r)
                break
        if placed:
            break

    # ── 2. Growth ─────────────────────────────────────────────────
    iterations = 0
    for _ in range(max_iterations):
        iterations += 1
        candidates = generate_candidates(placed, outline, min_radius, tol)
        candidates.sort(key=lambda p: math.hypot(p[0] - centroid[0],
                                                 p[1] - centroid[1]))

        placed_one = False
        for r in usable:
            best = next(
                (p for p in candidates if can_place(p, r, placed, outline, tol)),
                None,
            )
            if best is not None:
                placed.append(PlantCircle(best, r))
                log.debug("Placed circle at (%.2f, %.2f) R=%.2f",
                          best[0], best[1], r)
                placed_one = True
                break

        if not placed_one:
            break

    log.info("Finished packing: %d circles in %d iterations",
             len(placed), iterations)
    return PackedLayout(
        circles=tuple(placed),
        polygon=outline,
        radii=radii_t,
        iterations=iterations,
    )
