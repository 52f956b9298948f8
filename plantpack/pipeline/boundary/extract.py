"""Boundary extraction: turn a boundary source into a closed polygon."""

from __future__ import annotations

import logging
import math

from plantpack.config import DEFAULT_TOLERANCE, Tolerance
from plantpack.geometry.polygon import Vertex, Outline, points_equal, distinct_vertex_count

from .models import (
    BoundaryExtraction, BoundarySource, Evaluator, ExtractionError, ExtractionErrorKind,
    Polyline, SpatialPolyline3D, LegacyPolyline2D, Circle, CompositeRegion,
    Loop, LoopType,
    LineSegment, ArcSegment, EllipticalArcSegment, ParametricCurveSegment,
    UnsupportedSegment,
    CIRCLE_SEGMENTS, ARC_SEGMENTS, CURVE_SEGMENTS,
)


log = logging.getLogger(__name__)


class _CurveEvaluationError(Exception):
    """Internal: a segment evaluator failed while sampling a loop."""


# ── Main extraction function ──────────────────────────────────────


def extract_boundary(
    source: BoundarySource,
    tolerance: Tolerance | None = None,
) -> BoundaryExtraction:
    """Extract a closed polygon from a boundary source.

    Parameters
    ----------
    source : BoundarySource
        Polyline (any flavour), circle, or composite region.
    tolerance : Tolerance, optional
        Point-equality tolerance (default ``DEFAULT_TOLERANCE``).

    Returns
    -------
    BoundaryExtraction
        ``polygon`` is set on success, ``error`` otherwise.  Failures are
        never raised.
    """
    tol = tolerance or DEFAULT_TOLERANCE

    if isinstance(source, Polyline):
        return _from_polyline("Polyline", list(source.vertices), source.closed, tol)
    if isinstance(source, SpatialPolyline3D):
        pts = [(p[0], p[1]) for p in source.positions]
        return _from_polyline("SpatialPolyline3D", pts, source.closed, tol)
    if isinstance(source, LegacyPolyline2D):
        pts = [(p[0], p[1]) for p in source.positions]
        return _from_polyline("LegacyPolyline2D", pts, source.closed, tol)
    if isinstance(source, Circle):
        return _usable("Circle", _from_circle(source, tol), tol)
    if isinstance(source, CompositeRegion):
        return _from_region(source, tol)

    log.info("Unsupported boundary source: %s", type(source).__name__)
    return _failure(
        ExtractionErrorKind.UNSUPPORTED_SHAPE,
        f"{type(source).__name__} is not a recognized boundary type",
    )


def _failure(kind: ExtractionErrorKind, message: str,
             warnings: list[str] | None = None) -> BoundaryExtraction:
    return BoundaryExtraction(
        error=ExtractionError(kind=kind, message=message),
        warnings=warnings or [],
    )


def _close(points: Outline, tol: Tolerance) -> Outline:
    """Append the first point if the loop is not already closed."""
    if points and not points_equal(points[0], points[-1], tol):
        points.append(points[0])
    return points


# ── Polylines and circles ──────────────────────────────────────────


def _from_polyline(
    name: str, points: Outline, closed: bool, tol: Tolerance,
) -> BoundaryExtraction:
    if not closed:
        log.info("%s is not closed", name)
        return _failure(ExtractionErrorKind.NOT_CLOSED, f"{name} is not closed")
    pts = [(float(x), float(y)) for x, y in points]
    return _usable(name, _close(pts, tol), tol)


def _usable(name: str, points: Outline, tol: Tolerance) -> BoundaryExtraction:
    """Wrap a closed point list, rejecting it below 3 distinct points."""
    n_distinct = distinct_vertex_count(points, tol)
    if n_distinct < 3:
        log.info("%s has only %d distinct points", name, n_distinct)
        return _failure(ExtractionErrorKind.NO_USABLE_LOOP,
                        f"{name} has only {n_distinct} distinct points")
    return BoundaryExtraction(polygon=points)


def _from_circle(circle: Circle, tol: Tolerance) -> Outline:
    """Equal-angle samples starting at angle 0, explicitly closed."""
    cx, cy = circle.center
    pts: Outline = []
    for i in range(CIRCLE_SEGMENTS):
        angle = (2 * math.pi / CIRCLE_SEGMENTS) * i
        pts.append((
            cx + circle.radius * math.cos(angle),
            cy + circle.radius * math.sin(angle),
        ))
    return _close(pts, tol)


# ── Composite regions ──────────────────────────────────────────────


def _eligible_loops(region: CompositeRegion) -> list[tuple[int, Loop]]:
    """External loops first, then default loops, each in region order."""
    indexed = list(enumerate(region.loops))
    external = [(i, lp) for i, lp in indexed if lp.loop_type == LoopType.EXTERNAL]
    default = [(i, lp) for i, lp in indexed if lp.loop_type == LoopType.DEFAULT]
    return external + default


def _from_region(region: CompositeRegion, tol: Tolerance) -> BoundaryExtraction:
    candidates = _eligible_loops(region)
    if not candidates:
        log.info("Region has no external or default loop")

    warnings: list[str] = []
    last_error = ExtractionError(
        kind=ExtractionErrorKind.NO_USABLE_LOOP,
        message="region has no external or default loop",
    )

    for index, loop in candidates:
        loop_warnings: list[str] = []
        try:
            points = _sample_loop(loop, tol, loop_warnings)
        except _CurveEvaluationError as exc:
            log.warning("Loop %d: curve evaluation failed: %s", index, exc)
            last_error = ExtractionError(
                kind=ExtractionErrorKind.CURVE_EVALUATION_FAILED,
                message=f"loop {index}: {exc}",
            )
            continue

        warnings.extend(loop_warnings)
        n_distinct = distinct_vertex_count(points, tol)
        if n_distinct < 3:
            log.info(
                "Loop %d has only %d distinct points; trying next loop",
                index, n_distinct,
            )
            last_error = ExtractionError(
                kind=ExtractionErrorKind.NO_USABLE_LOOP,
                message=f"loop {index} has only {n_distinct} distinct points",
            )
            continue

        log.debug("Extracted loop %d with %d points", index, len(points))
        return BoundaryExtraction(polygon=points, warnings=warnings)

    return BoundaryExtraction(error=last_error, warnings=warnings)


def _append_distinct(points: Outline, p: Vertex, tol: Tolerance) -> None:
    if not points or not points_equal(p, points[-1], tol):
        points.append(p)


def _evaluate(segment: object, evaluator: Evaluator, value: float) -> Vertex:
    """Call a segment evaluator, turning any failure into one error type."""
    try:
        x, y = evaluator(value)
        x, y = float(x), float(y)
    except Exception as exc:
        raise _CurveEvaluationError(
            f"{type(segment).__name__} evaluator failed at {value:.6g}: {exc}"
        ) from exc
    if not (math.isfinite(x) and math.isfinite(y)):
        raise _CurveEvaluationError(
            f"{type(segment).__name__} evaluator returned a non-finite point "
            f"at {value:.6g}"
        )
    return (x, y)


def _unwrapped_end(start: float, end: float) -> float:
    # Angles spanning 0/2pi: iterate in the positive direction.
    if end < start:
        end += 2 * math.pi
    return end


def _sample_loop(loop: Loop, tol: Tolerance, warnings: list[str]) -> Outline:
    """Walk a loop's segments in order and accumulate boundary points."""
    points: Outline = []

    for seg in loop.segments:
        if isinstance(seg, EllipticalArcSegment):
            start = _evaluate(seg, seg.evaluator, seg.start_angle)
        elif isinstance(seg, ParametricCurveSegment):
            start = _evaluate(seg, seg.evaluator, seg.start_param)
        else:
            start = getattr(seg, "start_point", None)
        if start is not None:
            _append_distinct(points, (float(start[0]), float(start[1])), tol)

        if isinstance(seg, LineSegment):
            _append_distinct(points, (float(seg.end[0]), float(seg.end[1])), tol)

        elif isinstance(seg, ArcSegment):
            a0 = seg.start_angle
            a1 = _unwrapped_end(a0, seg.end_angle)
            for j in range(ARC_SEGMENTS + 1):
                angle = a0 + (a1 - a0) * (j / ARC_SEGMENTS)
                _append_distinct(points, seg.evaluate(angle), tol)

        elif isinstance(seg, EllipticalArcSegment):
            log.debug("Approximating elliptical arc by segmenting")
            a0 = seg.start_angle
            a1 = _unwrapped_end(a0, seg.end_angle)
            for j in range(1, CURVE_SEGMENTS + 1):
                angle = a0 + (a1 - a0) * (j / CURVE_SEGMENTS)
                _append_distinct(points, _evaluate(seg, seg.evaluator, angle), tol)

        elif isinstance(seg, ParametricCurveSegment):
            log.debug("Approximating parametric curve by segmenting")
            t0, t1 = seg.start_param, seg.end_param
            for j in range(1, CURVE_SEGMENTS + 1):
                t = t0 + (t1 - t0) * (j / CURVE_SEGMENTS)
                _append_distinct(points, _evaluate(seg, seg.evaluator, t), tol)

        else:
            kind = seg.kind if isinstance(seg, UnsupportedSegment) else type(seg).__name__
            end = getattr(seg, "end", None)
            msg = (f"Unsupported curve type '{kind}' in region boundary; "
                   f"adding end point only")
            log.warning(msg)
            warnings.append(msg)
            if end is not None:
                _append_distinct(points, (float(end[0]), float(end[1])), tol)

    return _close(points, tol)
