"""Boundary serialization: JSON conversion for sources and polygons."""

from __future__ import annotations

import math

from plantpack.geometry.polygon import Vertex, Outline, polygon_bounds

from .models import (
    BoundaryExtraction, BoundarySource, Evaluator,
    Polyline, SpatialPolyline3D, LegacyPolyline2D, Circle, CompositeRegion,
    Loop, LoopType, Segment,
    LineSegment, ArcSegment, EllipticalArcSegment, ParametricCurveSegment,
    UnsupportedSegment,
)


def parse_boundary_source(data: dict) -> BoundarySource:
    """Parse a raw dict (from JSON) into a boundary source.

    Format examples:
        {"type": "polyline", "vertices": [[0, 0], [10, 0], [10, 10]], "closed": true}
        {"type": "circle", "center": [0, 0], "radius": 5}
        {"type": "region", "loops": [{"loop_type": "external", "segments": [...]}]}

    Unknown ``type`` values and non-object entries raise ``ValueError``.
    """
    _require_object(data, "boundary source")
    kind = str(data.get("type", "")).lower()

    if kind == "polyline":
        return Polyline(
            vertices=[_point(v) for v in data["vertices"]],
            closed=bool(data.get("closed", False)),
        )
    if kind == "polyline3d":
        return SpatialPolyline3D(
            positions=[_point3d(v) for v in data["vertices"]],
            closed=bool(data.get("closed", False)),
        )
    if kind == "polyline2d":
        return LegacyPolyline2D(
            positions=[_point(v) for v in data["vertices"]],
            closed=bool(data.get("closed", False)),
        )
    if kind == "circle":
        return Circle(center=_point(data["center"]), radius=float(data["radius"]))
    if kind == "region":
        return CompositeRegion(loops=[_parse_loop(lp) for lp in data["loops"]])

    raise ValueError(f"Unknown boundary source type: {data.get('type')!r}")


def _require_object(data, what: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for {what}, got {type(data).__name__}")


def _point(v) -> Vertex:
    if not isinstance(v, (list, tuple)) or len(v) < 2:
        raise ValueError(f"Point needs at least 2 coordinates, got {v!r}")
    return (float(v[0]), float(v[1]))


def _point3d(v) -> tuple[float, float, float]:
    x, y = _point(v)
    return (x, y, float(v[2]) if len(v) > 2 else 0.0)


def _parse_loop(data: dict) -> Loop:
    _require_object(data, "loop")
    raw_type = str(data.get("loop_type", "default")).lower()
    try:
        loop_type = LoopType(raw_type)
    except ValueError:
        raise ValueError(f"Unknown loop_type: {raw_type!r}") from None
    return Loop(
        segments=[_parse_segment(s) for s in data["segments"]],
        loop_type=loop_type,
    )


def _parse_segment(data: dict) -> Segment:
    """Parse one loop segment.

    Angles are in radians.  ``ellipse`` takes a center, the major-axis
    vector and the minor/major ratio; ``bezier`` takes control points and
    is evaluated over [0, 1].  Anything else is kept as an unsupported
    segment (its ``start``/``end`` are required).
    """
    _require_object(data, "segment")
    kind = str(data.get("type", "")).lower()

    if kind == "line":
        return LineSegment(start=_point(data["start"]), end=_point(data["end"]))
    if kind == "arc":
        return ArcSegment(
            center=_point(data["center"]),
            radius=float(data["radius"]),
            start_angle=float(data["start_angle"]),
            end_angle=float(data["end_angle"]),
        )
    if kind == "ellipse":
        return EllipticalArcSegment(
            evaluator=ellipse_evaluator(
                _point(data["center"]),
                _point(data["major_axis"]),
                float(data["radius_ratio"]),
            ),
            start_angle=float(data.get("start_angle", 0.0)),
            end_angle=float(data.get("end_angle", 2 * math.pi)),
        )
    if kind == "bezier":
        controls = [_point(p) for p in data["control_points"]]
        if len(controls) < 2:
            raise ValueError("Bezier segment needs at least 2 control points")
        return ParametricCurveSegment(
            evaluator=bezier_evaluator(controls),
            start_param=0.0,
            end_param=1.0,
        )
    return UnsupportedSegment(
        start=_point(data["start"]),
        end=_point(data["end"]),
        kind=kind or "unknown",
    )


# ── Curve evaluators ───────────────────────────────────────────────


def ellipse_evaluator(
    center: Vertex, major_axis: Vertex, radius_ratio: float,
) -> Evaluator:
    """Parametric ellipse: center + major*cos(a) + minor*sin(a).

    The minor axis is the major axis turned 90° CCW and scaled by
    *radius_ratio*.
    """
    cx, cy = center
    mx, my = major_axis
    nx, ny = -my * radius_ratio, mx * radius_ratio

    def evaluate(angle: float) -> Vertex:
        c, s = math.cos(angle), math.sin(angle)
        return (cx + mx * c + nx * s, cy + my * c + ny * s)

    return evaluate


def bezier_evaluator(controls: list[Vertex]) -> Evaluator:
    """Bezier curve over t in [0, 1] (de Casteljau)."""
    pts = list(controls)

    def evaluate(t: float) -> Vertex:
        work = list(pts)
        for _ in range(len(work) - 1):
            work = [
                ((1 - t) * work[i][0] + t * work[i + 1][0],
                 (1 - t) * work[i][1] + t * work[i + 1][1])
                for i in range(len(work) - 1)
            ]
        return work[0]

    return evaluate


# ── Output ─────────────────────────────────────────────────────────


def polygon_to_dict(polygon: Outline) -> dict:
    """Serialize a polygon to a JSON-safe dict."""
    min_x, min_y, max_x, max_y = polygon_bounds(polygon)
    return {
        "points": [[x, y] for x, y in polygon],
        "bounds": [min_x, min_y, max_x, max_y],
    }


def extraction_to_dict(result: BoundaryExtraction) -> dict:
    """Serialize an extraction result (success or failure)."""
    if result.ok:
        return {
            "ok": True,
            "polygon": polygon_to_dict(result.unwrap()),
            "warnings": list(result.warnings),
        }
    return {
        "ok": False,
        "error": {
            "kind": result.error.kind.value,
            "message": result.error.message,
        } if result.error else None,
        "warnings": list(result.warnings),
    }
