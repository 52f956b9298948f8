"""Boundary source dataclasses, extraction result, and sampling constants."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

from plantpack.geometry.polygon import Vertex, Outline

Evaluator = Callable[[float], Vertex]


# ── Curve segments (composite region loops) ────────────────────────


@dataclass(frozen=True)
class LineSegment:
    start: Vertex
    end: Vertex

    @property
    def start_point(self) -> Vertex:
        return self.start


@dataclass(frozen=True)
class ArcSegment:
    """Circular arc, counter-clockwise from start_angle to end_angle (radians)."""

    center: Vertex
    radius: float
    start_angle: float
    end_angle: float

    def evaluate(self, angle: float) -> Vertex:
        return (
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        )

    @property
    def start_point(self) -> Vertex:
        return self.evaluate(self.start_angle)


@dataclass(frozen=True)
class EllipticalArcSegment:
    """Elliptical arc; *evaluator* maps an angle (radians) to a point."""

    evaluator: Evaluator
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class ParametricCurveSegment:
    """Spline-like curve; *evaluator* maps a parameter to a point."""

    evaluator: Evaluator
    start_param: float
    end_param: float


@dataclass(frozen=True)
class UnsupportedSegment:
    """A segment kind we cannot sample.  Only its end point is kept."""

    start: Vertex
    end: Vertex
    kind: str = "unknown"

    @property
    def start_point(self) -> Vertex:
        return self.start


Segment = Union[
    LineSegment, ArcSegment, EllipticalArcSegment,
    ParametricCurveSegment, UnsupportedSegment,
]


class LoopType(str, Enum):
    EXTERNAL = "external"
    DEFAULT = "default"
    OTHER = "other"


@dataclass(frozen=True)
class Loop:
    segments: list[Segment]
    loop_type: LoopType = LoopType.DEFAULT


# ── Boundary sources ───────────────────────────────────────────────


@dataclass(frozen=True)
class Polyline:
    """Lightweight 2D polyline."""

    vertices: list[Vertex]
    closed: bool = False


@dataclass(frozen=True)
class SpatialPolyline3D:
    """3D polyline; z is dropped (planting beds are assumed planar)."""

    positions: list[tuple[float, float, float]]
    closed: bool = False


@dataclass(frozen=True)
class LegacyPolyline2D:
    """Old-style 2D polyline with per-vertex positions."""

    positions: list[Vertex]
    closed: bool = False


@dataclass(frozen=True)
class Circle:
    center: Vertex
    radius: float


@dataclass(frozen=True)
class CompositeRegion:
    """Hatch-like region bounded by one or more loops of curve segments."""

    loops: list[Loop]


BoundarySource = Union[
    Polyline, SpatialPolyline3D, LegacyPolyline2D, Circle, CompositeRegion,
]


# ── Extraction result ──────────────────────────────────────────────


class ExtractionErrorKind(str, Enum):
    NOT_CLOSED = "not_closed"
    UNSUPPORTED_SHAPE = "unsupported_shape"
    NO_USABLE_LOOP = "no_usable_loop"
    CURVE_EVALUATION_FAILED = "curve_evaluation_failed"


@dataclass(frozen=True)
class ExtractionError:
    kind: ExtractionErrorKind
    message: str


class BoundaryError(Exception):
    """Raised by ``BoundaryExtraction.unwrap()`` when extraction failed."""

    def __init__(self, kind: ExtractionErrorKind, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Cannot extract boundary ({kind.value}): {reason}")


@dataclass
class BoundaryExtraction:
    """Either a closed polygon or the reason there is none."""

    polygon: Outline | None = None
    error: ExtractionError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.polygon is not None

    def unwrap(self) -> Outline:
        if self.error is not None:
            raise BoundaryError(self.error.kind, self.error.message)
        if self.polygon is None:
            raise BoundaryError(ExtractionErrorKind.NO_USABLE_LOOP,
                                "extraction produced no polygon")
        return self.polygon


# ── Configuration ──────────────────────────────────────────────────

from plantpack.config import SAMPLING_RULES

# Derived from shared SamplingRules (plantpack.config).
CIRCLE_SEGMENTS = SAMPLING_RULES.circle_segments
ARC_SEGMENTS = SAMPLING_RULES.arc_segments
CURVE_SEGMENTS = SAMPLING_RULES.curve_segments
