"""Boundary: extract a closed polygon from a boundary source.

Submodules:
  models        Source dataclasses, extraction result, sampling constants.
  extract       Extraction algorithm (polylines, circles, composite regions).
  serialization JSON conversion (parse_boundary_source, extraction_to_dict).
"""

from .models import (
    Polyline, SpatialPolyline3D, LegacyPolyline2D, Circle, CompositeRegion,
    Loop, LoopType,
    LineSegment, ArcSegment, EllipticalArcSegment, ParametricCurveSegment,
    UnsupportedSegment,
    BoundaryExtraction, ExtractionError, ExtractionErrorKind, BoundaryError,
)
from .extract import extract_boundary
from .serialization import (
    parse_boundary_source, polygon_to_dict, extraction_to_dict,
    ellipse_evaluator, bezier_evaluator,
)

__all__ = [
    # Sources
    "Polyline", "SpatialPolyline3D", "LegacyPolyline2D", "Circle",
    "CompositeRegion", "Loop", "LoopType",
    "LineSegment", "ArcSegment", "EllipticalArcSegment",
    "ParametricCurveSegment", "UnsupportedSegment",
    # Result
    "BoundaryExtraction", "ExtractionError", "ExtractionErrorKind", "BoundaryError",
    # Extraction
    "extract_boundary",
    # Serialization
    "parse_boundary_source", "polygon_to_dict", "extraction_to_dict",
    "ellipse_evaluator", "bezier_evaluator",
]
