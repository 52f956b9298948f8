"""Shared tolerances and sampling constants for boundary extraction and packing.

The **boundary** stage (which turns a shape into a polygon) and the
**packer** (which places circles inside that polygon) both compare points,
test containment and check overlaps with the same tolerance.  The default
lives here so both stages agree on what "equal enough" means.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tolerance:
    """Thresholds for approximate geometric comparisons.

    All distances are in drawing units.
    """

    equal_point: float = 1e-9
    """Two points closer than this are the same point.  Also the slack
    allowed when a circle touches the boundary or another circle."""

    equal_vector: float = 1e-9
    """Slack for direction comparisons (parallel / zero-length checks)."""

    def __post_init__(self) -> None:
        if not (self.equal_point > 0 and self.equal_vector > 0):
            raise ValueError(
                f"Tolerance values must be positive, got "
                f"equal_point={self.equal_point}, equal_vector={self.equal_vector}"
            )

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def ring_gap(self) -> float:
        """Extra gap added to the candidate ring around a placed circle.

        Two point-tolerances, so a neighbour touching at the ring never
        registers as an overlap.
        """
        return 2 * self.equal_point


@dataclass(frozen=True)
class SamplingRules:
    """How finely curved boundaries are discretized."""

    circle_segments: int = 64
    """Equal-angle samples for a full circle."""

    arc_segments: int = 16
    """Sub-segments for a circular arc (both ends included)."""

    curve_segments: int = 48
    """Steps for elliptical arcs and parametric curves."""


@dataclass(frozen=True)
class PackingRules:
    """Greedy packer knobs."""

    ring_samples: int = 12
    """Candidate points on the ring around each placed circle."""

    max_iterations: int = 5000
    """Hard cap on growth iterations."""

    vertex_seed_divisor: int = 10
    """With nothing placed, every ``n // divisor``-th vertex is a candidate."""


# Module-level singletons: importable everywhere.
DEFAULT_TOLERANCE = Tolerance()
SAMPLING_RULES = SamplingRules()
PACKING_RULES = PackingRules()
