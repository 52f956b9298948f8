"""Packer output dataclasses and configuration constants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from plantpack.config import Tolerance
from plantpack.geometry.polygon import Vertex, Outline


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass(frozen=True)
class PlantCircle:
    """A placed plant: center and radius, immutable once placed."""

    center: Vertex
    radius: float

    def distance_to(self, other: PlantCircle) -> float:
        return math.hypot(self.center[0] - other.center[0],
                          self.center[1] - other.center[1])

    def overlaps(self, other: PlantCircle, tolerance: Tolerance) -> bool:
        """True if the circles overlap by more than the point tolerance.

        Near-tangency within tolerance is not an overlap.
        """
        return self.distance_to(other) < (
            self.radius + other.radius - tolerance.equal_point
        )


@dataclass(frozen=True)
class PackedLayout:
    """Circles in placement order (seed first), plus the packing inputs."""

    circles: tuple[PlantCircle, ...]
    polygon: Outline
    radii: tuple[float, ...]
    iterations: int = 0     # growth iterations actually run

    def __len__(self) -> int:
        return len(self.circles)

    def __iter__(self) -> Iterator[PlantCircle]:
        return iter(self.circles)

    def __getitem__(self, index: int) -> PlantCircle:
        return self.circles[index]

    @property
    def seed(self) -> PlantCircle | None:
        return self.circles[0] if self.circles else None

    def count_by_radius(self) -> dict[float, int]:
        """Number of placed circles per requested radius, in radius order."""
        counts = {r: 0 for r in self.radii}
        for c in self.circles:
            counts[c.radius] = counts.get(c.radius, 0) + 1
        return counts


# ── Configuration ──────────────────────────────────────────────────

from plantpack.config import PACKING_RULES

# Derived from shared PackingRules (plantpack.config).
RING_SAMPLES = PACKING_RULES.ring_samples
MAX_ITERATIONS = PACKING_RULES.max_iterations
VERTEX_SEED_DIVISOR = PACKING_RULES.vertex_seed_divisor
