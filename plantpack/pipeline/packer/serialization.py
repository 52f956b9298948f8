"""Layout serialization: JSON conversion."""

from __future__ import annotations

from .models import PlantCircle, PackedLayout


def layout_to_dict(layout: PackedLayout) -> dict:
    """Serialize a PackedLayout to a JSON-safe dict."""
    return {
        "circles": [
            {
                "x": c.center[0],
                "y": c.center[1],
                "radius": c.radius,
            }
            for c in layout.circles
        ],
        "polygon": [[x, y] for x, y in layout.polygon],
        "radii": list(layout.radii),
        "iterations": layout.iterations,
    }


def parse_layout(data: dict) -> PackedLayout:
    """Parse a layout.json dict back into a PackedLayout."""
    circles = tuple(
        PlantCircle(
            center=(float(c["x"]), float(c["y"])),
            radius=float(c["radius"]),
        )
        for c in data["circles"]
    )

    polygon = [(float(p[0]), float(p[1])) for p in data.get("polygon", [])]

    return PackedLayout(
        circles=circles,
        polygon=polygon,
        radii=tuple(float(r) for r in data.get("radii", [])),
        iterations=int(data.get("iterations", 0)),
    )
