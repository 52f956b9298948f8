"""Packer: places plant circles inside a boundary polygon.

Submodules:
  models        Output dataclasses and configuration constants.
  engine        Greedy packing algorithm (seed + ring-candidate growth).
  serialization JSON conversion (layout_to_dict, parse_layout).
"""

from .models import PlantCircle, PackedLayout
from .engine import pack_circles, can_place, generate_candidates
from .serialization import layout_to_dict, parse_layout

__all__ = [
    # Models
    "PlantCircle", "PackedLayout",
    # Engine
    "pack_circles", "can_place", "generate_candidates",
    # Serialization
    "layout_to_dict", "parse_layout",
]
