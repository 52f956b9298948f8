"""plantpack: planting-bed boundary extraction and greedy circle packing."""

__version__ = "0.1.0"
