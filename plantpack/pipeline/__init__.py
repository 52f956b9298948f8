"""Pipeline stages: boundary, packer.

Each stage consumes the previous stage's output value.  The stages in order:

  boundary   turn a shape (polyline, circle, composite region) into a closed polygon
  packer     place plant circles inside that polygon without overlap
"""
