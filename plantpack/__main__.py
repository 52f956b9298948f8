"""
plantpack: entry point.

Usage:
    python -m plantpack extract bed.json
    python -m plantpack pack bed.json --radii 7,5,3 --out layout.json
"""

import sys

from plantpack.app import main


if __name__ == "__main__":
    sys.exit(main())
