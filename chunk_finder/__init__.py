"""
Chunk Finder - reads the in-game coordinate label and points at the
nearest 4x4 dig spot.
"""

__version__ = "1.0.0"
