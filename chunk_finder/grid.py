"""
Grid Anchor Module - Snaps a position to the nearest 4x4 dig spot.

Dig spots sit at the center of the 4-block sub-cell inside each 16-block
chunk, so the anchor for an axis value v is trunc((v + 8) / 16) * 16 + 4.
Only x and z are aligned; y is carried through.
"""

import math
from dataclasses import dataclass
from typing import List

from .ocr import Coordinate


CHUNK_SIZE = 16
CELL_CENTER = 4


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def align_axis(value: int) -> int:
    """
    Align one axis value to its dig spot.

    Division truncates toward zero, so values in (-24, -8] land on the
    positive anchor 4 along with [-8, 8).
    """
    return _trunc_div(value + CHUNK_SIZE // 2, CHUNK_SIZE) * CHUNK_SIZE + CELL_CENTER


def nearest_grid_anchor(pos: Coordinate) -> Coordinate:
    """
    Nearest dig spot to a position.

    Args:
        pos: Player position

    Returns:
        Coordinate with x and z aligned, y unchanged
    """
    return Coordinate(align_axis(pos.x), pos.y, align_axis(pos.z))


def planar_distance(a: Coordinate, b: Coordinate) -> float:
    """Horizontal (x/z) Euclidean distance; y is ignored."""
    return math.hypot(a.x - b.x, a.z - b.z)


@dataclass(frozen=True)
class ChunkReading:
    """
    One successful read: position, its dig spot, and the distance between.

    Attributes:
        position: Decoded player position
        anchor: Nearest dig spot
        distance: Planar distance to the dig spot
    """
    position: Coordinate
    anchor: Coordinate
    distance: float

    @classmethod
    def from_position(cls, position: Coordinate) -> 'ChunkReading':
        """
        Build a reading from a decoded position.

        Args:
            position: Decoded player position

        Returns:
            ChunkReading instance
        """
        anchor = nearest_grid_anchor(position)
        return cls(position=position, anchor=anchor,
                   distance=planar_distance(position, anchor))

    @property
    def whole_distance(self) -> int:
        """Distance in whole blocks (fraction dropped)."""
        return int(self.distance)

    def lines(self) -> List[str]:
        """Overlay text lines."""
        return [
            f"Player: {self.position}",
            f"4x4: {self.anchor}",
            f"Dist: {self.whole_distance} blocks",
        ]


def idle_lines(hotkey_label: str) -> List[str]:
    """Overlay text shown before a successful read."""
    return [
        f"Press {hotkey_label} to read coords",
        "Make sure to be decently near to dig spot",
        "Right-click for settings",
    ]
