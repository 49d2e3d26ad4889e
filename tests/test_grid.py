"""
Tests for dig spot alignment and the overlay readout.

Usage:
    python test_grid.py
"""

import math
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunk_finder.grid import (
    ChunkReading, align_axis, idle_lines, nearest_grid_anchor, planar_distance
)
from chunk_finder.ocr import Coordinate


def test_known_position():
    reading = ChunkReading.from_position(Coordinate(10, 5, 10))
    assert reading.anchor == Coordinate(20, 5, 20)
    assert reading.distance == pytest.approx(math.sqrt(200))
    assert reading.whole_distance == 14


def test_anchor_axes_in_cell_center():
    for value in range(-200, 200):
        assert align_axis(value) % 16 == 4


def test_chunk_boundaries():
    assert align_axis(0) == 4
    assert align_axis(7) == 4
    assert align_axis(8) == 20
    assert align_axis(23) == 20
    assert align_axis(24) == 36
    assert align_axis(-8) == 4


def test_negative_values_truncate_toward_zero():
    assert align_axis(-9) == 4
    assert align_axis(-23) == 4
    assert align_axis(-24) == -12
    assert align_axis(-40) == -28


def test_idempotent_for_non_negative():
    for value in range(0, 500):
        anchor = align_axis(value)
        assert align_axis(anchor) == anchor


def test_not_idempotent_for_negative_anchor():
    assert align_axis(-24) == -12
    assert align_axis(-12) == 4


def test_y_is_carried_through():
    anchor = nearest_grid_anchor(Coordinate(-100, -64, 300))
    assert anchor.y == -64
    assert anchor.x == align_axis(-100)
    assert anchor.z == align_axis(300)


def test_planar_distance():
    a = Coordinate(0, 0, 0)
    b = Coordinate(3, 99, 4)
    assert planar_distance(a, b) == 5.0
    assert planar_distance(b, a) == planar_distance(a, b)
    assert planar_distance(a, a) == 0.0


def test_distance_at_anchor_is_zero():
    reading = ChunkReading.from_position(Coordinate(20, 70, 36))
    assert reading.anchor == reading.position
    assert reading.distance == 0.0


def test_reading_lines():
    reading = ChunkReading.from_position(Coordinate(10, 5, 10))
    assert reading.lines() == [
        "Player: 10, 5, 10",
        "4x4: 20, 5, 20",
        "Dist: 14 blocks",
    ]


def test_idle_lines():
    lines = idle_lines("Ctrl+F8")
    assert lines[0] == "Press Ctrl+F8 to read coords"
    assert len(lines) == 3


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
