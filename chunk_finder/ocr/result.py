"""
Decode Result Dataclasses

Shared data structures for decoder results.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Coordinate:
    """Three signed integer coordinates (x, y, z)."""
    x: int
    y: int
    z: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"{self.x}, {self.y}, {self.z}"


@dataclass(frozen=True)
class Found:
    """Successful decode."""
    coordinate: Coordinate
    origin: Tuple[int, int]  # (x, y) of the first sampled digit column
    scale: int               # Integral glyph scale factor

    found = True


@dataclass(frozen=True)
class NotFound:
    """No label could be located in the buffer."""
    reason: str = ""

    found = False


DecodeResult = Union[Found, NotFound]
