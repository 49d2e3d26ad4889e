"""
Glyph Column Table

Maps the 7-bit column masks of the fixed bitmap font to their meaning.
Each character is identified by a single sampled column: seven rows,
topmost row in the highest bit.
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Optional


GLYPH_ROWS = 7
MASK_COUNT = 1 << GLYPH_ROWS  # 128 possible column masks


class GlyphKind(Enum):
    """What a sampled column means to the decoder."""
    DIGIT = auto()
    SIGN = auto()        # Value is negative
    SEPARATOR = auto()   # End of current field
    UNKNOWN = auto()


@dataclass(frozen=True)
class GlyphColumn:
    """Meaning of one column mask."""
    kind: GlyphKind
    digit: Optional[int] = None


UNKNOWN_COLUMN = GlyphColumn(GlyphKind.UNKNOWN)

SIGN_MASK = 0b0001000
SEPARATOR_MASK = 0b0000011

DIGIT_MASKS = (
    0b0111110,  # 0
    0b0000001,  # 1
    0b0100011,  # 2
    0b0100010,  # 3
    0b0001100,  # 4
    0b1110010,  # 5
    0b0011110,  # 6
    0b1100000,  # 7
    0b0110110,  # 8
    0b0110000,  # 9
)

_table = {mask: GlyphColumn(GlyphKind.DIGIT, digit) for digit, mask in enumerate(DIGIT_MASKS)}
_table[SIGN_MASK] = GlyphColumn(GlyphKind.SIGN)
_table[SEPARATOR_MASK] = GlyphColumn(GlyphKind.SEPARATOR)

DIGIT_TABLE: Mapping[int, GlyphColumn] = MappingProxyType(_table)
del _table

# Characters the label renderer knows how to draw
CHAR_MASKS: Mapping[str, int] = MappingProxyType({
    **{str(digit): mask for digit, mask in enumerate(DIGIT_MASKS)},
    "-": SIGN_MASK,
    ",": SEPARATOR_MASK,
    " ": 0,
})


def classify(mask: int) -> GlyphColumn:
    """
    Look up a column mask.

    Args:
        mask: 7-bit column mask

    Returns:
        GlyphColumn; UNKNOWN_COLUMN for masks not in the table
    """
    return DIGIT_TABLE.get(mask, UNKNOWN_COLUMN)


def mask_for(char: str) -> int:
    """
    Column mask used to draw a character.

    Raises:
        ValueError: If the character has no glyph column
    """
    try:
        return CHAR_MASKS[char]
    except KeyError:
        raise ValueError(f"No glyph column for character: {char!r}") from None
