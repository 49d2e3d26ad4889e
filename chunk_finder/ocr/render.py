"""
Synthetic Label Renderer

Draws coordinate labels the way the decoder expects to find them: a solid
reference stroke where the label starts, then one pixel-exact column per
character at the fixed glyph pitch. Used for tests and decoder calibration.
"""

from typing import Tuple

import numpy as np

from .buffer import PixelBuffer, WHITE_ARGB
from .column_decoder import ANCHOR_UNIT, GLYPH_PITCH, LABEL_OFFSET
from .glyphs import GLYPH_ROWS, mask_for
from .result import Coordinate


BACKGROUND_ARGB = 0xFF000000  # Opaque black

DEFAULT_WIDTH = 900
DEFAULT_HEIGHT = 300
DEFAULT_ORIGIN = (10, 30)


def render_text(
    text: str,
    scale: int = 2,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    origin: Tuple[int, int] = DEFAULT_ORIGIN,
    color: int = WHITE_ARGB,
    background: int = BACKGROUND_ARGB,
    label_offset: int = LABEL_OFFSET,
    stride: int = 0
) -> PixelBuffer:
    """
    Render a label's value text into a new buffer.

    Args:
        text: Characters to draw (digits, '-', ',' and ' ')
        scale: Integral glyph scale
        width: Buffer width
        height: Buffer height
        origin: (x, y) of the label's reference stroke
        color: ARGB text color
        background: ARGB fill color
        label_offset: Unscaled distance from the stroke to the first column
        stride: Optional row pitch (> width pads each row)

    Returns:
        PixelBuffer containing the rendered label

    Raises:
        ValueError: If text contains a character with no glyph column
    """
    pixels = np.full((height, width), background, dtype=np.uint32)
    left, top = origin

    # Reference stroke: exactly ANCHOR_UNIT units long
    pixels[top:top + scale, left:left + ANCHOR_UNIT * scale] = color

    x = left + label_offset * scale
    for char in text:
        mask = mask_for(char)
        for dy in range(GLYPH_ROWS):
            if mask & (1 << (GLYPH_ROWS - 1 - dy)):
                y = top + dy * scale
                pixels[y:y + scale, x:x + scale] = color
        x += GLYPH_PITCH * scale

    return PixelBuffer.from_array(pixels, stride=stride)


def render_coordinate(coordinate: Coordinate, **kwargs) -> PixelBuffer:
    """Render "x, y, z" for a coordinate. Accepts render_text keywords."""
    return render_text(str(coordinate), **kwargs)
