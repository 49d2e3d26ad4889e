"""
Glyph Column Decoder

Reads the "label: x, y, z" coordinate line from a captured window without
OCR. The label is drawn in a fixed bitmap font, pure white, unsmoothed and
scaled by a whole number, so one sampled column per character is enough to
tell the characters apart.
"""

import logging
from typing import List, Optional, Tuple

from .base import CoordinateDecoder
from .buffer import PixelBuffer, WHITE_ARGB
from .glyphs import GLYPH_ROWS, GlyphKind, classify
from .result import Coordinate, DecodeResult, Found, NotFound

logger = logging.getLogger(__name__)


# Search region (label sits in the upper-left of the window)
SEARCH_WIDTH_CAP = 125
SEARCH_FRACTION = 3
SCAN_START_X = 8
SCAN_START_Y = 30

# Font geometry in unscaled pixels
ANCHOR_UNIT = 4          # Reference stroke length at scale 1
LABEL_OFFSET = 44        # Label start to first digit column
GLYPH_PITCH = 6          # Character advance

FIELD_COUNT = 3


def search_region(width: int, height: int) -> Tuple[int, int]:
    """
    Size of the upper-left region scanned for the label.

    Returns:
        (search_width, search_height)
    """
    search_width = max(width // SEARCH_FRACTION, min(SEARCH_WIDTH_CAP, width))
    search_height = height // SEARCH_FRACTION
    return search_width, search_height


class GlyphColumnDecoder(CoordinateDecoder):
    """
    Decoder for pixel-exact bitmap digit labels.

    Finds the first solid stroke of the label to learn its position and
    scale, then walks the digit columns at a fixed pitch, looking each
    column mask up in the glyph table.
    """

    def __init__(self, label_offset: int = LABEL_OFFSET, lit_color: int = WHITE_ARGB):
        """
        Initialize the decoder.

        Args:
            label_offset: Unscaled distance from the label start to the
                          first digit column
            lit_color: Exact ARGB color of the label text
        """
        self._label_offset = label_offset
        self._lit_color = lit_color

    @property
    def name(self) -> str:
        return "glyph_column"

    def configure(self, **kwargs) -> None:
        """
        Configure decoder parameters.

        Args:
            label_offset: Unscaled label-to-digits offset
            lit_color: ARGB text color
        """
        if 'label_offset' in kwargs:
            self._label_offset = int(kwargs['label_offset'])
        if 'lit_color' in kwargs:
            self._lit_color = int(kwargs['lit_color'])

    def decode(self, buffer: Optional[PixelBuffer]) -> DecodeResult:
        if buffer is None:
            return NotFound("no buffer")

        search_width, search_height = search_region(buffer.width, buffer.height)
        if search_width <= 0 or search_height <= 0:
            logger.debug(f"Search region empty for {buffer.width}x{buffer.height} buffer")
            return NotFound("search region empty")

        anchor = self._find_anchor(buffer, search_width, search_height)
        if anchor is None:
            logger.debug("No label stroke found in search region")
            return NotFound("label not found")

        start_x, start_y, streak = anchor
        scale = streak // ANCHOR_UNIT
        x = start_x + self._label_offset * scale
        origin = (x, start_y)

        coords = [0] * FIELD_COUNT
        index = 0
        negative = False

        while x < search_width:
            column = classify(self._sample_column(buffer, x, start_y, scale))

            if column.kind is GlyphKind.DIGIT:
                if index < FIELD_COUNT:
                    coords[index] = coords[index] * 10 + column.digit
            elif column.kind is GlyphKind.SIGN:
                negative = True
            elif column.kind is GlyphKind.SEPARATOR:
                if negative and index < FIELD_COUNT:
                    coords[index] = -coords[index]
                index += 1
                if index < FIELD_COUNT:
                    negative = False
            elif index < FIELD_COUNT - 1 and negative:
                # Unknown column mid-field; flag stays set
                coords[index] = -coords[index]

            x += GLYPH_PITCH * scale

        if negative and index < FIELD_COUNT:
            coords[index] = -coords[index]

        coordinate = Coordinate(*coords)
        logger.debug(f"Decoded {coordinate} (stroke at {start_x},{start_y}, scale {scale})")
        return Found(coordinate=coordinate, origin=origin, scale=scale)

    def _find_anchor(
        self,
        buffer: PixelBuffer,
        search_width: int,
        search_height: int
    ) -> Optional[Tuple[int, int, int]]:
        """
        Scan for the first run of at least ANCHOR_UNIT lit pixels.

        The run counter carries across row ends; the start position is the
        first lit pixel seen anywhere in the scan.

        Returns:
            (start_x, start_y, run_length) or None
        """
        start: Optional[Tuple[int, int]] = None
        streak = 0

        for y in range(SCAN_START_Y, search_height):
            row: List[bool] = buffer.row_matches(y, search_width, self._lit_color)
            for x in range(SCAN_START_X, len(row)):
                if row[x]:
                    if start is None:
                        start = (x, y)
                    streak += 1
                elif streak < ANCHOR_UNIT:
                    streak = 0
                else:
                    break
            if streak >= ANCHOR_UNIT:
                break

        if streak < ANCHOR_UNIT or start is None:
            return None
        return start[0], start[1], streak

    def _sample_column(self, buffer: PixelBuffer, x: int, top: int, scale: int) -> int:
        """Build the 7-bit mask for the glyph column at x, top row first."""
        mask = 0
        for dy in range(GLYPH_ROWS):
            mask <<= 1
            if buffer.is_lit(x, top + dy * scale, self._lit_color):
                mask |= 1
        return mask
