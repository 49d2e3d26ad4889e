"""
Tests for the glyph column table and pixel buffer.

Usage:
    python test_glyphs.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunk_finder.ocr import DIGIT_TABLE, GlyphKind, PixelBuffer, classify
from chunk_finder.ocr.glyphs import (
    DIGIT_MASKS, MASK_COUNT, SEPARATOR_MASK, SIGN_MASK, UNKNOWN_COLUMN, mask_for
)


def test_every_mask_classifies():
    kinds = {kind: 0 for kind in GlyphKind}
    for mask in range(MASK_COUNT):
        kinds[classify(mask).kind] += 1

    assert kinds[GlyphKind.DIGIT] == 10
    assert kinds[GlyphKind.SIGN] == 1
    assert kinds[GlyphKind.SEPARATOR] == 1
    assert kinds[GlyphKind.UNKNOWN] == MASK_COUNT - 12


def test_digit_masks():
    assert len(set(DIGIT_MASKS)) == 10
    for digit, mask in enumerate(DIGIT_MASKS):
        column = classify(mask)
        assert column.kind is GlyphKind.DIGIT
        assert column.digit == digit

    assert classify(0b0111110).digit == 0
    assert classify(0b1110010).digit == 5


def test_sign_and_separator():
    assert classify(SIGN_MASK).kind is GlyphKind.SIGN
    assert classify(SEPARATOR_MASK).kind is GlyphKind.SEPARATOR
    assert classify(0b0001000).kind is GlyphKind.SIGN
    assert classify(0b0000011).kind is GlyphKind.SEPARATOR


def test_blank_column_is_unknown():
    assert classify(0) is UNKNOWN_COLUMN
    assert classify(0b1111111).kind is GlyphKind.UNKNOWN


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DIGIT_TABLE[0] = UNKNOWN_COLUMN


def test_mask_for():
    assert mask_for("7") == 0b1100000
    assert mask_for("-") == SIGN_MASK
    assert mask_for(",") == SEPARATOR_MASK
    assert mask_for(" ") == 0
    with pytest.raises(ValueError):
        mask_for("x")


def test_buffer_validation():
    with pytest.raises(ValueError):
        PixelBuffer(width=4, height=2, stride=3, data=np.zeros(8, dtype=np.uint32))
    with pytest.raises(ValueError):
        PixelBuffer(width=4, height=2, stride=4, data=np.zeros(7, dtype=np.uint32))
    with pytest.raises(ValueError):
        PixelBuffer(width=-1, height=2, stride=4, data=np.zeros(8, dtype=np.uint32))

    # Last row may end at width rather than stride
    buffer = PixelBuffer(width=4, height=2, stride=6, data=np.zeros(10, dtype=np.uint32))
    assert buffer.pixel(3, 1) == 0


def test_is_lit_outside_image():
    buffer = PixelBuffer.from_array(np.full((3, 3), 0xFFFFFFFF, dtype=np.uint32))
    assert buffer.is_lit(2, 2)
    assert not buffer.is_lit(3, 0)
    assert not buffer.is_lit(0, -1)
    assert buffer.row_matches(1, 10) == [True, True, True]
    assert buffer.row_matches(5, 10) == []


def test_padded_array_keeps_pixels():
    pixels = np.arange(6, dtype=np.uint32).reshape(2, 3)
    buffer = PixelBuffer.from_array(pixels, stride=5)
    assert buffer.stride == 5
    assert buffer.pixel(2, 1) == 5
    assert buffer.row_matches(1, 3, 4) == [False, True, False]


def test_bgra_bytes_force_opaque():
    raw = bytes([0x10, 0x20, 0x30, 0x00])  # B, G, R, undefined alpha
    assert PixelBuffer.from_bgra_bytes(raw, 1, 1).pixel(0, 0) == 0xFF302010
    assert PixelBuffer.from_bgra_bytes(raw, 1, 1, force_opaque=False).pixel(0, 0) == 0x00302010


def test_image_conversion():
    image = Image.new("RGB", (4, 2), (255, 255, 255))
    image.putpixel((1, 1), (255, 0, 0))
    buffer = PixelBuffer.from_image(image)

    assert (buffer.width, buffer.height) == (4, 2)
    assert buffer.is_lit(0, 0)
    assert buffer.pixel(1, 1) == 0xFFFF0000

    back = buffer.to_image()
    assert back.mode == "RGBA"
    assert back.getpixel((1, 1)) == (255, 0, 0, 255)
    assert back.getpixel((3, 0)) == (255, 255, 255, 255)


def test_padded_buffer_to_image():
    pixels = np.full((2, 3), 0xFF0000FF, dtype=np.uint32)  # Opaque blue
    image = PixelBuffer.from_array(pixels, stride=8).to_image()
    assert image.size == (3, 2)
    assert image.getpixel((2, 1)) == (0, 0, 255, 255)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
