"""
Tests for the glyph column decoder.

Renders synthetic coordinate labels and checks what the decoder reads back,
including the sign and separator quirks of the label format.

Usage:
    python test_decoder.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunk_finder.ocr import (
    Coordinate,
    CoordinateDecoder,
    GlyphColumnDecoder,
    NotFound,
    PixelBuffer,
    WHITE_ARGB,
    available_decoders,
    create_decoder,
    register_decoder,
    render_coordinate,
    render_text,
    search_region,
)


BLACK = 0xFF000000


def blank_buffer(width: int, height: int, color: int = BLACK) -> PixelBuffer:
    return PixelBuffer.from_array(np.full((height, width), color, dtype=np.uint32))


def test_search_region():
    assert search_region(900, 300) == (300, 100)
    assert search_region(300, 300) == (125, 100)    # Width cap wins
    assert search_region(60, 90) == (60, 30)        # Narrow window uses full width
    assert search_region(0, 0) == (0, 0)


def test_reads_rendered_coordinate():
    decoder = GlyphColumnDecoder()
    result = decoder.decode(render_coordinate(Coordinate(100, 64, -32), scale=2))

    assert result.found
    assert result.coordinate == Coordinate(100, 64, -32)
    assert result.scale == 2
    assert result.origin == (10 + 44 * 2, 30)


@pytest.mark.parametrize("scale", [1, 2, 3])
def test_reads_at_each_scale(scale):
    result = GlyphColumnDecoder().decode(render_text("-1234, 70, 5", scale=scale, width=1500))
    assert result.found
    assert result.coordinate.as_tuple() == (-1234, 70, 5)
    assert result.scale == scale


def test_negative_first_field():
    result = GlyphColumnDecoder().decode(render_text("-5, 6, 7"))
    assert result.coordinate == Coordinate(-5, 6, 7)


def test_sign_only_field_reads_zero():
    result = GlyphColumnDecoder().decode(render_text("-, 5, 7"))
    assert result.found
    assert result.coordinate == Coordinate(0, 5, 7)


def test_unknown_column_after_negative_value_flips_sign():
    # The blank column negates the field and leaves the sign flag set,
    # so the separator negates it back.
    result = GlyphColumnDecoder().decode(render_text("-12 , 3, 4"))
    assert result.coordinate == Coordinate(12, 3, 4)


def test_unknown_column_ignored_in_last_field():
    result = GlyphColumnDecoder().decode(render_text("1, 2, -3 "))
    assert result.coordinate == Coordinate(1, 2, -3)


def test_fields_after_third_ignored():
    result = GlyphColumnDecoder().decode(render_text("1, 2, 3, 4"))
    assert result.coordinate == Coordinate(1, 2, 3)


def test_negative_third_field_kept_when_fourth_follows():
    result = GlyphColumnDecoder().decode(render_text("1, 2, -3, 4"))
    assert result.coordinate == Coordinate(1, 2, -3)


def test_digits_past_search_region_dropped():
    # Search width is 125 for a 300-wide buffer; glyphs start at 10 + 44 = 54
    # and advance by 6, so only the first twelve columns are sampled.
    result = GlyphColumnDecoder().decode(render_text("1, 2, 3456789", scale=1, width=300))
    assert result.coordinate == Coordinate(1, 2, 345678)


def test_missing_separators_leave_zero_fields():
    result = GlyphColumnDecoder().decode(render_text("42"))
    assert result.coordinate == Coordinate(42, 0, 0)


def test_all_black_buffer_not_found():
    result = GlyphColumnDecoder().decode(blank_buffer(900, 300))
    assert not result.found
    assert isinstance(result, NotFound)


def test_none_buffer_not_found():
    result = GlyphColumnDecoder().decode(None)
    assert not result.found
    assert result.reason == "no buffer"


def test_zero_area_buffer_not_found():
    empty = PixelBuffer(width=0, height=0, stride=0, data=np.zeros(0, dtype=np.uint32))
    assert not GlyphColumnDecoder().decode(empty).found


def test_short_buffer_not_found():
    # Search height 60 // 3 = 20 is above the first scanned row
    assert not GlyphColumnDecoder().decode(blank_buffer(20, 60, WHITE_ARGB)).found


def test_narrow_black_buffer_not_found():
    assert not GlyphColumnDecoder().decode(blank_buffer(20, 300)).found


def test_near_white_is_not_lit():
    buffer = render_text("1, 2, 3", color=0xFFFFFFFE)
    assert not GlyphColumnDecoder().decode(buffer).found


def test_padded_rows():
    buffer = render_text("100, 64, -32", stride=1000)
    assert buffer.stride == 1000
    result = GlyphColumnDecoder().decode(buffer)
    assert result.coordinate == Coordinate(100, 64, -32)


def test_stroke_start_is_first_lit_pixel():
    pixels = np.full((300, 900), BLACK, dtype=np.uint32)
    pixels[30, 20:22] = WHITE_ARGB     # Too short, but becomes the start
    pixels[30, 40:48] = WHITE_ARGB     # Stroke of 8 -> scale 2
    result = GlyphColumnDecoder().decode(PixelBuffer.from_array(pixels))

    assert result.found
    assert result.scale == 2
    assert result.origin == (20 + 44 * 2, 30)


def test_stroke_run_continues_onto_next_row():
    pixels = np.full((300, 300), BLACK, dtype=np.uint32)
    pixels[30, 123:125] = WHITE_ARGB   # Last two columns of the 125 search width
    pixels[31, 8:10] = WHITE_ARGB      # First two scanned columns of the next row
    result = GlyphColumnDecoder().decode(PixelBuffer.from_array(pixels))

    assert result.found
    assert result.scale == 1
    assert result.origin == (123 + 44, 30)
    assert result.coordinate == Coordinate(0, 0, 0)


def test_configure_lit_color():
    yellow = 0xFFFFFF00
    buffer = render_text("7, 8, 9", color=yellow)
    decoder = GlyphColumnDecoder()
    assert not decoder.decode(buffer).found

    decoder.configure(lit_color=yellow)
    assert decoder.decode(buffer).coordinate == Coordinate(7, 8, 9)


def test_configure_label_offset():
    buffer = render_text("7, 8, 9", label_offset=30)
    decoder = create_decoder(label_offset=30)
    assert decoder.decode(buffer).coordinate == Coordinate(7, 8, 9)


def test_factory_default():
    decoder = create_decoder()
    assert isinstance(decoder, GlyphColumnDecoder)
    assert decoder.name == "glyph_column"
    assert "glyph_column" in available_decoders()


def test_factory_unknown_type():
    with pytest.raises(ValueError):
        create_decoder("tesseract")


def test_register_decoder():
    class FixedDecoder(CoordinateDecoder):
        @property
        def name(self):
            return "fixed"

        def decode(self, buffer):
            return NotFound("fixed")

    register_decoder("fixed", FixedDecoder)
    assert "fixed" in available_decoders()
    assert create_decoder("fixed").decode(None).reason == "fixed"

    with pytest.raises(TypeError):
        register_decoder("bad", dict)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
