"""
Coordinate Decoding Module for Chunk Finder

Pluggable decoder architecture for reading the on-screen coordinate label
from a captured window.

Usage:
    from chunk_finder.ocr import create_decoder, PixelBuffer

    # Create a decoder (glyph column decoding)
    decoder = create_decoder()

    # Decode a captured buffer
    result = decoder.decode(PixelBuffer.from_image(image))

    if result.found:
        print(result.coordinate)
"""

# Public API - Buffer and result types
from .buffer import PixelBuffer, WHITE_ARGB
from .result import (
    Coordinate,
    DecodeResult,
    Found,
    NotFound,
)

# Public API - Glyph table
from .glyphs import (
    DIGIT_TABLE,
    GlyphColumn,
    GlyphKind,
    classify,
)

# Public API - Base class for custom decoders
from .base import CoordinateDecoder

# Public API - Factory functions
from .factory import (
    create_decoder,
    register_decoder,
    available_decoders,
)

# Public API - Glyph column decoder
from .column_decoder import GlyphColumnDecoder, search_region

# Synthetic rendering
from .render import render_coordinate, render_text

# Debug utilities
from .debug import DEBUG_DIR, debug_image_paths, latest_clean_image, save_clean_image, save_debug_image

__all__ = [
    # Buffer and results
    "PixelBuffer",
    "WHITE_ARGB",
    "Coordinate",
    "DecodeResult",
    "Found",
    "NotFound",
    # Glyph table
    "DIGIT_TABLE",
    "GlyphColumn",
    "GlyphKind",
    "classify",
    # Base class
    "CoordinateDecoder",
    # Factory
    "create_decoder",
    "register_decoder",
    "available_decoders",
    # Decoders
    "GlyphColumnDecoder",
    "search_region",
    # Rendering
    "render_coordinate",
    "render_text",
    # Debug
    "DEBUG_DIR",
    "debug_image_paths",
    "latest_clean_image",
    "save_clean_image",
    "save_debug_image",
]
