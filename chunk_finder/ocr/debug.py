"""
Decoder Debug Utilities

Functions for saving annotated and clean debug images and managing debug
output. Clean copies are what tools/debug_decoder.py decodes; the annotated
ones carry sample-point markers that would hide the glyph columns.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from PIL import ImageDraw, ImageFont

from .buffer import PixelBuffer
from .column_decoder import GLYPH_PITCH, search_region
from .glyphs import GLYPH_ROWS
from .result import DecodeResult, Found


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

REGION_COLOR = "blue"
SAMPLE_COLOR = "yellow"
FOUND_COLOR = "lime"
NOT_FOUND_COLOR = "red"


def save_debug_image(
    buffer: PixelBuffer,
    result: Optional[DecodeResult],
    path: str
) -> None:
    """
    Save an annotated debug image showing the decoder's view of a buffer.

    Annotations include:
    - Search region box
    - Label origin marker
    - Every sampled glyph column position
    - Decoded coordinates, or the reason nothing was found

    Args:
        buffer: Captured buffer
        result: Decode result (can be None)
        path: Output file path
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    debug_img = buffer.to_image().convert("RGB")
    draw = ImageDraw.Draw(debug_img)

    try:
        font = ImageFont.truetype("arial.ttf", 12)
    except OSError:
        font = ImageFont.load_default()

    search_width, search_height = search_region(buffer.width, buffer.height)
    if search_width > 0 and search_height > 0:
        draw.rectangle([0, 0, search_width - 1, search_height - 1], outline=REGION_COLOR, width=1)

    if isinstance(result, Found):
        origin_x, origin_y = result.origin
        scale = result.scale

        # Cross at the first digit column
        draw.line([origin_x - 4, origin_y, origin_x + 4, origin_y], fill=FOUND_COLOR)
        draw.line([origin_x, origin_y - 4, origin_x, origin_y + 4], fill=FOUND_COLOR)

        x = origin_x
        while x < search_width:
            for dy in range(GLYPH_ROWS):
                y = origin_y + dy * scale
                draw.point((x, y), fill=SAMPLE_COLOR)
            x += GLYPH_PITCH * scale

        text = f"{result.coordinate} (scale {scale})"
        text_y = min(search_height + 4, max(0, buffer.height - 16))
        draw.text((4, text_y), text, fill=FOUND_COLOR, font=font)
    elif result is not None:
        text_y = min(search_height + 4, max(0, buffer.height - 16))
        draw.text((4, text_y), f"Not found: {result.reason or 'unknown'}",
                  fill=NOT_FOUND_COLOR, font=font)

    debug_img.save(path, "PNG")

    # Cleanup old debug images
    _cleanup_debug_images()


def save_clean_image(buffer: PixelBuffer, path: str) -> None:
    """
    Save the buffer without annotations, so it can be decoded again later.

    Args:
        buffer: Captured buffer
        path: Output file path
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    buffer.to_image().save(path, "PNG")
    _cleanup_debug_images()


def debug_image_paths(timestamp: str) -> Tuple[Path, Path]:
    """
    File names for one debug capture.

    Returns:
        (annotated_path, clean_path) inside DEBUG_DIR
    """
    return (DEBUG_DIR / f"debug_{timestamp}.png",
            DEBUG_DIR / f"debug_{timestamp}_clean.png")


def _prune(files: List[Path]) -> None:
    """Delete all but the MAX_DEBUG_IMAGES newest files."""
    files.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    for old_file in files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError:
            pass


def _cleanup_debug_images() -> None:
    """Keep only the most recent MAX_DEBUG_IMAGES annotated and clean images."""
    if not DEBUG_DIR.exists():
        return

    clean = list(DEBUG_DIR.glob("debug_*_clean.png"))
    annotated = [p for p in DEBUG_DIR.glob("debug_*.png") if not p.stem.endswith("_clean")]
    _prune(annotated)
    _prune(clean)


def latest_clean_image() -> Optional[Path]:
    """Most recent clean debug image, or None if there is none."""
    if not DEBUG_DIR.exists():
        return None
    clean = sorted(DEBUG_DIR.glob("debug_*_clean.png"), key=lambda p: p.stat().st_mtime)
    return clean[-1] if clean else None
