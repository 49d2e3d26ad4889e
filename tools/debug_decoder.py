#!/usr/bin/env python3
"""
Diagnostic script for the coordinate decoder.

Decodes saved screenshots (or the most recent clean debug image), prints what
the decoder found and writes an annotated copy next to the debug images.
With --render, draws a synthetic label instead so the decoder can be
checked without the game.

Usage:
    python tools/debug_decoder.py [image_path ...]
    python tools/debug_decoder.py --render "100, 64, -32" --scale 3
"""

import argparse
import sys
from pathlib import Path

from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunk_finder.grid import ChunkReading
from chunk_finder.ocr import (
    DEBUG_DIR,
    PixelBuffer,
    create_decoder,
    latest_clean_image,
    render_text,
    save_debug_image,
    search_region,
)


def analyze_buffer(buffer: PixelBuffer, label: str, output_path: Path) -> bool:
    """Decode one buffer and report the result."""
    print(f"\n{'='*60}")
    print(f"Analyzing: {label}")
    print('='*60)

    search_width, search_height = search_region(buffer.width, buffer.height)
    print(f"Buffer size: {buffer.width}x{buffer.height} (stride {buffer.stride})")
    print(f"Search region: {search_width}x{search_height}")

    result = create_decoder().decode(buffer)
    if result.found:
        reading = ChunkReading.from_position(result.coordinate)
        print(f"Origin: {result.origin}, scale {result.scale}")
        for line in reading.lines():
            print(f"  {line}")
    else:
        print(f"Not found: {result.reason}")

    save_debug_image(buffer, result, str(output_path))
    print(f"Debug image saved: {output_path}")
    return result.found


def main():
    parser = argparse.ArgumentParser(description="Run the coordinate decoder on images")
    parser.add_argument("images", nargs="*", help="Image files (default: latest clean debug image)")
    parser.add_argument("--render", metavar="TEXT",
                        help='Decode a synthetic label, e.g. "100, 64, -32"')
    parser.add_argument("--scale", type=int, default=2, help="Glyph scale for --render")
    args = parser.parse_args()

    if args.render is not None:
        try:
            buffer = render_text(args.render, scale=args.scale)
        except ValueError as e:
            print(f"Cannot render: {e}")
            return 1
        found = analyze_buffer(buffer, f"rendered {args.render!r}", DEBUG_DIR / "render_debug.png")
        return 0 if found else 1

    image_paths = [Path(p) for p in args.images]
    if not image_paths:
        latest = latest_clean_image()
        if latest is None:
            print("No clean debug images found in ./debug/")
            print("Run with --debug first to generate debug images, or specify an image path:")
            print("  python tools/debug_decoder.py path/to/screenshot.png")
            return 1
        image_paths = [latest]

    failures = 0
    for path in image_paths:
        with Image.open(path) as image:
            buffer = PixelBuffer.from_image(image)
        if not analyze_buffer(buffer, str(path), DEBUG_DIR / f"analyze_{path.stem}.png"):
            failures += 1

    print(f"\nDecoded {len(image_paths) - failures}/{len(image_paths)} images")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
