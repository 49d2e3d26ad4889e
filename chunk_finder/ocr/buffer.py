"""
Pixel Buffer

Read-only 32-bit ARGB view of a captured window, as consumed by decoders.
"""

from dataclasses import dataclass
from typing import List

import cv2
import numpy as np
from PIL import Image


# Fully opaque pure white in ARGB
WHITE_ARGB = 0xFFFFFFFF

# Alpha channel bits
OPAQUE_ALPHA = 0xFF000000


@dataclass(frozen=True)
class PixelBuffer:
    """
    Rectangular ARGB image with an explicit row pitch.

    Pixel (x, y) lives at data[y * stride + x]. The stride may exceed the
    width when rows are padded.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        stride: Row pitch in pixels (>= width)
        data: Flat uint32 array of ARGB values
    """
    width: int
    height: int
    stride: int
    data: np.ndarray

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size: {self.width}x{self.height}")
        if self.stride < self.width:
            raise ValueError(f"Stride {self.stride} is smaller than width {self.width}")
        if self.height and self.data.size < (self.height - 1) * self.stride + self.width:
            raise ValueError(
                f"Buffer holds {self.data.size} pixels, "
                f"need {(self.height - 1) * self.stride + self.width}"
            )

    def pixel(self, x: int, y: int) -> int:
        """ARGB value at (x, y)."""
        return int(self.data[y * self.stride + x])

    def is_lit(self, x: int, y: int, color: int = WHITE_ARGB) -> bool:
        """
        Check whether (x, y) holds exactly the given color.

        Positions outside the image read as unlit.
        """
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return bool(self.data[y * self.stride + x] == color)

    def row_matches(self, y: int, x_end: int, color: int = WHITE_ARGB) -> List[bool]:
        """
        Per-pixel color match for row y, columns [0, x_end).

        Columns past the image width are dropped.
        """
        if y < 0 or y >= self.height:
            return []
        start = y * self.stride
        row = self.data[start:start + min(x_end, self.width)]
        return (row == color).tolist()

    @classmethod
    def from_array(cls, pixels: np.ndarray, stride: int = 0) -> "PixelBuffer":
        """
        Wrap a 2D uint32 ARGB array.

        Args:
            pixels: Array of shape (height, width) with ARGB values
            stride: Row pitch; defaults to the array width
        """
        height, width = pixels.shape[:2]
        stride = stride or width
        if stride == width:
            flat = np.ascontiguousarray(pixels, dtype=np.uint32).reshape(-1)
        else:
            padded = np.zeros((height, stride), dtype=np.uint32)
            padded[:, :width] = pixels
            flat = padded.reshape(-1)
        flat.setflags(write=False)
        return cls(width=width, height=height, stride=stride, data=flat)

    @classmethod
    def from_bgra_bytes(cls, raw: bytes, width: int, height: int,
                        force_opaque: bool = True) -> "PixelBuffer":
        """
        Build a buffer from top-down 32-bit BGRA bytes (GDI DIB / mss layout).

        Little-endian BGRA is ARGB when read as uint32. GDI leaves the alpha
        byte undefined, so it is forced opaque unless told otherwise.
        """
        data = np.frombuffer(raw, dtype="<u4", count=width * height).astype(np.uint32)
        if force_opaque:
            data |= np.uint32(OPAQUE_ALPHA)
        data.setflags(write=False)
        return cls(width=width, height=height, stride=width, data=data)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """
        Convert a PIL Image to a buffer.

        Images without an alpha channel become fully opaque.
        """
        rgba = np.array(image.convert("RGBA"))
        bgra = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
        height, width = bgra.shape[:2]
        return cls.from_bgra_bytes(bgra.tobytes(), width, height, force_opaque=False)

    def to_image(self) -> Image.Image:
        """Convert to an RGBA PIL Image (padding columns dropped)."""
        if self.width == 0 or self.height == 0:
            return Image.new("RGBA", (self.width, self.height))
        flat = self.data
        needed = self.height * self.stride
        if flat.size < needed:
            # Last row may stop at width instead of stride
            flat = np.concatenate([flat, np.zeros(needed - flat.size, dtype=np.uint32)])
        rows = flat[:needed].reshape(self.height, self.stride)
        argb = np.ascontiguousarray(rows[:, :self.width])
        bgra = argb.view(np.uint8).reshape(self.height, self.width, 4)
        rgba = cv2.cvtColor(bgra, cv2.COLOR_BGRA2RGBA)
        return Image.fromarray(rgba, "RGBA")
