"""
Image buffer holding the final 8-bit pixels.

Linear colors from the renderer are gamma-2 encoded, scaled to [0, 255] and
clamped on the way in. Row y = 0 is the bottom row of the picture, matching
the camera's v coordinate; file writers emit the top row first.
"""

from __future__ import annotations
import math
from typing import NamedTuple

import numpy as np

from .vec3 import Color
from .errors import OutsideImageBufferError


class Pixel(NamedTuple):
    """An 8-bit RGB pixel."""
    r: int
    g: int
    b: int

    @classmethod
    def black(cls) -> Pixel:
        return cls(0, 0, 0)

    @classmethod
    def from_float(cls, r: float, g: float, b: float) -> Pixel:
        """Convert channels in [0, 1] to bytes.

        Values are scaled by 255.99 and truncated; anything outside the byte
        range is clamped and NaN becomes 0.
        """
        return cls(_to_byte(r), _to_byte(g), _to_byte(b))

    @classmethod
    def from_color(cls, color: Color) -> Pixel:
        return cls.from_float(color.r, color.g, color.b)


def _to_byte(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(max(value * 255.99, 0.0), 255.0))


class ImageBuffer:
    """A width x height grid of pixels."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    def get_index(self, x: int, y: int) -> int:
        """Return the flat index of pixel (x, y).

        Raises:
            OutsideImageBufferError: if (x, y) is not inside the buffer
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise OutsideImageBufferError(x, y, self.width, self.height)

    def get_pixel(self, x: int, y: int) -> Pixel:
        self.get_index(x, y)
        r, g, b = self.pixels[y, x]
        return Pixel(int(r), int(g), int(b))

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        self.get_index(x, y)
        self.pixels[y, x] = pixel

    def write_color(self, x: int, y: int, color: Color) -> None:
        """Gamma-encode a linear color and store it at (x, y)."""
        self.set_pixel(x, y, Pixel.from_color(color.gamma2_on_color()))

    def to_array(self) -> np.ndarray:
        """Return a (height, width, 3) uint8 copy with the top row first."""
        return np.flipud(self.pixels).copy()

    @classmethod
    def from_hdr(cls, hdr_image: np.ndarray) -> ImageBuffer:
        """Build a buffer from a linear HDR image stored top row first.

        Applies the same gamma 2 encoding and clamping as write_color.
        """
        height, width = hdr_image.shape[:2]
        buffer = cls(width, height)
        with np.errstate(invalid='ignore'):
            encoded = np.sqrt(np.flipud(hdr_image)) * 255.99
        encoded = np.nan_to_num(encoded, nan=0.0, posinf=255.0, neginf=0.0)
        buffer.pixels[:] = np.clip(encoded, 0, 255).astype(np.uint8)
        return buffer

    def save_ppm(self, filename: str) -> None:
        """Save as an ASCII (P3) PPM file."""
        with open(filename, 'w') as f:
            f.write('P3\n')
            f.write(f'{self.width} {self.height}\n')
            f.write('255\n')
            for row in self.to_array():
                f.write(' '.join(f'{r} {g} {b}' for r, g, b in row))
                f.write('\n')

    def save(self, filename: str) -> None:
        """Save image to file.

        Args:
            filename: Output filename (extension determines format; .ppm is
                written directly, everything else goes through Pillow)
        """
        if filename.lower().endswith('.ppm'):
            self.save_ppm(filename)
            return

        from PIL import Image as PILImage

        PILImage.fromarray(self.to_array(), 'RGB').save(filename)

    def __repr__(self) -> str:
        return f"ImageBuffer({self.width}x{self.height})"
