"""
LED Matrix Display Surface

Fixed-resolution RGB framebuffer with two copies:
- the mutable buffer animations draw into (set_pixel / fill / blit)
- the published buffer viewers read (snapshot)

The published buffer only changes on commit(), which copies the whole
mutable buffer under a lock, so readers never see a half-drawn frame.
Both buffers are allocated once and overwritten in place.
"""

import base64
import operator
import threading
from dataclasses import dataclass

import numpy as np


DEFAULT_WIDTH = 32
DEFAULT_HEIGHT = 32


class PixelRangeError(IndexError):
    """Pixel coordinates fall outside the matrix."""


def _to_channels(values):
    """Clamp channel values to [0, 255] uint8. NaN becomes 0 (blank)."""
    arr = np.asarray(values, dtype=np.float64)
    arr = np.nan_to_num(arr, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(arr, 0, 255).astype(np.uint8)


@dataclass(frozen=True)
class Snapshot:
    """A published frame: row-major RGB triplets, 3 bytes per pixel."""

    width: int
    height: int
    content: bytes

    def to_dict(self):
        """Wire format for external viewers: content is base64 text."""
        return {
            "width": self.width,
            "height": self.height,
            "content": base64.b64encode(self.content).decode("ascii"),
        }

    def to_array(self):
        """(height, width, 3) uint8 copy of the frame."""
        arr = np.frombuffer(self.content, dtype=np.uint8)
        return arr.reshape(self.height, self.width, 3).copy()

    def to_image(self, scale=1):
        """Pillow image of the frame, each LED scaled to scale x scale pixels."""
        from PIL import Image
        rgb = self.to_array()
        if scale > 1:
            rgb = np.repeat(np.repeat(rgb, scale, axis=0), scale, axis=1)
        return Image.fromarray(rgb)


class LedMatrix:
    """Double-buffered width x height RGB pixel surface."""

    def __init__(self, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT):
        if width < 1 or height < 1:
            raise ValueError(f"Matrix size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)
        self._framebuffer = np.zeros((height, width, 3), dtype=np.uint8)
        self._lock = threading.Lock()

    def _coords(self, x, y):
        try:
            x, y = operator.index(x), operator.index(y)
        except TypeError as e:
            raise PixelRangeError(
                f"Pixel coordinates must be integers, got ({x!r}, {y!r})"
            ) from e
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelRangeError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} matrix"
            )
        return x, y

    def set_pixel(self, x, y, r, g, b):
        """Write one pixel. Channels are clamped, coordinates are not.

        Coordinates must be integers; anything else raises PixelRangeError.
        """
        x, y = self._coords(x, y)
        self._buffer[y, x] = _to_channels((r, g, b))

    def fill(self, r, g, b):
        self._buffer[:, :] = _to_channels((r, g, b))

    def clear(self):
        self.fill(0, 0, 0)

    def blit(self, pixels):
        """Write a whole (height, width, 3) frame of channel values.

        Values get the same clamping as set_pixel.
        """
        pixels = np.asarray(pixels)
        expected = (self.height, self.width, 3)
        if pixels.shape != expected:
            raise ValueError(f"Frame shape {pixels.shape} does not match matrix {expected}")
        self._buffer[:] = _to_channels(pixels)

    def pixel(self, x, y):
        """Read one pixel of the mutable buffer as an (r, g, b) tuple."""
        x, y = self._coords(x, y)
        r, g, b = self._buffer[y, x]
        return int(r), int(g), int(b)

    def commit(self):
        """Publish the mutable buffer."""
        with self._lock:
            np.copyto(self._framebuffer, self._buffer)

    def snapshot(self):
        """Return the published frame."""
        with self._lock:
            content = self._framebuffer.tobytes()
        return Snapshot(self.width, self.height, content)
