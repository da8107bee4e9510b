"""In-memory raster surface backed by a numpy pixel buffer."""

import math
from typing import List, Optional, Tuple

import numpy as np

from starry_skyline.errors import ConfigurationError
from starry_skyline.render.base import Surface
from starry_skyline.scene.points import BLACK, Color


class RasterSurface(Surface):
    """Surface that rasterizes onto a float RGB buffer.

    The buffer is stored bottom row first so ``buffer[y, x]`` matches the
    y-up drawing coordinates. A pixel is covered by a shape when its center
    ``(x + 0.5, y + 0.5)`` lies inside the shape. The buffer is never cleared
    between frames unless ``clear()`` is called.
    """

    def __init__(self, width: int, height: int, background: Color = BLACK):
        """Initialize raster surface.

        Args:
            width: Width in pixels
            height: Height in pixels
            background: Color used by clear() and for the initial buffer
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.background = background
        self.buffer = np.empty((height, width, 3), dtype=np.float32)

        self._fill = np.array(BLACK.as_rgb(), dtype=np.float32)
        self._stroke = np.array(BLACK.as_rgb(), dtype=np.float32)
        self._line_width = 1.0
        self._clip: Optional[np.ndarray] = None
        self._stack: List[Tuple] = []
        self.clear()

    def clear(self):
        """Reset every pixel to the background color."""
        self.buffer[:, :] = self.background.as_rgb()

    def _region(self, x: float, y: float, width: float, height: float):
        """Pixel index bounds and center coordinates overlapping a box."""
        i0 = max(0, int(math.floor(x)))
        i1 = min(self.width, int(math.ceil(x + width)))
        j0 = max(0, int(math.floor(y)))
        j1 = min(self.height, int(math.ceil(y + height)))
        if i0 >= i1 or j0 >= j1:
            return None
        cx = np.arange(i0, i1, dtype=np.float64)[np.newaxis, :] + 0.5
        cy = np.arange(j0, j1, dtype=np.float64)[:, np.newaxis] + 0.5
        return (j0, j1, i0, i1), cx, cy

    @staticmethod
    def _inside_ellipse(cx, cy, x, y, width, height):
        a = width / 2.0
        b = height / 2.0
        if a <= 0 or b <= 0:
            return np.zeros(np.broadcast(cx, cy).shape, dtype=bool)
        return ((cx - (x + a)) / a) ** 2 + ((cy - (y + b)) / b) ** 2 <= 1.0

    def _rect_mask(self, x, y, width, height):
        region = self._region(x, y, width, height)
        if region is None:
            return None
        bounds, cx, cy = region
        mask = (cx >= x) & (cx < x + width) & (cy >= y) & (cy < y + height)
        return bounds, mask

    def _ellipse_mask(self, x, y, width, height):
        region = self._region(x, y, width, height)
        if region is None:
            return None
        bounds, cx, cy = region
        return bounds, self._inside_ellipse(cx, cy, x, y, width, height)

    def _paint(self, shape, color: np.ndarray):
        if shape is None:
            return
        (j0, j1, i0, i1), mask = shape
        if self._clip is not None:
            mask = mask & self._clip[j0:j1, i0:i1]
        self.buffer[j0:j1, i0:i1][mask] = color

    def _intersect_clip(self, shape):
        full = np.zeros((self.height, self.width), dtype=bool)
        if shape is not None:
            (j0, j1, i0, i1), mask = shape
            full[j0:j1, i0:i1] = mask
        # A new array each time keeps states saved on the stack untouched.
        self._clip = full if self._clip is None else (self._clip & full)

    def fill_rect(self, x, y, width, height):
        self._paint(self._rect_mask(x, y, width, height), self._fill)

    def fill_ellipse(self, x, y, width, height):
        self._paint(self._ellipse_mask(x, y, width, height), self._fill)

    def stroke_ellipse(self, x, y, width, height):
        half = self._line_width / 2.0
        outer = self._region(x - half, y - half, width + 2 * half, height + 2 * half)
        if outer is None:
            return
        bounds, cx, cy = outer
        ring = self._inside_ellipse(cx, cy, x - half, y - half, width + 2 * half, height + 2 * half)
        inner_w = width - 2 * half
        inner_h = height - 2 * half
        if inner_w > 0 and inner_h > 0:
            ring &= ~self._inside_ellipse(cx, cy, x + half, y + half, inner_w, inner_h)
        self._paint((bounds, ring), self._stroke)

    def clip_to_rect(self, x, y, width, height):
        self._intersect_clip(self._rect_mask(x, y, width, height))

    def clip_to_ellipse(self, x, y, width, height):
        self._intersect_clip(self._ellipse_mask(x, y, width, height))

    def save_state(self):
        self._stack.append((self._fill, self._stroke, self._line_width, self._clip))

    def restore_state(self):
        if not self._stack:
            raise RuntimeError("restore_state() called without a matching save_state()")
        self._fill, self._stroke, self._line_width, self._clip = self._stack.pop()

    def set_fill_color(self, color: Color):
        self._fill = np.array(color.as_rgb(), dtype=np.float32)

    def set_stroke_color(self, color: Color):
        self._stroke = np.array(color.as_rgb(), dtype=np.float32)

    def set_line_width(self, width: float):
        self._line_width = float(width)

    def pixel(self, x: int, y: int) -> np.ndarray:
        """RGB value at a y-up pixel coordinate."""
        return self.buffer[y, x].copy()

    def capture_frame(self) -> np.ndarray:
        """Current image as (H, W, 3) uint8, top row first."""
        frame = np.clip(self.buffer, 0.0, 1.0) * 255.0
        return np.flipud(np.round(frame).astype(np.uint8))
