"""
Numpy raster back-end for the frame painter

Used for `rgb_array` rendering of the environment and for headless
tests. It has no sprite support, so every entity takes its fallback shape.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .render import Color, Surface


class RasterSurface(Surface):
    """Draws into an (H, W, 3) uint8 array"""

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self._buf = np.zeros((self.height, self.width, 3), dtype=np.float32)
        self._ox = 0.0
        self._oy = 0.0

    @property
    def frame(self) -> np.ndarray:
        return np.clip(self._buf, 0, 255).astype(np.uint8)

    def set_offset(self, dx: float, dy: float):
        self._ox = dx
        self._oy = dy

    def _blend(self, region: Tuple[slice, slice], mask: np.ndarray, color: Color, alpha: float):
        if alpha <= 0 or not mask.any():
            return
        view = self._buf[region]
        c = np.asarray(color, dtype=np.float32)
        view[mask] = view[mask] * (1.0 - alpha) + c * alpha

    def _box(self, x0: float, y0: float, x1: float, y1: float):
        """Clip a float box to integer pixel bounds; None when fully outside"""
        ix0 = max(0, int(np.floor(x0)))
        iy0 = max(0, int(np.floor(y0)))
        ix1 = min(self.width, int(np.ceil(x1)) + 1)
        iy1 = min(self.height, int(np.ceil(y1)) + 1)
        if ix0 >= ix1 or iy0 >= iy1:
            return None
        return ix0, iy0, ix1, iy1

    def clear(self, color: Color, alpha: float = 1.0):
        c = np.asarray(color, dtype=np.float32)
        self._buf[:] = self._buf * (1.0 - alpha) + c * alpha

    def circle(self, x, y, r, color, alpha=1.0, line_width=0):
        x += self._ox
        y += self._oy
        outer = r + line_width / 2 if line_width > 0 else r
        box = self._box(x - outer, y - outer, x + outer, y + outer)
        if box is None:
            return
        ix0, iy0, ix1, iy1 = box
        ys, xs = np.ogrid[iy0:iy1, ix0:ix1]
        d = np.sqrt((xs + 0.5 - x) ** 2 + (ys + 0.5 - y) ** 2)
        if line_width > 0:
            mask = np.abs(d - r) <= line_width / 2
        else:
            mask = d <= r
        self._blend((slice(iy0, iy1), slice(ix0, ix1)), mask, color, alpha)

    def rect(self, x, y, w, h, color, alpha=1.0):
        x += self._ox
        y += self._oy
        ix0 = max(0, int(round(x)))
        iy0 = max(0, int(round(y)))
        ix1 = min(self.width, int(round(x + w)))
        iy1 = min(self.height, int(round(y + h)))
        if ix0 >= ix1 or iy0 >= iy1:
            return
        mask = np.ones((iy1 - iy0, ix1 - ix0), dtype=bool)
        self._blend((slice(iy0, iy1), slice(ix0, ix1)), mask, color, alpha)

    def line(self, x1, y1, x2, y2, line_width, color, alpha=1.0):
        x1 += self._ox
        y1 += self._oy
        x2 += self._ox
        y2 += self._oy
        half = line_width / 2
        box = self._box(min(x1, x2) - half, min(y1, y2) - half, max(x1, x2) + half, max(y1, y2) + half)
        if box is None:
            return
        ix0, iy0, ix1, iy1 = box
        ys, xs = np.ogrid[iy0:iy1, ix0:ix1]
        px = xs + 0.5
        py = ys + 0.5
        dx = x2 - x1
        dy = y2 - y1
        len2 = dx * dx + dy * dy
        if len2 == 0:
            t = np.zeros_like(px * py)
        else:
            t = np.clip(((px - x1) * dx + (py - y1) * dy) / len2, 0.0, 1.0)
        d = np.sqrt((px - (x1 + t * dx)) ** 2 + (py - (y1 + t * dy)) ** 2)
        self._blend((slice(iy0, iy1), slice(ix0, ix1)), d <= half, color, alpha)

    def image(self, name, x, y, w, h) -> bool:
        return False
