"""
Geometry helpers shared by the entities, the collision engine and the renderer
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def angle_to(x1: float, y1: float, x2: float, y2: float) -> float:
    """Angle (radians, screen space) of the vector pointing from (x1, y1) to (x2, y2)"""
    return math.atan2(y2 - y1, x2 - x1)


def line_distance(px: float, py: float, ox: float, oy: float, angle: float) -> float:
    """Perpendicular distance from a point to the infinite line through (ox, oy) at `angle`"""
    dx = px - ox
    dy = py - oy
    return abs(math.sin(angle) * dx - math.cos(angle) * dy)


def closest_point_on_rect(
    px: float, py: float, rx: float, ry: float, rw: float, rh: float
) -> Tuple[float, float]:
    """Closest point of the rectangle (rx, ry, rw, rh) to the point (px, py)"""
    return clamp(px, rx, rx + rw), clamp(py, ry, ry + rh)


def circle_rect_collide(
    cx: float, cy: float, r: float, rx: float, ry: float, rw: float, rh: float
) -> bool:
    """Check if a circle overlaps an axis-aligned rectangle (strict)"""
    qx, qy = closest_point_on_rect(cx, cy, rx, ry, rw, rh)
    dx = cx - qx
    dy = cy - qy
    return (dx * dx + dy * dy) < (r * r)


def point_in_expanded_rect(
    px: float, py: float, rx: float, ry: float, rw: float, rh: float, pad: float
) -> bool:
    """Strict point test against a rectangle grown by `pad` on every side"""
    return (rx - pad < px < rx + rw + pad) and (ry - pad < py < ry + rh + pad)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
