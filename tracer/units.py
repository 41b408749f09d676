# tracer/units.py
"""
Pixel <-> meter conversion for a pannable, zoomable canvas.

Screen Y grows downward while world Y grows upward, so the Y axis is
flipped around the viewport offset.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

METER_DECIMALS = 3

Vec2 = Tuple[float, float]


def round_half_up(v: float) -> int:
    """Nearest integer, halves rounded toward +inf (not banker's rounding)."""
    return int(math.floor(v + 0.5))


def to_meters(px: float, py: float, offset: Vec2, scale: float,
              ndigits: Optional[int] = METER_DECIMALS) -> Vec2:
    """Canvas pixel -> world meters, rounded to `ndigits` (None keeps full precision)."""
    mx = (px - offset[0]) / scale
    my = (offset[1] - py) / scale
    if ndigits is None:
        return (mx, my)
    return (round(mx, ndigits), round(my, ndigits))


def to_pixels(mx: float, my: float, offset: Vec2, scale: float) -> Vec2:
    """World meters -> canvas pixel."""
    return (mx * scale + offset[0], offset[1] - my * scale)


def snap_px(px: float, py: float, offset: Vec2, scale: float) -> Vec2:
    """Snap a pixel to the nearest grid intersection, measured from the offset."""
    return (round_half_up((px - offset[0]) / scale) * scale + offset[0],
            round_half_up((py - offset[1]) / scale) * scale + offset[1])


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))
