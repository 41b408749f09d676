# tracer/view.py
from __future__ import annotations

from typing import Optional, Tuple

from .config import (
    DEFAULT_PX_PER_METER, MIN_PX_PER_METER, MAX_PX_PER_METER, ZOOM_STEP,
    ORIGIN_MARGIN_X, ORIGIN_MARGIN_Y, WINDOW_HEIGHT
)
from .units import Vec2, clamp, to_meters, to_pixels, snap_px


class Viewport:
    """Pixel offset of the world origin plus pixels-per-meter scale."""

    def __init__(self, offset: Vec2 = (ORIGIN_MARGIN_X, WINDOW_HEIGHT - ORIGIN_MARGIN_Y),
                 scale: float = DEFAULT_PX_PER_METER,
                 min_scale: float = MIN_PX_PER_METER,
                 max_scale: float = MAX_PX_PER_METER):
        self.min_scale = float(min_scale)
        self.max_scale = float(max_scale)
        self.offset = (float(offset[0]), float(offset[1]))
        self.scale = clamp(float(scale), self.min_scale, self.max_scale)

    def to_meters(self, px, py, ndigits=3):
        return to_meters(px, py, self.offset, self.scale, ndigits)

    def to_pixels(self, mx, my):
        return to_pixels(mx, my, self.offset, self.scale)

    def snap(self, px, py):
        return snap_px(px, py, self.offset, self.scale)

    def __repr__(self):
        return f"Viewport(offset={self.offset!r}, scale={self.scale!r})"


class ViewController:
    """Pan / zoom / resize handling for a Viewport."""

    def __init__(self, viewport: Optional[Viewport] = None, zoom_step: float = ZOOM_STEP,
                 origin_margin: Tuple[float, float] = (ORIGIN_MARGIN_X, ORIGIN_MARGIN_Y)):
        self.viewport = viewport or Viewport()
        self.zoom_in_factor = float(zoom_step)
        self.zoom_out_factor = 1.0 / float(zoom_step)
        self.origin_margin = origin_margin
        self._mounted = False
        # (pointer_x, pointer_y, offset_x, offset_y) captured at pan start
        self._pan_start = None
        self._pan_moved = False

    @property
    def panning(self) -> bool:
        return self._pan_start is not None

    def pan_start(self, px: float, py: float) -> None:
        ox, oy = self.viewport.offset
        self._pan_start = (px, py, ox, oy)
        self._pan_moved = False

    def pan_move(self, px: float, py: float) -> bool:
        """Drag the offset along with the pointer. Returns False when not panning."""
        if self._pan_start is None:
            return False
        sx, sy, ox, oy = self._pan_start
        dx, dy = px - sx, py - sy
        if dx or dy:
            self._pan_moved = True
        self.viewport.offset = (ox + dx, oy + dy)
        return True

    def pan_end(self) -> bool:
        """Finish the gesture; True if the pointer moved while panning."""
        moved = self._pan_start is not None and self._pan_moved
        self._pan_start = None
        self._pan_moved = False
        return moved

    def zoom(self, cx: float, cy: float, zoom_in: bool) -> bool:
        """
        Scale by the zoom step about the cursor (cx, cy).

        The world point under the cursor keeps its screen position:
        offset' = cursor - (cursor - offset) * (scale' / scale), per axis.
        Returns False when the scale was already at its bound.
        """
        vp = self.viewport
        factor = self.zoom_in_factor if zoom_in else self.zoom_out_factor
        prev = vp.scale
        nxt = clamp(prev * factor, vp.min_scale, vp.max_scale)
        if nxt == prev:
            return False
        ratio = nxt / prev
        ox, oy = vp.offset
        vp.offset = (cx - (cx - ox) * ratio, cy - (cy - oy) * ratio)
        vp.scale = nxt
        return True

    def resize(self, width: int, height: int) -> bool:
        """Only the first call moves anything: it drops the origin near the bottom-left."""
        if self._mounted:
            return False
        self._mounted = True
        if height > 0:
            mx, my = self.origin_margin
            self.viewport.offset = (float(mx), float(height - my))
            return True
        return False
