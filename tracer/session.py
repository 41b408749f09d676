# tracer/session.py
"""
Editing session: the single owner of path, viewport, hover and gesture state.

Input handlers mutate state synchronously and request a redraw; the main
loop renders at most once per frame from whatever the handlers left behind.
"""
from __future__ import annotations

import math
from typing import Callable, List, Optional

from .config import view_flat, editor_flat, window_flat
from .codec import encode_path, decode_path
from .frame import FrameScheduler
from .path_model import PathModel, Waypoint
from .view import Viewport, ViewController

LEFT_BUTTON = 1
MIDDLE_BUTTON = 2


class EditorSession:

    def __init__(self, cfg: Optional[dict] = None):
        view = view_flat(cfg or {})
        editor = editor_flat(cfg or {})
        viewport = Viewport(
            scale=float(view["px_per_meter"]),
            min_scale=float(view["min_px_per_meter"]),
            max_scale=float(view["max_px_per_meter"]),
        )
        self.view = ViewController(
            viewport,
            zoom_step=float(view["zoom_step"]),
            origin_margin=(float(view["origin_margin_x"]), float(view["origin_margin_y"])),
        )
        self.path = PathModel()
        self.frame = FrameScheduler()
        self.snap_to_grid = bool(editor["snap_to_grid"])
        self.close_path = bool(editor["close_path"])
        self.copied_ms = int(editor["copied_ms"])
        self.delete_radius_px = float(editor["delete_radius_px"])
        self.listeners: List[Callable[[List[Waypoint]], None]] = []
        self._hover_raw = None
        self._click_armed = False
        self._copied_until = None

    # ---------------- state readouts ----------------
    @property
    def viewport(self) -> Viewport:
        return self.view.viewport

    @property
    def points(self) -> List[Waypoint]:
        return self.path.points

    @property
    def point_count(self) -> int:
        return len(self.path)

    @property
    def total_length(self) -> float:
        return self.path.total_length()

    @property
    def output_points(self) -> List[Waypoint]:
        """What gets drawn as the path and what gets encoded."""
        return self.path.closed(self.close_path)

    @property
    def command(self) -> str:
        return encode_path(self.output_points)

    @property
    def hover_px(self):
        """Pointer pixel (grid-snapped when snapping is on) or None off-canvas."""
        if self._hover_raw is None:
            return None
        if self.snap_to_grid:
            return self.viewport.snap(*self._hover_raw)
        return self._hover_raw

    @property
    def hover_meters(self):
        hp = self.hover_px
        return None if hp is None else self.viewport.to_meters(*hp)

    def copied(self, now_ms: int) -> bool:
        return self._copied_until is not None and now_ms < self._copied_until

    def to_config(self, cfg: Optional[dict] = None) -> dict:
        """Config sections with the live scale and snap/close toggles folded in."""
        view = view_flat(cfg or {})
        editor = editor_flat(cfg or {})
        view["px_per_meter"] = self.viewport.scale
        editor["snap_to_grid"] = int(self.snap_to_grid)
        editor["close_path"] = int(self.close_path)
        return {"view": view, "editor": editor, "window": window_flat(cfg or {})}

    # ---------------- internals ----------------
    def _redraw(self) -> None:
        self.frame.request()

    def _points_changed(self) -> None:
        pts = self.path.points
        for cb in list(self.listeners):
            cb(pts)
        self._redraw()

    # ---------------- pointer events ----------------
    def pointer_down(self, px: float, py: float, button: int = LEFT_BUTTON, alt: bool = False) -> None:
        if button == MIDDLE_BUTTON or (button == LEFT_BUTTON and alt):
            self._click_armed = False
            self.view.pan_start(px, py)
            self._redraw()
        elif button == LEFT_BUTTON:
            self._click_armed = True

    def pointer_move(self, px: float, py: float) -> None:
        if self.view.pan_move(px, py):
            self._redraw()
            return
        self._hover_raw = (px, py)
        self._redraw()

    def pointer_up(self, px: float, py: float, button: int = LEFT_BUTTON) -> Optional[Waypoint]:
        """Release ends a pan; an armed left click places a point. Never both."""
        if self.view.panning:
            self.view.pan_end()
            self._click_armed = False
            self._hover_raw = (px, py)
            self._redraw()
            return None
        if button == LEFT_BUTTON and self._click_armed:
            self._click_armed = False
            return self.place_point(px, py)
        return None

    def pointer_leave(self) -> None:
        if self._hover_raw is not None:
            self._hover_raw = None
            self._redraw()

    def wheel(self, px: float, py: float, dy: float) -> bool:
        """dy > 0 zooms in about (px, py), dy < 0 zooms out."""
        if not dy:
            return False
        changed = self.view.zoom(px, py, zoom_in=dy > 0)
        self._hover_raw = (px, py)
        self._redraw()
        return changed

    def resize(self, width: int, height: int) -> None:
        self.view.resize(width, height)
        self._redraw()

    # ---------------- intents ----------------
    def place_point(self, px: float, py: float) -> Waypoint:
        wp = self.path.place(px, py, self.viewport, snap=self.snap_to_grid)
        self._points_changed()
        return wp

    def undo(self) -> Optional[Waypoint]:
        removed = self.path.undo_last()
        if removed is not None:
            self._points_changed()
        return removed

    def remove_at(self, i: int) -> Optional[Waypoint]:
        removed = self.path.remove_at(i)
        if removed is not None:
            self._points_changed()
        return removed

    def pick(self, px: float, py: float, radius: Optional[float] = None) -> Optional[int]:
        """Index of the closest waypoint marker within `radius` pixels."""
        r = self.delete_radius_px if radius is None else radius
        best, best_d = None, float("inf")
        for i, wp in enumerate(self.path):
            cx, cy = self.viewport.to_pixels(wp.x, wp.y)
            d = math.hypot(cx - px, cy - py)
            if d <= r and d < best_d:
                best, best_d = i, d
        return best

    def remove_near(self, px: float, py: float) -> Optional[Waypoint]:
        idx = self.pick(px, py)
        return None if idx is None else self.remove_at(idx)

    def clear(self) -> None:
        self.path.clear()
        self._hover_raw = None
        self._points_changed()

    def toggle_snap(self) -> bool:
        self.snap_to_grid = not self.snap_to_grid
        self._redraw()
        return self.snap_to_grid

    def toggle_close(self) -> bool:
        self.close_path = not self.close_path
        self._redraw()
        return self.close_path

    def request_copy(self, now_ms: int) -> str:
        """Command for the current path; starts the copied indicator when non-empty."""
        cmd = self.command
        if not cmd:
            return ""
        self._copied_until = now_ms + self.copied_ms
        print(f"Copied publish command ({len(self.output_points)} poses)")
        self._redraw()
        return cmd

    def request_import(self, text: str) -> List[Waypoint]:
        """Replace the path with waypoints decoded from text; DecodeError leaves it untouched."""
        pts = decode_path(text)
        self.path.replace(pts)
        print(f"Imported {len(pts)} waypoints")
        self._points_changed()
        return self.path.points

    def tick(self, now_ms: int) -> None:
        if self._copied_until is not None and now_ms >= self._copied_until:
            self._copied_until = None
            self._redraw()
