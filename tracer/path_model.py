# tracer/path_model.py
from __future__ import annotations

import math
from typing import List, NamedTuple, Optional


class Waypoint(NamedTuple):
    """World-frame position in meters, Y up."""
    x: float
    y: float


def closed_view(points, close_path: bool) -> List[Waypoint]:
    """Path with its first waypoint repeated at the end, only for closed paths of 3+ points."""
    pts = list(points)
    if close_path and len(pts) > 2:
        pts.append(pts[0])
    return pts


def path_length(points) -> float:
    """Sum of segment lengths in traversal order."""
    total = 0.0
    for a, b in zip(points, points[1:]):
        total += math.hypot(b[0] - a[0], b[1] - a[1])
    return total


class PathModel:
    """Ordered waypoint list for one editing session."""

    def __init__(self, points=None):
        self._points: List[Waypoint] = [Waypoint(float(x), float(y)) for x, y in (points or [])]

    @property
    def points(self) -> List[Waypoint]:
        return list(self._points)

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, i):
        return self._points[i]

    def place(self, px: float, py: float, viewport, snap: bool = False) -> Waypoint:
        """Convert a canvas pixel (optionally grid-snapped in pixel space) and append it."""
        if snap:
            px, py = viewport.snap(px, py)
        wp = Waypoint(*viewport.to_meters(px, py))
        self._points.append(wp)
        return wp

    def append(self, wp) -> Waypoint:
        wp = Waypoint(float(wp[0]), float(wp[1]))
        self._points.append(wp)
        return wp

    def undo_last(self) -> Optional[Waypoint]:
        if not self._points:
            return None
        return self._points.pop()

    def remove_at(self, i: int) -> Optional[Waypoint]:
        """Remove by ordinal; out-of-range (including negative) indices are ignored."""
        if not 0 <= i < len(self._points):
            return None
        return self._points.pop(i)

    def clear(self) -> None:
        self._points = []

    def replace(self, points) -> None:
        self._points = [Waypoint(float(x), float(y)) for x, y in points]

    def closed(self, close_path: bool) -> List[Waypoint]:
        return closed_view(self._points, close_path)

    def total_length(self) -> float:
        """Open-path length; the closing segment is never counted."""
        return path_length(self._points)
