# tracer/draw.py
from __future__ import annotations

import math
from typing import List, Optional, Tuple

import pygame

from .config import (
    BG_COLOR, GRID_COLOR, MAJOR_GRID_COLOR, AXIS_COLOR, PATH_COLOR, PREVIEW_COLOR,
    POINT_COLOR, FIRST_POINT_COLOR, HOVER_COLOR, TEXT_COLOR, DIM_TEXT_COLOR, MAJOR_EVERY_M
)
from .path_model import closed_view
from .units import round_half_up

FIRST_POINT_RADIUS = 6
POINT_RADIUS = 4
HOVER_RADIUS = 5
PATH_WIDTH = 2
GRID_WIDTH = 1
MAJOR_GRID_WIDTH = 2
DASH_PX, GAP_PX = 6, 4
HUD_MAX_LISTED = 12


def grid_lines(extent: float, offset: float, scale: float) -> List[Tuple[float, int, bool]]:
    """
    Grid line positions along one axis as (pixel, meter, is_major).

    The first line is the one nearest the top/left edge; Python's % keeps it in
    [0, scale) for negative offsets as well.
    """
    start = offset % scale
    lines = []
    k = 0
    while True:
        p = start + k * scale
        if p >= extent:
            break
        m = round_half_up((p - offset) / scale)
        lines.append((p, m, m % MAJOR_EVERY_M == 0))
        k += 1
    return lines


def axis_positions(width: float, height: float, offset) -> Tuple[Optional[float], Optional[float]]:
    """(x of the Y axis, y of the X axis); None for an axis outside the surface."""
    ox, oy = offset
    x_at = ox if 0 <= ox <= width else None
    y_at = oy if 0 <= oy <= height else None
    return x_at, y_at


def draw_grid(surface, viewport):
    """Draw meter grid and origin axes for the current viewport."""
    w, h = surface.get_width(), surface.get_height()
    ox, oy = viewport.offset
    for x, _, major in grid_lines(w, ox, viewport.scale):
        color, width = (MAJOR_GRID_COLOR, MAJOR_GRID_WIDTH) if major else (GRID_COLOR, GRID_WIDTH)
        pygame.draw.line(surface, color, (x, 0), (x, h), width)
    for y, _, major in grid_lines(h, oy, viewport.scale):
        color, width = (MAJOR_GRID_COLOR, MAJOR_GRID_WIDTH) if major else (GRID_COLOR, GRID_WIDTH)
        pygame.draw.line(surface, color, (0, y), (w, y), width)

    x_at, y_at = axis_positions(w, h, viewport.offset)
    if y_at is not None:
        pygame.draw.line(surface, AXIS_COLOR, (0, y_at), (w, y_at))
    if x_at is not None:
        pygame.draw.line(surface, AXIS_COLOR, (x_at, 0), (x_at, h))


def draw_dashed_line(surface, color, start, end, width=1, dash=DASH_PX, gap=GAP_PX):
    x0, y0 = start
    x1, y1 = end
    length = math.hypot(x1 - x0, y1 - y0)
    if length <= 1e-9:
        return
    ux, uy = (x1 - x0) / length, (y1 - y0) / length
    d = 0.0
    while d < length:
        e = min(d + dash, length)
        pygame.draw.line(surface, color, (x0 + ux * d, y0 + uy * d), (x0 + ux * e, y0 + uy * e), width)
        d = e + gap


def draw_scene(surface, viewport, points, close_path=False, hover_px=None):
    """
    Paint one full frame: grid, path, hover preview, markers, hover marker.

    Pure function of its arguments; it never touches viewport or points.
    """
    surface.fill(BG_COLOR)
    draw_grid(surface, viewport)

    if not points and hover_px is None:
        return

    route = [viewport.to_pixels(p[0], p[1]) for p in closed_view(points, close_path)]
    if len(route) > 1:
        pygame.draw.lines(surface, PATH_COLOR, False, route, PATH_WIDTH)

    if hover_px is not None and points:
        last = viewport.to_pixels(points[-1][0], points[-1][1])
        draw_dashed_line(surface, PREVIEW_COLOR, last, hover_px, 2)

    for i, p in enumerate(points):
        cp = viewport.to_pixels(p[0], p[1])
        if i == 0:
            pygame.draw.circle(surface, FIRST_POINT_COLOR, cp, FIRST_POINT_RADIUS)
        else:
            pygame.draw.circle(surface, POINT_COLOR, cp, POINT_RADIUS)

    if hover_px is not None:
        pygame.draw.circle(surface, HOVER_COLOR, hover_px, HOVER_RADIUS)


def _blit(surface, font, text, pos, color=TEXT_COLOR):
    surface.blit(font.render(text, True, color), pos)


def draw_hud(surface, session, font, now_ms):
    """Readouts on top of the scene: hover coords, scale bar, stats, point list."""
    w, h = surface.get_width(), surface.get_height()

    hm = session.hover_meters
    if hm is not None:
        _blit(surface, font, f"{hm[0]:.2f}m, {hm[1]:.2f}m", (12, 12))

    # Scale bar
    scale = session.viewport.scale
    pygame.draw.rect(surface, PATH_COLOR, pygame.Rect(16, h - 30, int(round(scale)), 4))
    _blit(surface, font, f"{int(round(scale))}px = 1 METER", (16, h - 22), DIM_TEXT_COLOR)

    flags = ["SNAP" if session.snap_to_grid else "snap",
             "CLOSE" if session.close_path else "close"]
    if session.copied(now_ms):
        flags.append("COPIED")
    stats = f"POINTS {session.point_count}   LENGTH {session.total_length:.2f}m   " + "  ".join(flags)
    label = font.render(stats, True, TEXT_COLOR)
    surface.blit(label, (w - label.get_width() - 12, 12))

    # Long lists only show the tail
    pts = session.points
    shown = pts[-HUD_MAX_LISTED:]
    first_idx = len(pts) - len(shown)
    y = 34
    if first_idx > 0:
        _blit(surface, font, f"... {first_idx} earlier", (w - 170, y), DIM_TEXT_COLOR)
        y += 16
    for i, p in enumerate(shown, start=first_idx):
        color = FIRST_POINT_COLOR if i == 0 else DIM_TEXT_COLOR
        _blit(surface, font, f"{i:02d}  {p.x:.3f}, {p.y:.3f}", (w - 170, y), color)
        y += 16
