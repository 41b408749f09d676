# Editing session checks: gestures, intents, redraw coalescing, copy/import.
import pytest

from .codec import DecodeError, encode_path
from .config import load_config, save_config
from .session import EditorSession

_CFG = {
    "view": {"px_per_meter": {"value": 120.0}},
    "editor": {"copied_ms": {"value": 1500}, "delete_radius_px": {"value": 10}},
}


def _session():
    s = EditorSession(_CFG)
    s.resize(800, 600)          # origin at (80, 540)
    return s


def _click(s, px, py):
    s.pointer_down(px, py, 1)
    return s.pointer_up(px, py, 1)


def _click_m(s, mx, my):
    px, py = s.viewport.to_pixels(mx, my)
    return _click(s, px, py)


def test_click_places_point():
    s = _session()
    assert _click(s, 200, 420) == (1.0, 1.0)
    assert s.points == [(1.0, 1.0)]


def test_pan_gesture_never_places():
    s = _session()
    s.pointer_down(100, 100, 1, alt=True)
    s.pointer_move(150, 130)
    assert s.pointer_up(150, 130, 1) is None
    assert s.point_count == 0
    assert s.viewport.offset == (130.0, 570.0)

    s.pointer_down(300, 300, 2)
    assert s.pointer_up(300, 300, 2) is None
    assert s.point_count == 0


def test_hover_follows_pointer_and_clears_on_leave():
    s = _session()
    assert s.hover_px is None
    s.pointer_move(207, 409)
    assert s.hover_px == (207, 409)
    assert s.hover_meters == (1.058, 1.092)
    s.toggle_snap()
    assert s.hover_px == (200.0, 420.0)
    assert s.hover_meters == (1.0, 1.0)
    s.pointer_leave()
    assert s.hover_px is None and s.hover_meters is None


def test_snap_click():
    s = _session()
    s.toggle_snap()
    assert _click(s, 207, 409) == (1.0, 1.0)


def test_wheel_zoom_keeps_point_under_cursor():
    s = _session()
    before = s.viewport.to_meters(333, 222, ndigits=None)
    s.wheel(333, 222, 1)
    s.wheel(333, 222, 1)
    s.wheel(333, 222, -1)
    assert s.viewport.scale == pytest.approx(132.0)
    assert s.viewport.to_meters(333, 222, ndigits=None) == pytest.approx(before, abs=1e-9)
    assert s.wheel(333, 222, 0) is False


def test_scenario_square_corner():
    s = _session()
    for m in [(0, 0), (1, 0), (1, 1)]:
        _click_m(s, *m)
    assert s.points == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
    assert s.total_length == pytest.approx(2.0)
    assert s.command.count("position:") == 3
    s.toggle_close()
    assert s.command.count("position:") == 4
    assert s.output_points[3] == s.output_points[0]
    assert s.total_length == pytest.approx(2.0)


def test_two_points_never_close():
    s = _session()
    _click_m(s, 0, 0)
    _click_m(s, 2, 0)
    s.toggle_close()
    assert len(s.output_points) == 2


def test_undo_clear_remove():
    s = _session()
    assert s.undo() is None
    for m in [(0, 0), (1, 0), (2, 0)]:
        _click_m(s, *m)
    assert s.remove_at(9) is None
    assert s.remove_at(1) == (1.0, 0.0)
    assert s.undo() == (2.0, 0.0)
    s.pointer_move(10, 10)
    s.clear()
    assert s.point_count == 0
    assert s.total_length == 0
    assert s.hover_px is None
    _click(s, 400, 300)
    assert s.point_count == 1


def test_remove_near_picks_closest_marker():
    s = _session()
    _click_m(s, 0, 0)
    _click_m(s, 0.05, 0)       # 6 px to the right
    px, py = s.viewport.to_pixels(0.05, 0)
    assert s.remove_near(px + 2, py) == (0.05, 0.0)
    assert s.remove_near(px + 40, py) is None
    assert s.points == [(0.0, 0.0)]


def test_redraw_requests_coalesce():
    s = _session()
    s.frame.cancel()
    renders = []
    for m in [(0, 0), (1, 0), (1, 1)]:
        _click_m(s, *m)
    s.toggle_close()
    s.pointer_move(5, 5)
    assert s.frame.run(lambda: renders.append(len(s.output_points))) is True
    assert renders == [4]
    assert s.frame.run(lambda: renders.append(-1)) is False
    s.undo()
    assert s.frame.pending


def test_listeners_see_new_points():
    s = _session()
    seen = []
    s.listeners.append(seen.append)
    _click(s, 200, 420)
    s.undo()
    assert seen == [[(1.0, 1.0)], []]


def test_copy_indicator_expires():
    s = _session()
    assert s.request_copy(0) == ""
    assert not s.copied(0)
    _click_m(s, 0, 0)
    cmd = s.request_copy(1000)
    assert cmd == encode_path(s.output_points)
    assert s.copied(1000) and s.copied(2499)
    assert not s.copied(2500)
    s.frame.cancel()
    s.tick(2000)
    assert not s.frame.pending
    s.tick(2600)
    assert s.frame.pending
    assert not s.copied(1200)


def test_import_replaces_path():
    s = _session()
    _click_m(s, 5, 5)
    s.request_import(encode_path([(0, 0), (2, 3.5)]))
    assert s.points == [(0.0, 0.0), (2.0, 3.5)]


def test_failed_import_leaves_path_alone():
    s = _session()
    _click_m(s, 1, 1)
    before = s.points
    with pytest.raises(DecodeError):
        s.request_import("no waypoints in here")
    assert s.points == before


def test_saved_settings_reload_into_new_session(tmp_path):
    s = _session()
    s.wheel(400, 300, 1)
    s.toggle_snap()
    s.toggle_close()
    _click_m(s, 1, 1)
    path = str(tmp_path / "config.json")
    assert save_config(s.to_config(_CFG), path) is True
    fresh = EditorSession(load_config(path))
    assert fresh.viewport.scale == pytest.approx(132.0)
    assert fresh.snap_to_grid and fresh.close_path
    assert fresh.copied_ms == 1500
    assert fresh.point_count == 0


def run():
    test_click_places_point()
    test_pan_gesture_never_places()
    test_hover_follows_pointer_and_clears_on_leave()
    test_snap_click()
    test_wheel_zoom_keeps_point_under_cursor()
    test_scenario_square_corner()
    test_two_points_never_close()
    test_undo_clear_remove()
    test_remove_near_picks_closest_marker()
    test_redraw_requests_coalesce()
    test_listeners_see_new_points()
    test_copy_indicator_expires()
    test_import_replaces_path()
    test_failed_import_leaves_path_alone()


if __name__ == "__main__":
    run()
