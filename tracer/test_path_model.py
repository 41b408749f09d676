# Path model checks: ordering, removal no-ops, closed view gating, length.
import pytest

from .path_model import PathModel, Waypoint, closed_view, path_length
from .view import Viewport


def _vp():
    return Viewport(offset=(80.0, 520.0), scale=120.0)


def test_place_appends_in_order():
    vp = _vp()
    path = PathModel()
    assert path.place(200.0, 400.0, vp) == Waypoint(1.0, 1.0)
    path.place(80.0, 520.0, vp)
    path.place(200.0, 400.0, vp)
    assert path.points == [(1.0, 1.0), (0.0, 0.0), (1.0, 1.0)]


def test_place_with_snap():
    vp = _vp()
    path = PathModel()
    wp = path.place(207.0, 389.0, vp, snap=True)
    assert wp == Waypoint(1.0, 1.0)
    wp = path.place(207.0, 389.0, vp, snap=False)
    assert wp == Waypoint(1.058, 1.092)


def test_undo_last():
    path = PathModel([(0, 0), (1, 0)])
    assert path.undo_last() == (1.0, 0.0)
    assert path.undo_last() == (0.0, 0.0)
    assert path.undo_last() is None
    assert len(path) == 0


def test_remove_at_shifts_and_ignores_bad_index():
    path = PathModel([(0, 0), (1, 0), (2, 0)])
    assert path.remove_at(5) is None
    assert path.remove_at(-1) is None
    assert len(path) == 3
    assert path.remove_at(1) == (1.0, 0.0)
    assert path.points == [(0.0, 0.0), (2.0, 0.0)]
    assert path[1] == (2.0, 0.0)


def test_closed_view_gating():
    for n in range(6):
        pts = [Waypoint(float(i), float(i * i)) for i in range(n)]
        assert closed_view(pts, False) == pts
        closed = closed_view(pts, True)
        if n <= 2:
            assert closed == pts
        else:
            assert len(closed) == n + 1
            assert closed[-1] == closed[0]
        assert len(pts) == n


def test_total_length_ignores_closing_segment():
    path = PathModel([(0, 0), (1, 0), (1, 1)])
    assert path.total_length() == pytest.approx(2.0)
    assert path_length(path.closed(True)) == pytest.approx(2.0 + 2 ** 0.5)
    assert path.total_length() == pytest.approx(2.0)
    assert PathModel().total_length() == 0.0
    assert PathModel([(3, 4)]).total_length() == 0.0


def test_duplicates_allowed():
    path = PathModel()
    path.append((1, 1))
    path.append((1, 1))
    assert len(path) == 2
    assert path.total_length() == 0.0


def test_clear_then_place():
    vp = _vp()
    path = PathModel([(0, 0), (3, 4)])
    path.clear()
    assert path.total_length() == 0
    path.place(80.0, 520.0, vp)
    assert len(path) == 1


def run():
    test_place_appends_in_order()
    test_place_with_snap()
    test_undo_last()
    test_remove_at_shifts_and_ignores_bad_index()
    test_closed_view_gating()
    test_total_length_ignores_closing_segment()
    test_duplicates_allowed()
    test_clear_then_place()


if __name__ == "__main__":
    run()
