# tracer/frame.py
from __future__ import annotations


class FrameScheduler:
    """
    Dirty flag with at most one pending redraw.

    Any number of request() calls between two frames collapse into a single
    render. The flag is cleared before rendering so a request made from inside
    the render callback carries over to the next frame instead of being lost.
    """

    def __init__(self, pending: bool = True):
        self._pending = pending

    @property
    def pending(self) -> bool:
        return self._pending

    def request(self) -> None:
        self._pending = True

    def cancel(self) -> None:
        self._pending = False

    def run(self, render) -> bool:
        """Call render() once if a redraw is pending; True if it ran."""
        if not self._pending:
            return False
        self._pending = False
        render()
        return True
