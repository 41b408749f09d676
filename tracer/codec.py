# tracer/codec.py
"""
ROS 2 publish-command generation for nav_msgs/msg/Path.
Encodes waypoints into a `ros2 topic pub` command line and pulls waypoints
back out of pasted command text.
"""

import re
from typing import List, Sequence

from .path_model import Waypoint

TOPIC = "/path"
MSG_TYPE = "nav_msgs/msg/Path"
FRAME_ID = "map"

HEADER = "{stamp: {sec: 0, nanosec: 0}, frame_id: '%s'}" % FRAME_ID
POSE_TEMPLATE = (
    "{header: " + HEADER + ", pose: {position: {x: %.3f, y: %.3f, z: 0.0}, "
    "orientation: {x: 0.0, y: 0.0, z: 0.0, w: 1.0}}}"
)
COMMAND_TEMPLATE = (
    'ros2 topic pub --once ' + TOPIC + ' ' + MSG_TYPE +
    ' "{header: ' + HEADER + ', poses: [%s]}"'
)

_NUM = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
POSITION_RE = re.compile(
    r"position:\s*\{\s*x:\s*(" + _NUM + r")\s*,\s*y:\s*(" + _NUM + r")"
)


class DecodeError(ValueError):
    """Pasted text held no `position: {x: .., y: ..}` entries."""


def encode_pose(wp) -> str:
    return POSE_TEMPLATE % (wp[0], wp[1])


def encode_path(points: Sequence) -> str:
    """
    Build the publish command for `points` (pass the closed view to close the loop).

    Returns "" for an empty sequence: there is nothing to publish.
    """
    if not points:
        return ""
    return COMMAND_TEMPLATE % ", ".join(encode_pose(p) for p in points)


def decode_path(text: str) -> List[Waypoint]:
    """
    Extract every position in order of appearance.

    Orientation, z and frame metadata are ignored. Raises DecodeError if no
    position is found; an empty result is never returned.
    """
    pts = [Waypoint(float(x), float(y)) for x, y in POSITION_RE.findall(text or "")]
    if not pts:
        raise DecodeError("No waypoints found: expected 'position: {x: <num>, y: <num>}' entries")
    return pts


def pretty_command(cmd: str) -> str:
    """Break the command after `poses: [`, one pose per line."""
    if not cmd:
        return ""
    return (cmd.replace("}, poses: [", "},\n  poses: [\n    ", 1)
               .replace("}, {header", "},\n    {header")
               .replace(']}"', '\n  ]}"'))
