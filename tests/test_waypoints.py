from pathlib import Path

import pytest

from gcode_writer.io import SettingsError, load_waypoints, parse_waypoints
from gcode_writer.motion import GCodePosition


def test_plain_waypoint_list():
    moves = parse_waypoints([{"x": 1, "y": 2, "z": 3}, {"z": 10, "fast": True}])
    assert moves == [
        (GCodePosition.from_float_full(1.0, 2.0, 3.0), False),
        (GCodePosition.from_float(z=10.0), True),
    ]


def test_default_fast_applies_when_unspecified():
    moves = parse_waypoints([{"x": 1}, {"x": 2, "fast": False}], default_fast=True)
    assert [fast for _, fast in moves] == [True, False]


def test_offset_only_touches_shared_axes():
    data = {
        "offset": {"x": 100.0, "z": -5.0},
        "waypoints": [{"x": 1.0, "y": 2.0}, {"z": 1.0}],
    }
    moves = parse_waypoints(data)
    assert moves[0][0].as_floats() == (101.0, 2.0, None)
    assert moves[1][0].as_floats() == (None, None, -4.0)


@pytest.mark.parametrize(
    "data",
    [
        {"waypoints": "nope"},
        [{"x": "abc"}],
        [{"q": 1.0}],
        [[1, 2, 3]],
        [{"x": 1e300}],
        {"offset": [1, 2], "waypoints": []},
        [{"x": 1.0, "fast": "false"}],
        [{"x": 1.0, "fast": 1}],
    ],
)
def test_invalid_waypoints(data):
    with pytest.raises(SettingsError):
        parse_waypoints(data)


def test_load_waypoints_from_file(tmp_path: Path):
    path = tmp_path / "path.yml"
    path.write_text("waypoints:\n  - {x: 0, y: 0, fast: true}\n  - {x: 5.5}\n")
    moves = load_waypoints(path)
    assert moves[1] == (GCodePosition.from_float(x=5.5), False)
