"""Waypoint files: YAML lists of (optionally offset) moves."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from gcode_writer.errors import OutOfRangeError
from gcode_writer.io.settings import PathLike, SettingsError, load_yaml, resolve_path
from gcode_writer.motion.position import GCodeOffset, GCodePosition
from gcode_writer.motion.program import Move

AXES = ("x", "y", "z")


def _position_from_mapping(entry: Dict[str, Any], context: str) -> GCodePosition:
    unknown = set(entry) - set(AXES) - {"fast"}
    if unknown:
        raise SettingsError(f"Unknown keys {sorted(unknown)} in {context}")
    try:
        values = [None if entry.get(axis) is None else float(entry[axis]) for axis in AXES]
        return GCodePosition.from_float(*values)
    except (TypeError, ValueError) as exc:
        # OutOfRangeError is a ValueError as well
        raise SettingsError(f"Invalid coordinate in {context}: {exc}") from exc


def parse_waypoints(data: Any, default_fast: bool = False) -> List[Move]:
    """Turn loaded YAML into ``(position, fast)`` moves.

    Accepts either a bare list of waypoints or a mapping with ``waypoints`` and an
    optional ``offset``. The offset is added to every waypoint, so axes the offset
    leaves out stay as written.
    """
    offset: Optional[GCodeOffset] = None
    if isinstance(data, dict):
        if "offset" in data and data["offset"] is not None:
            if not isinstance(data["offset"], dict):
                raise SettingsError("offset must be a mapping")
            offset = _position_from_mapping(data["offset"], "offset")
        data = data.get("waypoints", [])
    if not isinstance(data, list):
        raise SettingsError("waypoints must be a list")

    moves: List[Move] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise SettingsError(f"waypoint {index} must be a mapping")
        position = _position_from_mapping(entry, f"waypoint {index}")
        if offset is not None:
            try:
                position = position + offset
            except OutOfRangeError as exc:
                raise SettingsError(f"waypoint {index} overflows after offset: {exc}") from exc
        fast = entry.get("fast", default_fast)
        if not isinstance(fast, bool):
            raise SettingsError(f"waypoint {index}: fast must be true or false, got {fast!r}")
        moves.append((position, fast))
    return moves


def load_waypoints(path: PathLike, default_fast: bool = False) -> List[Move]:
    return parse_waypoints(load_yaml(resolve_path(path)) or [], default_fast=default_fast)
