"""I/O utilities (configuration, waypoint files, serial destinations)."""

from .settings import (
    DEFAULT_SETTINGS_PATH,
    ProgramSettings,
    SettingsError,
    find_project_root,
    load_program_settings,
    load_settings,
    load_writer_options,
)
from .serial_sink import open_serial_sink
from .waypoints import load_waypoints, parse_waypoints

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "ProgramSettings",
    "SettingsError",
    "find_project_root",
    "load_settings",
    "load_writer_options",
    "load_program_settings",
    "load_waypoints",
    "parse_waypoints",
    "open_serial_sink",
]
