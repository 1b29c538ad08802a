import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import yaml

from gcode_writer.motion.writer import GCodeOptions

PROJECT_MARKERS: Iterable[str] = (".git", "pyproject.toml", "config")
DEFAULT_SETTINGS_PATH = Path("config/settings.yml")

PathLike = Union[str, os.PathLike]


class SettingsError(RuntimeError):
    """Raised when a settings or waypoint file is missing or invalid."""


@dataclass
class ProgramSettings:
    header: Tuple[str, ...] = ()
    add_eof: bool = True
    rapid_travel: bool = False


def find_project_root(markers: Iterable[str] = PROJECT_MARKERS) -> Path:
    """Attempt to locate the repository root by walking up until a marker file/dir appears."""
    start = Path(__file__).resolve().parent
    for candidate in [start] + list(start.parents):
        for marker in markers:
            if (candidate / marker).exists():
                return candidate
    return start


def resolve_path(path: PathLike, project_root: Optional[Path] = None) -> Path:
    target = Path(path)
    if not target.is_absolute():
        target = (project_root or find_project_root()) / target
    return target


def load_yaml(target: Path) -> Any:
    if not target.exists():
        raise SettingsError(f"settings file not found: {target}")
    try:
        with open(target, "r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except OSError as exc:
        raise SettingsError(f"Failed to read {target}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {target}: {exc}") from exc


def load_settings(path: Optional[PathLike] = None) -> Dict[str, Any]:
    """Load the YAML settings file, defaulting to ``config/settings.yml`` under the project root."""
    data = load_yaml(resolve_path(path or DEFAULT_SETTINGS_PATH)) or {}
    if not isinstance(data, dict):
        raise SettingsError("settings file must contain a mapping")
    return data


def _writer_section(settings: Dict[str, Any]) -> Dict[str, Any]:
    section = settings.get("writer", {}) or {}
    if not isinstance(section, dict):
        raise SettingsError("writer must be a mapping")
    return section


def load_writer_options(settings: Dict[str, Any], feed_override: Optional[float] = None) -> GCodeOptions:
    """Build :class:`GCodeOptions` from the ``writer`` section; ``feed_override`` wins when given."""
    feed = feed_override if feed_override is not None else _writer_section(settings).get("feed_rate")
    try:
        return GCodeOptions(feed_rate=None if feed is None else float(feed))
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"Invalid writer.feed_rate {feed!r}: {exc}") from exc


def load_program_settings(settings: Dict[str, Any]) -> ProgramSettings:
    section = _writer_section(settings)
    program = section.get("program", {}) or {}
    if not isinstance(program, dict):
        raise SettingsError("writer.program must be a mapping")
    header = program.get("header", []) or []
    if not isinstance(header, list):
        raise SettingsError("writer.program.header must be a list of commands")
    return ProgramSettings(
        header=tuple(str(line) for line in header),
        add_eof=bool(program.get("add_eof", True)),
        rapid_travel=bool(section.get("rapid_travel", False)),
    )
