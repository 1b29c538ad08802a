"""Helpers for composing move lines into a complete G-code program."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from gcode_writer.motion.position import GCodePosition
from gcode_writer.motion.writer import GCodeOptions, GCodeWriter

logger = logging.getLogger(__name__)

Move = Tuple[GCodePosition, bool]

PROGRAM_END_CODES = {"M2", "M30", "%"}


def write_program(
    writer: GCodeWriter,
    moves: Iterable[Move],
    options: Optional[GCodeOptions] = None,
    header: Sequence[str] = (),
) -> int:
    """Write ``header`` lines followed by one move per line. Returns the move count."""
    for line in header:
        writer.write_line(line)
    count = 0
    for position, fast in moves:
        writer.move_to(position, options, fast)
        writer.end_line()
        count += 1
    writer.flush()
    return count


def render_program(
    moves: Iterable[Move],
    options: Optional[GCodeOptions] = None,
    header: Sequence[str] = (),
) -> str:
    """Render moves into a newline-separated program string."""
    writer = GCodeWriter(StringIO())
    write_program(writer, moves, options, header)
    buffer = writer.release()
    return buffer.getvalue()


def _terminate_program(gcode: str, add_eof: bool) -> str:
    lines = gcode.replace("\r\n", "\n").replace("\r", "\n").rstrip().splitlines()
    if add_eof and (not lines or lines[-1].strip().upper() not in PROGRAM_END_CODES):
        lines.append("M2")
    return "\n".join(lines) + "\n"


def _default_ngc_path() -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path("gcode") / f"program_{stamp}.ngc"


def save_ngc(
    gcode: str,
    path: Optional[Union[str, Path]] = None,
    overwrite: bool = False,
    add_eof: bool = True,
) -> str:
    """Write ``gcode`` to a ``.ngc`` file and return its resolved path.

    Line endings are normalised to LF and ``M2`` is appended unless the program
    already ends with ``M2``, ``M30`` or ``%``. Without ``path`` the file goes to
    ``gcode/program_<timestamp>.ngc``. The file is written to a temporary sibling
    first and moved into place, so readers never see a half-written program.
    """
    target = _default_ngc_path() if path is None else Path(path).with_suffix(".ngc")
    if target.exists() and not overwrite:
        raise FileExistsError(f"{target} already exists; set overwrite=True to replace it.")

    text = _terminate_program(gcode, add_eof)
    target.parent.mkdir(parents=True, exist_ok=True)
    staging = target.with_name(target.name + ".tmp")
    with open(staging, "w", encoding="utf-8", newline="\n") as handle:
        handle.write(text)
    os.replace(staging, target)

    logger.info("Wrote G-code to %s (%d bytes)", target, len(text))
    return str(target.resolve())
