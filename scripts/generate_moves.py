#!/usr/bin/env python3
"""CLI helper to turn a YAML waypoint list into G00/G01 move commands."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gcode_writer.errors import GCodeError
from gcode_writer.io import (
    SettingsError,
    load_program_settings,
    load_settings,
    load_waypoints,
    load_writer_options,
    open_serial_sink,
)
from gcode_writer.motion import GCodeWriter, render_program, save_ngc, write_program

logger = logging.getLogger("generate_moves")


def positive_float(value: str) -> float:
    try:
        val = float(value)
    except ValueError as exc:  # pragma: no cover - argparse handles message
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if val <= 0:
        raise argparse.ArgumentTypeError("value must be positive")
    return val


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("waypoints", type=Path, help="YAML file with the waypoint list.")
    parser.add_argument("--settings", help="Optional path to a settings YAML file.")
    parser.add_argument("--feed", type=positive_float, help="Feed rate override (overrides writer.feed_rate).")
    target_group = parser.add_mutually_exclusive_group()
    target_group.add_argument("--output", type=Path, help="Optional target file path (.ngc).")
    target_group.add_argument("--port", help="Stream moves to this serial port instead of a file.")
    parser.add_argument("--baud", type=int, default=115200, help="Baud rate for --port.")
    parser.add_argument("--overwrite", action="store_true", help="Allow overwriting existing files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.settings) if args.settings else load_settings()
        options = load_writer_options(settings, feed_override=args.feed)
        program = load_program_settings(settings)
        moves = load_waypoints(args.waypoints, default_fast=program.rapid_travel)

        if args.port:
            port = open_serial_sink(args.port, baudrate=args.baud)
            try:
                writer = GCodeWriter(port)
                count = write_program(writer, moves, options, program.header)
                writer.release()
            finally:
                port.close()
            logger.info("Streamed %d moves to %s", count, args.port)
            return 0

        gcode = render_program(moves, options, program.header)
        path = save_ngc(gcode, path=args.output, overwrite=args.overwrite, add_eof=program.add_eof)
    except (GCodeError, SettingsError, FileExistsError) as exc:
        logger.error("%s", exc)
        return 1
    print(f"G-code saved to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
