"""Fixed-point positions and the G-code move writer."""

from .position import (
    COORDINATE_MULT,
    GCodeOffset,
    GCodePosition,
    fixed_to_float,
    float_to_fixed,
)
from .program import Move, render_program, save_ngc, write_program
from .writer import GCodeOptions, GCodeSink, GCodeWriter, format_move

__all__ = [
    "COORDINATE_MULT",
    "GCodeOffset",
    "GCodePosition",
    "fixed_to_float",
    "float_to_fixed",
    "GCodeOptions",
    "GCodeSink",
    "GCodeWriter",
    "format_move",
    "Move",
    "render_program",
    "save_ngc",
    "write_program",
]
