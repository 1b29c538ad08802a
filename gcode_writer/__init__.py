"""Fixed-point coordinate bookkeeping and G-code move emission."""

from .errors import ErrorKind, GCodeError, GCodeIOError, OutOfRangeError
from .motion import GCodeOffset, GCodeOptions, GCodePosition, GCodeWriter

__all__ = [
    "ErrorKind",
    "GCodeError",
    "GCodeIOError",
    "OutOfRangeError",
    "GCodeOffset",
    "GCodeOptions",
    "GCodePosition",
    "GCodeWriter",
    "motion",
    "io",
]
__version__ = "0.1.0"
