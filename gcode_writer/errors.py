"""Error taxonomy shared by the position type and the writer."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    IO_ERROR = "IOError"
    OUT_OF_RANGE = "OutOfRangeError"


class GCodeError(RuntimeError):
    """Base class for every failure raised by ``gcode_writer``."""

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        name = f"GCodeError::{self.kind.value}"
        return f"{name}: {self.detail}" if self.detail else name


class GCodeIOError(GCodeError, OSError):
    """Raised when the destination fails to accept a write or a flush."""

    kind = ErrorKind.IO_ERROR


class OutOfRangeError(GCodeError, ValueError):
    """Raised when a value does not fit the 64-bit fixed-point range."""

    kind = ErrorKind.OUT_OF_RANGE
