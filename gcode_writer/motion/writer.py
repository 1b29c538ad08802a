"""Streaming writer that renders positions as G00/G01 move commands."""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

from gcode_writer.errors import GCodeIOError, OutOfRangeError
from gcode_writer.motion.position import GCodePosition

logger = logging.getLogger(__name__)

RAPID_CODE = "G00"
LINEAR_CODE = "G01"


class GCodeSink(Protocol):
    """Minimal interface for destinations accepted by :class:`GCodeWriter`."""

    def write(self, data: Any) -> Any:
        ...

    def flush(self) -> None:
        ...


@dataclass(frozen=True)
class GCodeOptions:
    """Per-move options. Only the feed rate is recognised."""

    feed_rate: Optional[float] = None

    def __post_init__(self) -> None:
        if self.feed_rate is not None:
            rate = float(self.feed_rate)
            if not math.isfinite(rate) or rate <= 0:
                raise OutOfRangeError(f"feed rate must be a positive number, got {self.feed_rate!r}")


def _is_binary(sink: GCodeSink) -> bool:
    return isinstance(sink, (io.RawIOBase, io.BufferedIOBase))


def _write_all(sink: GCodeSink, payload: bytes) -> None:
    # Raw streams may accept only part of the payload per call.
    view = memoryview(payload)
    while view:
        written = sink.write(view)
        if not written:
            raise GCodeIOError(f"destination accepted no data ({len(view)} bytes pending)")
        view = view[written:]


def format_move(position: GCodePosition, options: Optional[GCodeOptions] = None, fast: bool = False) -> str:
    """Render a single move command without a line terminator.

    ``G00``/``G01`` followed by ``X``, ``Y`` and ``Z`` tokens for the axes present
    in ``position`` (4 decimals), then ``F`` (2 decimals) when ``options`` carries
    a feed rate.
    """
    tokens: List[str] = [RAPID_CODE if fast else LINEAR_CODE]
    for letter, value in zip("XYZ", position.as_floats()):
        if value is not None:
            tokens.append(f"{letter}{value:.4f}")
    if options is not None and options.feed_rate is not None:
        tokens.append(f"F{options.feed_rate:.2f}")
    return " ".join(tokens)


class GCodeWriter:
    """Writes move commands into a sink it owns until :meth:`release` is called.

    The writer never closes the sink and never appends a line terminator on its
    own; use :meth:`end_line` or :meth:`write_line` to compose a full program.
    Text sinks receive ``str``; binary sinks (``io.BytesIO``, pyserial ports)
    receive ASCII bytes.
    """

    def __init__(self, sink: GCodeSink) -> None:
        self._sink: Optional[GCodeSink] = sink
        self._binary = _is_binary(sink)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None and self._sink is not None:
            self.flush()

    @property
    def released(self) -> bool:
        return self._sink is None

    def _require_sink(self) -> GCodeSink:
        if self._sink is None:
            raise GCodeIOError("writer has released its destination")
        return self._sink

    def _write(self, text: str) -> None:
        sink = self._require_sink()
        payload = text.encode("ascii") if self._binary else text
        try:
            if self._binary:
                _write_all(sink, payload)
            else:
                sink.write(payload)
        except GCodeIOError:
            raise
        except (OSError, ValueError) as exc:
            logger.warning("G-code write failed: %s", exc)
            raise GCodeIOError(str(exc)) from exc

    # -- public API ------------------------------------------------------
    def move_to(
        self,
        position: GCodePosition,
        options: Optional[GCodeOptions] = None,
        fast: bool = False,
    ) -> None:
        """Emit one ``G00``/``G01`` move. No line terminator is written."""
        line = format_move(position, options, fast)
        logger.debug("move_to %s -> %s", position, line)
        self._write(line)

    def end_line(self) -> None:
        self._write("\n")

    def write_line(self, text: str) -> None:
        """Write a literal command (e.g. ``G21``) followed by a newline."""
        self._write(f"{text}\n")

    def flush(self) -> None:
        sink = self._require_sink()
        try:
            sink.flush()
        except (OSError, ValueError) as exc:
            logger.warning("G-code flush failed: %s", exc)
            raise GCodeIOError(str(exc)) from exc
        logger.debug("flushed G-code sink")

    def release(self) -> GCodeSink:
        """Hand the sink back to the caller. The sink is not flushed or closed."""
        sink = self._require_sink()
        self._sink = None
        logger.debug("released G-code sink")
        return sink
