"""Serial-port destinations for streaming moves straight to a controller."""

from __future__ import annotations

import logging

from serial import Serial

from gcode_writer.errors import GCodeIOError

logger = logging.getLogger(__name__)


def open_serial_sink(port: str, baudrate: int = 115200, timeout: float = 1.0) -> Serial:
    """Open ``port`` as a binary sink for :class:`~gcode_writer.motion.GCodeWriter`.

    The caller owns the returned port and is responsible for closing it.
    """
    try:
        sink = Serial(port=port, baudrate=baudrate, timeout=timeout)
    except OSError as exc:  # SerialException derives from OSError
        raise GCodeIOError(f"cannot open serial port {port}: {exc}") from exc
    logger.info("Opened serial port %s at %d baud", port, baudrate)
    return sink
