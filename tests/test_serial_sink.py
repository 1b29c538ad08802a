import pytest
from serial import SerialException

from gcode_writer.errors import GCodeIOError
from gcode_writer.io import open_serial_sink


class DummySerial:
    def __init__(self, port, baudrate, timeout):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout


def test_open_serial_sink(monkeypatch):
    monkeypatch.setattr("gcode_writer.io.serial_sink.Serial", DummySerial)
    sink = open_serial_sink("/dev/ttyUSB0", baudrate=57600)
    assert sink.port == "/dev/ttyUSB0"
    assert sink.baudrate == 57600


def test_open_serial_sink_failure(monkeypatch):
    def refuse(**kwargs):
        raise SerialException("could not open port")

    monkeypatch.setattr("gcode_writer.io.serial_sink.Serial", refuse)
    with pytest.raises(GCodeIOError):
        open_serial_sink("/dev/ttyUSB9")
