import importlib.util
import io
from pathlib import Path

import yaml

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "generate_moves.py"


def load_cli():
    spec = importlib.util.spec_from_file_location("generate_moves", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def write_inputs(tmp_path: Path) -> tuple:
    waypoints = tmp_path / "path.yml"
    waypoints.write_text(yaml.safe_dump({"waypoints": [{"z": 5.0, "fast": True}, {"x": 1.0, "y": 2.0}]}))
    settings = tmp_path / "settings.yml"
    settings.write_text(yaml.safe_dump({"writer": {"feed_rate": 600.0, "program": {"header": ["G90"]}}}))
    return waypoints, settings


def test_cli_writes_ngc(tmp_path: Path):
    cli = load_cli()
    waypoints, settings = write_inputs(tmp_path)
    output = tmp_path / "out.ngc"
    code = cli.main([str(waypoints), "--settings", str(settings), "--output", str(output), "--feed", "900"])
    assert code == 0
    assert output.read_text().splitlines() == [
        "G90",
        "G00 Z5.0000 F900.00",
        "G01 X1.0000 Y2.0000 F900.00",
        "M2",
    ]


def test_cli_refuses_overwrite(tmp_path: Path):
    cli = load_cli()
    waypoints, settings = write_inputs(tmp_path)
    output = tmp_path / "out.ngc"
    output.write_text("G90\n")
    assert cli.main([str(waypoints), "--settings", str(settings), "--output", str(output)]) == 1


class RecordingPort(io.BytesIO):
    def close(self):
        self.closed_by_cli = True


def test_cli_streams_to_serial(tmp_path: Path, monkeypatch):
    cli = load_cli()
    waypoints, settings = write_inputs(tmp_path)
    port = RecordingPort()
    monkeypatch.setattr(cli, "open_serial_sink", lambda name, baudrate: port)
    assert cli.main([str(waypoints), "--settings", str(settings), "--port", "/dev/null"]) == 0
    assert port.getvalue() == b"G90\nG00 Z5.0000 F600.00\nG01 X1.0000 Y2.0000 F600.00\n"
    assert port.closed_by_cli
