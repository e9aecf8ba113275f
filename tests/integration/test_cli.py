"""Integration tests for the command line interface."""

import json
import logging
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from deckdraw import __version__
from deckdraw.cli.app import app

runner = CliRunner()

SQUARE = [(0, 0), (240, 0), (240, 240), (0, 240), (0, 0)]
OPEN_L = [(0, 0), (288, 0), (288, 120), (144, 120), (144, 240), (0, 240)]
CLOSED_L = [*OPEN_L, (0, 0)]
TRIANGLE = [(0, 0), (100, 0), (50, 87), (0, 0)]


@pytest.fixture(autouse=True)
def restore_logging():
    """Each command configures logging; drop its handlers afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def write_shape(path: Path, coords: list[tuple[float, float]], ledger: list[int] | None = None) -> Path:
    data: dict = {"points": [{"x": x, "y": y} for x, y in coords]}
    if ledger is not None:
        data["ledger"] = ledger
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestVersion:
    """Tests for global options."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_log_level(self, tmp_path):
        """Test that an unknown log level is refused."""
        shape = write_shape(tmp_path / "deck.json", SQUARE)
        result = runner.invoke(app, ["validate", str(shape), "--log-level", "LOUD"])
        assert result.exit_code == 1
        assert "LOUD" in result.output


class TestCloseCommand:
    """Tests for the close command."""

    def test_close_writes_result(self, tmp_path):
        """Test closing an open L-shaped outline."""
        shape = write_shape(tmp_path / "deck.json", OPEN_L)
        output = tmp_path / "closed.json"

        result = runner.invoke(app, ["close", str(shape), "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["success"] is True
        assert len(data["closed_points"]) == 7
        assert data["closed_points"][0] == data["closed_points"][-1]

    def test_close_failure(self, tmp_path):
        """Test that too few points exit with status 1."""
        shape = write_shape(tmp_path / "deck.json", [(0, 0), (240, 0)])
        result = runner.invoke(app, ["close", str(shape)])
        assert result.exit_code == 1
        assert "Need at least 3 points" in result.output

    def test_missing_file(self, tmp_path):
        """Test that a missing shape file is reported."""
        result = runner.invoke(app, ["close", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_shape(self, tmp_path):
        """Test a closed square."""
        shape = write_shape(tmp_path / "deck.json", SQUARE)
        result = runner.invoke(app, ["validate", str(shape)])
        assert result.exit_code == 0
        assert "Valid shape" in result.output

    def test_invalid_shape(self, tmp_path):
        """Test that a sixty degree corner fails."""
        shape = write_shape(tmp_path / "deck.json", TRIANGLE)
        result = runner.invoke(app, ["validate", str(shape)])
        assert result.exit_code == 1
        assert "Invalid shape" in result.output

    def test_quiet(self, tmp_path):
        """Test that --quiet prints nothing for a valid shape."""
        shape = write_shape(tmp_path / "deck.json", SQUARE)
        result = runner.invoke(app, ["validate", str(shape), "--quiet"])
        assert result.exit_code == 0
        assert result.output.strip() == ""


class TestDecomposeCommand:
    """Tests for the decompose command."""

    def test_ledger_from_file(self, tmp_path):
        """Test decomposing with the ledger stored in the shape file."""
        shape = write_shape(tmp_path / "deck.json", CLOSED_L, ledger=[0])

        result = runner.invoke(app, ["decompose", str(shape)])

        assert result.exit_code == 0
        data = json.loads((tmp_path / "deck-sections.json").read_text(encoding="utf-8"))
        assert data["ledger"] == [0]
        assert [(r["x"], r["y"], r["width"], r["height"]) for r in data["rectangles"]] == [
            (0, 0, 144, 240),
            (144, 0, 144, 120),
        ]

    def test_open_outline_closed_first(self, tmp_path):
        """Test that an open outline is closed before decomposing."""
        shape = write_shape(tmp_path / "deck.json", OPEN_L)
        output = tmp_path / "sections.json"

        result = runner.invoke(app, ["decompose", str(shape), "-l", "1", "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["rectangles"]) == 2
        assert data["rectangles"][0]["is_ledger_rectangle"] is True

    def test_no_ledger(self, tmp_path):
        """Test that a ledger is required."""
        shape = write_shape(tmp_path / "deck.json", SQUARE)
        result = runner.invoke(app, ["decompose", str(shape)])
        assert result.exit_code == 1
        assert "No walls selected" in result.output
        assert not (tmp_path / "deck-sections.json").exists()

    def test_walls_not_parallel(self, tmp_path):
        """Test that perpendicular ledger walls are refused."""
        shape = write_shape(tmp_path / "deck.json", SQUARE)
        result = runner.invoke(app, ["decompose", str(shape), "-l", "0", "-l", "1"])
        assert result.exit_code == 1
        assert "parallel" in result.output

    def test_invalid_outline(self, tmp_path):
        """Test that an invalid closed outline is not decomposed."""
        shape = write_shape(tmp_path / "deck.json", TRIANGLE, ledger=[0])
        result = runner.invoke(app, ["decompose", str(shape)])
        assert result.exit_code == 1
        assert "Invalid angle" in result.output


class TestTraceCommand:
    """Tests for the trace command."""

    def write_script(self, path: Path, clicks: list[tuple[float, float]]) -> Path:
        data = {"viewport_scale": 1.0, "clicks": [{"x": x, "y": y} for x, y in clicks]}
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_trace_and_decompose(self, tmp_path):
        """Test replaying a drawing that selects the top wall."""
        script = self.write_script(
            tmp_path / "clicks.json",
            [(0, 0), (240, 0), (240, 240), (0, 240), (1, 1), (120, 2)],
        )
        output = tmp_path / "session.json"

        result = runner.invoke(app, ["trace", str(script), "-o", str(output), "-v"])

        assert result.exit_code == 0
        assert "SELECT_WALL" in result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["is_shape_closed"] is True
        assert data["selected_wall_indices"] == [0]
        assert len(data["rectangles"]) == 1

    def test_open_drawing(self, tmp_path):
        """Test a drawing that never closes."""
        script = self.write_script(tmp_path / "clicks.json", [(0, 0), (240, 0)])
        output = tmp_path / "session.json"

        result = runner.invoke(app, ["trace", str(script), "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["state"] == "DRAWING"
        assert data["rectangles"] == []

    def test_verbose_and_quiet(self, tmp_path):
        """Test that --verbose and --quiet cannot be combined."""
        script = self.write_script(tmp_path / "clicks.json", [])
        result = runner.invoke(app, ["trace", str(script), "-v", "-q"])
        assert result.exit_code == 1
