"""
Tests for the typer command line interface.
"""

from __future__ import annotations

import pytest
from loguru import logger
from typer.testing import CliRunner

from gymnarium.cli import app

runner = CliRunner()

CONFIG_YAML = """
logging:
  log_level: error
  colorize: false
sampling:
  seed: "cli"
format:
  entries:
    - key: sensors.position
      shape: [3]
      boundaries:
        - {kind: float, minimum: -1.0, maximum: 1.0}
    - key: ext_controller
      shape: [3]
      boundaries:
        - {kind: integer, minimum: 0, maximum: 4}
        - {kind: integer, minimum: 0, maximum: 1}
        - {kind: integer, minimum: 0, maximum: 1}
"""


@pytest.fixture(autouse=True)
def _reset_loguru():
    yield
    logger.remove()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestSeedCommand:
    def test_text_seed(self):
        result = runner.invoke(app, ["seed", "12345678"])

        assert result.exit_code == 0
        assert "[49, 50, 51, 52, 53, 54, 55, 56]" in result.stdout

    def test_numeric_seed(self):
        result = runner.invoke(app, ["seed", "--numeric", "258"])

        assert result.exit_code == 0
        assert "[0, 0, 0, 0, 0, 0, 1, 2]" in result.stdout

    def test_int_output(self):
        result = runner.invoke(app, ["seed", "--int", "ab"])

        assert result.exit_code == 0
        assert str(int.from_bytes(b"ab" + bytes(6), "big")) in result.stdout

    def test_bad_width(self):
        result = runner.invoke(app, ["seed", "x", "--width", "12"])

        assert result.exit_code == 1
        assert "width must be one of" in result.stdout

    def test_numeric_out_of_range(self):
        result = runner.invoke(app, ["seed", "--numeric", str(2**64)])

        assert result.exit_code == 1


class TestConfigCommands:
    def test_validate(self, config_file):
        result = runner.invoke(app, ["validate", str(config_file)])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.stdout

    def test_validate_reports_errors(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "format:\n  entries:\n    - {key: a, shape: [2, 0]}\n", encoding="utf-8"
        )

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "validation failed" in result.stdout
        assert "shape[1] must be positive" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "does not exist" in result.stdout

    def test_describe(self, config_file):
        result = runner.invoke(app, ["describe", str(config_file)])

        assert result.exit_code == 0
        assert "Format (6 cells)" in result.stdout
        assert "sensors.position" in result.stdout
        assert "ext_controller" in result.stdout

    def test_sample_is_reproducible(self, config_file):
        first = runner.invoke(app, ["sample", str(config_file)])
        second = runner.invoke(app, ["sample", str(config_file)])

        assert first.exit_code == 0
        assert "Sampled position" in first.stdout
        assert first.stdout == second.stdout

    def test_sample_seed_override(self, config_file):
        result = runner.invoke(app, ["sample", str(config_file), "--seed", "other"])

        assert result.exit_code == 0
        assert "ext_controller" in result.stdout
