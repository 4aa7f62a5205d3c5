"""Tests for top-level CLI help output."""
from typer.testing import CliRunner

from opskit import __version__
from opskit.cli import app

runner = CliRunner()


class TestMainHelp:

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        output = result.stdout

        assert "opskit - small helpers for routine DevOps chores" in output
        assert "scaffold" in output
        assert "gh" in output
        assert "dns" in output
        assert "version" in output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"opskit v{__version__}" in result.output
