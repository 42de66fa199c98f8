"""Unit tests for config CLI commands.

Tests for the dirclean config path/init/reset commands.
"""

import json
from pathlib import Path

from dirclean.cli.main import app
from dirclean.core.repository import CleanerRepository
from dirclean.core.store import ConfigurationStore
from dirclean.models.cleaner import Cleaner
from typer.testing import CliRunner

runner = CliRunner()


def _store() -> ConfigurationStore:
    return ConfigurationStore()


class TestConfigPath:
    """Tests for dirclean config path."""

    def test_path_before_creation(self) -> None:
        """The path is printed even if the file does not exist yet."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == str(_store().path)
        assert "does not exist yet" in result.output


class TestConfigInit:
    """Tests for dirclean config init."""

    def test_init_creates_file(self) -> None:
        """init writes an empty configuration."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Created" in result.output
        assert json.loads(_store().path.read_text()) == {"cleaners": []}

    def test_init_keeps_existing(self, tmp_path: Path) -> None:
        """init leaves an existing configuration alone."""
        CleanerRepository(_store()).create(
            Cleaner(name="Keep", location=str(tmp_path), directories=["bin"])
        )

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "already exists with 1 cleaner(s)" in result.output
        assert CleanerRepository(_store()).get_by_id(1).name == "Keep"


class TestConfigReset:
    """Tests for dirclean config reset."""

    def test_reset_with_yes(self, tmp_path: Path) -> None:
        """reset deletes the configuration file."""
        CleanerRepository(_store()).create(
            Cleaner(name="Gone", location=str(tmp_path), directories=["bin"])
        )

        result = runner.invoke(app, ["config", "reset", "--yes"])

        assert result.exit_code == 0
        assert "Configuration deleted." in result.output
        assert not _store().exists()

    def test_reset_aborted(self) -> None:
        """Declining the prompt keeps the file."""
        _store().create()

        result = runner.invoke(app, ["config", "reset"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert _store().exists()

    def test_reset_without_file(self) -> None:
        """Resetting without a file is a no-op."""
        result = runner.invoke(app, ["config", "reset", "--yes"])

        assert result.exit_code == 0
        assert "No configuration file to reset." in result.output


class TestMain:
    """Tests for the top-level application options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "dirclean version" in result.stdout

    def test_help_lists_command_groups(self) -> None:
        """The top-level help shows every command group."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for group in ("cleaners", "fs", "config"):
            assert group in result.stdout
