"""Unit tests for cleaner CLI commands.

Tests for the dirclean cleaners list/show/add/edit/remove commands.
"""

import json
from pathlib import Path

import pytest
from dirclean.cli.main import app
from dirclean.core.repository import CleanerRepository
from dirclean.core.store import ConfigurationStore
from dirclean.models.cleaner import Cleaner
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def default_repository() -> CleanerRepository:
    """Repository over the configuration file the CLI uses."""
    return CleanerRepository(ConfigurationStore())


def _stored(cleaner_id: int) -> Cleaner:
    """Read a cleaner back from disk, bypassing any cached repository state."""
    return CleanerRepository(ConfigurationStore()).get_by_id(cleaner_id)


@pytest.fixture
def seeded(default_repository: CleanerRepository, tmp_path: Path) -> Cleaner:
    """Store one cleaner in the CLI configuration file."""
    return default_repository.create(
        Cleaner(
            name="JavaScript",
            description="Node artifacts",
            location=str(tmp_path),
            directories=["node_modules", ".cache"],
        )
    )


class TestList:
    """Tests for dirclean cleaners list."""

    def test_list_empty(self) -> None:
        """An empty configuration prints a hint."""
        result = runner.invoke(app, ["cleaners", "list"])

        assert result.exit_code == 0
        assert "No cleaners configured" in result.output

    def test_list_table(self, seeded: Cleaner) -> None:
        """Configured cleaners are shown in a table."""
        result = runner.invoke(app, ["cleaners", "list"])

        assert result.exit_code == 0
        assert "JavaScript" in result.output
        assert "1 cleaner(s)" in result.output

    def test_list_json(self, seeded: Cleaner) -> None:
        """JSON output contains every field."""
        result = runner.invoke(app, ["cleaners", "list", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == [seeded.model_dump(mode="json")]

    def test_list_corrupt_configuration(self, default_repository: CleanerRepository) -> None:
        """A corrupt file fails with a pointer to the configuration path."""
        path = default_repository.store.path
        path.parent.mkdir(parents=True)
        path.write_text("{")

        result = runner.invoke(app, ["cleaners", "list"])

        assert result.exit_code == 1
        assert "Failed to load cleaners" in result.output
        assert "dirclean config path" in result.output


class TestShow:
    """Tests for dirclean cleaners show."""

    def test_show_json(self, seeded: Cleaner) -> None:
        """show prints a single cleaner."""
        result = runner.invoke(app, ["cleaners", "show", "1", "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["name"] == "JavaScript"

    def test_show_table(self, seeded: Cleaner) -> None:
        """The table view lists the cleaner's fields."""
        result = runner.invoke(app, ["cleaners", "show", "1"])

        assert result.exit_code == 0
        assert "node_modules" in result.output
        assert "Node artifacts" in result.output

    def test_show_missing(self) -> None:
        """An unknown id exits with an error."""
        result = runner.invoke(app, ["cleaners", "show", "7"])

        assert result.exit_code == 1
        assert "not found" in result.output
        assert "dirclean cleaners list" in result.output


class TestAdd:
    """Tests for dirclean cleaners add."""

    def test_add_assigns_next_id(
        self, default_repository: CleanerRepository, tmp_path: Path
    ) -> None:
        """A new cleaner gets the next free id and an absolute location."""
        result = runner.invoke(
            app,
            ["cleaners", "add", "Dotnet", "-l", str(tmp_path), "-d", "bin", "-d", "obj"],
        )

        assert result.exit_code == 0
        assert "Created cleaner 1: Dotnet" in result.output
        cleaner = default_repository.get_by_id(1)
        assert cleaner.directories == ["bin", "obj"]
        assert cleaner.location == str(tmp_path)
        assert cleaner.description is None

    def test_add_explicit_id_conflict(self, seeded: Cleaner, tmp_path: Path) -> None:
        """An explicit id already in use is rejected."""
        result = runner.invoke(
            app,
            ["cleaners", "add", "Dup", "-l", str(tmp_path), "-d", "bin", "--id", "1"],
        )

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_requires_directories(self, tmp_path: Path) -> None:
        """At least one --dir option is required."""
        result = runner.invoke(app, ["cleaners", "add", "X", "-l", str(tmp_path)])

        assert result.exit_code != 0

    def test_add_missing_location_warns(
        self, default_repository: CleanerRepository, tmp_path: Path
    ) -> None:
        """A location that does not exist is stored with a warning."""
        result = runner.invoke(
            app,
            ["cleaners", "add", "Later", "-l", str(tmp_path / "later"), "-d", "dist"],
        )

        assert result.exit_code == 0
        assert "does not exist" in result.output
        assert default_repository.get_by_id(1).name == "Later"

    def test_add_rejects_path_as_directory_name(self, tmp_path: Path) -> None:
        """Directory entries must be names."""
        result = runner.invoke(
            app,
            ["cleaners", "add", "Bad", "-l", str(tmp_path), "-d", "a/b"],
        )

        assert result.exit_code == 1
        assert "Invalid cleaner" in result.output


class TestEdit:
    """Tests for dirclean cleaners edit."""

    def test_edit_name_and_directories(self, seeded: Cleaner) -> None:
        """Only the given fields change."""
        result = runner.invoke(
            app,
            ["cleaners", "edit", "1", "--name", "Web", "-d", "dist"],
        )

        assert result.exit_code == 0
        assert "Updated cleaner 1: Web" in result.output
        cleaner = _stored(1)
        assert cleaner.name == "Web"
        assert cleaner.directories == ["dist"]
        assert cleaner.location == seeded.location
        assert cleaner.description == "Node artifacts"

    def test_edit_clears_description(self, seeded: Cleaner) -> None:
        """An empty description removes it."""
        result = runner.invoke(app, ["cleaners", "edit", "1", "--description", ""])

        assert result.exit_code == 0
        assert _stored(1).description is None

    def test_edit_nothing(self, seeded: Cleaner) -> None:
        """Without options nothing is changed."""
        result = runner.invoke(app, ["cleaners", "edit", "1"])

        assert result.exit_code == 0
        assert "Nothing to change" in result.output

    def test_edit_missing(self) -> None:
        """Editing an unknown id fails."""
        result = runner.invoke(app, ["cleaners", "edit", "5", "--name", "x"])

        assert result.exit_code == 1


class TestRemove:
    """Tests for dirclean cleaners remove."""

    def test_remove_with_yes(
        self, seeded: Cleaner, default_repository: CleanerRepository, tmp_path: Path
    ) -> None:
        """The profile is deleted, its location is untouched."""
        (tmp_path / "node_modules").mkdir()

        result = runner.invoke(app, ["cleaners", "remove", "1", "--yes"])

        assert result.exit_code == 0
        assert "Deleted cleaner 1." in result.output
        assert default_repository.list(refresh=True) == []
        assert (tmp_path / "node_modules").is_dir()

    def test_remove_aborted(self, seeded: Cleaner, default_repository: CleanerRepository) -> None:
        """Declining the prompt keeps the cleaner."""
        result = runner.invoke(app, ["cleaners", "remove", "1"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert default_repository.get_by_id(1).name == "JavaScript"

    def test_remove_missing(self) -> None:
        """Removing an unknown id fails."""
        result = runner.invoke(app, ["cleaners", "remove", "2", "--yes"])

        assert result.exit_code == 1
