"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from dirclean.core.repository import CleanerRepository
from dirclean.core.store import ConfigurationStore


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG data and config directories at a temporary location."""
    xdg_root = tmp_path / "xdg"
    monkeypatch.setenv("XDG_DATA_HOME", str(xdg_root / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_root / "config"))
    return xdg_root


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path of a configuration file inside the test directory."""
    return tmp_path / "store" / "dirclean.configuration.json"


@pytest.fixture
def store(config_path: Path) -> ConfigurationStore:
    """ConfigurationStore writing to a temporary file."""
    return ConfigurationStore(config_path)


@pytest.fixture
def repository(store: ConfigurationStore) -> CleanerRepository:
    """CleanerRepository over the temporary store."""
    return CleanerRepository(store)


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Create a directory tree with nested target directories.

    Layout:
        root/A/target/x
        root/target/
        root/B/target/deep/target2
        root/C/src/
    """
    root = tmp_path / "root"
    (root / "A" / "target" / "x").mkdir(parents=True)
    (root / "target").mkdir(parents=True)
    (root / "B" / "target" / "deep" / "target2").mkdir(parents=True)
    (root / "C" / "src").mkdir(parents=True)
    (root / "A" / "target" / "x" / "artifact.bin").write_bytes(b"\0" * 128)
    (root / "C" / "src" / "main.py").write_text("print('hi')\n")
    return root
