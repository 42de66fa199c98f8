"""Configuration file I/O operations.

This module provides the ConfigurationStore, the only component that
reads or writes the cleaner configuration document. The document is
JSON, validated with Pydantic models, and always rewritten in full.
"""

import contextlib
import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from pydantic import ValidationError

from dirclean.core.errors import ConfigurationError
from dirclean.core.paths import get_configuration_path
from dirclean.models.cleaner import Configuration

logger = logging.getLogger(__name__)


class ConfigurationStore:
    """Reads and writes the cleaner configuration document.

    Storage location: ~/.local/share/dirclean/dirclean.configuration.json

    Attributes:
        path: Location of the configuration file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize ConfigurationStore.

        Args:
            path: Optional override for the configuration file.
                  Default: ~/.local/share/dirclean/dirclean.configuration.json
        """
        self._path = path if path is not None else get_configuration_path()

    @property
    def path(self) -> Path:
        """Path to the configuration file."""
        return self._path

    def exists(self) -> bool:
        """Check if the configuration file exists."""
        return self._path.exists()

    def create(self) -> Configuration:
        """Return the stored configuration, writing an empty one if absent.

        Returns:
            The existing configuration, or a freshly saved empty one.

        Raises:
            ConfigurationError: If the file cannot be read, parsed, or written.
        """
        if self._path.exists():
            return self._read()

        configuration = Configuration()
        self.save(configuration)
        logger.info("Created empty configuration at %s", self._path)
        return configuration

    def load(self) -> Configuration:
        """Load and validate the configuration, creating it first if missing.

        Returns:
            Validated Configuration object.

        Raises:
            ConfigurationError: If the file is unreadable, not valid JSON,
                or does not match the expected shape.
        """
        if not self._path.exists():
            return self.create()
        return self._read()

    def save(self, configuration: Configuration) -> Path:
        """Save the full configuration to disk.

        The file is written atomically by first writing to a temporary file
        in the same directory and then using os.replace() for atomic rename.
        The temporary file is cleaned up on failure.

        Args:
            configuration: The Configuration object to save.

        Returns:
            Path where the configuration was saved.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        content = json.dumps(configuration.model_dump(mode="json"), indent=2) + "\n"

        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink(missing_ok=True)
            raise ConfigurationError(
                "Failed to save configuration",
                operation="save",
                target=str(self._path),
                cause=e,
            ) from e

        logger.debug("Saved %d cleaner(s) to %s", len(configuration.cleaners), self._path)
        return self._path

    def delete(self) -> None:
        """Remove the configuration file.

        A missing file is not an error.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        try:
            self._path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to delete configuration %s", self._path)
            raise
        logger.info("Deleted configuration %s", self._path)

    def _read(self) -> Configuration:
        """Read and validate the configuration file."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                "Failed to read configuration",
                operation="load",
                target=str(self._path),
                cause=e,
            ) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                "Invalid JSON in configuration",
                operation="load",
                target=str(self._path),
                cause=e,
            ) from e

        try:
            return Configuration.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration content",
                operation="load",
                target=str(self._path),
                cause=e,
            ) from e
