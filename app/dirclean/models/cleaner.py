"""Cleaner profile models.

This module defines the Pydantic models representing the persisted
configuration document: a single ordered collection of cleaner profiles.
"""

from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _lowercase_keys(data: Any) -> Any:
    """Normalize mapping keys so field names match case-insensitively."""
    if isinstance(data, dict):
        return {key.lower() if isinstance(key, str) else key: value for key, value in data.items()}
    return data


class Cleaner(BaseModel):
    """A named cleaning profile.

    Pairs a root location with the directory names to purge beneath it.
    Path existence is not checked here; an invalid location simply
    produces no matches at scan time.

    Attributes:
        id: Unique identifier. Zero or negative means "assign on create".
        name: Display name (e.g., "JavaScript Cleaner").
        description: Optional free-form description.
        directories: Directory names (not paths) to match, case-insensitively.
        location: Absolute root directory of the search. Nothing outside
            it is deleted.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: Annotated[int, Field(description="Unique cleaner identifier")] = 0
    name: Annotated[str, Field(min_length=1, description="Display name")]
    description: Annotated[str | None, Field(description="Cleaner description")] = None
    directories: Annotated[list[str], Field(description="Directory names to remove")]
    location: Annotated[str, Field(min_length=1, description="Root of the search")]

    @model_validator(mode="before")
    @classmethod
    def normalize_field_names(cls, data: Any) -> Any:
        """Accept field names in any letter case."""
        return _lowercase_keys(data)

    @field_validator("name", "location")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("location")
    @classmethod
    def validate_absolute_location(cls, v: str) -> str:
        """Require the search root to be an absolute path."""
        if not Path(v).is_absolute():
            msg = f"location must be an absolute path: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("directories")
    @classmethod
    def validate_directory_names(cls, v: list[str]) -> list[str]:
        """Ensure every entry is a bare directory name."""
        for name in v:
            if not name.strip():
                msg = "directory names must not be empty"
                raise ValueError(msg)
            if "/" in name or "\\" in name:
                msg = f"expected a directory name, not a path: {name!r}"
                raise ValueError(msg)
        return v


class Configuration(BaseModel):
    """Root of the configuration document.

    Attributes:
        cleaners: Cleaner profiles in display/storage order.
    """

    model_config = ConfigDict(extra="forbid")

    cleaners: Annotated[
        list[Cleaner],
        Field(default_factory=list, description="Configured cleaners"),
    ]

    @model_validator(mode="before")
    @classmethod
    def normalize_field_names(cls, data: Any) -> Any:
        """Accept field names in any letter case."""
        return _lowercase_keys(data)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "Configuration":
        """Validate that no two cleaners share an id."""
        seen: set[int] = set()
        duplicates: set[int] = set()
        for cleaner in self.cleaners:
            if cleaner.id in seen:
                duplicates.add(cleaner.id)
            seen.add(cleaner.id)
        if duplicates:
            msg = f"Cleaner ids must be unique, duplicated: {sorted(duplicates)}"
            raise ValueError(msg)
        return self

    def find(self, cleaner_id: int) -> Cleaner | None:
        """Return the cleaner with the given id, or None."""
        for cleaner in self.cleaners:
            if cleaner.id == cleaner_id:
                return cleaner
        return None

    def next_id(self) -> int:
        """Return the id to assign to a new cleaner (max + 1, or 1 when empty)."""
        if not self.cleaners:
            return 1
        return max(cleaner.id for cleaner in self.cleaners) + 1
