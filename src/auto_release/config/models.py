"""Pydantic models for the ``[tool.auto-release]`` configuration table."""

from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auto_release.core.labels import normalize_labels, parse_label_list
from auto_release.core.version import BumpType


def _label_set(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return sorted(parse_label_list(value))
    if isinstance(value, (list, tuple, set, frozenset)):
        return sorted(normalize_labels(str(item) for item in value))
    raise ValueError("labels must be a comma-separated string or a list of strings")


class LabelsConfig(BaseModel):
    """Pull request labels that control bumps and skipping.

    Each field accepts a list or a comma-separated string and is stored as
    lowercase, trimmed labels.
    """

    model_config = ConfigDict(extra="forbid")

    major: list[str] = Field(default_factory=lambda: ["breaking", "major"])
    minor: list[str] = Field(default_factory=lambda: ["enhancement", "feature", "minor"])
    patch: list[str] = Field(default_factory=lambda: ["bugfix", "fix", "patch"])
    skip: list[str] = Field(default_factory=lambda: ["no-release", "skip-release"])

    @field_validator("major", "minor", "patch", "skip", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> list[str]:
        return _label_set(value)


class ChangelogConfig(BaseModel):
    """Changelog file settings."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Path("CHANGELOG.md")
    timezone: str = "UTC"
    release_notes_path: Path | None = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value.upper() == "UTC":
            return "UTC"
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value


class AutoReleaseConfig(BaseModel):
    """Root configuration for auto-release."""

    model_config = ConfigDict(extra="forbid")

    default_bump: BumpType = BumpType.PATCH
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    labels: LabelsConfig = Field(default_factory=LabelsConfig)

    @field_validator("default_bump", mode="before")
    @classmethod
    def _resolve_bump(cls, value: object) -> BumpType:
        # InvalidBumpConfigurationError is not a ValueError, so it propagates
        # out of validation unwrapped.
        return BumpType.from_config(value)

    @property
    def changelog_path(self) -> Path:
        return self.changelog.path
