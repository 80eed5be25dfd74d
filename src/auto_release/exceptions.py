"""Exception hierarchy for auto-release.

Configuration problems are fatal and raised to the caller. Content problems
(unparseable tags, malformed changelogs) are recovered inside the engine and
only surface here for callers that ask for the strict variants.
"""

from __future__ import annotations


class AutoReleaseError(Exception):
    """Base class for all auto-release errors."""


# Configuration


class ConfigError(AutoReleaseError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when a configuration file cannot be found."""


class ConfigValidationError(ConfigError):
    """Raised when configuration values fail validation."""


class InvalidBumpConfigurationError(ConfigError):
    """Raised when a configured bump type is not major, minor, or patch."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid default bump value: {value}. Must be major, minor, or patch.")


# Versions


class VersionError(AutoReleaseError):
    """Base class for version errors."""


class InvalidVersionFormatError(VersionError):
    """Raised when a string is not a semantic version."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid version format: {text!r}")


# Changelog


class ChangelogError(AutoReleaseError):
    """Base class for changelog errors."""


class ChangelogParseError(ChangelogError):
    """Raised when changelog text cannot be parsed into releases."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
