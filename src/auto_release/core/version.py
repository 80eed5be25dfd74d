"""Semantic version parsing, formatting and bumping.

Versions follow ``major.minor.patch[-prerelease]`` with an optional leading
``v``. The prerelease part is opaque: it is preserved by parsing and
formatting but dropped by every bump.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from auto_release.exceptions import InvalidBumpConfigurationError, InvalidVersionFormatError

VERSION_PATTERN = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:-(.+))?\Z", re.ASCII)
PRERELEASE_TAG_PATTERN = re.compile(r"v?\d+\.\d+\.\d+-\w+", re.ASCII)


class BumpType(StrEnum):
    """Magnitude of a version increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def from_config(cls, value: object) -> BumpType:
        """Resolve a configured bump value.

        Raises:
            InvalidBumpConfigurationError: If the value is not a known bump type
        """
        if isinstance(value, BumpType):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidBumpConfigurationError(value)


@dataclass(frozen=True, slots=True)
class Version:
    """A semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string, raising on failure.

        Raises:
            InvalidVersionFormatError: If the text is not a semantic version
        """
        version = parse_version(text)
        if version is None:
            raise InvalidVersionFormatError(text)
        return version

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def release_key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def bump(self, bump_type: BumpType) -> Version:
        return bump_version(self, bump_type)

    def __str__(self) -> str:
        return format_version(self, include_v_prefix=False)


BASELINE_VERSION = Version(0, 0, 0)


def parse_version(text: str | None) -> Version | None:
    """Parse ``v1.2.3`` / ``1.2.3`` / ``v1.2.3-beta.1``.

    Returns ``None`` for anything else, including short forms like ``1.2``.
    """
    if not text:
        return None
    match = VERSION_PATTERN.match(text)
    if match is None:
        return None
    major, minor, patch, prerelease = match.groups()
    return Version(int(major), int(minor), int(patch), prerelease)


def format_version(version: Version, include_v_prefix: bool = True) -> str:
    base = f"{version.major}.{version.minor}.{version.patch}"
    if version.prerelease is not None:
        base = f"{base}-{version.prerelease}"
    return f"v{base}" if include_v_prefix else base


def bump_version(version: Version, bump_type: BumpType) -> Version:
    """Increment a version. The result is never a prerelease."""
    match bump_type:
        case BumpType.MAJOR:
            return Version(version.major + 1, 0, 0)
        case BumpType.MINOR:
            return Version(version.major, version.minor + 1, 0)
        case BumpType.PATCH:
            return Version(version.major, version.minor, version.patch + 1)
    raise InvalidBumpConfigurationError(bump_type)


def strip_v_prefix(text: str) -> str:
    return text[1:] if text.startswith("v") else text


def is_prerelease(tag_name: str) -> bool:
    """Check whether a tag looks like a prerelease (``v1.0.0-beta``)."""
    return PRERELEASE_TAG_PATTERN.search(tag_name) is not None


def extract_tag_name(ref: str) -> str:
    """Strip the ``refs/tags/`` prefix from a git ref."""
    return ref.removeprefix("refs/tags/")
