"""Shared fixtures for auto-release tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from auto_release.config.models import AutoReleaseConfig
from auto_release.core.release import PullRequest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config() -> AutoReleaseConfig:
    """Default configuration."""
    return AutoReleaseConfig()


@pytest.fixture
def basic_changelog() -> str:
    """Changelog with a single release and an uncategorized entry."""
    return "# Changelog\n\n## [1.0.0] - 2024-01-01\n\n- Initial release\n"


@pytest.fixture
def unreleased_changelog() -> str:
    """Changelog with pending Unreleased entries."""
    return """\
# Changelog

All notable changes to this project will be documented in this file.

## [Unreleased]

### Added

- Manual entry from unreleased

### Fixed

- Unreleased fix

## [1.0.0] - 2024-01-01

### Added

- Initial release
"""


@pytest.fixture
def feature_pr() -> PullRequest:
    """A merged feature PR with a structured description."""
    return PullRequest(
        number=42,
        title="Add export command",
        body="## Summary\n\nAdds export.\n\n### Added\n- Export command\n\n### Fixed\n- Crash on empty input",
        labels=("feature",),
    )


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """Project directory with a pyproject.toml holding auto-release settings."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.auto-release]
default_bump = "minor"

[tool.auto-release.changelog]
path = "CHANGELOG.md"
release_notes_path = "RELEASE_NOTES.md"

[tool.auto-release.labels]
major = "Breaking, major"
skip = ["skip-release"]
"""
    )
    return tmp_path
