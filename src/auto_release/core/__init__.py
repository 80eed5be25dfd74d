"""Core business logic for auto-release.

This module contains the fundamental building blocks:
- Version parsing and bumping (semantic versioning)
- Label-driven bump and skip policy
- Pull request description categorization
- Keep a Changelog parsing, merging and rendering
- Release planning
"""

from __future__ import annotations

from auto_release.core.categorize import categorize_changes
from auto_release.core.changelog import (
    CHANGELOG_TEMPLATE,
    Changelog,
    Release,
    Released,
    Unreleased,
    extract_latest_version,
    find_release,
    load_changelog,
    parse_changelog,
)
from auto_release.core.changes import ChangeCategory, ChangeSet
from auto_release.core.labels import determine_bump_type, parse_label_list, should_skip_release
from auto_release.core.merge import merge_release
from auto_release.core.release import (
    PullRequest,
    ReleasePlan,
    current_date,
    find_latest_tag,
    plan_release,
)
from auto_release.core.render import (
    normalize_version_headings,
    render_changelog,
    render_release_body,
)
from auto_release.core.version import (
    BumpType,
    Version,
    bump_version,
    format_version,
    is_prerelease,
    parse_version,
)

__all__ = [
    # Changelog
    "CHANGELOG_TEMPLATE",
    # Version
    "BumpType",
    # Changes
    "ChangeCategory",
    "ChangeSet",
    "Changelog",
    # Release
    "PullRequest",
    "Release",
    "ReleasePlan",
    "Released",
    "Unreleased",
    "Version",
    "bump_version",
    "categorize_changes",
    "current_date",
    "determine_bump_type",
    "extract_latest_version",
    "find_latest_tag",
    "find_release",
    "format_version",
    "is_prerelease",
    "load_changelog",
    "merge_release",
    "normalize_version_headings",
    "parse_changelog",
    "parse_label_list",
    "parse_version",
    "plan_release",
    "render_changelog",
    "render_release_body",
    "should_skip_release",
]
