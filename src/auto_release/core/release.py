"""Release planning.

Combines the label policy, version bump and changelog merge into a single
pure step. Callers are responsible for fetching the pull request, listing
tags, reading and writing the changelog file and publishing the result.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from auto_release.core.categorize import categorize_changes
from auto_release.core.changelog import find_release, load_changelog
from auto_release.core.changes import ChangeCategory, ChangeSet
from auto_release.core.labels import determine_bump_type, should_skip_release
from auto_release.core.merge import merge_release
from auto_release.core.render import render_changelog, render_release_body
from auto_release.core.version import (
    BASELINE_VERSION,
    BumpType,
    Version,
    format_version,
    is_prerelease,
    parse_version,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from auto_release.config.models import AutoReleaseConfig

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"^v?\d+\.\d+\.\d+", re.ASCII)
BASELINE_TAG = "v0.0.0"


@dataclass(frozen=True, slots=True)
class PullRequest:
    """The merged pull request a release is planned from."""

    number: int
    title: str
    body: str | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Outcome of planning a release.

    When ``skipped`` is true every other field except ``previous_tag`` is None.
    """

    skipped: bool
    bump_type: BumpType | None = None
    previous_tag: str | None = None
    version: Version | None = None
    changelog: str | None = None
    release_body: str | None = None

    @property
    def tag(self) -> str | None:
        return format_version(self.version, include_v_prefix=True) if self.version else None

    @property
    def bare_version(self) -> str | None:
        return format_version(self.version, include_v_prefix=False) if self.version else None

    @property
    def is_prerelease(self) -> bool:
        return self.tag is not None and is_prerelease(self.tag)


def find_latest_tag(tags: Iterable[str]) -> str | None:
    """Return the first semver-like tag.

    Tags are expected most-recent-first; no numeric maximum is computed.
    """
    for tag in tags:
        if TAG_PATTERN.match(tag):
            logger.debug("Found latest tag: %s", tag)
            return tag
    logger.debug("No existing semver tags found")
    return None


def current_date(timezone: str = "UTC") -> str:
    """Today's date in ISO format for an IANA timezone."""
    tz = UTC if timezone.upper() == "UTC" else ZoneInfo(timezone)
    return datetime.now(tz).strftime("%Y-%m-%d")


def resolve_bump_type(pr: PullRequest, config: AutoReleaseConfig) -> BumpType:
    labels = config.labels
    bump_type = determine_bump_type(pr.labels, labels.major, labels.minor, labels.patch)
    if bump_type is None:
        logger.info("No version label found, using default bump: %s", config.default_bump)
        return config.default_bump
    logger.info("Version bump from labels: %s", bump_type)
    return bump_type


def resolve_current_version(latest_tag: str | None) -> Version:
    """Parse the latest tag, falling back to 0.0.0 when it is not a version."""
    version = parse_version(latest_tag or BASELINE_TAG)
    if version is None:
        logger.warning("Could not parse version from tag: %s, starting from v0.0.0", latest_tag)
        return BASELINE_VERSION
    return version


def collect_pr_changes(pr: PullRequest) -> ChangeSet:
    """Categorize the PR body, using the title when it yields nothing."""
    changes = categorize_changes(pr.body)
    if changes.is_empty and pr.title.strip():
        return changes.append(ChangeCategory.CHANGED, pr.title.strip())
    return changes


def plan_release(
    pr: PullRequest,
    changelog_text: str | None,
    latest_tag: str | None,
    config: AutoReleaseConfig,
    date: str | None = None,
) -> ReleasePlan:
    """Plan the release for a merged pull request.

    Args:
        pr: The merged pull request
        changelog_text: Current changelog content (None when there is none)
        latest_tag: Most recent semver tag, or None for a first release
        config: Release configuration
        date: Release date, defaults to today in the configured timezone

    Returns:
        The release plan
    """
    if should_skip_release(pr.labels, config.labels.skip):
        logger.info("Skipping release due to skip label on PR #%d", pr.number)
        return ReleasePlan(skipped=True, previous_tag=latest_tag)

    bump_type = resolve_bump_type(pr, config)
    current = resolve_current_version(latest_tag)
    next_version = current.bump(bump_type)
    logger.info(
        "Bumping version: %s -> %s",
        latest_tag or BASELINE_TAG,
        format_version(next_version, include_v_prefix=True),
    )

    release_date = date or current_date(config.changelog.timezone)
    changelog = merge_release(
        load_changelog(changelog_text),
        next_version,
        release_date,
        collect_pr_changes(pr),
    )
    release = find_release(changelog, next_version)

    return ReleasePlan(
        skipped=False,
        bump_type=bump_type,
        previous_tag=latest_tag,
        version=next_version,
        changelog=render_changelog(changelog),
        release_body=render_release_body(release) if release else "",
    )
