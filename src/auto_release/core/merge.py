"""Merge pending changes into a versioned release.

Merging is strictly additive: the Unreleased section and the pull request
changes are concatenated onto the target release, whose existing entries
are never replaced or deduplicated. Every function returns new values.
"""

from __future__ import annotations

import logging

from auto_release.core.changelog import Changelog, Release, Released, Unreleased, find_release
from auto_release.core.changes import ChangeSet
from auto_release.core.version import Version, format_version

logger = logging.getLogger(__name__)


def insert_release(releases: tuple[Release, ...], release: Released) -> tuple[Release, ...]:
    """Insert a release as the newest one.

    The release goes immediately before the first existing Released entry,
    or at the end when there is none. Version numbers are not compared.
    """
    for index, existing in enumerate(releases):
        if isinstance(existing, Released):
            return releases[:index] + (release,) + releases[index:]
    return releases + (release,)


def drain_unreleased(
    releases: tuple[Release, ...],
) -> tuple[tuple[Release, ...], ChangeSet]:
    """Empty the Unreleased section in place.

    Returns:
        The releases with a fresh Unreleased placeholder, and the changes
        that were pending in it
    """
    for index, release in enumerate(releases):
        if isinstance(release, Unreleased):
            drained = releases[:index] + (Unreleased(),) + releases[index + 1 :]
            return drained, release.changes
    return releases, ChangeSet()


def _replace_release(
    releases: tuple[Release, ...], old: Released, new: Released
) -> tuple[Release, ...]:
    return tuple(new if release is old else release for release in releases)


def merge_release(
    changelog: Changelog,
    version: Version | str,
    date: str,
    pr_changes: ChangeSet,
) -> Changelog:
    """Merge Unreleased and pull request changes into the release for ``version``.

    Args:
        changelog: Parsed changelog
        version: Target version, with or without a ``v`` prefix
        date: Release date used when the release does not exist yet
        pr_changes: Changes categorized from the pull request

    Returns:
        A new Changelog containing the merged release

    Raises:
        InvalidVersionFormatError: If ``version`` is a string that is not a semantic version
    """
    target_version = version if isinstance(version, Version) else Version.parse(version.strip())
    bare_version = format_version(target_version, include_v_prefix=False)

    releases = changelog.releases
    target = find_release(changelog, bare_version)
    if target is None:
        logger.debug("Adding new release %s dated %s", bare_version, date)
        target = Released(version=target_version, date=date)
        releases = insert_release(releases, target)
    else:
        logger.debug("Merging into existing release %s", bare_version)

    releases, pending = drain_unreleased(releases)
    if not pending.is_empty:
        logger.debug("Moving %d unreleased entries into %s", pending.item_count, bare_version)

    merged = Released(
        version=target.version,
        date=target.date,
        changes=target.changes.extend(pending).extend(pr_changes),
        description=target.description,
    )
    releases = _replace_release(releases, target, merged)

    return Changelog(preamble=changelog.preamble, releases=releases, footer=changelog.footer)
