"""Label-driven release policy.

Pull request labels decide whether a release happens at all and, if so,
how large the version bump is.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from auto_release.core.version import BumpType

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def parse_label_list(csv: str | None) -> frozenset[str]:
    """Parse a comma-separated label list into lowercase, trimmed labels."""
    if not csv:
        return frozenset()
    return normalize_labels(csv.split(","))


def normalize_labels(labels: Iterable[str]) -> frozenset[str]:
    return frozenset(label.strip().lower() for label in labels if label.strip())


def determine_bump_type(
    pr_labels: Iterable[str],
    major_labels: Iterable[str],
    minor_labels: Iterable[str],
    patch_labels: Iterable[str],
) -> BumpType | None:
    """Determine the bump type from PR labels.

    Tiers are checked in order of precedence: major > minor > patch.

    Returns:
        The first matching tier, or None when no label matches
    """
    labels = normalize_labels(pr_labels)

    tiers = (
        (BumpType.MAJOR, major_labels),
        (BumpType.MINOR, minor_labels),
        (BumpType.PATCH, patch_labels),
    )
    for bump_type, tier_labels in tiers:
        matched = labels & normalize_labels(tier_labels)
        if matched:
            logger.debug("Labels %s select a %s bump", sorted(matched), bump_type)
            return bump_type

    return None


def should_skip_release(pr_labels: Iterable[str], skip_labels: Iterable[str]) -> bool:
    return bool(normalize_labels(pr_labels) & normalize_labels(skip_labels))
