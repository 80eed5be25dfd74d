"""Categorize free-form pull request descriptions into changelog sections.

The description is read line by line by a two-state classifier. Each line
is turned into one of three events:

- a heading naming a category (``### Fixed``) opens that section,
- a bullet (``- text`` or ``* text``) is routed to a category,
- anything else is ignored and leaves the state unchanged.

Bullets are routed in two passes. A conventional prefix (``feat:``,
``fix:``, ...) wins regardless of the open section; otherwise the open
section receives the bullet, and without one it lands in ``Changed``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from auto_release.core.changes import ChangeCategory, ChangeSet

if TYPE_CHECKING:
    from collections.abc import Iterator

_CATEGORY_NAMES = "|".join(category.value for category in ChangeCategory)

HEADING_PATTERN = re.compile(rf"^#+\s*({_CATEGORY_NAMES})\s*$", re.IGNORECASE)
BULLET_PATTERN = re.compile(r"^[-*]\s+(.+)$")
CHECKBOX_PATTERN = re.compile(r"^[-*]\s+\[[ xX]\]")
PREFIX_PATTERN = re.compile(r"^([a-z]+):\s*(.*)$", re.IGNORECASE)

CONVENTIONAL_PREFIXES: dict[str, ChangeCategory] = {
    "feat": ChangeCategory.ADDED,
    "add": ChangeCategory.ADDED,
    "fix": ChangeCategory.FIXED,
    "bug": ChangeCategory.FIXED,
    "remove": ChangeCategory.REMOVED,
    "delete": ChangeCategory.REMOVED,
    "deprecate": ChangeCategory.DEPRECATED,
    "security": ChangeCategory.SECURITY,
}

DEFAULT_CATEGORY = ChangeCategory.CHANGED


@dataclass(frozen=True, slots=True)
class HeadingLine:
    category: ChangeCategory


@dataclass(frozen=True, slots=True)
class BulletLine:
    content: str


@dataclass(frozen=True, slots=True)
class OtherLine:
    text: str


LineEvent = HeadingLine | BulletLine | OtherLine


def is_checkbox(line: str) -> bool:
    """Task checkbox lines (``- [ ]``, ``- [x]``) are review noise, not changes."""
    return CHECKBOX_PATTERN.match(line.strip()) is not None


def classify_line(line: str) -> LineEvent:
    trimmed = line.strip()

    heading = HEADING_PATTERN.match(trimmed)
    if heading:
        category = ChangeCategory.from_name(heading.group(1))
        if category is not None:
            return HeadingLine(category)

    if not is_checkbox(trimmed):
        bullet = BULLET_PATTERN.match(trimmed)
        if bullet:
            return BulletLine(bullet.group(1))

    return OtherLine(trimmed)


def iter_line_events(text: str) -> Iterator[LineEvent]:
    for line in text.splitlines():
        yield classify_line(line)


def match_conventional_prefix(content: str) -> tuple[ChangeCategory, str] | None:
    """Match a conventional prefix such as ``fix: typo``.

    Returns:
        The prefix category and the content with the prefix stripped, or
        None when there is no recognized prefix or nothing follows it
    """
    match = PREFIX_PATTERN.match(content)
    if match is None:
        return None
    category = CONVENTIONAL_PREFIXES.get(match.group(1).lower())
    remainder = match.group(2).strip()
    if category is None or not remainder:
        return None
    return category, remainder


def route_bullet(content: str, section: ChangeCategory | None) -> tuple[ChangeCategory, str]:
    """Pick the category for a bullet given the currently open section."""
    prefixed = match_conventional_prefix(content)
    if prefixed is not None:
        return prefixed
    if section is not None:
        return section, content
    return DEFAULT_CATEGORY, content


def categorize_changes(text: str | None) -> ChangeSet:
    """Categorize a pull request description into a ChangeSet."""
    if not text:
        return ChangeSet()

    collected: dict[ChangeCategory, list[str]] = {category: [] for category in ChangeCategory}

    section: ChangeCategory | None = None
    for event in iter_line_events(text):
        match event:
            case HeadingLine(category=category):
                section = category
            case BulletLine(content=content):
                category, item = route_bullet(content, section)
                collected[category].append(item)
            case OtherLine():
                pass

    return ChangeSet.from_mapping(collected)
