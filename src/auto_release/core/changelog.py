"""Keep a Changelog document model and parser.

A changelog is a free-form preamble followed by release sections::

    # Changelog

    ## [Unreleased]

    ## [1.0.0] - 2024-01-01

    ### Added

    - Initial release

Release headings may be bracketed or bare and may carry a ``- <date>``
suffix. Inside a release, ``### <Category>`` headings open sections and
bullets belong to the open section. Parsing stops at the first ``---``
line; whatever follows (test plans, scratch notes) is dropped. Link
reference definitions (``[1.0.0]: https://...``) found after the first
release heading are collected into the footer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from auto_release.core.categorize import BulletLine, HeadingLine, classify_line, is_checkbox
from auto_release.core.changes import ChangeCategory, ChangeSet
from auto_release.core.version import Version, format_version, parse_version, strip_v_prefix
from auto_release.exceptions import ChangelogParseError

logger = logging.getLogger(__name__)

UNRELEASED = "Unreleased"

CHANGELOG_TEMPLATE = """\
# Changelog

All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](http://keepachangelog.com/)
and this project adheres to [Semantic Versioning](http://semver.org/).
"""

RELEASE_HEADING_PATTERN = re.compile(
    r"^##\s+(?:\[(?P<bracketed>[^\]]+)\]|(?P<bare>\S+))(?:\s+-\s+(?P<date>.+?))?\s*$"
)
SUBHEADING_PATTERN = re.compile(r"^###\s")
SEPARATOR = "---"
LATEST_VERSION_PATTERN = re.compile(r"^##\s*\[v?(\d+\.\d+\.\d+(?:-[^\]]+)?)\]", re.MULTILINE)
LINK_REFERENCE_PATTERN = re.compile(r"^\[[^\]]+\]:\s*\S+")


@dataclass(frozen=True, slots=True)
class Unreleased:
    """Changes accumulated for the next, not yet versioned, release."""

    changes: ChangeSet = field(default_factory=ChangeSet)
    description: str = ""


@dataclass(frozen=True, slots=True)
class Released:
    """A published release.

    ``date`` is the raw date text from the heading; headings written
    without a date keep ``None``.
    """

    version: Version
    date: str | None = None
    changes: ChangeSet = field(default_factory=ChangeSet)
    description: str = ""

    @property
    def bare_version(self) -> str:
        return format_version(self.version, include_v_prefix=False)


Release = Unreleased | Released


@dataclass(frozen=True, slots=True)
class Changelog:
    """A parsed changelog: preamble, releases newest first, then link footer."""

    preamble: str = ""
    releases: tuple[Release, ...] = ()
    footer: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> Changelog:
        return cls(preamble=CHANGELOG_TEMPLATE)

    @property
    def unreleased(self) -> Unreleased | None:
        for release in self.releases:
            if isinstance(release, Unreleased):
                return release
        return None


def parse_release_heading(line: str) -> Release | None:
    """Parse a ``## [1.2.3] - 2024-01-01`` style heading.

    Returns:
        An empty release for the heading, or None if the line is not a
        version or Unreleased heading
    """
    match = RELEASE_HEADING_PATTERN.match(line.strip())
    if match is None:
        return None

    name = (match.group("bracketed") or match.group("bare")).strip()
    if name.lower() == UNRELEASED.lower():
        return Unreleased()

    version = parse_version(name)
    if version is None:
        return None
    return Released(version=version, date=match.group("date"))


@dataclass
class _ReleaseBuilder:
    heading: Release
    description: list[str] = field(default_factory=list)
    changes: dict[ChangeCategory, list[str]] = field(
        default_factory=lambda: {category: [] for category in ChangeCategory}
    )
    section: ChangeCategory | None = None
    seen_subheading: bool = False
    in_prose: bool = False

    def feed(self, line: str) -> None:
        if is_checkbox(line):
            return

        event = classify_line(line)
        if isinstance(event, HeadingLine) and SUBHEADING_PATTERN.match(line.strip()):
            self.section = event.category
            self.seen_subheading = True
            self.in_prose = False
            return

        if SUBHEADING_PATTERN.match(line.strip()):
            # unknown category heading closes the open section
            self.section = None
            self.seen_subheading = True
            self.in_prose = False
            return

        if not self.seen_subheading:
            self.description.append(line.rstrip())
            return

        if isinstance(event, BulletLine):
            if self.section is not None:
                self.changes[self.section].append(event.content)
            self.in_prose = False
            return

        if not line.strip():
            self.in_prose = False
            return

        # prose inside a section joins the description as its own paragraph
        if not self.in_prose and self.description and self.description[-1]:
            self.description.append("")
        self.description.append(line.rstrip())
        self.in_prose = True

    def build(self) -> Release:
        changes = ChangeSet.from_mapping(self.changes)
        description = "\n".join(self.description).strip("\n")
        if isinstance(self.heading, Unreleased):
            return Unreleased(changes=changes, description=description)
        return Released(
            version=self.heading.version,
            date=self.heading.date,
            changes=changes,
            description=description,
        )


def parse_changelog(text: str) -> Changelog:
    """Parse changelog text.

    Raises:
        ChangelogParseError: If the document holds more than one Unreleased section
    """
    preamble: list[str] = []
    builders: list[_ReleaseBuilder] = []
    footer: list[str] = []
    unreleased_line: int | None = None

    for line_number, line in enumerate(text.splitlines(), start=1):
        if line.rstrip() == SEPARATOR:
            break

        heading = parse_release_heading(line)
        if heading is not None:
            if isinstance(heading, Unreleased):
                if unreleased_line is not None:
                    raise ChangelogParseError(
                        f"duplicate Unreleased section (first at line {unreleased_line})",
                        line_number=line_number,
                    )
                unreleased_line = line_number
            builders.append(_ReleaseBuilder(heading=heading))
            continue

        if not builders:
            preamble.append(line.rstrip())
        elif LINK_REFERENCE_PATTERN.match(line.strip()):
            footer.append(line.strip())
        else:
            builders[-1].feed(line)

    return Changelog(
        preamble="\n".join(preamble).strip("\n"),
        releases=tuple(builder.build() for builder in builders),
        footer=tuple(footer),
    )


def load_changelog(text: str | None) -> Changelog:
    """Parse changelog text, falling back to a fresh document on failure."""
    if not text or not text.strip():
        return Changelog.empty()
    try:
        return parse_changelog(text)
    except ChangelogParseError as e:
        logger.warning("Could not parse changelog (%s), starting a new one", e)
        return Changelog.empty()


def find_release(changelog: Changelog, version: Version | str) -> Released | None:
    """Find a released entry by version, compared as bare version strings."""
    wanted = (
        format_version(version, include_v_prefix=False)
        if isinstance(version, Version)
        else strip_v_prefix(version.strip())
    )
    for release in changelog.releases:
        if isinstance(release, Released) and release.bare_version == wanted:
            return release
    return None


def extract_latest_version(text: str) -> str | None:
    """Return the first bracketed version heading, ``v``-prefixed."""
    match = LATEST_VERSION_PATTERN.search(text)
    if match is None:
        return None
    return f"v{match.group(1)}"
