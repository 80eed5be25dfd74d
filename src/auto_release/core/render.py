"""Render changelog documents back to Keep a Changelog markdown."""

from __future__ import annotations

import re

from auto_release.core.changelog import UNRELEASED, Changelog, Release, Released
from auto_release.core.changes import ChangeSet

BARE_VERSION_HEADING_PATTERN = re.compile(r"^(## )(\d+\.\d+\.\d+(?:-\S+)?)", re.MULTILINE)


def render_heading(release: Release) -> str:
    if isinstance(release, Released):
        heading = f"## [{release.bare_version}]"
        return f"{heading} - {release.date}" if release.date else heading
    return f"## [{UNRELEASED}]"


def render_changes(changes: ChangeSet) -> str:
    """Render non-empty categories in canonical order."""
    blocks = []
    for category, items in changes.non_empty():
        bullets = "\n".join(f"- {item}" for item in items)
        blocks.append(f"### {category}\n\n{bullets}")
    return "\n\n".join(blocks)


def render_release_body(release: Release) -> str:
    """Render a release without its heading, e.g. for release notes."""
    parts = [release.description, render_changes(release.changes)]
    return "\n\n".join(part for part in parts if part)


def render_release(release: Release) -> str:
    body = render_release_body(release)
    heading = render_heading(release)
    return f"{heading}\n\n{body}" if body else heading


def normalize_version_headings(text: str) -> str:
    """Rewrite bare ``## 1.2.3`` headings as ``## [1.2.3]``."""
    return BARE_VERSION_HEADING_PATTERN.sub(r"\1[\2]", text)


def render_changelog(changelog: Changelog) -> str:
    blocks = [changelog.preamble.strip("\n")] if changelog.preamble.strip() else []
    blocks.extend(render_release(release) for release in changelog.releases)
    if changelog.footer:
        blocks.append("\n".join(changelog.footer))
    return normalize_version_headings("\n\n".join(blocks) + "\n")
