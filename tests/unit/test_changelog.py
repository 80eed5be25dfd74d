"""Unit tests for changelog parsing."""

from __future__ import annotations

import logging

import pytest

from auto_release.core.changelog import (
    CHANGELOG_TEMPLATE,
    Changelog,
    Released,
    Unreleased,
    extract_latest_version,
    find_release,
    load_changelog,
    parse_changelog,
    parse_release_heading,
)
from auto_release.core.changes import ChangeCategory, ChangeSet
from auto_release.core.version import Version
from auto_release.exceptions import ChangelogParseError


class TestParseReleaseHeading:
    """Tests for parse_release_heading()."""

    def test_bracketed_with_date(self):
        assert parse_release_heading("## [1.0.0] - 2024-01-01") == Released(
            version=Version(1, 0, 0), date="2024-01-01"
        )

    def test_bare_with_date(self):
        assert parse_release_heading("## 1.0.0 - 2024-01-01") == Released(
            version=Version(1, 0, 0), date="2024-01-01"
        )

    def test_without_date(self):
        assert parse_release_heading("## [2.0.0-rc.1]") == Released(version=Version(2, 0, 0, "rc.1"))

    def test_v_prefixed(self):
        release = parse_release_heading("## [v1.2.3] - 2024-02-02")
        assert isinstance(release, Released)
        assert release.bare_version == "1.2.3"

    @pytest.mark.parametrize("line", ["## [Unreleased]", "## Unreleased", "## [unreleased]"])
    def test_unreleased(self, line: str):
        assert parse_release_heading(line) == Unreleased()

    @pytest.mark.parametrize("line", ["## Notes", "### [1.0.0]", "# Changelog", "## [1.2]", "- 1.0.0"])
    def test_not_a_release_heading(self, line: str):
        assert parse_release_heading(line) is None


class TestParseChangelog:
    """Tests for parse_changelog()."""

    def test_preamble_and_releases(self, unreleased_changelog: str):
        changelog = parse_changelog(unreleased_changelog)

        assert changelog.preamble.startswith("# Changelog")
        assert "All notable changes" in changelog.preamble
        assert len(changelog.releases) == 2
        assert changelog.releases[0] == Unreleased(
            changes=ChangeSet(added=("Manual entry from unreleased",), fixed=("Unreleased fix",))
        )
        released = changelog.releases[1]
        assert isinstance(released, Released)
        assert released.version == Version(1, 0, 0)
        assert released.date == "2024-01-01"
        assert released.changes == ChangeSet(added=("Initial release",))

    def test_no_prefix_heuristic_in_document(self):
        """Bullets in a structured document follow their section only."""
        changelog = parse_changelog("## [1.0.0] - 2024-01-01\n\n### Changed\n\n- fix: typo in docs\n")
        assert changelog.releases[0].changes == ChangeSet(changed=("fix: typo in docs",))

    def test_uncategorized_text_kept_as_description(self, basic_changelog: str):
        """Text before the first category heading is the release description."""
        release = parse_changelog(basic_changelog).releases[0]
        assert release.description == "- Initial release"
        assert release.changes.is_empty

    def test_unknown_subheading_closes_section(self):
        text = "## [1.0.0]\n### Added\n- a\n### Notes\n- dropped\n### Fixed\n- f\n"
        release = parse_changelog(text).releases[0]
        assert release.changes == ChangeSet(added=("a",), fixed=("f",))

    def test_stops_at_separator(self):
        """Everything after the first --- line is discarded."""
        text = """\
# Changelog

## [1.0.0] - 2024-01-01

### Added

- Kept

---

## Test plan

## [0.9.0] - 2023-12-01

### Added

- Discarded
"""
        changelog = parse_changelog(text)
        assert len(changelog.releases) == 1
        assert changelog.releases[0].changes == ChangeSet(added=("Kept",))

    def test_checkboxes_excluded(self):
        text = "## [Unreleased]\n\n- [ ] todo\n\n### Added\n\n- Real\n- [x] Reviewed\n"
        release = parse_changelog(text).releases[0]
        assert release.changes == ChangeSet(added=("Real",))
        assert release.description == ""

    def test_preamble_checkboxes_kept(self):
        changelog = parse_changelog("# Changelog\n\n- [ ] backfill 0.x history\n\n## [1.0.0]\n")
        assert changelog.preamble == "# Changelog\n\n- [ ] backfill 0.x history"

    def test_link_references_collected_into_footer(self):
        text = """\
## [Unreleased]

## [1.0.0] - 2024-01-01

### Added

- Initial release

[unreleased]: https://example.com/compare/v1.0.0...HEAD
[1.0.0]: https://example.com/releases/tag/v1.0.0
"""
        changelog = parse_changelog(text)

        assert changelog.footer == (
            "[unreleased]: https://example.com/compare/v1.0.0...HEAD",
            "[1.0.0]: https://example.com/releases/tag/v1.0.0",
        )
        assert changelog.releases[1].changes == ChangeSet(added=("Initial release",))
        assert changelog.releases[1].description == ""

    def test_prose_inside_section_kept_as_description(self):
        text = "## [1.0.0]\n\nIntro.\n\n### Added\n\n- Export\n\nSee the migration guide.\nIt covers 0.x.\n"
        release = parse_changelog(text).releases[0]

        assert release.changes == ChangeSet(added=("Export",))
        assert release.description == "Intro.\n\nSee the migration guide.\nIt covers 0.x."

    def test_empty_text(self):
        assert parse_changelog("") == Changelog()

    def test_no_releases(self):
        changelog = parse_changelog("# Changelog\n\nNo releases yet.\n")
        assert changelog.releases == ()
        assert changelog.preamble == "# Changelog\n\nNo releases yet."

    def test_duplicate_unreleased_raises(self):
        with pytest.raises(ChangelogParseError, match="line 5"):
            parse_changelog("## [Unreleased]\n- a\n\n## [1.0.0]\n## Unreleased\n")


class TestLoadChangelog:
    """Tests for load_changelog()."""

    def test_valid(self, basic_changelog: str):
        assert load_changelog(basic_changelog) == parse_changelog(basic_changelog)

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_blank_gives_template(self, text):
        assert load_changelog(text) == Changelog(preamble=CHANGELOG_TEMPLATE)

    def test_malformed_falls_back_to_empty(self, caplog: pytest.LogCaptureFixture):
        """Parse failures are recovered with a fresh document and a warning."""
        caplog.set_level(logging.WARNING, logger="auto_release")
        changelog = load_changelog("## [Unreleased]\n## [Unreleased]\n")

        assert changelog == Changelog.empty()
        assert "Could not parse changelog" in caplog.text


class TestFindRelease:
    """Tests for find_release()."""

    def test_find_by_string(self, unreleased_changelog: str):
        changelog = parse_changelog(unreleased_changelog)
        assert find_release(changelog, "v1.0.0") is changelog.releases[1]
        assert find_release(changelog, "1.0.0") is changelog.releases[1]

    def test_find_by_version(self, unreleased_changelog: str):
        changelog = parse_changelog(unreleased_changelog)
        assert find_release(changelog, Version(1, 0, 0)) is changelog.releases[1]

    def test_missing(self, unreleased_changelog: str):
        assert find_release(parse_changelog(unreleased_changelog), "2.0.0") is None


class TestExtractLatestVersion:
    """Tests for extract_latest_version()."""

    def test_with_v(self):
        assert extract_latest_version("# Changelog\n\n## [v1.2.3] - 2024-01-01\n") == "v1.2.3"

    def test_without_v(self):
        assert extract_latest_version("# Changelog\n\n## [1.2.3] - 2024-01-01\n") == "v1.2.3"

    def test_skips_unreleased(self, unreleased_changelog: str):
        assert extract_latest_version(unreleased_changelog) == "v1.0.0"

    def test_none(self):
        assert extract_latest_version("# Changelog\n\nNo versions yet.") is None
