"""Implementation of the 'prepare' command.

The prepare command plans a release from a merged pull request and updates
the changelog locally. Tagging, pushing and publishing are left to the
surrounding workflow.
"""

from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from auto_release.config import load_config
from auto_release.core.changelog import CHANGELOG_TEMPLATE
from auto_release.core.labels import parse_label_list
from auto_release.core.release import PullRequest, find_latest_tag, plan_release
from auto_release.exceptions import AutoReleaseError

if TYPE_CHECKING:
    from rich.console import Console

    from auto_release.core.release import ReleasePlan


def run_prepare(
    path: str | None,
    title: str,
    body_file: str | None,
    number: int,
    labels: str,
    tags: list[str],
    date: str | None,
    execute: bool,
    console: Console,
    err_console: Console,
) -> ReleasePlan:
    """Run the prepare command.

    Args:
        path: Optional path to project directory
        title: Pull request title
        body_file: File holding the pull request description, "-" for stdin
        number: Pull request number
        labels: Comma-separated pull request labels
        tags: Existing tags, most recent first
        date: Release date override (YYYY-MM-DD)
        execute: Whether to actually write files
        console: Console for standard output
        err_console: Console for error output

    Returns:
        The computed release plan
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path)
    except AutoReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        body = _read_body(body_file)
    except OSError as e:
        err_console.print(f"[red]Error reading PR body:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if date is not None:
        try:
            date = dt.date.fromisoformat(date).isoformat()
        except ValueError as e:
            err_console.print(f"[red]Invalid date:[/] {escape(date)}")
            raise SystemExit(1) from e

    pr = PullRequest(
        number=number,
        title=title,
        body=body,
        labels=tuple(sorted(parse_label_list(labels))),
    )

    changelog_path = project_path / config.changelog_path
    if changelog_path.is_file():
        changelog_text = changelog_path.read_text(encoding="utf-8")
    else:
        err_console.print(
            f"[yellow]Warning:[/] Changelog not found at {config.changelog_path}, creating new one"
        )
        changelog_text = CHANGELOG_TEMPLATE

    plan = plan_release(
        pr,
        changelog_text,
        find_latest_tag(tags),
        config,
        date=date,
    )

    if plan.skipped:
        console.print(f"[yellow]Skipping release due to skip label on PR #{pr.number}.[/]")
        _print_outputs(plan, console)
        return plan

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    console.print(
        f"\n{mode_str} - Bumping [cyan]{plan.previous_tag or 'v0.0.0'}[/] "
        f"to [green]{plan.tag}[/] ({plan.bump_type} bump)\n"
    )
    console.print(
        Panel(
            Text(plan.release_body) if plan.release_body else "[dim]No changes[/]",
            title=f"[bold]Release notes for {plan.tag}[/]",
            border_style="green" if execute else "yellow",
        )
    )

    if not execute:
        console.print("\n[dim]Run with [cyan]--execute[/] to write these changes.[/]")
        _print_outputs(plan, console)
        return plan

    try:
        changelog_path.write_text(plan.changelog or "", encoding="utf-8")
        console.print(f"  [green]✓[/] Updated {config.changelog_path}")

        notes_path = config.changelog.release_notes_path
        if notes_path is not None:
            (project_path / notes_path).write_text(
                (plan.release_body or "") + "\n", encoding="utf-8"
            )
            console.print(f"  [green]✓[/] Wrote release notes to {notes_path}")
    except OSError as e:
        err_console.print(f"[red]Error writing files:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    _print_outputs(plan, console)
    return plan


def _read_body(body_file: str | None) -> str | None:
    if body_file is None:
        return None
    if body_file == "-":
        return sys.stdin.read()
    return Path(body_file).read_text(encoding="utf-8")


def _print_outputs(plan: ReleasePlan, console: Console) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("output", style="cyan")
    table.add_column("value")
    table.add_row("version", plan.bare_version or "")
    table.add_row("tag", plan.tag or "")
    table.add_row("prerelease", str(plan.is_prerelease).lower())
    table.add_row("skipped", str(plan.skipped).lower())
    console.print(table)
