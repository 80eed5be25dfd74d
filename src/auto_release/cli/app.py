"""Command line interface for auto-release."""

from typing import Annotated

import typer
from rich.console import Console

from auto_release import __version__
from auto_release.log import configure_logging

app = typer.Typer(
    name="auto-release",
    help="Label-driven version bumps and Keep a Changelog updates.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging.")
    ] = False,
) -> None:
    configure_logging(verbose, err_console)


@app.command()
def prepare(
    title: Annotated[str, typer.Option("--title", help="Pull request title.")],
    body_file: Annotated[
        str | None,
        typer.Option("--body-file", help="File with the pull request description ('-' for stdin)."),
    ] = None,
    number: Annotated[int, typer.Option("--number", help="Pull request number.")] = 0,
    labels: Annotated[
        str, typer.Option("--labels", help="Comma-separated pull request labels.")
    ] = "",
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", help="Existing tag, most recent first. Repeatable."),
    ] = None,
    date: Annotated[
        str | None, typer.Option("--date", help="Release date (YYYY-MM-DD).")
    ] = None,
    path: Annotated[
        str | None, typer.Option("--path", help="Project directory.")
    ] = None,
    execute: Annotated[
        bool, typer.Option("--execute", help="Write the changelog instead of a dry run.")
    ] = False,
) -> None:
    """Plan a release for a merged pull request and update the changelog."""
    from auto_release.cli.commands.prepare import run_prepare

    run_prepare(
        path=path,
        title=title,
        body_file=body_file,
        number=number,
        labels=labels,
        tags=tags or [],
        date=date,
        execute=execute,
        console=console,
        err_console=err_console,
    )


@app.command()
def version() -> None:
    """Show the auto-release version."""
    console.print(f"auto-release {__version__}")
