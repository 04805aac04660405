"""CLI command: pressroom lint -- report leftovers the publishing target cannot render."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pressroom.model.diagnostic import Severity
from pressroom.validation import summarize, validate


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--ignore", "ignored", multiple=True, metavar="RULE", help="Skip a lint rule by name; repeatable.")
def lint(file: str, ignored: tuple[str, ...]) -> None:
    """Lint a CSS or HTML file for unresolved variables and broken blocks.

    Prints diagnostics and exits with code 0 if no errors are found, or
    code 1 if there are errors.
    """
    path = Path(file)
    diagnostics = validate(path.read_text(encoding="utf-8"), ignore=ignored)

    if not diagnostics:
        click.echo(f"OK: {path.name} is clean (0 diagnostics)")
        sys.exit(0)

    for diag in diagnostics:
        click.echo(str(diag))

    counts = summarize(diagnostics)
    click.echo()
    click.echo(
        f"Summary: {counts[Severity.ERROR]} error(s), {counts[Severity.WARNING]} warning(s), "
        f"{counts[Severity.INFO]} info"
    )
    sys.exit(1 if counts[Severity.ERROR] else 0)
