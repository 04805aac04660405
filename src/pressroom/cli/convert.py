"""CLI commands: pressroom expand / dark / resolve -- rewrite CSS or HTML files."""

from __future__ import annotations

from pathlib import Path

import click

from pressroom.errors import StagingError
from pressroom.transforms import (
    DarkModeConverter,
    apply_transforms,
    convert_css_to_dark_mode,
    expand_css_variables,
    resolve_inline_style_variables,
)


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(text, nl=False)


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to a file instead of stdout.")
def expand(cssfile: str, output: str | None) -> None:
    """Inline every var() in a stylesheet and drop custom properties."""
    css = Path(cssfile).read_text(encoding="utf-8")
    _emit(expand_css_variables(css), output)


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--expand/--no-expand", "expand_vars", default=True, help="Expand var() before converting.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to a file instead of stdout.")
def dark(cssfile: str, expand_vars: bool, output: str | None) -> None:
    """Derive the dark-mode counterpart of a light theme stylesheet."""
    css = Path(cssfile).read_text(encoding="utf-8")
    converter = DarkModeConverter()
    if expand_vars:
        result = apply_transforms(css, dark=True, converter=converter)
    else:
        result = convert_css_to_dark_mode(css, converter)
    _emit(result, output)


@click.command()
@click.argument("htmlfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to a file instead of stdout.")
def resolve(htmlfile: str, output: str | None) -> None:
    """Resolve var() in inline style attributes with cascade scoping."""
    markup = Path(htmlfile).read_text(encoding="utf-8")
    try:
        result = resolve_inline_style_variables(markup)
    except StagingError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(result, output)
