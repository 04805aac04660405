"""Pressroom CLI entry point: Click group with subcommands."""

import logging

import click

from pressroom import __version__


@click.group()
@click.version_option(version=__version__, prog_name="pressroom")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Pressroom - flatten and dark-convert theme CSS for rich-text publishing."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from pressroom.cli.convert import dark, expand, resolve  # noqa: E402
from pressroom.cli.lint import lint  # noqa: E402

cli.add_command(expand)
cli.add_command(dark)
cli.add_command(resolve)
cli.add_command(lint)
