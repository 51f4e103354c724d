"""selectorlint CLI entry point: Click group with subcommands."""

import logging

import click

from selectorlint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="selectorlint")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """selectorlint - keep CSS selectors simple."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from selectorlint.cli.lint import lint  # noqa: E402
from selectorlint.cli.inspect import inspect  # noqa: E402

cli.add_command(lint)
cli.add_command(inspect)
