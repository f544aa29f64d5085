"""Command-line interface for combrank using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging
import sys

import click

from combrank import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("verbose", "-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """combrank: enumerative rank/unrank coding of bit sequences."""

    # Ranks of long sequences exceed the default 4300-digit int/str limit
    sys.set_int_max_str_digits(0)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from combrank.commands.encode import encode  # noqa: E402
from combrank.commands.decode import decode  # noqa: E402
from combrank.commands.analyze import analyze  # noqa: E402

cli.add_command(encode)
cli.add_command(decode)
cli.add_command(analyze)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
