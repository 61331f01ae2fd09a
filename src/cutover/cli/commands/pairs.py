"""cutover pairs -- list the built-in algorithm pairs."""

from __future__ import annotations

import click

from cutover.cli.formatting import format_pairs, get_console


@click.command()
def pairs() -> None:
    """List the algorithm pairs that can be tuned."""
    from cutover.algorithms import PAIRS

    format_pairs(list(PAIRS.values()), get_console())
