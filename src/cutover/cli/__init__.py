"""Cutover CLI -- terminal interface for crossover tuning.

This module is NEVER imported from cutover/__init__.py.
It is only loaded via the ``cutover`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install cutover[cli]"
    ) from None


def _configure_logging(verbosity: int) -> None:
    """Route cutover's loggers through Rich; -v for INFO, -vv for DEBUG."""
    if verbosity <= 0:
        return
    from rich.logging import RichHandler

    from cutover.cli.formatting import get_console

    level = logging.INFO if verbosity == 1 else logging.DEBUG
    handler = RichHandler(console=get_console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("cutover")
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False


@click.group()
@click.option("-v", "--verbose", count=True, help="Log search progress (-vv for every comparison).")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Cutover: find where a fast algorithm starts beating a slow one."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


# Register subcommands after cli group is defined
from cutover.cli.commands.pairs import pairs  # noqa: E402
from cutover.cli.commands.tune import tune  # noqa: E402

cli.add_command(pairs)
cli.add_command(tune)
