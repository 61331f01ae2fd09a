"""cutover tune -- find crossover intervals for algorithm pairs."""

from __future__ import annotations

import json

import click

DEFAULT_PAIRS = ("multiply", "divide")


@click.command()
@click.argument("pair_names", metavar="[PAIR]...", nargs=-1)
@click.option("--start-exponent", type=int, default=8, show_default=True, envvar="CUTOVER_START_EXPONENT",
              help="Start searching at 2**N + 1 bits.")
@click.option("--min-duration", type=float, default=2.0, show_default=True, envvar="CUTOVER_MIN_DURATION",
              help="Calibration floor per comparison, in seconds.")
@click.option("--accuracy", type=int, default=64, show_default=True, envvar="CUTOVER_ACCURACY",
              help="Stop refining once the bracket is narrower than this many bits.")
@click.option("--margin", type=int, default=None, envvar="CUTOVER_MARGIN",
              help="Override the pair's bracketing margin (bits).")
@click.option("--max-bits", type=int, default=1 << 24, show_default=True, envvar="CUTOVER_MAX_BITS",
              help="Give up past this operand size.")
@click.option("--fixed-value", type=int, default=1, show_default=True,
              help="Value passed to fixed-constant arguments such as worker counts.")
@click.option("--seed", type=int, default=None, envvar="CUTOVER_SEED", help="Seed for reproducible operands.")
@click.option("--quick", is_flag=True, help="Single-iteration comparisons instead of calibrated ones.")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON instead of a report.")
def tune(
    pair_names: tuple[str, ...],
    start_exponent: int,
    min_duration: float,
    accuracy: int,
    margin: int | None,
    max_bits: int,
    fixed_value: int,
    seed: int | None,
    quick: bool,
    as_json: bool,
) -> None:
    """Time each PAIR and report where its fast algorithm wins.

    Tunes multiply and then divide when no PAIR is given.
    """
    from pydantic import ValidationError

    from cutover.algorithms import get_pair
    from cutover.cli.formatting import ProgressPrinter, format_error, format_result, get_console
    from cutover.exceptions import CutoverError, InvocationError
    from cutover.models.config import TuneConfig
    from cutover.tuner import tune_pair

    console = get_console()
    try:
        config = TuneConfig(
            start_exponent=start_exponent,
            min_duration_ns=int(min_duration * 1_000_000_000),
            accuracy=accuracy,
            margin=margin,
            max_bits=max_bits,
            fixed_value=fixed_value,
            seed=seed,
            calibrate=not quick,
        )
        selected = [get_pair(name) for name in (pair_names or DEFAULT_PAIRS)]
    except (ValidationError, CutoverError) as e:
        format_error(str(e), console)
        raise SystemExit(1) from None

    results = []
    for pair in selected:
        progress = None
        if not as_json:
            if pair.note:
                console.print(f"[yellow]Note:[/yellow] {pair.note}")
            console.print(f"Timing [bold]{pair.slow.name}[/bold] vs [bold]{pair.fast.name}[/bold]")
            progress = ProgressPrinter(console)
        try:
            result = tune_pair(pair, config, on_probe=progress)
        except InvocationError as e:
            if progress is not None:
                progress.finish()
            found = ", ".join(str(i) for i in e.intervals) or "none"
            format_error(f"{e} ({e.__cause__!r}); intervals found before failure: {found}", console)
            raise SystemExit(1) from None
        except CutoverError as e:
            if progress is not None:
                progress.finish()
            format_error(str(e), console)
            raise SystemExit(1) from None
        if progress is not None:
            progress.finish()
            format_result(result, console)
        results.append(result)

    if as_json:
        click.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))

    if any(not r.ok for r in results):
        raise SystemExit(1)
