import os
import webbrowser
from typing import List, Optional

import click

from divconq.output import message, set_debug, timer
from divconq.report import METRICS, load_metrics, plot_metrics, summarize
from divconq.runner import DEFAULT_SIZES, run_algorithms, run_sizes, system_name


def _parse_sizes(ctx, param, value: str) -> List[int]:
    try:
        sizes = [int(s) for s in value.split(",") if s.strip()]
    except ValueError:
        raise click.BadParameter("sizes must be a comma-separated list of integers")
    if not sizes or any(s <= 0 for s in sizes):
        raise click.BadParameter("sizes must be positive integers")
    return sizes


def _print_rows(rows):
    for row in rows:
        message(
            f"{row['algorithm']:>20}  n={row['n']:<7} time={row['time_ns']}ns "
            f"depth={row['depth']} comparisons={row['comparisons']} "
            f"allocations={row['allocations']}"
        )


@click.group()
def main():
    """Instrumented divide-and-conquer algorithms."""


@main.command()
@click.argument("size", type=click.IntRange(min=1))
@click.argument("output_csv", type=click.Path(dir_okay=False))
@click.option("--seed", "seed", type=int, default=None, help="Seed for input and pivots.")
@click.option("--debug", "debug", is_flag=True, help="Show debug output.")
def run(size: int, output_csv: str, seed: Optional[int], debug: bool):
    """Run every algorithm once on SIZE random integers, appending to OUTPUT_CSV."""
    set_debug(debug)
    rows = run_algorithms(size, output_csv, seed=seed)
    _print_rows(rows)
    message(f"{output_csv} written.")


@main.command()
@click.argument("output_csv", type=click.Path(dir_okay=False))
@click.option(
    "--sizes",
    "sizes",
    default=",".join(str(s) for s in DEFAULT_SIZES),
    show_default=True,
    callback=_parse_sizes,
    help="Comma-separated input sizes.",
)
@click.option("--seed", "seed", type=int, default=None, help="Seed for input and pivots.")
@click.option("--debug", "debug", is_flag=True, help="Show debug output.")
def batch(output_csv: str, sizes: List[int], seed: Optional[int], debug: bool):
    """Run every algorithm at each of several sizes, appending to OUTPUT_CSV."""
    set_debug(debug)
    rows = run_sizes(sizes, output_csv, seed=seed)
    _print_rows(rows)
    message(f"{output_csv} written.")


@main.command()
@click.argument("input_csv", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--metric",
    "metric",
    type=click.Choice(METRICS),
    default="comparisons",
    show_default=True,
    help="Metric to fit and plot against n.",
)
@click.option(
    "--output-file",
    "output_file",
    default=None,
    help="Where to save the plot (.png or .pdf).",
)
@click.option(
    "--open-report",
    "open_report",
    is_flag=True,
    help="Open the plot in a web browser.",
)
@click.option("--debug", "debug", is_flag=True, help="Show debug output.")
def report(
    input_csv: str, metric: str, output_file: Optional[str], open_report: bool, debug: bool
):
    """Fit growth models to the metrics in INPUT_CSV and plot them."""
    set_debug(debug)
    with timer("Loading data"):
        df = load_metrics(input_csv)

    for algorithm, model in summarize(df, metric).items():
        message(f"{algorithm:>20}  {metric}: {model}")

    filename = output_file or f"{system_name}_{metric}.png"
    with timer("Plotting"):
        plot_metrics(df, metric, filename)
    message(f"{filename} written.")
    if open_report:
        webbrowser.open(f"file://{os.path.abspath(filename)}")


if __name__ == "__main__":
    main()
