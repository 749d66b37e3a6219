"""Click-based CLI for timpris.

Thin wrapper around the pipeline. Meant to be invoked periodically by an
external scheduler (cron, systemd timer); each invocation is one run.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime

import click
from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)
console = Console(stderr=True)

# Config and -v count share one scale: 0 quiet .. 4 debug
VERBOSITY_LEVELS = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def configure_logging(verbosity: int) -> None:
    """Route log records to stderr at the level for ``verbosity``."""
    level = VERBOSITY_LEVELS[max(0, min(verbosity, 4))]
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from timpris.core import load_config
        from timpris.core.config import resolve_config_path

        path = resolve_config_path(ctx.obj.get("config_path"))
        config = load_config(config_path=str(path) if path is not None else None)
        verbosity = ctx.obj.get("verbose") or config.verbose
        configure_logging(verbosity)
        if path is not None:
            logger.debug("Using config file: %s", path)
        ctx.obj["config"] = config
    return ctx.obj["config"]


def _fail(exc: Exception) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    raise SystemExit(1)


def _status(ok: bool | None) -> str:
    if ok is None:
        return "[dim]disabled[/dim]"
    return "[green]ok[/green]" if ok else "[red]failed[/red]"


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-f",
    type=click.Path(exists=True),
    envvar="TIMPRIS_CONFIG",
    default=None,
    help="Config file (default is $HOME/.timpris).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Repeat for more verbose printouts (up to -vvvv).",
)
@click.version_option(package_name="timpris")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: int) -> None:
    """Save Swedish hour-by-hour power prices to InfluxDB."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["console"] = console


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--date",
    "-d",
    "ref_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date the prices belong to (YYYY-MM-DD). Default: today.",
)
@click.pass_context
def run(ctx: click.Context, ref_date: datetime | None) -> None:
    """Scrape today's prices and write them to the configured sinks."""
    from timpris.core import TimprisError, WriteError
    from timpris.pipeline import ScrapePipeline

    try:
        config = _load_config(ctx)
        report = ScrapePipeline(config).run(ref_date.date() if ref_date else None)
    except WriteError as exc:
        report = exc.context.get("report")
        if report is not None:
            console.print(
                f"time-series: {_status(report.time_series_ok)}  "
                f"relational: {_status(report.relational_ok)}"
            )
        _fail(exc)
    except TimprisError as exc:
        _fail(exc)

    console.print(
        f"[green]✓[/green] Stored {report.points} {config.area} prices  "
        f"time-series: {_status(report.time_series_ok)}  "
        f"relational: {_status(report.relational_ok)}"
    )


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--date",
    "-d",
    "ref_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date the prices belong to (YYYY-MM-DD). Default: today.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.pass_context
def show(ctx: click.Context, ref_date: datetime | None, output_format: str) -> None:
    """Scrape and print prices without writing anything."""
    from timpris.core import TimprisError
    from timpris.pipeline import ScrapePipeline

    try:
        config = _load_config(ctx)
        points = ScrapePipeline(config).collect(ref_date.date() if ref_date else None)
    except TimprisError as exc:
        _fail(exc)

    if output_format == "json":
        click.echo(
            json.dumps(
                [
                    {
                        "timestamp": p.timestamp.isoformat(),
                        "area": p.area,
                        "hour": p.hour,
                        "price": p.price,
                        "price_cents": p.price_cents,
                    }
                    for p in points
                ],
                indent=2,
            )
        )
        return

    table = Table(title=f"{config.area} hourly prices")
    table.add_column("Hour", justify="right")
    table.add_column("Timestamp")
    table.add_column("Price", justify="right")
    table.add_column("Cents", justify="right")
    for p in points:
        table.add_row(str(p.hour), p.timestamp.isoformat(), f"{p.price:.4f}", str(p.price_cents))
    Console().print(table)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
