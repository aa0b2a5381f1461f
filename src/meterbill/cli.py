"""Command-line interface for time-of-use electricity billing periods."""

import logging
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ConfigError, load_settings
from .parsers import ParseError, parse_counter_list, parse_date_list
from .periods import format_period_time_table, parse_time_window
from .registry import TariffRegistry

console = Console()

logger = logging.getLogger(__name__)


def _parse_each(parser):
    """Build a click callback that parses every occurrence of a repeatable option.

    The parsed items of all the occurrences are returned as one flat list.
    """

    def callback(ctx, param, values):
        items = []
        for value in values:
            try:
                items.extend(parser(value))
            except ParseError as e:
                raise click.BadParameter(str(e), ctx=ctx, param=param) from e
        return items

    return callback


def _parse_windows(ctx, param, values):
    try:
        return [parse_time_window(value) for value in values]
    except (ParseError, ValueError) as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def tariff_options(f):
    """Options shared by the commands that build a tariff registry."""
    options = [
        click.option(
            "-d",
            "--bank-holidays",
            multiple=True,
            callback=_parse_each(parse_date_list),
            help="Bank holidays as yyyy-mm-dd, extra days of the same month after ',' "
            "and more dates after ';' (e.g. 2022-12-25,26;2023-01-06). Repeatable.",
        ),
        click.option(
            "-c",
            "--base-meter-counter",
            multiple=True,
            callback=_parse_each(parse_counter_list),
            help="Meter counters before the first CSV reading as p<digit>=<counter>, "
            "separated by ',' (e.g. p1=97,p3=23). Repeatable; the last value of a period wins.",
        ),
        click.option(
            "-w",
            "--time-window",
            "time_windows",
            multiple=True,
            callback=_parse_windows,
            help="Time window as p<digit>:<start>-<end> (e.g. p2:22-0). "
            "Repeatable; replaces the configured windows.",
        ),
        click.option(
            "--holiday-period",
            type=click.IntRange(0, 9),
            help="Period applied on bank holidays (default from config, or 3).",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_registry(ctx, bank_holidays, base_meter_counter, time_windows, holiday_period):
    """Create the registry from the config file and the command-line options."""
    try:
        settings = load_settings(ctx.obj["config_path"])
    except (ConfigError, ParseError) as e:
        raise click.ClickException(str(e)) from e

    registry = TariffRegistry(
        time_windows or settings.time_windows,
        settings.bank_holiday_period if holiday_period is None else holiday_period,
    )
    registry.add_bank_holidays(bank_holidays)
    registry.add_counters(base_meter_counter)
    logger.debug(
        "Registry with %d bank holidays and %d counters",
        len(registry.bank_holidays),
        len(registry.counters),
    )
    return registry


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to meterbill.yaml")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Billing periods for time-of-use electricity tariffs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None


@cli.command("show")
@click.argument("csv_filepath", type=click.Path(exists=True, dir_okay=False))
@tariff_options
@click.pass_context
def show(ctx, csv_filepath, bank_holidays, base_meter_counter, time_windows, holiday_period):
    """Show the tariff periods to apply to an e-distribution CSV file."""
    registry = build_registry(
        ctx, bank_holidays, base_meter_counter, time_windows, holiday_period
    )
    console.print(f"[cyan]CSV file:[/cyan] {csv_filepath}")

    table = Table(title="Period Times")
    table.add_column("Period", style="cyan")
    table.add_column("Hours")
    for period, start, end in format_period_time_table(registry.period_times):
        label = f"p{period}" if period else "[dim]unassigned[/dim]"
        table.add_row(label, f"{start:02d}:00 - {end:02d}:00")
    console.print(table)

    table = Table(title="Base Meter Counters")
    table.add_column("Period", style="cyan")
    table.add_column("Counter", justify="right")
    for period in sorted(set(registry.periods) | set(registry.counters)):
        table.add_row(f"p{period}", str(registry.counter_for(period)))
    console.print(table)

    if registry.bank_holidays:
        holidays = ", ".join(d.isoformat() for d in sorted(registry.bank_holidays))
        console.print(
            f"[cyan]Bank holidays (p{registry.bank_holiday_period}):[/cyan] {holidays}"
        )
    else:
        console.print("[yellow]No bank holidays[/yellow]")


@cli.command("period")
@click.argument("when", type=click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H"]))
@tariff_options
@click.pass_context
def period_cmd(ctx, when: datetime, bank_holidays, base_meter_counter, time_windows, holiday_period):
    """Show the period applied at a date and hour (e.g. "2022-12-25 13:00")."""
    registry = build_registry(
        ctx, bank_holidays, base_meter_counter, time_windows, holiday_period
    )
    period = registry.period_for(when.date(), when.hour)
    holiday = " (bank holiday)" if registry.is_bank_holiday(when.date()) else ""
    console.print(f"{when:%Y-%m-%d %H}:00 → [green]p{period}[/green]{holiday}")


if __name__ == "__main__":
    cli()
