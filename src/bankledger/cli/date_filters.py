"""CLI helpers for date range resolution."""

from datetime import date

import click

from bankledger.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]


def period_options(command):
    """Add the --this-month ... --last-week flags to a command."""
    for period in reversed(PERIOD_OPTIONS):
        label = period.replace("-", " ")
        command = click.option(f"--{period}", is_flag=True, help=f"Filter to {label}")(command)
    return command


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop the period flags out of a command's keyword arguments."""
    return {period: kwargs.pop(period.replace("-", "_"), False) for period in PERIOD_OPTIONS}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates.

    ``today`` anchors relative periods and dates; it is the fixed date override
    when one is configured.
    """
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --this-week, --last-month, --last-year, --last-week) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period, today=today)
                break
    else:
        if start_date:
            try:
                start = parse_date(start_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

        if start is None and end is None and default_range is not None:
            start, end = default_range

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
