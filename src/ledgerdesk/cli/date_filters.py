"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerdesk.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(func):
    """Attach one ``--<period>`` flag per supported period, plus start/end dates."""
    func = click.option("--end-date", help="End date (inclusive)")(func)
    func = click.option("--start-date", help="Start date (inclusive)")(func)
    for period in reversed(PERIODS):
        func = click.option(
            f"--{period}",
            f"period_{period.replace('-', '_')}",
            is_flag=True,
            help=f"Limit to {period.replace('-', ' ')}",
        )(func)
    return func


def pop_period_flags(kwargs: dict) -> dict[str, bool]:
    """Remove the period flags added by ``period_options`` from command kwargs."""
    return {period: kwargs.pop(f"period_{period.replace('-', '_')}") for period in PERIODS}


def _fail(ctx, message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def _parse_bound(ctx, label: str, value: str | None) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        _fail(ctx, f"Invalid {label} date: {e}")


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Turn period flags or --start-date/--end-date into a date range.

    A single period flag wins; explicit dates are parsed day-first. With
    neither, ``default_range`` (or an open range) is returned.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        flags = ", ".join(f"--{period}" for period in selected)
        _fail(ctx, f"Only one period option can be specified at a time (got {flags}).")
    if selected and (start_date or end_date):
        _fail(ctx, "Period options cannot be combined with --start-date or --end-date.")

    if selected:
        return get_date_range(selected[0])

    start = _parse_bound(ctx, "start", start_date)
    end = _parse_bound(ctx, "end", end_date)
    if start is None and end is None and default_range is not None:
        return default_range
    return start, end
