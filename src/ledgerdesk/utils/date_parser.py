"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = (
    "today",
    "this-week",
    "this-month",
    "this-year",
    "last-week",
    "last-month",
    "last-year",
)


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _year_start(day: date) -> date:
    return day.replace(month=1, day=1)


def _period_starts(today: date) -> dict[str, date]:
    """First day of this/last week, month and year, keyed "this week" etc."""
    return {
        "this week": _week_start(today),
        "this month": _month_start(today),
        "this year": _year_start(today),
        "last week": _week_start(today) - timedelta(days=7),
        "last month": _month_start(today - relativedelta(months=1)),
        "last year": _year_start(today) - relativedelta(years=1),
    }


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15"
    - Day-first dates as written on receipts: "15/01/2024", "15 Jan 2024"
    - "today", "yesterday", "tomorrow"
    - Period starts: "this week", "last month", "last year", ...

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = " ".join(date_str.strip().lower().split())
    today = date.today()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        **_period_starts(today),
    }
    if text in relative:
        return relative[text]

    # ISO first: dayfirst would otherwise swap month and day in 2024-01-05
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return date_parser.parse(text, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing ``day``."""
    start = _month_start(day)
    return (start, start + relativedelta(months=1) - timedelta(days=1))


def get_date_range(period: str) -> tuple[date, date]:
    """Start and end dates (inclusive) for one of ``PERIODS``.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    today = date.today()
    if key == "today":
        return (today, today)

    starts = _period_starts(today)
    name = key.replace("-", " ")
    if name not in starts:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    start = starts[name]
    if name.startswith("this "):
        return (start, today)
    if name == "last week":
        return (start, start + timedelta(days=6))
    if name == "last month":
        return month_bounds(start)
    return (start, _year_start(today) - timedelta(days=1))
