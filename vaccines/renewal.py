"""Helper functions for renewal date calculations."""

from datetime import date, datetime
from typing import Optional, Tuple, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

# Picker ranges offered by the edit forms
MAX_RENEWAL_YEARS = 50
MAX_RENEWAL_MONTHS = 11

# Days before renewal that count as "renews soon"
WARNING_DAYS = 30

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """
    Coerce a date, datetime or ISO 8601 string to a calendar date.

    Timestamps keep their own calendar day; no timezone conversion happens.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return isoparse(str(value).strip()).date()


def compute_renewal_date(base: DateLike, years: int, months: int) -> date:
    """Calculate renewal date: base + years + months (calendar-aware)."""
    return parse_date(base) + relativedelta(years=years, months=months)


def days_until(target: DateLike, now: DateLike) -> int:
    """Whole calendar days from now to target; negative if target is past."""
    return (parse_date(target) - parse_date(now)).days


def decompose_interval(base: DateLike, renewal_date: DateLike) -> Tuple[int, int]:
    """
    Split the span between base and renewal_date into (years, months).

    Uses calendar year/month subtraction, so it inverts
    compute_renewal_date() for months in 0..11.
    """
    delta = relativedelta(parse_date(renewal_date), parse_date(base))
    return delta.years, delta.months


def format_interval(years: int, months: int) -> str:
    """Format a renewal interval for display (e.g., '1 year and 6 months')."""
    if years == 0 and months == 0:
        return ""
    month_text = f"{months} month{'s' if months != 1 else ''}"
    year_text = f"{years} year{'s' if years != 1 else ''}"
    if years == 0:
        return month_text
    if months == 0:
        return year_text
    return f"{year_text} and {month_text}"


def format_month_year(value: DateLike, locale: Optional[str] = None) -> str:
    """
    Format a date as 'Mon YYYY'.

    The locale is accepted for callers that track a display locale but is
    not interpreted here.
    """
    return parse_date(value).strftime("%b %Y")
