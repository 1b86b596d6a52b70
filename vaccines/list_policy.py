"""Filtering and ordering of the vaccine list."""

from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .renewal import WARNING_DAYS, DateLike
from .vaccine import Vaccine


class VaccineFilter(Enum):
    """List filter modes: (value, label, icon)."""

    ALL = ("all", "All", "list")
    OVERDUE = ("overdue", "Expired", "xmark")
    EXPIRING = ("expiring", "Expiring soon", "clock")
    NO_RENEWAL = ("no-renewal", "No renewal", "checkmark")

    def __new__(cls, value, label, icon):
        obj = object.__new__(cls)
        obj._value_ = value
        obj.label = label
        obj.icon = icon
        return obj

    @classmethod
    def parse(cls, value: str) -> "VaccineFilter":
        """Look up a filter by value, accepting underscores and any case."""
        normalized = (value or "all").strip().lower().replace("_", "-")
        return cls(normalized)


def _expiring_soon(vaccine: Vaccine, now: DateLike) -> bool:
    # Due today is not "expiring" here, even though attention is WARNING
    days = vaccine.days_until_renewal(now)
    return days is not None and 0 < days <= WARNING_DAYS


def matches_filter(vaccine: Vaccine, mode: VaccineFilter, now: DateLike) -> bool:
    """Check if a vaccine is shown under the given filter mode."""
    if mode == VaccineFilter.OVERDUE:
        return vaccine.is_expired(now)
    if mode == VaccineFilter.EXPIRING:
        return _expiring_soon(vaccine, now)
    if mode == VaccineFilter.NO_RENEWAL:
        return vaccine.renewal_date is None
    return True


def filter_vaccines(
    vaccines: Iterable[Vaccine], mode: VaccineFilter, now: DateLike
) -> List[Vaccine]:
    return [v for v in vaccines if matches_filter(v, mode, now)]


def priority_rank(vaccine: Vaccine, now: DateLike) -> int:
    """0 = expired, 1 = expiring within WARNING_DAYS (not today), 2 = rest."""
    if vaccine.is_expired(now):
        return 0
    if _expiring_soon(vaccine, now):
        return 1
    return 2


def sort_key(vaccine: Vaccine, now: DateLike) -> Tuple:
    """
    Ordering key for the vaccine list.

    1. Priority rank (expired, expiring soon, everything else)
    2. Vaccines with a renewal date first, nearest renewal first
    3. Most recent vaccination first
    4. Name, case-insensitive
    """
    has_renewal = vaccine.renewal_date is not None
    return (
        priority_rank(vaccine, now),
        0 if has_renewal else 1,
        vaccine.renewal_date if has_renewal else date.max,
        -vaccine.date.toordinal(),
        vaccine.name.casefold(),
    )


def sort_vaccines(vaccines: Iterable[Vaccine], now: DateLike) -> List[Vaccine]:
    return sorted(vaccines, key=lambda v: sort_key(v, now))


def visible_vaccines(
    vaccines: Iterable[Vaccine], mode: VaccineFilter, now: DateLike
) -> List[Vaccine]:
    """Filter then sort: the sequence shown in the list view."""
    return sort_vaccines(filter_vaccines(vaccines, mode, now), now)


def count_by_filter(vaccines: Iterable[Vaccine], now: DateLike) -> Dict[VaccineFilter, int]:
    """Number of vaccines shown under each filter mode."""
    vaccines = list(vaccines)
    return {
        mode: sum(1 for v in vaccines if matches_filter(v, mode, now))
        for mode in VaccineFilter
    }
