"""Vaccine class and renewal status derivation."""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from .renewal import (
    WARNING_DAYS,
    DateLike,
    days_until,
    format_month_year,
    parse_date,
)
from .status import AttentionLevel, Category, Status


@dataclass(frozen=True)
class NoRenewal:
    """Vaccine without a tracked renewal."""


@dataclass(frozen=True)
class RenewalOn:
    """Vaccine that is due for renewal on a given day."""

    on: date


Renewal = Union[NoRenewal, RenewalOn]


@dataclass(frozen=True)
class StatusInfo:
    """Derived renewal status for a vaccine at a given day."""

    status: Status
    attention: AttentionLevel
    icon: str
    color: str
    days_until_renewal: Optional[int] = None

    @property
    def text(self) -> str:
        return self.status.text

    @property
    def needs_attention(self) -> bool:
        return self.attention != AttentionLevel.NONE


def derive_status(renewal: Renewal, now: DateLike) -> StatusInfo:
    """
    Map a renewal variant to its status, attention level, icon and color.

    - No renewal: valid, nothing to do
    - Past renewal date: overdue
    - Renewal within WARNING_DAYS (today included): renews soon
    - Otherwise: valid
    """
    if isinstance(renewal, NoRenewal):
        return StatusInfo(
            status=Status.VALID_NO_RENEWAL,
            attention=AttentionLevel.NONE,
            icon="ok",
            color="neutral-positive",
        )

    days = days_until(renewal.on, now)
    if days < 0:
        return StatusInfo(
            status=Status.OVERDUE,
            attention=AttentionLevel.OVERDUE,
            icon="alert",
            color="danger",
            days_until_renewal=days,
        )
    if days <= WARNING_DAYS:
        return StatusInfo(
            status=Status.RENEWS_SOON,
            attention=AttentionLevel.WARNING,
            icon="clock",
            color="caution",
            days_until_renewal=days,
        )
    return StatusInfo(
        status=Status.VALID,
        attention=AttentionLevel.NONE,
        icon="ok",
        color="neutral-positive",
        days_until_renewal=days,
    )


class Vaccine:
    """A recorded vaccination with an optional renewal date."""

    def __init__(
        self,
        name: str,
        date: DateLike,
        renewal_date: Optional[DateLike] = None,
        id: Optional[str] = None,
    ):
        self._id = id or str(uuid.uuid4())
        self.name = name
        self.date = parse_date(date)
        self.renewal_date = (
            parse_date(renewal_date) if renewal_date is not None else None
        )

    @property
    def id(self) -> str:
        """Identifier assigned at creation; never changes."""
        return self._id

    @property
    def renewal(self) -> Renewal:
        if self.renewal_date is None:
            return NoRenewal()
        return RenewalOn(self.renewal_date)

    @property
    def category(self) -> Category:
        return Category.for_name(self.name)

    @property
    def icon_name(self) -> str:
        return self.category.icon

    @property
    def color(self) -> str:
        return self.category.color

    def days_until_renewal(self, now: DateLike) -> Optional[int]:
        """Days from now to renewal, negative when past. None without renewal."""
        if self.renewal_date is None:
            return None
        return days_until(self.renewal_date, now)

    def is_expired(self, now: DateLike) -> bool:
        """True if the renewal date is strictly before now."""
        days = self.days_until_renewal(now)
        return days is not None and days < 0

    def status_info(self, now: DateLike) -> StatusInfo:
        return derive_status(self.renewal, now)

    def attention_level(self, now: DateLike) -> AttentionLevel:
        return self.status_info(now).attention

    def status_text(self, now: DateLike) -> str:
        return self.status_info(now).text

    def status_icon(self, now: DateLike) -> str:
        return self.status_info(now).icon

    def status_color(self, now: DateLike) -> str:
        return self.status_info(now).color

    def renewal_month_year_text(self, locale: Optional[str] = None) -> Optional[str]:
        if self.renewal_date is None:
            return None
        return format_month_year(self.renewal_date, locale)

    def renewal_subtitle(self, now: DateLike, locale: Optional[str] = None) -> str:
        """Short renewal description (e.g., '12 days left', 'Expired Mar 2025')."""
        days = self.days_until_renewal(now)
        if days is None:
            return "-"
        month_year = self.renewal_month_year_text(locale)
        if days < 0:
            return f"Expired {month_year}"
        if days <= WARNING_DAYS:
            return f"{days} days left"
        return f"Renews {month_year}"

    def suggested_action(self, now: DateLike) -> Optional[str]:
        """Action to offer on the detail view, if the renewal needs one."""
        days = self.days_until_renewal(now)
        if days is None:
            return None
        if days < 0:
            return "Fix renewal"
        if days <= WARNING_DAYS:
            return "Update renewal"
        return None

    def __eq__(self, other):
        if not isinstance(other, Vaccine):
            return NotImplemented
        return (self.id, self.name, self.date, self.renewal_date) == (
            other.id,
            other.name,
            other.date,
            other.renewal_date,
        )

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return (
            f"Vaccine(id={self.id!r}, name={self.name!r}, date={self.date!r}, "
            f"renewal_date={self.renewal_date!r})"
        )
