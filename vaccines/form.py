"""Edit form model shared by the add and edit flows."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .renewal import (
    MAX_RENEWAL_MONTHS,
    MAX_RENEWAL_YEARS,
    DateLike,
    compute_renewal_date,
    decompose_interval,
    format_interval,
    parse_date,
)
from .vaccine import Vaccine


class VaccineValidationError(ValueError):
    """Raised when form input can't be saved. Holds all error messages."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class VaccineForm:
    """User input for creating or editing a vaccine."""

    name: str
    date: date
    should_renew: bool = False
    renewal_years: int = 0
    renewal_months: int = 0

    def __post_init__(self):
        self.date = parse_date(self.date)

    @classmethod
    def from_vaccine(cls, vaccine: Vaccine) -> "VaccineForm":
        """Load an existing vaccine back into editable form."""
        if vaccine.renewal_date is None:
            return cls(name=vaccine.name, date=vaccine.date)
        years, months = decompose_interval(vaccine.date, vaccine.renewal_date)
        return cls(
            name=vaccine.name,
            date=vaccine.date,
            should_renew=True,
            renewal_years=years,
            renewal_months=months,
        )

    @property
    def is_name_valid(self) -> bool:
        return bool(self.name and self.name.strip())

    def is_date_valid(self, now: DateLike) -> bool:
        return self.date <= parse_date(now)

    @property
    def is_renewal_valid(self) -> bool:
        if not self.should_renew:
            return True
        if not 0 <= self.renewal_years <= MAX_RENEWAL_YEARS:
            return False
        if not 0 <= self.renewal_months <= MAX_RENEWAL_MONTHS:
            return False
        return self.renewal_years > 0 or self.renewal_months > 0

    def errors(self, now: DateLike) -> List[str]:
        errors = []
        if not self.is_name_valid:
            errors.append("Vaccine name can't be empty")
        if not self.is_date_valid(now):
            errors.append("Vaccination date can't be in the future")
        if not self.is_renewal_valid:
            errors.append(
                f"Renewal interval must be 0-{MAX_RENEWAL_YEARS} years and "
                f"0-{MAX_RENEWAL_MONTHS} months, and not empty"
            )
        return errors

    def validate(self, now: DateLike) -> None:
        errors = self.errors(now)
        if errors:
            raise VaccineValidationError(errors)

    def renewal_date(self) -> Optional[date]:
        if not self.should_renew:
            return None
        return compute_renewal_date(self.date, self.renewal_years, self.renewal_months)

    def summary_text(self) -> str:
        if not self.should_renew:
            return ""
        return format_interval(self.renewal_years, self.renewal_months)

    def build(self, vaccine_id: Optional[str] = None) -> Vaccine:
        """Create a Vaccine from this form, keeping vaccine_id when editing."""
        return Vaccine(
            name=self.name.strip(),
            date=self.date,
            renewal_date=self.renewal_date(),
            id=vaccine_id,
        )
