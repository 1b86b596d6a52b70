"""
Vaccine tracking models.

This package provides the data models and rules for tracking vaccinations:
- Status, AttentionLevel, Category: Renewal urgency and display categories
- Vaccine: A recorded vaccination with optional renewal date
- Renewal calculations: renewal dates, day counts, interval decomposition
- List policy: filter modes and the list ordering
- VaccineForm: Add/edit input and validation
- VaccineStorage: YAML persistence of the whole collection
- Reminders: one-shot renewal alerts keyed by vaccine id
- VaccineTracker: add/edit/delete flows tying it all together
"""

from .status import AttentionLevel, Category, Status
from .renewal import (
    compute_renewal_date,
    days_until,
    decompose_interval,
    format_interval,
    parse_date,
)
from .vaccine import NoRenewal, RenewalOn, StatusInfo, Vaccine, derive_status
from .list_policy import (
    VaccineFilter,
    filter_vaccines,
    priority_rank,
    sort_vaccines,
    visible_vaccines,
    count_by_filter,
)
from .form import VaccineForm, VaccineValidationError
from .storage import VaccineStorage, vaccine_from_dict, vaccine_to_dict
from .reminders import FileReminders, InMemoryReminders, Reminder, ReminderGateway
from .tracker import VaccineTracker

__all__ = [
    "AttentionLevel",
    "Category",
    "Status",
    "compute_renewal_date",
    "days_until",
    "decompose_interval",
    "format_interval",
    "parse_date",
    "NoRenewal",
    "RenewalOn",
    "StatusInfo",
    "Vaccine",
    "derive_status",
    "VaccineFilter",
    "filter_vaccines",
    "priority_rank",
    "sort_vaccines",
    "visible_vaccines",
    "count_by_filter",
    "VaccineForm",
    "VaccineValidationError",
    "VaccineStorage",
    "vaccine_from_dict",
    "vaccine_to_dict",
    "FileReminders",
    "InMemoryReminders",
    "Reminder",
    "ReminderGateway",
    "VaccineTracker",
]
