"""VaccineTracker - add, edit and delete flows over storage and reminders."""

import logging
from datetime import date
from typing import List, Optional

from .form import VaccineForm
from .list_policy import VaccineFilter, visible_vaccines
from .reminders import ReminderGateway
from .renewal import DateLike
from .storage import VaccineStorage
from .vaccine import Vaccine

logger = logging.getLogger(__name__)


class VaccineTracker:
    """
    Entry point used by the CLI and web UI.

    Every mutation reads the whole collection, changes it and writes it
    back. Reminder calls are best-effort: failures are logged and ignored.
    """

    def __init__(self, storage: VaccineStorage, reminders: ReminderGateway):
        self.storage = storage
        self.reminders = reminders

    def vaccines(self) -> List[Vaccine]:
        return self.storage.load()

    def get(self, vaccine_id: str) -> Vaccine:
        """Find a vaccine by id, or by a unique id prefix."""
        vaccines = self.vaccines()
        for vaccine in vaccines:
            if vaccine.id == vaccine_id:
                return vaccine
        matches = [v for v in vaccines if vaccine_id and v.id.startswith(vaccine_id)]
        if len(matches) == 1:
            return matches[0]
        if matches:
            raise KeyError(f"Ambiguous vaccine id '{vaccine_id}'")
        raise KeyError(f"Unknown vaccine id '{vaccine_id}'")

    def visible(
        self, mode: VaccineFilter = VaccineFilter.ALL, now: Optional[DateLike] = None
    ) -> List[Vaccine]:
        return visible_vaccines(self.vaccines(), mode, now or date.today())

    def add(self, form: VaccineForm, now: Optional[DateLike] = None) -> Vaccine:
        """Validate the form and store it as a new vaccine."""
        form.validate(now or date.today())
        vaccine = form.build()
        self._upsert(vaccine)
        return vaccine

    def update(
        self, vaccine_id: str, form: VaccineForm, now: Optional[DateLike] = None
    ) -> Vaccine:
        """Replace all fields of an existing vaccine, keeping its id."""
        existing = self.get(vaccine_id)
        form.validate(now or date.today())
        vaccine = form.build(vaccine_id=existing.id)
        self._upsert(vaccine)
        return vaccine

    def delete(self, vaccine_id: str) -> Vaccine:
        """Remove a vaccine and cancel its reminder."""
        vaccine = self.get(vaccine_id)
        self._remove_reminder(vaccine)
        remaining = [v for v in self.vaccines() if v.id != vaccine.id]
        self.storage.save(remaining)
        return vaccine

    def _upsert(self, vaccine: Vaccine) -> None:
        vaccines = self.vaccines()
        for index, existing in enumerate(vaccines):
            if existing.id == vaccine.id:
                vaccines[index] = vaccine
                break
        else:
            vaccines.append(vaccine)

        self._remove_reminder(vaccine)
        if vaccine.renewal_date is not None:
            self._schedule_reminder(vaccine)

        self.storage.save(vaccines)

    def _schedule_reminder(self, vaccine: Vaccine) -> None:
        try:
            self.reminders.schedule_reminder(vaccine)
        except Exception as e:
            logger.warning("Could not schedule reminder for %s: %s", vaccine.id, e)

    def _remove_reminder(self, vaccine: Vaccine) -> None:
        try:
            self.reminders.remove_reminder(vaccine)
        except Exception as e:
            logger.warning("Could not remove reminder for %s: %s", vaccine.id, e)
