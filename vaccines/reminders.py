"""
Renewal reminders.

A reminder is a one-shot alert keyed by vaccine id that fires on the
calendar day of the vaccine's renewal date. The tracker only talks to the
ReminderGateway interface; the implementations here keep pending reminders
in memory or in a YAML file.
"""

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Protocol, Union

import yaml

from .renewal import DateLike, parse_date
from .vaccine import Vaccine

logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).parent.parent

REMINDER_TITLE = "Vaccine reminder"


def default_reminders_path() -> Path:
    """Reminder file from VACCINE_REMINDERS_FILE, else data/reminders.yaml."""
    return Path(
        os.environ.get("VACCINE_REMINDERS_FILE", PROJECT_DIR / "data" / "reminders.yaml")
    )


@dataclass
class Reminder:
    """A pending renewal alert."""

    vaccine_id: str
    title: str
    body: str
    fire_on: date

    @classmethod
    def for_vaccine(cls, vaccine: Vaccine) -> "Reminder":
        return cls(
            vaccine_id=vaccine.id,
            title=REMINDER_TITLE,
            body=f"{vaccine.name} needs renewal",
            fire_on=vaccine.renewal_date,
        )


class ReminderGateway(Protocol):
    """What the tracker needs from a reminder service."""

    def schedule_reminder(self, vaccine: Vaccine) -> None:
        ...

    def remove_reminder(self, vaccine: Vaccine) -> None:
        ...


class InMemoryReminders:
    """Reminder gateway that keeps pending reminders in a dict."""

    def __init__(self):
        self.reminders: Dict[str, Reminder] = {}

    def schedule_reminder(self, vaccine: Vaccine) -> None:
        if vaccine.renewal_date is None:
            self.remove_reminder(vaccine)
            return
        self.reminders[vaccine.id] = Reminder.for_vaccine(vaccine)

    def remove_reminder(self, vaccine: Vaccine) -> None:
        self.reminders.pop(vaccine.id, None)

    def pending(self) -> List[Reminder]:
        return sorted(self.reminders.values(), key=lambda r: (r.fire_on, r.vaccine_id))

    def due(self, now: DateLike) -> List[Reminder]:
        """Reminders whose day has come."""
        today = parse_date(now)
        return [r for r in self.pending() if r.fire_on <= today]

    def pop_due(self, now: DateLike) -> List[Reminder]:
        """Return due reminders and drop them; each fires only once."""
        fired = self.due(now)
        for reminder in fired:
            del self.reminders[reminder.vaccine_id]
        return fired


class FileReminders(InMemoryReminders):
    """
    Reminder gateway persisted to a YAML file.

    The file is re-read before and written after every change, the same
    read-modify-write used for the vaccine collection.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        super().__init__()
        self.path = Path(path) if path is not None else default_reminders_path()
        self._load()

    def _load(self) -> None:
        self.reminders = {}
        try:
            with open(self.path, "rb") as fp:
                data = yaml.load(fp, Loader=yaml.SafeLoader) or []
        except FileNotFoundError:
            return
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return
        try:
            for dct in data:
                reminder = Reminder(
                    vaccine_id=str(dct["vaccineId"]),
                    title=dct["title"],
                    body=dct["body"],
                    fire_on=parse_date(dct["fireOn"]),
                )
                self.reminders[reminder.vaccine_id] = reminder
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable reminders in %s: %s", self.path, e)
            self.reminders = {}

    def _save(self) -> None:
        data = [
            {
                "vaccineId": r.vaccine_id,
                "title": r.title,
                "body": r.body,
                "fireOn": r.fire_on.isoformat(),
            }
            for r in self.pending()
        ]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )

    def schedule_reminder(self, vaccine: Vaccine) -> None:
        self._load()
        super().schedule_reminder(vaccine)
        self._save()
        logger.debug("Reminder for %s set to %s", vaccine.id, vaccine.renewal_date)

    def remove_reminder(self, vaccine: Vaccine) -> None:
        self._load()
        if vaccine.id not in self.reminders:
            return
        super().remove_reminder(vaccine)
        self._save()

    def pop_due(self, now: DateLike) -> List[Reminder]:
        self._load()
        fired = super().pop_due(now)
        if fired:
            self._save()
        return fired
