#!/usr/bin/env python3
"""Tests for renewal reminders."""

from datetime import date

import pytest
import yaml

from vaccines import FileReminders, InMemoryReminders, Reminder, Vaccine
from vaccines.reminders import default_reminders_path


@pytest.fixture
def tbe():
    return Vaccine("TBE", date(2025, 5, 2), date(2028, 5, 2), id="tbe-1")


@pytest.fixture(params=["memory", "file"])
def reminders(request, tmp_path):
    if request.param == "memory":
        return InMemoryReminders()
    return FileReminders(tmp_path / "reminders.yaml")


class TestReminder:
    """Tests for Reminder.for_vaccine."""

    def test_content(self, tbe):
        reminder = Reminder.for_vaccine(tbe)
        assert reminder.vaccine_id == "tbe-1"
        assert reminder.title == "Vaccine reminder"
        assert reminder.body == "TBE needs renewal"
        assert reminder.fire_on == date(2028, 5, 2)


class TestReminderGateway:
    """Behavior shared by both reminder gateways."""

    def test_schedule(self, reminders, tbe):
        reminders.schedule_reminder(tbe)
        assert [r.vaccine_id for r in reminders.pending()] == ["tbe-1"]

    def test_reschedule_replaces(self, reminders, tbe):
        reminders.schedule_reminder(tbe)
        tbe.renewal_date = date(2030, 1, 1)
        reminders.schedule_reminder(tbe)
        pending = reminders.pending()
        assert len(pending) == 1
        assert pending[0].fire_on == date(2030, 1, 1)

    def test_schedule_without_renewal_removes(self, reminders, tbe):
        reminders.schedule_reminder(tbe)
        tbe.renewal_date = None
        reminders.schedule_reminder(tbe)
        assert reminders.pending() == []

    def test_remove(self, reminders, tbe):
        reminders.schedule_reminder(tbe)
        reminders.remove_reminder(tbe)
        assert reminders.pending() == []

    def test_remove_when_none_pending_is_noop(self, reminders, tbe):
        reminders.remove_reminder(tbe)
        assert reminders.pending() == []

    def test_due_and_pop_due(self, reminders, tbe):
        later = Vaccine("Covid", date(2025, 1, 1), date(2029, 1, 1), id="covid-1")
        reminders.schedule_reminder(tbe)
        reminders.schedule_reminder(later)

        assert reminders.due(date(2028, 5, 1)) == []
        assert [r.vaccine_id for r in reminders.due(date(2028, 5, 2))] == ["tbe-1"]

        fired = reminders.pop_due(date(2028, 5, 2))
        assert [r.vaccine_id for r in fired] == ["tbe-1"]
        # One-shot: does not fire again
        assert reminders.pop_due(date(2028, 5, 3)) == []
        assert [r.vaccine_id for r in reminders.pending()] == ["covid-1"]


class TestFileReminders:
    """Tests for FileReminders persistence."""

    def test_persists_between_instances(self, tmp_path, tbe):
        path = tmp_path / "reminders.yaml"
        FileReminders(path).schedule_reminder(tbe)

        reopened = FileReminders(path)
        assert reopened.pending() == [Reminder.for_vaccine(tbe)]

    def test_file_format(self, tmp_path, tbe):
        path = tmp_path / "reminders.yaml"
        FileReminders(path).schedule_reminder(tbe)
        assert yaml.safe_load(path.read_text()) == [
            {
                "vaccineId": "tbe-1",
                "title": "Vaccine reminder",
                "body": "TBE needs renewal",
                "fireOn": "2028-05-02",
            }
        ]

    def test_pop_due_persists(self, tmp_path, tbe):
        path = tmp_path / "reminders.yaml"
        FileReminders(path).schedule_reminder(tbe)
        FileReminders(path).pop_due(date(2028, 5, 2))
        assert FileReminders(path).pending() == []

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VACCINE_REMINDERS_FILE", str(tmp_path / "r.yaml"))
        assert default_reminders_path() == tmp_path / "r.yaml"

    def test_corrupt_file_loads_empty(self, tmp_path, tbe):
        path = tmp_path / "reminders.yaml"
        path.write_text("- vaccineId: [unclosed\n")
        reminders = FileReminders(path)
        assert reminders.pending() == []
        reminders.schedule_reminder(tbe)
        assert FileReminders(path).pending() == [Reminder.for_vaccine(tbe)]

    def test_invalid_utf8_loads_empty(self, tmp_path):
        path = tmp_path / "reminders.yaml"
        path.write_bytes(b"- vaccineId: a\n  title: \xff\xfe\n  body: x\n  fireOn: '2028-05-02'\n")
        assert FileReminders(path).pending() == []
