#!/usr/bin/env python3
"""Tests for renewal calculation helper functions."""
import pytest
from datetime import date, datetime, timedelta
from vaccines import (
    compute_renewal_date,
    days_until,
    decompose_interval,
    format_interval,
    parse_date,
)
from vaccines.renewal import format_month_year


class TestParseDate:
    """Tests for parse_date."""

    def test_date_unchanged(self):
        assert parse_date(date(2025, 1, 15)) == date(2025, 1, 15)

    def test_datetime_keeps_calendar_day(self):
        assert parse_date(datetime(2025, 1, 15, 23, 59)) == date(2025, 1, 15)

    def test_iso_date_string(self):
        assert parse_date("2025-01-15") == date(2025, 1, 15)

    def test_iso_timestamp_string(self):
        assert parse_date("2025-01-15T08:30:00Z") == date(2025, 1, 15)

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestComputeRenewalDate:
    """Tests for compute_renewal_date."""

    def test_years_and_months(self):
        assert compute_renewal_date(date(2024, 1, 15), 1, 6) == date(2025, 7, 15)

    def test_zero_offset(self):
        assert compute_renewal_date(date(2024, 1, 15), 0, 0) == date(2024, 1, 15)

    def test_month_end_clamps(self):
        """Calendar-aware: Jan 31 + 1 month is the end of February."""
        assert compute_renewal_date(date(2023, 1, 31), 0, 1) == date(2023, 2, 28)
        assert compute_renewal_date(date(2024, 1, 31), 0, 1) == date(2024, 2, 29)

    def test_leap_day_plus_year(self):
        assert compute_renewal_date(date(2024, 2, 29), 1, 0) == date(2025, 2, 28)

    def test_months_roll_over_year(self):
        assert compute_renewal_date(date(2024, 11, 10), 0, 3) == date(2025, 2, 10)

    def test_accepts_string_base(self):
        assert compute_renewal_date("2024-05-02", 3, 0) == date(2027, 5, 2)


class TestDaysUntil:
    """Tests for days_until."""

    def test_same_day_is_zero(self):
        d = date(2025, 3, 1)
        assert days_until(d, d) == 0

    def test_future_positive(self):
        assert days_until(date(2025, 3, 11), date(2025, 3, 1)) == 10

    def test_past_negative(self):
        assert days_until(date(2025, 2, 27), date(2025, 3, 1)) == -2

    def test_calendar_days_not_24h_periods(self):
        """Late evening 'now' still counts whole calendar days."""
        now = datetime(2025, 3, 1, 23, 30)
        assert days_until(date(2025, 3, 2), now) == 1

    def test_strictly_decreasing_as_now_advances(self):
        target = date(2025, 6, 1)
        start = date(2025, 5, 1)
        values = [days_until(target, start + timedelta(days=i)) for i in range(60)]
        assert all(a > b for a, b in zip(values, values[1:]))


class TestDecomposeInterval:
    """Tests for decompose_interval."""

    def test_years_and_months(self):
        assert decompose_interval(date(2024, 1, 15), date(2025, 7, 15)) == (1, 6)

    def test_same_day(self):
        assert decompose_interval(date(2024, 1, 15), date(2024, 1, 15)) == (0, 0)

    def test_month_end(self):
        assert decompose_interval(date(2023, 1, 31), date(2023, 2, 28)) == (0, 1)

    @pytest.mark.parametrize(
        "base",
        [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2023, 3, 31),
            date(2025, 8, 30),
            date(2025, 12, 31),
        ],
    )
    def test_inverts_compute_renewal_date(self, base):
        """Round-trip holds for every picker value, including month ends."""
        for years in (0, 1, 2, 5, 10, 50):
            for months in range(12):
                renewal = compute_renewal_date(base, years, months)
                assert decompose_interval(base, renewal) == (years, months)


class TestFormatInterval:
    """Tests for format_interval."""

    def test_empty(self):
        assert format_interval(0, 0) == ""

    def test_months_only(self):
        assert format_interval(0, 1) == "1 month"
        assert format_interval(0, 6) == "6 months"

    def test_years_only(self):
        assert format_interval(1, 0) == "1 year"
        assert format_interval(3, 0) == "3 years"

    def test_years_and_months(self):
        assert format_interval(1, 6) == "1 year and 6 months"


class TestFormatMonthYear:
    """Tests for format_month_year."""

    def test_format(self):
        assert format_month_year(date(2025, 3, 14)) == "Mar 2025"

    def test_locale_passed_through(self):
        assert format_month_year(date(2025, 3, 14), "sv_SE") == "Mar 2025"
