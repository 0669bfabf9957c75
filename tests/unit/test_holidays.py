"""Tests for US federal holiday generation."""

from __future__ import annotations

from datetime import date

import pytest

from achforge.core.exceptions import CalendarError
from achforge.settlement.holidays import (
    FederalHolidaySet,
    generate_default_holidays,
    last_weekday_of_month,
    nth_weekday_of_month,
    observed_date,
    resolve_holiday_dates,
)


def _by_id(year: int) -> dict[str, date]:
    return {h.id: h.observed_date for h in generate_default_holidays(year)}


class TestRuleHelpers:
    def test_nth_weekday_third_monday(self):
        assert nth_weekday_of_month(2023, 1, 0, 3) == date(2023, 1, 16)

    def test_nth_weekday_when_month_starts_on_that_weekday(self):
        # May 1, 2023 is a Monday.
        assert nth_weekday_of_month(2023, 5, 0, 1) == date(2023, 5, 1)

    def test_last_weekday_counts_back_from_month_end(self):
        assert last_weekday_of_month(2023, 5, 0) == date(2023, 5, 29)

    def test_last_weekday_on_final_day(self):
        # May 31, 2021 is a Monday.
        assert last_weekday_of_month(2021, 5, 0) == date(2021, 5, 31)

    def test_observed_shift(self):
        assert observed_date(date(2026, 7, 4)) == date(2026, 7, 3)  # Saturday
        assert observed_date(date(2021, 7, 4)) == date(2021, 7, 5)  # Sunday
        assert observed_date(date(2023, 7, 4)) == date(2023, 7, 4)  # Tuesday


class TestGenerateDefaultHolidays:
    def test_ten_recurring_holidays(self):
        holidays = generate_default_holidays(2024)
        assert len(holidays) == 10
        assert all(h.recurring and h.year == 2024 for h in holidays)

    def test_2023_calendar(self):
        assert _by_id(2023) == {
            "new-years-2023": date(2023, 1, 2),
            "mlk-day-2023": date(2023, 1, 16),
            "presidents-day-2023": date(2023, 2, 20),
            "memorial-day-2023": date(2023, 5, 29),
            "independence-day-2023": date(2023, 7, 4),
            "labor-day-2023": date(2023, 9, 4),
            "columbus-day-2023": date(2023, 10, 9),
            "veterans-day-2023": date(2023, 11, 10),
            "thanksgiving-2023": date(2023, 11, 23),
            "christmas-2023": date(2023, 12, 25),
        }

    def test_2026_independence_day_observed_friday(self):
        assert _by_id(2026)["independence-day-2026"] == date(2026, 7, 3)

    def test_2026_monday_holidays(self):
        observed = _by_id(2026)
        assert observed["mlk-day-2026"] == date(2026, 1, 19)
        assert observed["presidents-day-2026"] == date(2026, 2, 16)
        assert observed["memorial-day-2026"] == date(2026, 5, 25)
        assert observed["labor-day-2026"] == date(2026, 9, 7)
        assert observed["columbus-day-2026"] == date(2026, 10, 12)
        assert observed["thanksgiving-2026"] == date(2026, 11, 26)

    def test_saturday_new_year_observed_in_previous_year(self):
        assert _by_id(2022)["new-years-2022"] == date(2021, 12, 31)

    def test_sunday_christmas_observed_monday(self):
        assert _by_id(2022)["christmas-2022"] == date(2022, 12, 26)

    @pytest.mark.parametrize("year", [-1, 0, 10000, 2023.0, "2023", True])
    def test_invalid_year_fails_fast(self, year):
        with pytest.raises(CalendarError):
            generate_default_holidays(year)

    def test_first_and_last_supported_years(self):
        assert _by_id(1)["new-years-1"] == date(1, 1, 1)  # a Monday
        assert len(generate_default_holidays(9999)) == 10


class TestResolveHolidayDates:
    def test_spans_years(self):
        dates = resolve_holiday_dates([2025, 2026])
        assert date(2025, 12, 25) in dates
        assert date(2026, 12, 25) in dates
        assert len(dates) == 20

    def test_extra_and_excluded_overrides(self):
        mourning = date(2026, 3, 2)
        dates = resolve_holiday_dates(
            [2026], extra=[mourning], excluded=[date(2026, 10, 12)]
        )
        assert mourning in dates
        assert date(2026, 10, 12) not in dates
        assert isinstance(dates, frozenset)


class TestFederalHolidaySet:
    def test_generates_any_year_on_lookup(self):
        holidays = FederalHolidaySet()
        assert len(holidays) == 0
        assert date(2030, 12, 25) in holidays
        assert date(2030, 12, 24) not in holidays
        assert len(holidays) == 10

    def test_new_year_observed_in_prior_december(self):
        assert date(2021, 12, 31) in FederalHolidaySet()

    def test_overrides_apply_in_every_year(self):
        holidays = FederalHolidaySet(
            extra=[date(2031, 3, 3)], excluded=[date(2026, 10, 12)]
        )
        assert date(2031, 3, 3) in holidays
        assert date(2026, 10, 12) not in holidays
        assert date(2026, 11, 26) in holidays

    def test_non_dates_are_not_members(self):
        assert "2026-12-25" not in FederalHolidaySet()
