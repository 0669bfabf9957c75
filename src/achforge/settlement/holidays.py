"""US federal holiday generation for the ACH settlement calendar.

The ten standard federal holidays are derived from fixed rules (fixed calendar
dates, nth weekday of a month, last weekday of a month) and then shifted to
their observed dates: Saturday holidays are observed the preceding Friday,
Sunday holidays the following Monday.
"""

from __future__ import annotations

import calendar
import threading
from collections.abc import Iterable, Iterator
from datetime import MAXYEAR, MINYEAR, date, timedelta

from achforge.core.exceptions import CalendarError
from achforge.models.calendar import FederalHoliday

MONDAY, THURSDAY, SATURDAY, SUNDAY = 0, 3, 5, 6

# (id slug, name, month, rule) where rule is ("fixed", day), ("nth", weekday, n)
# or ("last", weekday).
FEDERAL_HOLIDAY_RULES: tuple[tuple[str, str, int, tuple[object, ...]], ...] = (
    ("new-years", "New Year's Day", 1, ("fixed", 1)),
    ("mlk-day", "Martin Luther King Jr. Day", 1, ("nth", MONDAY, 3)),
    ("presidents-day", "Presidents Day", 2, ("nth", MONDAY, 3)),
    ("memorial-day", "Memorial Day", 5, ("last", MONDAY)),
    ("independence-day", "Independence Day", 7, ("fixed", 4)),
    ("labor-day", "Labor Day", 9, ("nth", MONDAY, 1)),
    ("columbus-day", "Columbus Day", 10, ("nth", MONDAY, 2)),
    ("veterans-day", "Veterans Day", 11, ("fixed", 11)),
    ("thanksgiving", "Thanksgiving Day", 11, ("nth", THURSDAY, 4)),
    ("christmas", "Christmas Day", 12, ("fixed", 25)),
)


def _check_year(year: object) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise CalendarError(f"year must be an integer, got {year!r}")
    # January 1, 0001 is a Monday, so no observed date falls before MINYEAR.
    if not MINYEAR <= year <= MAXYEAR:
        raise CalendarError(f"year {year} is outside the supported range {MINYEAR}..{MAXYEAR}")
    return year


def nth_weekday_of_month(year: int, month: int, weekday: int, occurrence: int) -> date:
    """Date of the ``occurrence``-th ``weekday`` (Monday=0) in a month."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday() + 7) % 7
    return first + timedelta(days=offset + (occurrence - 1) * 7)


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """Date of the last ``weekday`` (Monday=0) in a month."""
    last = date(year, month, calendar.monthrange(year, month)[1])
    return last - timedelta(days=(last.weekday() - weekday + 7) % 7)


def observed_date(actual: date) -> date:
    """Apply the federal weekend observance shift."""
    if actual.weekday() == SATURDAY:
        return actual - timedelta(days=1)
    if actual.weekday() == SUNDAY:
        return actual + timedelta(days=1)
    return actual


def _actual_date(year: int, month: int, rule: tuple[object, ...]) -> date:
    kind = rule[0]
    if kind == "fixed":
        return date(year, month, rule[1])  # type: ignore[arg-type]
    if kind == "nth":
        return nth_weekday_of_month(year, month, rule[1], rule[2])  # type: ignore[arg-type]
    return last_weekday_of_month(year, month, rule[1])  # type: ignore[arg-type]


def generate_default_holidays(year: int) -> list[FederalHoliday]:
    """Ten standard US federal holidays for ``year``, at their observed dates.

    A Saturday New Year's Day is observed on December 31 of the previous
    year; the returned holiday still carries ``year``.

    Raises:
        CalendarError: ``year`` is not an integer in 1..9999.
    """
    year = _check_year(year)
    return [
        FederalHoliday(
            id=f"{slug}-{year}",
            name=name,
            observed_date=observed_date(_actual_date(year, month, rule)),
            year=year,
            recurring=True,
        )
        for slug, name, month, rule in FEDERAL_HOLIDAY_RULES
    ]


def resolve_holiday_dates(
    years: Iterable[int],
    extra: Iterable[date] = (),
    excluded: Iterable[date] = (),
) -> frozenset[date]:
    """Resolved set of holiday dates for ``years`` with configured overrides.

    Args:
        years: Calendar years whose default federal holidays are included.
        extra: Additional closure dates (e.g. a declared day of mourning).
        excluded: Dates removed from the resolved set.
    """
    dates = {h.observed_date for year in years for h in generate_default_holidays(year)}
    dates.update(extra)
    dates.difference_update(excluded)
    return frozenset(dates)


class FederalHolidaySet:
    """Observed federal holiday dates, generated per year on first lookup.

    Membership never depends on a precomputed year range: asking about any
    date generates (and caches) the holidays of the years that can observe a
    holiday on it. ``extra`` dates are always members and ``excluded`` dates
    never are, whatever their year.
    """

    def __init__(self, extra: Iterable[date] = (), excluded: Iterable[date] = ()) -> None:
        self._extra = frozenset(extra)
        self._excluded = frozenset(excluded)
        self._by_year: dict[int, frozenset[date]] = {}
        self._lock = threading.Lock()

    def dates_for_year(self, year: int) -> frozenset[date]:
        """Observed dates generated for ``year``, before overrides."""
        with self._lock:
            cached = self._by_year.get(year)
            if cached is None:
                cached = frozenset(h.observed_date for h in generate_default_holidays(year))
                self._by_year[year] = cached
            return cached

    def __contains__(self, d: object) -> bool:
        if not isinstance(d, date):
            return False
        if d in self._excluded:
            return False
        if d in self._extra:
            return True
        # A Saturday New Year's Day is observed on December 31 of the prior year.
        years = [d.year]
        if (d.month, d.day) == (12, 31) and d.year < MAXYEAR:
            years.append(d.year + 1)
        return any(d in self.dates_for_year(year) for year in years)

    def __iter__(self) -> Iterator[date]:
        """Dates of the years generated so far, with overrides applied."""
        with self._lock:
            generated = set().union(*self._by_year.values())
        return iter(sorted((generated | self._extra) - self._excluded))

    def __len__(self) -> int:
        return sum(1 for _ in self)
