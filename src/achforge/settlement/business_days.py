"""Business-day arithmetic against a weekend + holiday calendar.

The module-level functions take the holiday set explicitly.
``BusinessDayCalculator`` binds a resolved, immutable holiday set and a
weekend rule so services can pass one object around.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from datetime import date, datetime, timedelta

from achforge.core.exceptions import CalendarError
from achforge.models.calendar import FederalHoliday
from achforge.settlement.holidays import FederalHolidaySet, resolve_holiday_dates

DEFAULT_WEEKEND: frozenset[int] = frozenset({5, 6})  # Saturday, Sunday
CREDIT_SETTLEMENT_LAG = 2

_ONE_DAY = timedelta(days=1)


def check_weekend(weekend: Iterable[int]) -> frozenset[int]:
    """Validated weekend rule: weekday numbers 0..6 leaving at least one business weekday."""
    days = frozenset(weekend)
    if not days <= set(range(7)):
        raise CalendarError(f"weekend days must be weekday numbers 0..6, got {sorted(days)}")
    if len(days) == 7:
        raise CalendarError("weekend rule leaves no business weekdays")
    return days


def _as_date(d: date) -> date:
    # Time of day is irrelevant to every calendar comparison.
    return d.date() if isinstance(d, datetime) else d


def is_weekend(d: date, weekend: Collection[int] = DEFAULT_WEEKEND) -> bool:
    return d.weekday() in weekend


def is_holiday(d: date, holidays: Collection[date]) -> bool:
    return _as_date(d) in holidays


def is_business_day(
    d: date, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> bool:
    return not is_weekend(d, weekend) and not is_holiday(d, holidays)


def _step_business_days(
    d: date, n: int, step: timedelta, holidays: Collection[date], weekend: Collection[int]
) -> date:
    if n < 0:
        raise CalendarError(f"business day count must be non-negative, got {n}")
    weekend = check_weekend(weekend)
    current = _as_date(d)
    remaining = n
    while remaining > 0:
        current += step
        if is_business_day(current, holidays, weekend):
            remaining -= 1
    return current


def add_business_days(
    d: date, n: int, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> date:
    """Date ``n`` business days after ``d``.

    ``n == 0`` returns ``d`` as given, even when it is not a business day.
    """
    return _step_business_days(d, n, _ONE_DAY, holidays, weekend)


def subtract_business_days(
    d: date, n: int, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> date:
    """Date ``n`` business days before ``d``."""
    return _step_business_days(d, n, -_ONE_DAY, holidays, weekend)


def next_business_day(
    d: date, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> date:
    return add_business_days(d, 1, holidays, weekend)


def previous_business_day(
    d: date, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> date:
    return subtract_business_days(d, 1, holidays, weekend)


def business_days_between(
    start: date, end: date, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> int:
    """Signed count of business days in ``(start, end]``; negative if ``end < start``."""
    start, end = _as_date(start), _as_date(end)
    sign = 1
    if end < start:
        start, end, sign = end, start, -1
    count = 0
    current = start
    while current < end:
        current += _ONE_DAY
        if is_business_day(current, holidays, weekend):
            count += 1
    return sign * count


def resolve_effective_date(
    requested: date, holidays: Collection[date], weekend: Collection[int] = DEFAULT_WEEKEND
) -> date:
    """Earliest postable settlement date on or after ``requested``."""
    requested = _as_date(requested)
    if is_business_day(requested, holidays, weekend):
        return requested
    return next_business_day(requested, holidays, weekend)


def resolve_credit_effective_date(
    debit_effective_date: date,
    holidays: Collection[date],
    weekend: Collection[int] = DEFAULT_WEEKEND,
) -> date:
    """Credits settle a fixed two business days after the linked debit."""
    return add_business_days(debit_effective_date, CREDIT_SETTLEMENT_LAG, holidays, weekend)


class BusinessDayCalculator:
    """Weekend rule plus a resolved holiday set, with the arithmetic bound to them."""

    def __init__(
        self,
        holidays: Iterable[date | FederalHoliday] | FederalHolidaySet = (),
        weekend: Iterable[int] = DEFAULT_WEEKEND,
    ) -> None:
        self._holidays: Collection[date]
        if isinstance(holidays, FederalHolidaySet):
            self._holidays = holidays
        else:
            self._holidays = frozenset(
                h.observed_date if isinstance(h, FederalHoliday) else _as_date(h) for h in holidays
            )
        self._weekend = check_weekend(weekend)

    @classmethod
    def for_years(
        cls,
        years: Iterable[int],
        extra: Iterable[date] = (),
        excluded: Iterable[date] = (),
        weekend: Iterable[int] = DEFAULT_WEEKEND,
    ) -> BusinessDayCalculator:
        """Calculator over the default federal holidays of ``years`` plus overrides."""
        return cls(resolve_holiday_dates(years, extra, excluded), weekend)

    @classmethod
    def federal(
        cls,
        extra: Iterable[date] = (),
        excluded: Iterable[date] = (),
        weekend: Iterable[int] = DEFAULT_WEEKEND,
    ) -> BusinessDayCalculator:
        """Calculator over the default federal holidays of every year, generated on demand."""
        return cls(FederalHolidaySet(extra, excluded), weekend)

    @property
    def holidays(self) -> Collection[date]:
        return self._holidays

    @property
    def weekend(self) -> frozenset[int]:
        return self._weekend

    def is_weekend(self, d: date) -> bool:
        return is_weekend(d, self._weekend)

    def is_holiday(self, d: date) -> bool:
        return is_holiday(d, self._holidays)

    def is_business_day(self, d: date) -> bool:
        return is_business_day(d, self._holidays, self._weekend)

    def add_business_days(self, d: date, n: int) -> date:
        return add_business_days(d, n, self._holidays, self._weekend)

    def subtract_business_days(self, d: date, n: int) -> date:
        return subtract_business_days(d, n, self._holidays, self._weekend)

    def next_business_day(self, d: date) -> date:
        return next_business_day(d, self._holidays, self._weekend)

    def previous_business_day(self, d: date) -> date:
        return previous_business_day(d, self._holidays, self._weekend)

    def business_days_between(self, start: date, end: date) -> int:
        return business_days_between(start, end, self._holidays, self._weekend)

    def resolve_effective_date(self, requested: date) -> date:
        return resolve_effective_date(requested, self._holidays, self._weekend)

    def resolve_credit_effective_date(self, debit_effective_date: date) -> date:
        return resolve_credit_effective_date(debit_effective_date, self._holidays, self._weekend)
