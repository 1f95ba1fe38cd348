"""Time-window and factory-scope filters for DailyLog retrieval.

Log dates are ISO calendar days (YYYY-MM-DD), so comparing them as strings
orders them the same way as comparing the dates.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import coerce_iso_date
from ..core.constants import WEEK_STARTS_ON
from ..core.enums import TimeWindow
from ..core.exceptions import AuthorizationError, ValidationError
from ..ledger.model import DailyLog
from ..users.model import Scope


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of ISO dates; None means unbounded on that side."""

    start: Optional[str] = None
    end: Optional[str] = None

    def contains(self, day: str) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


def start_of_week(today: date) -> date:
    return today - timedelta(days=(today.weekday() - WEEK_STARTS_ON) % 7)


def end_of_month(today: date) -> date:
    return today.replace(day=calendar.monthrange(today.year, today.month)[1])


def parse_window(value) -> TimeWindow:
    try:
        return TimeWindow(value)
    except ValueError:
        raise ValidationError(f"Unknown report period: {value!r}")


def resolve_range(
    window: TimeWindow,
    *,
    today: date,
    start: Optional[str | date] = None,
    end: Optional[str | date] = None,
) -> DateRange:
    window = parse_window(window)

    if window == TimeWindow.DAILY:
        day = today.isoformat()
        return DateRange(start=day, end=day)
    if window == TimeWindow.WEEKLY:
        return DateRange(start=start_of_week(today).isoformat())
    if window == TimeWindow.MONTHLY:
        return DateRange(start=today.replace(day=1).isoformat())
    if window == TimeWindow.YEARLY:
        return DateRange(start=today.replace(month=1, day=1).isoformat())

    if not start or not end:
        raise ValidationError("Custom period needs both a start and an end date")
    start_s = coerce_iso_date(start, "Start date")
    end_s = coerce_iso_date(end, "End date")
    if start_s > end_s:
        raise ValidationError("Start date must be on or before end date")
    return DateRange(start=start_s, end=end_s)


@dataclass(frozen=True)
class LogFilter:
    window: TimeWindow
    date_range: DateRange
    factory_id: Optional[str] = None

    @classmethod
    def for_scope(
        cls,
        scope: Scope,
        window: TimeWindow,
        date_range: DateRange,
        *,
        selected_factory_id: Optional[str] = None,
    ) -> "LogFilter":
        """Managers are pinned to their factory; owners see all or one selected factory."""

        if scope.is_owner:
            return cls(window=window, date_range=date_range, factory_id=selected_factory_id or None)
        if not scope.factory_id:
            raise AuthorizationError("No factory assigned to this account")
        return cls(window=window, date_range=date_range, factory_id=scope.factory_id)

    @property
    def period_label(self) -> str:
        if self.window == TimeWindow.CUSTOM:
            return f"{self.date_range.start} to {self.date_range.end}"
        return self.window.value

    def matches(self, log: DailyLog) -> bool:
        if self.factory_id is not None and log.factory_id != self.factory_id:
            return False
        return self.date_range.contains(log.date)
