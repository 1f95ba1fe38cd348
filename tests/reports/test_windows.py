from __future__ import annotations

from datetime import date

import pytest

from conftest import make_log
from src.factory_ledger.factory_ledger.core.enums import Role, TimeWindow
from src.factory_ledger.factory_ledger.core.exceptions import AuthorizationError, ValidationError
from src.factory_ledger.factory_ledger.reports.windows import (
    DateRange,
    LogFilter,
    end_of_month,
    parse_window,
    resolve_range,
    start_of_week,
)
from src.factory_ledger.factory_ledger.users.model import Scope


@pytest.mark.parametrize(
    "window,expected",
    [
        (TimeWindow.DAILY, DateRange("2024-03-15", "2024-03-15")),
        (TimeWindow.WEEKLY, DateRange("2024-03-10", None)),
        (TimeWindow.MONTHLY, DateRange("2024-03-01", None)),
        (TimeWindow.YEARLY, DateRange("2024-01-01", None)),
    ],
)
def test_preset_windows(window, expected, fixed_today):
    assert resolve_range(window, today=fixed_today) == expected


def test_week_starts_on_sunday():
    assert start_of_week(date(2024, 3, 10)) == date(2024, 3, 10)
    assert start_of_week(date(2024, 3, 16)) == date(2024, 3, 10)
    assert start_of_week(date(2024, 3, 11)) == date(2024, 3, 10)


def test_custom_window_is_inclusive(fixed_today):
    rng = resolve_range("custom", today=fixed_today, start="2024-03-01", end=date(2024, 3, 31))

    assert rng == DateRange("2024-03-01", "2024-03-31")
    assert rng.contains("2024-03-01")
    assert rng.contains("2024-03-31")
    assert not rng.contains("2024-04-01")
    assert not rng.contains("2024-02-29")


def test_custom_window_single_day(fixed_today):
    rng = resolve_range(TimeWindow.CUSTOM, today=fixed_today, start="2024-03-05", end="2024-03-05")
    assert rng.contains("2024-03-05")


@pytest.mark.parametrize(
    "start,end",
    [
        (None, "2024-03-31"),
        ("2024-03-01", None),
        ("2024-03-31", "2024-03-01"),
        ("2024/03/01", "2024-03-31"),
    ],
)
def test_invalid_custom_window(start, end, fixed_today):
    with pytest.raises(ValidationError):
        resolve_range(TimeWindow.CUSTOM, today=fixed_today, start=start, end=end)


def test_unknown_window():
    with pytest.raises(ValidationError):
        parse_window("hourly")


def test_manager_filter_ignores_selected_factory():
    rng = DateRange("2024-03-01", "2024-03-31")
    manager = Scope.manager("m", "f1", "Factory A")

    log_filter = LogFilter.for_scope(manager, TimeWindow.CUSTOM, rng, selected_factory_id="f2")

    assert log_filter.factory_id == "f1"
    assert log_filter.matches(make_log(factory_id="f1"))
    assert not log_filter.matches(make_log(factory_id="f2"))


def test_owner_filter_selects_all_or_one_factory():
    rng = DateRange("2024-03-01", None)
    owner = Scope.owner("o")

    assert LogFilter.for_scope(owner, TimeWindow.MONTHLY, rng).factory_id is None
    assert LogFilter.for_scope(owner, TimeWindow.MONTHLY, rng, selected_factory_id="").factory_id is None
    assert LogFilter.for_scope(owner, TimeWindow.MONTHLY, rng, selected_factory_id="f2").factory_id == "f2"


def test_manager_without_factory_cannot_query():
    with pytest.raises(AuthorizationError):
        LogFilter.for_scope(Scope(user_id="m", role=Role.MANAGER), TimeWindow.DAILY, DateRange())


def test_period_label():
    assert LogFilter(TimeWindow.WEEKLY, DateRange("2024-03-10")).period_label == "weekly"
    assert LogFilter(TimeWindow.CUSTOM, DateRange("2024-03-01", "2024-03-31")).period_label == "2024-03-01 to 2024-03-31"


def test_daily_and_monthly_boundaries(fixed_today):
    daily = resolve_range(TimeWindow.DAILY, today=fixed_today)
    assert daily.contains("2024-03-15")
    assert not daily.contains("2024-03-14")

    monthly = resolve_range(TimeWindow.MONTHLY, today=fixed_today)
    assert monthly.contains("2024-03-01")
    assert not monthly.contains("2024-02-29")


@pytest.mark.parametrize(
    "today,expected",
    [
        (date(2024, 2, 10), date(2024, 2, 29)),
        (date(2023, 2, 1), date(2023, 2, 28)),
        (date(2024, 12, 31), date(2024, 12, 31)),
    ],
)
def test_end_of_month(today, expected):
    assert end_of_month(today) == expected
