"""Adherence recap over a date range."""

from collections.abc import Iterable
from datetime import date, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from nutricoach.calculations.aggregation import ZERO_MACROS, add_macros, local_date
from nutricoach.calculations.constants import TARGET_TOLERANCE
from nutricoach.domain.macros import Macros
from nutricoach.domain.recaps import RecapMetrics, TargetMetDays

if TYPE_CHECKING:
    from nutricoach.domain.meals import MealEntry


def days_in_range(start_date: date, end_date: date) -> list[date]:
    """Return every calendar day from start to end, inclusive."""
    days = []
    current = start_date
    while current <= end_date:
        days.append(current)
        current += timedelta(days=1)
    return days


def did_meet_target(
    total: Macros, target: Macros, tolerance: float = TARGET_TOLERANCE
) -> bool:
    """True when every macro is within ``tolerance`` of its target."""
    return all(
        abs(actual - expected) <= expected * tolerance
        for actual, expected in (
            (total.calories, target.calories),
            (total.protein, target.protein),
            (total.carbs, target.carbs),
            (total.fat, target.fat),
        )
    )


def bucket_daily_totals(
    entries: Iterable["MealEntry"], start_date: date, end_date: date, timezone: str
) -> dict[str, Macros]:
    """Sum entry totals per local day, keyed by ISO date.

    Every day of the range gets a bucket; entries outside it are dropped.
    """
    tz = ZoneInfo(timezone)
    totals = {
        day.isoformat(): ZERO_MACROS for day in days_in_range(start_date, end_date)
    }
    for entry in entries:
        key = local_date(entry.timestamp, tz).isoformat()
        if key not in totals:
            continue
        totals[key] = add_macros(totals[key], entry.macros)
    return totals


def compute_recap(
    entries: Iterable["MealEntry"],
    target: Macros,
    start_date: date,
    end_date: date,
    timezone: str,
) -> RecapMetrics:
    """Count the days in ``[start_date, end_date]`` that met the target.

    Callers must pass a non-empty range; an empty one yields a NaN percentage.
    """
    totals = bucket_daily_totals(entries, start_date, end_date, timezone)
    met = sum(1 for total in totals.values() if did_meet_target(total, target))
    total_days = len(totals)
    percentage = met / total_days * 100 if total_days else float("nan")
    return RecapMetrics(
        total_days=total_days,
        target_met_days=TargetMetDays(count=met, percentage=percentage),
    )
