"""Macro totals for meal items, meal entries and days."""

from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from nutricoach.calculations.numbers import coerce_number
from nutricoach.domain.macros import Macros

if TYPE_CHECKING:
    from nutricoach.domain.meals import MealEntry, MealItem

ZERO_MACROS = Macros(calories=0, protein=0, carbs=0, fat=0)


def add_macros(total: Macros, other: Macros) -> Macros:
    """Return the sum of two macro quantities, non-numeric fields counting as 0."""
    return Macros(
        calories=total.calories + coerce_number(other.calories),
        protein=total.protein + coerce_number(other.protein),
        carbs=total.carbs + coerce_number(other.carbs),
        fat=total.fat + coerce_number(other.fat),
    )


def item_macros(item: "MealItem") -> Macros:
    """Return the macros of a single item."""
    return item.macros


def entry_macros(items: Iterable["MealItem"]) -> Macros:
    """Sum the macros of a meal's items."""
    total = ZERO_MACROS
    for item in items:
        total = add_macros(total, item_macros(item))
    return total


def local_date(timestamp: datetime, tz: ZoneInfo) -> date:
    """Return the calendar day of ``timestamp`` in ``tz`` (naive means UTC)."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz).date()


def daily_total(
    entries: Iterable["MealEntry"],
    reference_date: date | None = None,
    timezone: str = "UTC",
) -> Macros:
    """Sum the stored totals of entries logged on ``reference_date`` in ``timezone``.

    ``reference_date`` defaults to today in ``timezone``.
    """
    tz = ZoneInfo(timezone)
    if reference_date is None:
        reference_date = datetime.now(tz=tz).date()
    total = ZERO_MACROS
    for entry in entries:
        if local_date(entry.timestamp, tz) != reference_date:
            continue
        total = add_macros(total, entry.macros)
    return total
