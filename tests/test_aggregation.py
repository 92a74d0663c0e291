"""Tests for meal and daily macro aggregation."""

from datetime import UTC, date, datetime, timedelta

from nutricoach.calculations.aggregation import add_macros, daily_total, entry_macros
from nutricoach.domain.macros import Macros
from nutricoach.domain.meals import MealEntry, MealItem


def _item(calories: float, protein: float, carbs: float, fat: float) -> MealItem:
    return MealItem(
        id="item",
        name="food",
        macros=Macros(calories=calories, protein=protein, carbs=carbs, fat=fat),
    )


def _entry(timestamp: datetime, calories: float) -> MealEntry:
    return MealEntry.create(
        meal_category="lunch",
        description="meal",
        items=[_item(calories, 10, 20, 5)],
        timestamp=timestamp,
    )


def test_entry_macros_sum_items() -> None:
    items = [_item(100, 10, 10, 5), _item(50.5, 2, 3, 1)]

    assert entry_macros(items) == Macros(calories=150.5, protein=12, carbs=13, fat=6)


def test_entry_macros_of_no_items_is_zero() -> None:
    assert entry_macros([]) == Macros(calories=0, protein=0, carbs=0, fat=0)


def test_create_stores_the_item_total() -> None:
    entry = MealEntry.create(
        meal_category="breakfast",
        description="eggs and toast",
        items=[_item(140, 12, 1, 10), _item(80, 3, 15, 1)],
        timestamp=datetime(2024, 1, 1, 8, tzinfo=UTC),
    )

    assert entry.macros == Macros(calories=220, protein=15, carbs=16, fat=11)
    assert entry.created_at == entry.updated_at == entry.timestamp


def test_add_macros_counts_non_numeric_as_zero() -> None:
    total = Macros(calories=100, protein=10, carbs=10, fat=10)
    broken = Macros(calories="lots", protein=float("nan"), carbs=5, fat=None)

    assert add_macros(total, broken) == Macros(
        calories=100, protein=10, carbs=15, fat=10
    )


def test_daily_total_filters_by_local_day() -> None:
    entries = [
        # 22:00 on March 9 in New York
        _entry(datetime(2024, 3, 10, 3, 0, tzinfo=UTC), 250),
        # 19:30 and 23:30 on March 10 in New York
        _entry(datetime(2024, 3, 10, 23, 30, tzinfo=UTC), 500),
        _entry(datetime(2024, 3, 11, 3, 30, tzinfo=UTC), 300),
        _entry(datetime(2024, 3, 11, 14, 0, tzinfo=UTC), 700),
    ]

    new_york = daily_total(entries, date(2024, 3, 10), "America/New_York")
    utc = daily_total(entries, date(2024, 3, 10), "UTC")

    assert new_york.calories == 800
    assert new_york.protein == 20
    assert utc.calories == 750


def test_daily_total_defaults_to_today() -> None:
    now = datetime.now(tz=UTC)
    entries = [_entry(now, 320), _entry(now - timedelta(days=1), 900)]

    assert daily_total(entries).calories == 320


def test_daily_total_treats_naive_timestamps_as_utc() -> None:
    entries = [_entry(datetime(2024, 3, 10, 23, 30), 400)]

    assert daily_total(entries, date(2024, 3, 10)).calories == 400
    assert daily_total(entries, date(2024, 3, 11), "Asia/Tokyo").calories == 400


def test_daily_total_uses_stored_total() -> None:
    entry = MealEntry(
        id=_entry(datetime(2024, 1, 1, tzinfo=UTC), 0).id,
        meal_category="dinner",
        description="edited total",
        items=[_item(100, 0, 0, 0)],
        macros=Macros(calories=250, protein=0, carbs=0, fat=0),
        timestamp=datetime(2024, 1, 1, 12, tzinfo=UTC),
        created_at=datetime(2024, 1, 1, 12, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, 12, tzinfo=UTC),
    )

    assert daily_total([entry], date(2024, 1, 1)).calories == 250
