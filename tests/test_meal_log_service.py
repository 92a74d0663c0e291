"""Tests for meal log service."""

from datetime import UTC, date, datetime
from uuid import uuid4

from nutricoach.domain.macros import Macros
from nutricoach.domain.meals import MealEntry, MealItem
from nutricoach.services.meals import MealLogService, day_window
from tests.conftest import InMemoryMealRepository


def _item(name: str, calories: float) -> MealItem:
    return MealItem(
        id=name,
        name=name,
        macros=Macros(calories=calories, protein=10, carbs=20, fat=5),
    )


def _stored_entry(timestamp: datetime, calories: float) -> MealEntry:
    return MealEntry.create(
        meal_category="dinner",
        description="stored",
        items=[_item("pasta", calories)],
        timestamp=timestamp,
    )


def test_log_meal_sums_items_and_stamps_time() -> None:
    repo = InMemoryMealRepository()
    service = MealLogService(repo)
    user_id = uuid4()
    before = datetime.now(tz=UTC)

    entry = service.log_meal(
        user_id, "lunch", "salad and bread", [_item("salad", 150), _item("bread", 90)]
    )

    assert repo.entries[user_id] == [entry]
    assert entry.macros == Macros(calories=240, protein=20, carbs=40, fat=10)
    assert entry.timestamp >= before
    assert entry.timestamp.tzinfo is not None


def test_entries_for_day_uses_local_calendar_day() -> None:
    repo = InMemoryMealRepository()
    service = MealLogService(repo)
    user_id = uuid4()
    evening = _stored_entry(datetime(2024, 6, 2, 3, 0, tzinfo=UTC), 600)
    morning = _stored_entry(datetime(2024, 6, 2, 15, 0, tzinfo=UTC), 300)
    repo.entries[user_id] = [morning, evening]

    june_first = service.entries_for_day(user_id, date(2024, 6, 1), "America/Chicago")
    june_second = service.entries_for_day(user_id, date(2024, 6, 2), "America/Chicago")

    assert june_first == [evening]
    assert june_second == [morning]


def test_get_daily_total() -> None:
    repo = InMemoryMealRepository()
    service = MealLogService(repo)
    user_id = uuid4()
    repo.entries[user_id] = [
        _stored_entry(datetime(2024, 6, 2, 8, tzinfo=UTC), 400),
        _stored_entry(datetime(2024, 6, 2, 13, tzinfo=UTC), 700),
        _stored_entry(datetime(2024, 6, 3, 8, tzinfo=UTC), 900),
    ]

    total = service.get_daily_total(user_id, date(2024, 6, 2), "UTC")

    assert total == Macros(calories=1100, protein=20, carbs=40, fat=10)


def test_replace_entry_recomputes_macros_and_keeps_log_time() -> None:
    repo = InMemoryMealRepository()
    service = MealLogService(repo)
    user_id = uuid4()
    original = _stored_entry(datetime(2024, 6, 2, 8, tzinfo=UTC), 400)
    repo.entries[user_id] = [original]

    updated = service.replace_entry(
        user_id, original.id, "breakfast", "oats", [_item("oats", 300)]
    )

    assert updated is not None
    assert updated.id == original.id
    assert updated.meal_category == "breakfast"
    assert updated.macros.calories == 300
    assert updated.timestamp == original.timestamp
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at
    assert repo.entries[user_id] == [updated]


def test_replace_missing_entry_returns_none() -> None:
    service = MealLogService(InMemoryMealRepository())

    assert service.replace_entry(uuid4(), uuid4(), "snack", "", []) is None


def test_delete_entry() -> None:
    repo = InMemoryMealRepository()
    service = MealLogService(repo)
    user_id = uuid4()
    entry = _stored_entry(datetime(2024, 6, 2, 8, tzinfo=UTC), 400)
    repo.entries[user_id] = [entry]

    assert service.delete_entry(user_id, entry.id) is True
    assert service.delete_entry(user_id, entry.id) is False
    assert repo.entries[user_id] == []


def test_delete_entries_for_day_keeps_other_days() -> None:
    repo = InMemoryMealRepository()
    service = MealLogService(repo)
    user_id = uuid4()
    keep = _stored_entry(datetime(2024, 6, 3, 8, tzinfo=UTC), 900)
    repo.entries[user_id] = [
        _stored_entry(datetime(2024, 6, 2, 8, tzinfo=UTC), 400),
        _stored_entry(datetime(2024, 6, 2, 20, tzinfo=UTC), 500),
        keep,
    ]

    deleted = service.delete_entries_for_day(user_id, date(2024, 6, 2), "UTC")

    assert deleted == 2
    assert repo.entries[user_id] == [keep]


def test_day_window_converts_local_midnights_to_utc() -> None:
    start, end = day_window(date(2024, 1, 15), "Asia/Kolkata")

    assert start == datetime(2024, 1, 14, 18, 30, tzinfo=UTC)
    assert end == datetime(2024, 1, 15, 18, 30, tzinfo=UTC)
