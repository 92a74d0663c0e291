"""Meal logging service."""

import dataclasses
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutricoach.calculations.aggregation import daily_total
from nutricoach.domain.macros import Macros
from nutricoach.domain.meals import MealCategory, MealEntry, MealItem


class MealRepository(Protocol):
    """Persistence interface for meal entries."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return entries with ``start <= timestamp < end``, oldest first."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> MealEntry | None:
        """Return a single entry, if present."""

    def add_entry(self, user_id: UUID, entry: MealEntry) -> None:
        """Append a new entry."""

    def replace_entry(self, user_id: UUID, entry: MealEntry) -> None:
        """Overwrite an existing entry."""

    def delete_entries(self, user_id: UUID, entry_ids: list[UUID]) -> None:
        """Delete the given entries."""


@dataclass
class MealLogService:
    """Service that records meals and reads them back per local day."""

    repository: MealRepository

    def log_meal(
        self,
        user_id: UUID,
        meal_category: MealCategory,
        description: str,
        items: list[MealItem],
    ) -> MealEntry:
        """Create a meal entry stamped with the server time."""
        entry = MealEntry.create(
            meal_category=meal_category,
            description=description,
            items=items,
            timestamp=datetime.now(tz=UTC),
        )
        self.repository.add_entry(user_id, entry)
        return entry

    def replace_entry(
        self,
        user_id: UUID,
        entry_id: UUID,
        meal_category: MealCategory,
        description: str,
        items: list[MealItem],
    ) -> MealEntry | None:
        """Replace an entry's contents, keeping its log time."""
        current = self.repository.get_entry(user_id, entry_id)
        if current is None:
            return None
        rebuilt = MealEntry.create(
            meal_category=meal_category,
            description=description,
            items=items,
            timestamp=current.timestamp,
            entry_id=current.id,
        )
        entry = dataclasses.replace(
            rebuilt, created_at=current.created_at, updated_at=datetime.now(tz=UTC)
        )
        self.repository.replace_entry(user_id, entry)
        return entry

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry; return False when it does not exist."""
        if self.repository.get_entry(user_id, entry_id) is None:
            return False
        self.repository.delete_entries(user_id, [entry_id])
        return True

    def entries_for_day(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> list[MealEntry]:
        """Return the entries logged on a local calendar day."""
        return self.entries_for_range(user_id, day, day, timezone_name)

    def entries_for_range(
        self, user_id: UUID, start_day: date, end_day: date, timezone_name: str
    ) -> list[MealEntry]:
        """Return the entries logged between two local days, inclusive."""
        start, _ = day_window(start_day, timezone_name)
        _, end = day_window(end_day, timezone_name)
        return self.repository.list_entries(user_id, start, end)

    def delete_entries_for_day(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> int:
        """Delete every entry of a local day and return how many were removed."""
        entries = self.entries_for_day(user_id, day, timezone_name)
        if entries:
            self.repository.delete_entries(user_id, [entry.id for entry in entries])
        return len(entries)

    def get_daily_total(self, user_id: UUID, day: date, timezone_name: str) -> Macros:
        """Return the summed macros for a local calendar day."""
        entries = self.entries_for_day(user_id, day, timezone_name)
        return daily_total(entries, day, timezone_name)


def day_window(day: date, timezone_name: str) -> tuple[datetime, datetime]:
    """Return the UTC bounds ``[start, end)`` of a local calendar day."""
    tz = ZoneInfo(timezone_name)
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def today_in(timezone_name: str) -> date:
    """Return the current calendar day in a timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
