"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID, uuid4

from nutricoach.calculations.aggregation import entry_macros
from nutricoach.domain.macros import Macros

MealCategory = Literal["breakfast", "lunch", "dinner", "snack"]

MEAL_CATEGORIES: tuple[str, ...] = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class MealItem:
    """Atomic logged food."""

    id: str
    name: str
    macros: Macros
    servings: float = 1.0
    serving_size: str = ""


@dataclass(frozen=True)
class MealEntry:
    """A logged meal.

    ``macros`` is the stored total and the source of truth for aggregation.
    Build new entries with :meth:`create` so it is derived from ``items``.
    """

    id: UUID
    meal_category: MealCategory
    description: str
    items: list[MealItem]
    macros: Macros
    timestamp: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        meal_category: MealCategory,
        description: str,
        items: list[MealItem],
        timestamp: datetime,
        entry_id: UUID | None = None,
    ) -> "MealEntry":
        """Build an entry whose total is summed from its items once."""
        return cls(
            id=entry_id or uuid4(),
            meal_category=meal_category,
            description=description,
            items=list(items),
            macros=entry_macros(items),
            timestamp=timestamp,
            created_at=timestamp,
            updated_at=timestamp,
        )
