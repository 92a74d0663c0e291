"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutricoach.domain.macros import Macros
from nutricoach.domain.meals import MealEntry, MealItem
from nutricoach.services.meals import MealRepository

_ENTRY_COLUMNS = (
    "id, meal_category, description, items, calories, protein, carbs, fat, "
    "logged_at, created_at, updated_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal entries."""

    client: Client

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return entries logged within a time range."""
        response = (
            self.client.table("meal_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, user_id: UUID, entry_id: UUID) -> MealEntry | None:
        """Return a meal entry by id."""
        response = (
            self.client.table("meal_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def add_entry(self, user_id: UUID, entry: MealEntry) -> None:
        """Insert a new meal entry row."""
        payload = {
            "id": str(entry.id),
            "user_id": str(user_id),
            **_entry_payload(entry),
        }
        response = self.client.table("meal_entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal entry")

    def replace_entry(self, user_id: UUID, entry: MealEntry) -> None:
        """Overwrite the stored contents of an entry."""
        response = (
            self.client.table("meal_entries")
            .update(_entry_payload(entry))
            .eq("user_id", str(user_id))
            .eq("id", str(entry.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal entry")

    def delete_entries(self, user_id: UUID, entry_ids: list[UUID]) -> None:
        """Delete the given entries."""
        if not entry_ids:
            return
        self.client.table("meal_entries").delete().eq("user_id", str(user_id)).in_(
            "id", [str(entry_id) for entry_id in entry_ids]
        ).execute()


def _entry_payload(entry: MealEntry) -> dict[str, object]:
    return {
        "meal_category": entry.meal_category,
        "description": entry.description,
        "items": [
            {
                "id": item.id,
                "name": item.name,
                "servings": item.servings,
                "serving_size": item.serving_size,
                "macros": _macros_payload(item.macros),
            }
            for item in entry.items
        ],
        **_macros_payload(entry.macros),
        "logged_at": entry.timestamp.isoformat(),
        "created_at": entry.created_at.isoformat(),
        "updated_at": entry.updated_at.isoformat(),
    }


def _macros_payload(macros: Macros) -> dict[str, float]:
    return {
        "calories": macros.calories,
        "protein": macros.protein,
        "carbs": macros.carbs,
        "fat": macros.fat,
    }


def _parse_macros(row: dict[str, object]) -> Macros:
    return Macros(
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
    )


def _parse_entry(row: dict[str, object]) -> MealEntry:
    items = [
        MealItem(
            id=str(item["id"]),
            name=str(item.get("name", "")),
            macros=_parse_macros(item.get("macros") or {}),
            servings=float(item.get("servings") or 1.0),
            serving_size=str(item.get("serving_size") or ""),
        )
        for item in row.get("items") or []
    ]
    return MealEntry(
        id=UUID(row["id"]),
        meal_category=row["meal_category"],
        description=row.get("description") or "",
        items=items,
        macros=_parse_macros(row),
        timestamp=datetime.fromisoformat(row["logged_at"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )
