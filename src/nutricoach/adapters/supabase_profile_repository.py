"""Supabase repository for user profiles and goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutricoach.domain.macros import MacroSplit, RemainingSplit
from nutricoach.domain.profile import (
    BODYWEIGHT_STRATEGY,
    PERCENTAGE_STRATEGY,
    BodyweightGoal,
    PercentageGoal,
    UnrecognizedGoal,
    UserGoal,
    UserProfile,
)
from nutricoach.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "user_id, name, age, gender, units, height, weight, activity_level, timezone"
)
_GOAL_COLUMNS = (
    "user_id, type, calculation_strategy, adjustment_percentage, split, "
    "protein_per_bodyweight, remaining_split"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles and goals."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("user_profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def get_goal(self, user_id: UUID) -> UserGoal | None:
        """Return the goal row for a user, if one is set."""
        response = (
            self.client.table("user_goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def create_user(self, user_id: UUID, timezone: str | None) -> None:
        """Create the profile row for a new user."""
        response = (
            self.client.table("user_profiles")
            .insert({"user_id": str(user_id), "timezone": timezone})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user profile")

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Merge the given columns into the profile row."""
        response = (
            self.client.table("user_profiles")
            .update(changes)
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user profile")
        return _parse_profile(response.data[0])

    def save_goal(self, user_id: UUID, goal: UserGoal) -> None:
        """Upsert the goal row for a user."""
        payload: dict[str, object] = {
            "user_id": str(user_id),
            "type": goal.type,
            "calculation_strategy": goal.calculation_strategy,
            "adjustment_percentage": goal.adjustment_percentage,
            "split": None,
            "protein_per_bodyweight": None,
            "remaining_split": None,
        }
        if isinstance(goal, PercentageGoal) and goal.split:
            payload["split"] = {
                "protein": goal.split.protein,
                "carbs": goal.split.carbs,
                "fat": goal.split.fat,
            }
        if isinstance(goal, BodyweightGoal):
            payload["protein_per_bodyweight"] = goal.protein_per_bodyweight
            if goal.remaining_split:
                payload["remaining_split"] = {
                    "carbs": goal.remaining_split.carbs,
                    "fat": goal.remaining_split.fat,
                }
        response = (
            self.client.table("user_goals")
            .upsert(payload, on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save user goal")

    def list_user_ids(self) -> list[UUID]:
        """Return the ids of all users with a profile."""
        response = self.client.table("user_profiles").select("user_id").execute()
        return [UUID(row["user_id"]) for row in response.data or []]


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        name=row.get("name"),
        age=row.get("age"),
        gender=row.get("gender"),
        units=row.get("units"),
        height=_optional_float(row.get("height")),
        weight=_optional_float(row.get("weight")),
        activity_level=row.get("activity_level"),
        timezone=row.get("timezone"),
    )


def _parse_goal(row: dict[str, object]) -> UserGoal | None:
    goal_type = row.get("type")
    if not goal_type:
        return None
    strategy = row.get("calculation_strategy") or PERCENTAGE_STRATEGY
    adjustment = float(row.get("adjustment_percentage") or 0.0)
    if strategy == PERCENTAGE_STRATEGY:
        split = row.get("split")
        return PercentageGoal(
            type=goal_type,
            adjustment_percentage=adjustment,
            split=MacroSplit(
                protein=float(split["protein"]),
                carbs=float(split["carbs"]),
                fat=float(split["fat"]),
            )
            if isinstance(split, dict)
            else None,
        )
    if strategy == BODYWEIGHT_STRATEGY:
        remaining = row.get("remaining_split")
        return BodyweightGoal(
            type=goal_type,
            adjustment_percentage=adjustment,
            protein_per_bodyweight=_optional_float(row.get("protein_per_bodyweight")),
            remaining_split=RemainingSplit(
                carbs=float(remaining["carbs"]), fat=float(remaining["fat"])
            )
            if isinstance(remaining, dict)
            else None,
        )
    return UnrecognizedGoal(
        type=goal_type, calculation_strategy=strategy, adjustment_percentage=adjustment
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
