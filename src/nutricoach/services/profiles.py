"""User profile and goal management."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutricoach.calculations.constants import (
    DEFAULT_PROTEIN_TARGET,
    DEFAULT_REMAINING_SPLIT,
    GOAL_BASED_PROTEIN_TARGETS,
    GOAL_BASED_REMAINING_SPLITS,
    GOAL_PRESETS,
)
from nutricoach.calculations.macro_split import recommended_macro_split
from nutricoach.calculations.targets import TargetBreakdown, compute_target_breakdown
from nutricoach.domain.profile import (
    BODYWEIGHT_STRATEGY,
    BodyweightGoal,
    PercentageGoal,
    UserAccount,
    UserGoal,
    UserProfile,
)

_logger = logging.getLogger(__name__)

_PROFILE_FIELDS = frozenset(field.name for field in dataclasses.fields(UserProfile))


class ProfileRepository(Protocol):
    """Persistence interface for profiles and goals."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if the user exists."""

    def get_goal(self, user_id: UUID) -> UserGoal | None:
        """Return the user's goal, if one is set."""

    def create_user(self, user_id: UUID, timezone: str | None) -> None:
        """Create an empty profile for a new user."""

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Merge changes into the stored profile and return it."""

    def save_goal(self, user_id: UUID, goal: UserGoal) -> None:
        """Replace the user's goal."""

    def list_user_ids(self) -> list[UUID]:
        """Return every known user id."""


@dataclass
class ProfileService:
    """Application service for profiles, goals and targets."""

    repository: ProfileRepository
    default_timezone: str = "UTC"

    def ensure_user(self, user_id: UUID, timezone: str | None = None) -> UserAccount:
        """Create the user with an empty profile if needed."""
        if self.repository.get_profile(user_id) is None:
            self.repository.create_user(user_id, timezone or self.default_timezone)
            _logger.info("Created profile for user %s", user_id)
        return self.get_user(user_id)

    def get_user(self, user_id: UUID) -> UserAccount:
        """Return the user's current profile and goal."""
        return UserAccount(
            id=user_id,
            profile=self.repository.get_profile(user_id),
            goal=self.repository.get_goal(user_id),
        )

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Merge known profile fields into the stored profile."""
        unknown = set(changes) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")
        account = self.ensure_user(user_id)
        if not changes and account.profile is not None:
            return account.profile
        return self.repository.update_profile(user_id, changes)

    def set_goal(self, user_id: UUID, goal: UserGoal) -> UserGoal:
        """Replace the user's goal."""
        self.ensure_user(user_id)
        self.repository.save_goal(user_id, goal)
        return goal

    def apply_goal_preset(self, user_id: UUID, goal_type: str) -> UserGoal:
        """Replace the user's goal with the defaults for ``goal_type``."""
        return self.set_goal(user_id, goal_from_preset(goal_type))

    def list_user_ids(self) -> list[UUID]:
        """Return every known user id."""
        return self.repository.list_user_ids()

    def timezone_for(self, user_id: UUID) -> str:
        """Return the user's timezone or the configured default."""
        profile = self.repository.get_profile(user_id)
        if profile and profile.timezone:
            return profile.timezone
        return self.default_timezone

    def target_breakdown(self, user_id: UUID) -> TargetBreakdown | None:
        """Return the user's target with its intermediate values."""
        account = self.get_user(user_id)
        if account.profile is None or account.goal is None:
            return None
        return compute_target_breakdown(account.profile, account.goal)


def goal_from_preset(goal_type: str) -> UserGoal:
    """Build a fully specified goal from the presets for a goal type."""
    preset = GOAL_PRESETS.get(goal_type)
    if preset is None:
        raise ValueError(f"Unknown goal type: {goal_type}")
    if preset.calculation_strategy == BODYWEIGHT_STRATEGY:
        return BodyweightGoal(
            type=goal_type,
            adjustment_percentage=preset.adjustment_percentage,
            protein_per_bodyweight=GOAL_BASED_PROTEIN_TARGETS.get(
                goal_type, DEFAULT_PROTEIN_TARGET
            ),
            remaining_split=GOAL_BASED_REMAINING_SPLITS.get(
                goal_type, DEFAULT_REMAINING_SPLIT
            ),
        )
    goal = PercentageGoal(
        type=goal_type, adjustment_percentage=preset.adjustment_percentage
    )
    return dataclasses.replace(goal, split=recommended_macro_split(goal))


def is_profile_complete(profile: UserProfile | None) -> bool:
    """True when the profile has everything BMR needs."""
    if profile is None:
        return False
    return all((profile.age, profile.gender, profile.height, profile.weight))
