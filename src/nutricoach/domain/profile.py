"""Domain models for user profiles and goals."""

from dataclasses import dataclass
from typing import Literal
from uuid import UUID

from nutricoach.domain.macros import MacroSplit, RemainingSplit

Gender = Literal["male", "female", "other"]
UnitSystem = Literal["metric", "imperial"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "veryActive"]
GoalType = Literal["weight-loss", "weight-gain", "muscle-gain", "maintenance"]

PERCENTAGE_STRATEGY = "calories-percentage-based"
BODYWEIGHT_STRATEGY = "bodyweight"

GOAL_TYPES: tuple[str, ...] = (
    "weight-loss",
    "weight-gain",
    "muscle-gain",
    "maintenance",
)


@dataclass(frozen=True)
class UserProfile:
    """Demographic and biometric attributes of a user.

    Height is centimeters for metric profiles and total inches for imperial
    ones; weight is kilograms or pounds respectively.
    """

    name: str | None = None
    age: int | None = None
    gender: Gender | None = None
    units: UnitSystem | None = None
    height: float | None = None
    weight: float | None = None
    activity_level: ActivityLevel | None = None
    timezone: str | None = None


@dataclass(frozen=True)
class PercentageGoal:
    """Goal whose macros are fractions of the calorie target."""

    type: str
    adjustment_percentage: float = 0.0
    split: MacroSplit | None = None
    calculation_strategy: Literal["calories-percentage-based"] = PERCENTAGE_STRATEGY


@dataclass(frozen=True)
class BodyweightGoal:
    """Goal with protein anchored to bodyweight.

    ``protein_per_bodyweight`` is grams per kg for metric profiles and grams
    per lb for imperial ones.
    """

    type: str
    adjustment_percentage: float = 0.0
    protein_per_bodyweight: float | None = None
    remaining_split: RemainingSplit | None = None
    calculation_strategy: Literal["bodyweight"] = BODYWEIGHT_STRATEGY


@dataclass(frozen=True)
class UnrecognizedGoal:
    """Goal stored with a strategy tag this version does not know."""

    type: str
    calculation_strategy: str
    adjustment_percentage: float = 0.0


UserGoal = PercentageGoal | BodyweightGoal | UnrecognizedGoal


@dataclass(frozen=True)
class UserAccount:
    """A user with the current profile and goal, if set."""

    id: UUID
    profile: UserProfile | None
    goal: UserGoal | None
