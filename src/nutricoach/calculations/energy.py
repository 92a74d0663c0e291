"""Energy expenditure estimates: BMR, TDEE and the daily calorie target."""

from nutricoach.calculations.constants import (
    ACTIVITY_MULTIPLIERS,
    DEFAULT_ACTIVITY_LEVEL,
)
from nutricoach.calculations.numbers import round_half_up
from nutricoach.calculations.units import height_in_cm, weight_in_kg
from nutricoach.domain.profile import UserGoal, UserProfile


def mifflin_st_jeor(
    weight_kg: float, height_cm: float, age: float, gender: str
) -> float:
    """Mifflin-St Jeor equation on metric inputs.

    "female" and "other" share the same constant.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return base + 5
    return base - 161


def calculate_bmr(profile: UserProfile) -> int:
    """Return the profile's BMR, or 0 when weight, height, age or gender is missing.

    0 means "cannot compute yet", never a real BMR.
    """
    weight_kg = weight_in_kg(profile)
    height_cm = height_in_cm(profile)
    if not weight_kg or not height_cm or not profile.age or not profile.gender:
        return 0
    return round_half_up(
        mifflin_st_jeor(weight_kg, height_cm, profile.age, profile.gender)
    )


def calculate_tdee(bmr: float, activity_level: str | None = None) -> int:
    """Scale BMR by the activity multiplier, sedentary when unset."""
    multiplier = ACTIVITY_MULTIPLIERS[activity_level or DEFAULT_ACTIVITY_LEVEL]
    return round_half_up(bmr * multiplier)


def calculate_calorie_target(tdee: float, goal: UserGoal) -> int:
    """Apply the goal's percentage adjustment to TDEE, floored at 0."""
    adjusted = tdee * (1 + goal.adjustment_percentage)
    return round_half_up(max(0, adjusted))
