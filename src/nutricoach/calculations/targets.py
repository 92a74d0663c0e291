"""Daily macro target orchestration."""

from dataclasses import dataclass

from nutricoach.calculations.energy import (
    calculate_bmr,
    calculate_calorie_target,
    calculate_tdee,
)
from nutricoach.calculations.macro_split import (
    macros_by_bodyweight,
    macros_by_percentage,
)
from nutricoach.domain.macros import Macros
from nutricoach.domain.profile import (
    BODYWEIGHT_STRATEGY,
    PERCENTAGE_STRATEGY,
    UserGoal,
    UserProfile,
)


@dataclass(frozen=True)
class TargetBreakdown:
    """Intermediate values of a target computation."""

    bmr: int
    tdee: int
    calorie_target: int
    macros: Macros | None


def get_macro_recommendation(
    goal: UserGoal | None,
    profile: UserProfile | None,
    calorie_target: int | None,
) -> Macros | None:
    """Dispatch to the macro strategy named by the goal.

    Unknown strategies fall back to the default percentage split.
    """
    if goal is None or profile is None or calorie_target is None:
        return None

    if goal.calculation_strategy == BODYWEIGHT_STRATEGY:
        return macros_by_bodyweight(goal, profile, calorie_target)
    if goal.calculation_strategy == PERCENTAGE_STRATEGY:
        return macros_by_percentage(calorie_target, goal.split)
    return macros_by_percentage(calorie_target)


def compute_target_breakdown(
    profile: UserProfile, goal: UserGoal
) -> TargetBreakdown:
    """Run BMR -> TDEE -> calorie target -> macro strategy."""
    bmr = calculate_bmr(profile)
    tdee = calculate_tdee(bmr, profile.activity_level)
    calorie_target = calculate_calorie_target(tdee, goal)
    macros = get_macro_recommendation(goal, profile, calorie_target)
    return TargetBreakdown(
        bmr=bmr, tdee=tdee, calorie_target=calorie_target, macros=macros
    )


def compute_target_macros(
    profile: UserProfile | None, goal: UserGoal | None
) -> Macros | None:
    """Return the user's daily macro target, or None without a profile and goal."""
    if profile is None or goal is None:
        return None
    return compute_target_breakdown(profile, goal).macros
