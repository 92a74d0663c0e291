"""Macro split strategies: percentage-of-calories and bodyweight-anchored protein."""

from nutricoach.calculations.constants import (
    DEFAULT_MACRO_SPLIT,
    DEFAULT_PROTEIN_TARGET,
    DEFAULT_REMAINING_SPLIT,
    GOAL_BASED_MACRO_SPLITS,
    GOAL_BASED_PROTEIN_TARGETS,
    GOAL_BASED_REMAINING_SPLITS,
)
from nutricoach.calculations.numbers import round_half_up
from nutricoach.calculations.units import weight_in_kg
from nutricoach.domain.macros import (
    CARBS_CALORIES_PER_GRAM,
    FAT_CALORIES_PER_GRAM,
    PROTEIN_CALORIES_PER_GRAM,
    Macros,
    MacroSplit,
    RemainingSplit,
)
from nutricoach.domain.profile import BodyweightGoal, UserGoal, UserProfile


def grams_from_split(calories: float, split: MacroSplit) -> tuple[int, int, int]:
    """Convert calories to (protein, carbs, fat) grams, each rounded on its own."""
    protein = round_half_up(calories * split.protein / PROTEIN_CALORIES_PER_GRAM)
    carbs = round_half_up(calories * split.carbs / CARBS_CALORIES_PER_GRAM)
    fat = round_half_up(calories * split.fat / FAT_CALORIES_PER_GRAM)
    return protein, carbs, fat


def macros_by_percentage(
    calorie_target: int, split: MacroSplit | None = None
) -> Macros:
    """Split the calorie target by fractions (30/40/30 when no split is given)."""
    protein, carbs, fat = grams_from_split(calorie_target, split or DEFAULT_MACRO_SPLIT)
    return Macros(calories=calorie_target, protein=protein, carbs=carbs, fat=fat)


def resolve_remaining_split(goal: BodyweightGoal) -> RemainingSplit:
    """Explicit split, then the goal-type default, then 50/50."""
    if goal.remaining_split is not None:
        return goal.remaining_split
    return GOAL_BASED_REMAINING_SPLITS.get(goal.type, DEFAULT_REMAINING_SPLIT)


def resolve_protein_per_bodyweight(goal: BodyweightGoal) -> float:
    """Explicit factor, then the goal-type default, then the global default."""
    if goal.protein_per_bodyweight is not None:
        return goal.protein_per_bodyweight
    return GOAL_BASED_PROTEIN_TARGETS.get(goal.type, DEFAULT_PROTEIN_TARGET)


def macros_by_bodyweight(
    goal: BodyweightGoal, profile: UserProfile, calorie_target: int
) -> Macros | None:
    """Anchor protein to bodyweight and split the remaining calories.

    Returns None when the profile has no usable weight. Protein is rounded
    before the remaining calories are derived from it, and the returned
    calories are the target itself rather than a sum of the macros.
    """
    weight_kg = weight_in_kg(profile)
    if not weight_kg:
        return None

    factor = resolve_protein_per_bodyweight(goal)
    if profile.units == "imperial":
        protein = round_half_up(profile.weight * factor)
    else:
        protein = round_half_up(weight_kg * factor)

    remaining_calories = calorie_target - protein * PROTEIN_CALORIES_PER_GRAM
    remaining_split = resolve_remaining_split(goal)
    _, carbs, fat = grams_from_split(
        remaining_calories,
        MacroSplit(protein=0, carbs=remaining_split.carbs, fat=remaining_split.fat),
    )
    return Macros(calories=calorie_target, protein=protein, carbs=carbs, fat=fat)


def recommended_macro_split(goal: UserGoal | None) -> MacroSplit:
    """Return the split to suggest for a goal.

    An explicit percentage split wins; otherwise the goal type's target
    fractions, otherwise the default balanced split.
    """
    if goal is None:
        return DEFAULT_MACRO_SPLIT
    split = getattr(goal, "split", None)
    if split is not None:
        return split
    recommendation = GOAL_BASED_MACRO_SPLITS.get(goal.type)
    if recommendation is not None:
        return recommendation.target_split()
    return DEFAULT_MACRO_SPLIT
