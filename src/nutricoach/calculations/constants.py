"""Reference tables for target calculations."""

from dataclasses import dataclass

from nutricoach.domain.macros import (
    MacroSplit,
    MacroSplitRecommendation,
    MacroTarget,
    RemainingSplit,
)
from nutricoach.domain.profile import BODYWEIGHT_STRATEGY, PERCENTAGE_STRATEGY

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "veryActive": 1.9,
}

ACTIVITY_LEVEL_LABELS: dict[str, str] = {
    "sedentary": "Sedentary (little to no exercise)",
    "light": "Lightly active (light exercise/sports 1-3 days/week)",
    "moderate": "Moderately active (moderate exercise/sports 3-5 days/week)",
    "active": "Very active (hard exercise/sports 6-7 days a week)",
    "veryActive": "Super active (very hard exercise/physical job & exercise 2x/day)",
}

DEFAULT_ACTIVITY_LEVEL = "sedentary"

WEIGHT_LOSS_ADJUSTMENT = -0.20
WEIGHT_GAIN_ADJUSTMENT = 0.15
MUSCLE_GAIN_ADJUSTMENT = 0.10
MAINTENANCE_ADJUSTMENT = 0.0

DEFAULT_MACRO_SPLIT = MacroSplit(protein=0.30, carbs=0.40, fat=0.30)

DEFAULT_REMAINING_SPLIT = RemainingSplit(carbs=0.5, fat=0.5)

GOAL_BASED_REMAINING_SPLITS: dict[str, RemainingSplit] = {
    "weight-loss": RemainingSplit(carbs=0.50, fat=0.50),
    "muscle-gain": RemainingSplit(carbs=0.65, fat=0.35),
    "maintenance": RemainingSplit(carbs=0.55, fat=0.45),
}

GOAL_BASED_MACRO_SPLITS: dict[str, MacroSplitRecommendation] = {
    "weight-loss": MacroSplitRecommendation(
        protein=MacroTarget(min=0.35, max=0.45, target=0.40),
        carbs=MacroTarget(min=0.25, max=0.35, target=0.30),
        fat=MacroTarget(min=0.25, max=0.35, target=0.30),
    ),
    "weight-gain": MacroSplitRecommendation(
        protein=MacroTarget(min=0.25, max=0.35, target=0.30),
        carbs=MacroTarget(min=0.45, max=0.55, target=0.50),
        fat=MacroTarget(min=0.20, max=0.30, target=0.20),
    ),
    "muscle-gain": MacroSplitRecommendation(
        protein=MacroTarget(min=0.30, max=0.40, target=0.35),
        carbs=MacroTarget(min=0.40, max=0.50, target=0.45),
        fat=MacroTarget(min=0.20, max=0.30, target=0.20),
    ),
    "maintenance": MacroSplitRecommendation(
        protein=MacroTarget(min=0.25, max=0.35, target=0.30),
        carbs=MacroTarget(min=0.35, max=0.45, target=0.40),
        fat=MacroTarget(min=0.25, max=0.35, target=0.30),
    ),
}

# grams of protein per kg of bodyweight
GOAL_BASED_PROTEIN_TARGETS: dict[str, float] = {
    "weight-loss": 1.8,
    "muscle-gain": 1.6,
    "maintenance": 1.2,
}

DEFAULT_PROTEIN_TARGET = 1.2

TARGET_TOLERANCE = 0.10


@dataclass(frozen=True)
class GoalPreset:
    """Defaults applied when a user picks a goal type."""

    description: str
    calculation_strategy: str
    adjustment_percentage: float


GOAL_PRESETS: dict[str, GoalPreset] = {
    "weight-loss": GoalPreset(
        description="Lose weight at a sustainable pace.",
        calculation_strategy=PERCENTAGE_STRATEGY,
        adjustment_percentage=WEIGHT_LOSS_ADJUSTMENT,
    ),
    "weight-gain": GoalPreset(
        description="Gain weight and build mass.",
        calculation_strategy=PERCENTAGE_STRATEGY,
        adjustment_percentage=WEIGHT_GAIN_ADJUSTMENT,
    ),
    "muscle-gain": GoalPreset(
        description="Build muscle while minimizing fat gain.",
        calculation_strategy=BODYWEIGHT_STRATEGY,
        adjustment_percentage=MUSCLE_GAIN_ADJUSTMENT,
    ),
    "maintenance": GoalPreset(
        description="Maintain your current weight and physique.",
        calculation_strategy=PERCENTAGE_STRATEGY,
        adjustment_percentage=MAINTENANCE_ADJUSTMENT,
    ),
}
