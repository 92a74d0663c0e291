"""Macronutrient domain models."""

from dataclasses import dataclass

PROTEIN_CALORIES_PER_GRAM = 4
CARBS_CALORIES_PER_GRAM = 4
FAT_CALORIES_PER_GRAM = 9


@dataclass(frozen=True)
class Macros:
    """Calories (kcal) and macronutrients (grams).

    Used for a single food item, a whole meal, a daily total or a daily
    target. Computed targets hold integers; logged food may hold floats.
    """

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MacroSplit:
    """Fractions of calories allocated to each macronutrient."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class RemainingSplit:
    """Carbs/fat fractions of the calories left after protein."""

    carbs: float
    fat: float


@dataclass(frozen=True)
class MacroTarget:
    """Recommended fraction with an acceptable range."""

    min: float
    max: float
    target: float


@dataclass(frozen=True)
class MacroSplitRecommendation:
    """Recommended split with per-macro ranges."""

    protein: MacroTarget
    carbs: MacroTarget
    fat: MacroTarget

    def target_split(self) -> MacroSplit:
        """Return the target fractions as a plain split."""
        return MacroSplit(
            protein=self.protein.target,
            carbs=self.carbs.target,
            fat=self.fat.target,
        )
