"""Models for LLM meal extraction results."""

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from nutricoach.calculations.numbers import coerce_number
from nutricoach.domain.macros import Macros
from nutricoach.domain.meals import MealItem

ExtractedMealCategory = Literal["breakfast", "lunch", "dinner", "snack", "unknown"]


class EstimatedMacros(BaseModel):
    """Macros of a food as reported by the model."""

    calories_kcal: float = Field(default=0.0, alias="caloriesKcal")
    protein_g: float = Field(default=0.0, alias="proteinG")
    carbohydrate_g: float = Field(default=0.0, alias="carbohydrateG")
    fat_g: float = Field(default=0.0, alias="fatG")

    model_config = {"populate_by_name": True}

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: object) -> float:
        return max(coerce_number(value), 0.0)

    def to_macros(self) -> Macros:
        """Convert to the domain macro quantity."""
        return Macros(
            calories=self.calories_kcal,
            protein=self.protein_g,
            carbs=self.carbohydrate_g,
            fat=self.fat_g,
        )


class EstimatedFoodItem(BaseModel):
    """A single food recognised in a meal."""

    name: str
    macros: EstimatedMacros


class MealEstimate(BaseModel):
    """Structured meal extracted from text, a transcript or a photo."""

    meal_description: str = Field(alias="mealDescription")
    meal_category: ExtractedMealCategory = Field(
        default="unknown", alias="mealCategory"
    )
    items: list[EstimatedFoodItem] = Field(default_factory=list)
    total_macros: EstimatedMacros = Field(
        default_factory=EstimatedMacros, alias="totalMacros"
    )

    model_config = {"populate_by_name": True}

    def to_meal_items(self) -> list[MealItem]:
        """Convert the recognised foods into loggable meal items."""
        return [
            MealItem(id=uuid4().hex, name=item.name, macros=item.macros.to_macros())
            for item in self.items
        ]


class MacroEstimate(BaseModel):
    """Flat macro estimate for a free-text food description."""

    estimated_kcal: float = Field(default=0.0, alias="estimatedKcal")
    estimated_protein_grams: float = Field(default=0.0, alias="estimatedProteinGrams")
    estimated_carb_grams: float = Field(default=0.0, alias="estimatedCarbGrams")
    estimated_fat_grams: float = Field(default=0.0, alias="estimatedFatGrams")

    model_config = {"populate_by_name": True}

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: object) -> float:
        return max(coerce_number(value), 0.0)

    def to_macros(self) -> Macros:
        """Convert to the domain macro quantity."""
        return Macros(
            calories=self.estimated_kcal,
            protein=self.estimated_protein_grams,
            carbs=self.estimated_carb_grams,
            fat=self.estimated_fat_grams,
        )
