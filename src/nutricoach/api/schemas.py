"""Pydantic request and response models for the HTTP API."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from nutricoach.calculations.units import feet_and_inches_to_inches
from nutricoach.config import is_valid_timezone
from nutricoach.domain.macros import Macros, MacroSplit, RemainingSplit
from nutricoach.domain.meals import MealCategory, MealEntry, MealItem
from nutricoach.domain.profile import (
    ActivityLevel,
    BodyweightGoal,
    Gender,
    GoalType,
    PercentageGoal,
    UnitSystem,
    UserGoal,
    UserProfile,
)
from nutricoach.domain.recaps import CachedRecap, RecapMetrics
from nutricoach.services.dashboard import Dashboard
from nutricoach.services.recaps import RecapRunSummary

_SPLIT_SUM_TOLERANCE = 0.01


class MacrosModel(BaseModel):
    """Calories and macro grams."""

    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)

    def to_domain(self) -> Macros:
        return Macros(
            calories=self.calories, protein=self.protein, carbs=self.carbs, fat=self.fat
        )

    @classmethod
    def from_domain(cls, macros: Macros) -> "MacrosModel":
        return cls(
            calories=macros.calories,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
        )


class SignedMacrosModel(BaseModel):
    """Computed macros; targets and remainders may be negative."""

    calories: float
    protein: float
    carbs: float
    fat: float

    @classmethod
    def from_domain(cls, macros: Macros) -> "SignedMacrosModel":
        return cls(
            calories=macros.calories,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
        )


class MealItemModel(BaseModel):
    """A food inside a meal."""

    id: str | None = None
    name: str = Field(min_length=1)
    macros: MacrosModel
    servings: float = Field(default=1.0, gt=0)
    serving_size: str = ""

    def to_domain(self) -> MealItem:
        return MealItem(
            id=self.id or uuid4().hex,
            name=self.name,
            macros=self.macros.to_domain(),
            servings=self.servings,
            serving_size=self.serving_size,
        )


class MealEntryRequest(BaseModel):
    """Body for creating or replacing a meal entry."""

    meal_category: MealCategory
    description: str = ""
    items: list[MealItemModel] = Field(default_factory=list)

    def domain_items(self) -> list[MealItem]:
        return [item.to_domain() for item in self.items]


class MealEntryResponse(BaseModel):
    """A stored meal entry."""

    id: UUID
    meal_category: MealCategory
    description: str
    items: list[MealItemModel]
    macros: MacrosModel
    timestamp: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, entry: MealEntry) -> "MealEntryResponse":
        return cls(
            id=entry.id,
            meal_category=entry.meal_category,
            description=entry.description,
            items=[
                MealItemModel(
                    id=item.id,
                    name=item.name,
                    macros=MacrosModel.from_domain(item.macros),
                    servings=item.servings,
                    serving_size=item.serving_size,
                )
                for item in entry.items
            ],
            macros=MacrosModel.from_domain(entry.macros),
            timestamp=entry.timestamp,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged.

    Imperial heights may be sent as ``height_feet`` and ``height_inches``
    instead of total inches.
    """

    name: str | None = None
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    units: UnitSystem | None = None
    height: float | None = Field(default=None, gt=0)
    height_feet: int | None = Field(default=None, ge=0)
    height_inches: float | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_timezone(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value

    def to_changes(self) -> dict[str, object]:
        """Return only the fields the client sent."""
        changes = self.model_dump(
            exclude_unset=True, exclude={"height_feet", "height_inches"}
        )
        if self.height is None and self.height_feet is not None:
            changes["height"] = feet_and_inches_to_inches(
                self.height_feet, self.height_inches or 0
            )
        return changes


class ProfileResponse(BaseModel):
    """A user's profile."""

    user_id: UUID
    name: str | None
    age: int | None
    gender: Gender | None
    units: UnitSystem | None
    height: float | None
    weight: float | None
    activity_level: ActivityLevel | None
    timezone: str | None

    @classmethod
    def from_domain(
        cls, user_id: UUID, profile: UserProfile | None
    ) -> "ProfileResponse":
        profile = profile or UserProfile()
        return cls(
            user_id=user_id,
            name=profile.name,
            age=profile.age,
            gender=profile.gender,
            units=profile.units,
            height=profile.height,
            weight=profile.weight,
            activity_level=profile.activity_level,
            timezone=profile.timezone,
        )


class SplitModel(BaseModel):
    """Fractions of calories per macro."""

    protein: float = Field(ge=0, le=1)
    carbs: float = Field(ge=0, le=1)
    fat: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _check_sum(self) -> "SplitModel":
        if abs(self.protein + self.carbs + self.fat - 1) > _SPLIT_SUM_TOLERANCE:
            raise ValueError("split fractions must sum to 1")
        return self


class RemainingSplitModel(BaseModel):
    """Fractions of the non-protein calories for carbs and fat."""

    carbs: float = Field(ge=0, le=1)
    fat: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _check_sum(self) -> "RemainingSplitModel":
        if abs(self.carbs + self.fat - 1) > _SPLIT_SUM_TOLERANCE:
            raise ValueError("remaining split fractions must sum to 1")
        return self


class GoalRequest(BaseModel):
    """Body for replacing a user's goal."""

    type: GoalType
    calculation_strategy: Literal["calories-percentage-based", "bodyweight"]
    adjustment_percentage: float = Field(default=0.0, ge=-1, le=1)
    split: SplitModel | None = None
    protein_per_bodyweight: float | None = Field(default=None, gt=0)
    remaining_split: RemainingSplitModel | None = None

    def to_domain(self) -> UserGoal:
        if self.calculation_strategy == "bodyweight":
            return BodyweightGoal(
                type=self.type,
                adjustment_percentage=self.adjustment_percentage,
                protein_per_bodyweight=self.protein_per_bodyweight,
                remaining_split=RemainingSplit(
                    carbs=self.remaining_split.carbs, fat=self.remaining_split.fat
                )
                if self.remaining_split
                else None,
            )
        return PercentageGoal(
            type=self.type,
            adjustment_percentage=self.adjustment_percentage,
            split=MacroSplit(
                protein=self.split.protein, carbs=self.split.carbs, fat=self.split.fat
            )
            if self.split
            else None,
        )


class GoalPresetRequest(BaseModel):
    """Body for applying the default goal for a goal type."""

    type: GoalType


class GoalResponse(BaseModel):
    """A user's goal as stored."""

    type: str
    calculation_strategy: str
    adjustment_percentage: float
    split: SplitModel | None = None
    protein_per_bodyweight: float | None = None
    remaining_split: RemainingSplitModel | None = None

    @classmethod
    def from_domain(cls, goal: UserGoal) -> "GoalResponse":
        response = cls(
            type=goal.type,
            calculation_strategy=goal.calculation_strategy,
            adjustment_percentage=goal.adjustment_percentage,
        )
        if isinstance(goal, PercentageGoal) and goal.split:
            response.split = SplitModel.model_construct(
                protein=goal.split.protein, carbs=goal.split.carbs, fat=goal.split.fat
            )
        if isinstance(goal, BodyweightGoal):
            response.protein_per_bodyweight = goal.protein_per_bodyweight
            if goal.remaining_split:
                response.remaining_split = RemainingSplitModel.model_construct(
                    carbs=goal.remaining_split.carbs, fat=goal.remaining_split.fat
                )
        return response


class TargetsResponse(BaseModel):
    """Daily target with its intermediate values."""

    bmr: int
    tdee: int
    calorie_target: int
    macros: SignedMacrosModel | None


class DashboardResponse(BaseModel):
    """Consumed versus target for one day."""

    day: date
    timezone: str
    consumed: MacrosModel
    target: SignedMacrosModel | None
    remaining: SignedMacrosModel | None
    bmr: int | None
    tdee: int | None
    calorie_target: int | None
    profile_complete: bool

    @classmethod
    def from_domain(cls, dashboard: Dashboard) -> "DashboardResponse":
        return cls(
            day=dashboard.day,
            timezone=dashboard.timezone,
            consumed=MacrosModel.from_domain(dashboard.consumed),
            target=SignedMacrosModel.from_domain(dashboard.target)
            if dashboard.target
            else None,
            remaining=SignedMacrosModel.from_domain(dashboard.remaining)
            if dashboard.remaining
            else None,
            bmr=dashboard.bmr,
            tdee=dashboard.tdee,
            calorie_target=dashboard.calorie_target,
            profile_complete=dashboard.profile_complete,
        )


class RecapResponse(BaseModel):
    """Adherence metrics for a date range."""

    total_days: int
    target_met_count: int
    target_met_percentage: float

    @classmethod
    def from_domain(cls, metrics: RecapMetrics) -> "RecapResponse":
        return cls(
            total_days=metrics.total_days,
            target_met_count=metrics.target_met_days.count,
            target_met_percentage=metrics.target_met_days.percentage,
        )


class CachedRecapResponse(RecapResponse):
    """Recap stored by a batch job."""

    period: str
    last_updated: datetime

    @classmethod
    def from_cached(cls, recap: CachedRecap) -> "CachedRecapResponse":
        return cls(
            period=recap.period,
            last_updated=recap.last_updated,
            total_days=recap.metrics.total_days,
            target_met_count=recap.metrics.target_met_days.count,
            target_met_percentage=recap.metrics.target_met_days.percentage,
        )


class RecapRunResponse(BaseModel):
    """Outcome of a batch recap run."""

    period: str
    processed: int
    skipped: int
    failed: int

    @classmethod
    def from_summary(cls, summary: RecapRunSummary) -> "RecapRunResponse":
        return cls(
            period=summary.period,
            processed=len(summary.processed),
            skipped=len(summary.skipped),
            failed=len(summary.failed),
        )


class TextAnalysisRequest(BaseModel):
    """Typed meal description to analyze."""

    description: str = Field(min_length=1)


class TranscriptAnalysisRequest(BaseModel):
    """Voice note transcript to analyze."""

    transcript: str = Field(min_length=1)


class PhotoAnalysisRequest(BaseModel):
    """Base64-encoded meal photo to analyze."""

    image_base64: str = Field(min_length=1)
    note: str | None = None


class ActivityLevelInfo(BaseModel):
    """Activity level choice for profile forms."""

    value: str
    label: str
    multiplier: float


class GoalPresetInfo(BaseModel):
    """Goal type choice with the defaults it applies."""

    type: str
    description: str
    calculation_strategy: str
    adjustment_percentage: float


class ReferenceResponse(BaseModel):
    """Choices a client needs to build profile, goal and meal forms."""

    activity_levels: list[ActivityLevelInfo]
    goal_presets: list[GoalPresetInfo]
    meal_categories: list[str]
