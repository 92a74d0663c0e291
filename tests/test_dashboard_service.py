"""Tests for dashboard service."""

from datetime import UTC, date, datetime
from uuid import uuid4

from nutricoach.domain.macros import Macros
from nutricoach.domain.meals import MealEntry, MealItem
from nutricoach.domain.profile import BodyweightGoal, PercentageGoal, UserProfile
from nutricoach.services.dashboard import DashboardService
from nutricoach.services.meals import MealLogService
from nutricoach.services.profiles import ProfileService
from tests.conftest import InMemoryMealRepository, InMemoryProfileRepository


def _service() -> tuple[
    DashboardService, InMemoryProfileRepository, InMemoryMealRepository
]:
    profiles = InMemoryProfileRepository()
    meals = InMemoryMealRepository()
    service = DashboardService(ProfileService(profiles), MealLogService(meals))
    return service, profiles, meals


def test_dashboard_reports_remaining_macros() -> None:
    service, profiles, meals = _service()
    user_id = uuid4()
    profiles.profiles[user_id] = UserProfile(
        age=30,
        gender="male",
        units="metric",
        height=180,
        weight=80,
        activity_level="sedentary",
        timezone="UTC",
    )
    profiles.goals[user_id] = BodyweightGoal(
        type="weight-loss", adjustment_percentage=-0.2, protein_per_bodyweight=2.2
    )
    meals.entries[user_id] = [
        MealEntry.create(
            meal_category="lunch",
            description="bowl",
            items=[
                MealItem(
                    id="bowl",
                    name="bowl",
                    macros=Macros(calories=700, protein=60, carbs=80, fat=20),
                )
            ],
            timestamp=datetime(2024, 4, 1, 12, tzinfo=UTC),
        )
    ]

    dashboard = service.get_dashboard(user_id, date(2024, 4, 1))

    assert dashboard.profile_complete is True
    assert dashboard.bmr == 1780
    assert dashboard.calorie_target == 1709
    assert dashboard.target == Macros(calories=1709, protein=176, carbs=126, fat=56)
    assert dashboard.consumed == Macros(calories=700, protein=60, carbs=80, fat=20)
    assert dashboard.remaining == Macros(calories=1009, protein=116, carbs=46, fat=36)


def test_dashboard_without_goal_has_no_target() -> None:
    service, _, _ = _service()
    user_id = uuid4()

    dashboard = service.get_dashboard(user_id, date(2024, 4, 1))

    assert dashboard.target is None
    assert dashboard.remaining is None
    assert dashboard.bmr is None
    assert dashboard.profile_complete is False
    assert dashboard.consumed == Macros(calories=0, protein=0, carbs=0, fat=0)
    assert dashboard.timezone == "UTC"


def test_dashboard_with_incomplete_profile_flags_it() -> None:
    service, profiles, _ = _service()
    user_id = uuid4()
    profiles.profiles[user_id] = UserProfile(age=30, timezone="UTC")
    profiles.goals[user_id] = PercentageGoal(type="maintenance")

    dashboard = service.get_dashboard(user_id, date(2024, 4, 1))

    assert dashboard.profile_complete is False
    assert dashboard.bmr == 0
    assert dashboard.target == Macros(calories=0, protein=0, carbs=0, fat=0)


def test_dashboard_defaults_to_today_in_user_timezone() -> None:
    service, profiles, _ = _service()
    user_id = uuid4()
    profiles.profiles[user_id] = UserProfile(timezone="Pacific/Kiritimati")

    dashboard = service.get_dashboard(user_id)

    assert dashboard.timezone == "Pacific/Kiritimati"
    assert isinstance(dashboard.day, date)
