"""Tests for BMR, TDEE and calorie target calculations."""

import pytest

from nutricoach.calculations.energy import (
    calculate_bmr,
    calculate_calorie_target,
    calculate_tdee,
)
from nutricoach.domain.profile import PercentageGoal, UserProfile


def test_bmr_metric_male() -> None:
    profile = UserProfile(
        age=30, gender="male", units="metric", height=180, weight=80
    )

    assert calculate_bmr(profile) == 1780


@pytest.mark.parametrize("gender", ["female", "other"])
def test_bmr_imperial_non_male(gender: str) -> None:
    profile = UserProfile(
        age=25, gender=gender, units="imperial", height=65, weight=135
    )

    assert calculate_bmr(profile) == 1358


@pytest.mark.parametrize(
    "missing", ["age", "gender", "height", "weight"]
)
def test_bmr_returns_zero_when_field_missing(missing: str) -> None:
    values = {
        "age": 30,
        "gender": "male",
        "units": "metric",
        "height": 180,
        "weight": 80,
    }
    values[missing] = None

    assert calculate_bmr(UserProfile(**values)) == 0


def test_bmr_without_units_is_treated_as_metric() -> None:
    profile = UserProfile(age=30, gender="male", height=180, weight=80)

    assert calculate_bmr(profile) == 1780


@pytest.mark.parametrize(
    ("bmr", "activity_level", "expected"),
    [
        (1800, "moderate", 2790),
        (1800, "sedentary", 2160),
        (1800, None, 2160),
        (1800, "active", 3105),
        (1800, "veryActive", 3420),
        (1788, "moderate", 2771),
    ],
)
def test_tdee(bmr: int, activity_level: str | None, expected: int) -> None:
    assert calculate_tdee(bmr, activity_level) == expected


def test_tdee_of_zero_bmr_is_zero() -> None:
    assert calculate_tdee(0, "active") == 0


@pytest.mark.parametrize(
    ("tdee", "adjustment", "expected"),
    [
        (2000, -0.2, 1600),
        (2000, 0.15, 2300),
        (2000, 0.1, 2200),
        (2000, 0.0, 2000),
        (2150.8, -0.2, 1721),
        (2000, -1.5, 0),
    ],
)
def test_calorie_target(tdee: float, adjustment: float, expected: int) -> None:
    goal = PercentageGoal(type="weight-loss", adjustment_percentage=adjustment)

    assert calculate_calorie_target(tdee, goal) == expected
