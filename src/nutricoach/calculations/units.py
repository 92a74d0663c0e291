"""Unit conversion to the canonical metric representation."""

from nutricoach.domain.profile import UserProfile

KG_PER_LB = 0.453592
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs * KG_PER_LB


def inches_to_cm(inches: float) -> float:
    """Convert inches to centimeters."""
    return inches * CM_PER_INCH


def feet_and_inches_to_inches(feet: float, inches: float = 0) -> float:
    """Compose an imperial height into total inches."""
    return feet * INCHES_PER_FOOT + inches


def weight_in_kg(profile: UserProfile) -> float:
    """Return the profile weight in kg, or 0 when unknown."""
    if not profile.weight:
        return 0
    if profile.units == "imperial":
        return lbs_to_kg(profile.weight)
    return profile.weight


def height_in_cm(profile: UserProfile) -> float:
    """Return the profile height in cm, or 0 when unknown."""
    if not profile.height:
        return 0
    if profile.units == "imperial":
        return inches_to_cm(profile.height)
    return profile.height
