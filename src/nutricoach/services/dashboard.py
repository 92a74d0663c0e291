"""Daily progress against the macro target."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from nutricoach.domain.macros import Macros
from nutricoach.services.meals import MealLogService, today_in
from nutricoach.services.profiles import ProfileService, is_profile_complete


@dataclass(frozen=True)
class Dashboard:
    """Consumed versus target macros for one local day."""

    day: date
    timezone: str
    consumed: Macros
    target: Macros | None
    remaining: Macros | None
    bmr: int | None
    tdee: int | None
    calorie_target: int | None
    profile_complete: bool


@dataclass
class DashboardService:
    """Combines a user's target with what they logged on a day."""

    profile_service: ProfileService
    meal_log_service: MealLogService

    def get_dashboard(self, user_id: UUID, day: date | None = None) -> Dashboard:
        """Return the dashboard for ``day``, today in the user's timezone by default."""
        account = self.profile_service.ensure_user(user_id)
        timezone_name = self.profile_service.timezone_for(user_id)
        resolved_day = day or today_in(timezone_name)
        consumed = self.meal_log_service.get_daily_total(
            user_id, resolved_day, timezone_name
        )
        breakdown = self.profile_service.target_breakdown(user_id)
        target = breakdown.macros if breakdown else None
        return Dashboard(
            day=resolved_day,
            timezone=timezone_name,
            consumed=consumed,
            target=target,
            remaining=_remaining(target, consumed) if target else None,
            bmr=breakdown.bmr if breakdown else None,
            tdee=breakdown.tdee if breakdown else None,
            calorie_target=breakdown.calorie_target if breakdown else None,
            profile_complete=is_profile_complete(account.profile),
        )


def _remaining(target: Macros, consumed: Macros) -> Macros:
    # Negative values mean the target was exceeded.
    return Macros(
        calories=target.calories - consumed.calories,
        protein=target.protein - consumed.protein,
        carbs=target.carbs - consumed.carbs,
        fat=target.fat - consumed.fat,
    )
