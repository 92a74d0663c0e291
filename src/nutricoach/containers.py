"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutricoach.adapters.openai_meal_client import OpenAIMealExtractionClient
from nutricoach.adapters.supabase_meal_repository import SupabaseMealRepository
from nutricoach.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutricoach.adapters.supabase_recap_repository import SupabaseRecapRepository
from nutricoach.config import Settings
from nutricoach.services.dashboard import DashboardService
from nutricoach.services.extraction import MealExtractionService
from nutricoach.services.meals import MealLogService
from nutricoach.services.profiles import ProfileService
from nutricoach.services.recaps import RecapService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    meal_log_service: MealLogService
    dashboard_service: DashboardService
    extraction_service: MealExtractionService
    recap_service: RecapService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(
        SupabaseProfileRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    meal_log_service = MealLogService(SupabaseMealRepository(supabase_client))
    openai_client = OpenAIMealExtractionClient.create(resolved_settings.openai_api_key)
    extraction_service = MealExtractionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    recap_service = RecapService(
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        cache_repository=SupabaseRecapRepository(supabase_client),
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        dashboard_service=DashboardService(profile_service, meal_log_service),
        extraction_service=extraction_service,
        recap_service=recap_service,
        close_resources=close_resources,
    )
