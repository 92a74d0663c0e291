"""Shared test fixtures."""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import pytest

from nutricoach.config import Settings
from nutricoach.containers import AppContainer
from nutricoach.domain.meals import MealEntry
from nutricoach.domain.profile import UserGoal, UserProfile
from nutricoach.domain.recaps import CachedRecap
from nutricoach.services.dashboard import DashboardService
from nutricoach.services.extraction import MealExtractionClient, MealExtractionService
from nutricoach.services.meals import MealLogService, MealRepository
from nutricoach.services.profiles import ProfileRepository, ProfileService
from nutricoach.services.recaps import RecapCacheRepository, RecapService

ADMIN_TOKEN = "admin-token"


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    goals: dict[UUID, UserGoal] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def get_goal(self, user_id: UUID) -> UserGoal | None:
        return self.goals.get(user_id)

    def create_user(self, user_id: UUID, timezone: str | None) -> None:
        self.profiles[user_id] = UserProfile(timezone=timezone)

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        profile = dataclasses.replace(self.profiles[user_id], **changes)
        self.profiles[user_id] = profile
        return profile

    def save_goal(self, user_id: UUID, goal: UserGoal) -> None:
        self.goals[user_id] = goal

    def list_user_ids(self) -> list[UUID]:
        return list(self.profiles)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    entries: dict[UUID, list[MealEntry]] = field(default_factory=dict)

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        return sorted(
            (
                entry
                for entry in self.entries.get(user_id, [])
                if start <= entry.timestamp < end
            ),
            key=lambda entry: entry.timestamp,
        )

    def get_entry(self, user_id: UUID, entry_id: UUID) -> MealEntry | None:
        for entry in self.entries.get(user_id, []):
            if entry.id == entry_id:
                return entry
        return None

    def add_entry(self, user_id: UUID, entry: MealEntry) -> None:
        self.entries.setdefault(user_id, []).append(entry)

    def replace_entry(self, user_id: UUID, entry: MealEntry) -> None:
        self.entries[user_id] = [
            entry if current.id == entry.id else current
            for current in self.entries.get(user_id, [])
        ]

    def delete_entries(self, user_id: UUID, entry_ids: list[UUID]) -> None:
        removed = set(entry_ids)
        self.entries[user_id] = [
            entry for entry in self.entries.get(user_id, []) if entry.id not in removed
        ]


@dataclass
class InMemoryRecapCacheRepository(RecapCacheRepository):
    """In-memory recap cache for tests."""

    recaps: dict[tuple[UUID, str], CachedRecap] = field(default_factory=dict)

    def save_cached_recap(self, recap: CachedRecap) -> None:
        self.recaps[(recap.user_id, recap.period)] = recap

    def list_cached_recaps(self, user_id: UUID) -> list[CachedRecap]:
        return [recap for key, recap in self.recaps.items() if key[0] == user_id]


@dataclass
class FakeMealExtractionClient(MealExtractionClient):
    """Fake extraction client returning canned payloads per schema name."""

    responses: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "meal_estimate": {
                "mealDescription": "Chicken with rice",
                "mealCategory": "lunch",
                "items": [
                    {
                        "name": "grilled chicken breast",
                        "macros": {
                            "caloriesKcal": 280,
                            "proteinG": 52,
                            "carbohydrateG": 0,
                            "fatG": 6,
                        },
                    },
                    {
                        "name": "white rice",
                        "macros": {
                            "caloriesKcal": 205,
                            "proteinG": 4,
                            "carbohydrateG": 45,
                            "fatG": 0.5,
                        },
                    },
                ],
                "totalMacros": {
                    "caloriesKcal": 485,
                    "proteinG": 56,
                    "carbohydrateG": 45,
                    "fatG": 6.5,
                },
            },
            "macro_estimate": {
                "estimatedKcal": 95,
                "estimatedProteinGrams": 0.5,
                "estimatedCarbGrams": 25,
                "estimatedFatGrams": 0.3,
            },
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "schema_name": schema_name,
                "image_data_url": image_data_url,
            }
        )
        if self.error is not None:
            raise self.error
        return self.responses[schema_name]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token=ADMIN_TOKEN,
        openai_api_key="openai-key",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def recap_repository() -> InMemoryRecapCacheRepository:
    return InMemoryRecapCacheRepository()


@pytest.fixture
def extraction_client() -> FakeMealExtractionClient:
    return FakeMealExtractionClient()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def meal_log_service(meal_repository: InMemoryMealRepository) -> MealLogService:
    return MealLogService(meal_repository)


@pytest.fixture
def recap_service(
    profile_service: ProfileService,
    meal_log_service: MealLogService,
    recap_repository: InMemoryRecapCacheRepository,
) -> RecapService:
    return RecapService(
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        cache_repository=recap_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    profile_service: ProfileService,
    meal_log_service: MealLogService,
    recap_service: RecapService,
    extraction_client: FakeMealExtractionClient,
) -> AppContainer:
    extraction_service = MealExtractionService(
        client=extraction_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        dashboard_service=DashboardService(profile_service, meal_log_service),
        extraction_service=extraction_service,
        recap_service=recap_service,
        close_resources=close_resources,
    )
