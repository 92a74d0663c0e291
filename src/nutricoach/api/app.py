"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from nutricoach.api.admin import router as admin_router
from nutricoach.api.schemas import (
    ActivityLevelInfo,
    CachedRecapResponse,
    DashboardResponse,
    GoalPresetInfo,
    GoalPresetRequest,
    GoalRequest,
    GoalResponse,
    MacrosModel,
    MealEntryRequest,
    MealEntryResponse,
    PhotoAnalysisRequest,
    ProfileResponse,
    ProfileUpdate,
    RecapResponse,
    ReferenceResponse,
    SignedMacrosModel,
    TargetsResponse,
    TextAnalysisRequest,
    TranscriptAnalysisRequest,
)
from nutricoach.app_logging import configure_logging
from nutricoach.calculations.constants import (
    ACTIVITY_LEVEL_LABELS,
    ACTIVITY_MULTIPLIERS,
    GOAL_PRESETS,
)
from nutricoach.containers import AppContainer
from nutricoach.domain.extraction import MealEstimate
from nutricoach.domain.meals import MEAL_CATEGORIES
from nutricoach.domain.profile import GOAL_TYPES
from nutricoach.services.meals import today_in
from nutricoach.services.profiles import is_profile_complete


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    def _resolve_day(state: AppContainer, user_id: UUID, day: date | None) -> date:
        return day or today_in(state.profile_service.timezone_for(user_id))

    def _extraction_failed() -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Meal analysis failed, please try again.",
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/reference")
    async def reference() -> ReferenceResponse:
        """Return activity levels, goal presets and meal categories."""
        return ReferenceResponse(
            activity_levels=[
                ActivityLevelInfo(
                    value=level,
                    label=ACTIVITY_LEVEL_LABELS[level],
                    multiplier=multiplier,
                )
                for level, multiplier in ACTIVITY_MULTIPLIERS.items()
            ],
            goal_presets=[
                GoalPresetInfo(
                    type=goal_type,
                    description=GOAL_PRESETS[goal_type].description,
                    calculation_strategy=GOAL_PRESETS[goal_type].calculation_strategy,
                    adjustment_percentage=GOAL_PRESETS[goal_type].adjustment_percentage,
                )
                for goal_type in GOAL_TYPES
            ],
            meal_categories=list(MEAL_CATEGORIES),
        )

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> ProfileResponse:
        """Return the user's profile, creating an empty one on first access."""
        account = _container(request).profile_service.ensure_user(user_id)
        return ProfileResponse.from_domain(user_id, account.profile)

    @app.patch("/users/{user_id}/profile")
    async def update_profile(
        user_id: UUID, body: ProfileUpdate, request: Request
    ) -> ProfileResponse:
        """Merge the sent fields into the user's profile."""
        profile = _container(request).profile_service.update_profile(
            user_id, body.to_changes()
        )
        return ProfileResponse.from_domain(user_id, profile)

    @app.put("/users/{user_id}/goal")
    async def set_goal(
        user_id: UUID, body: GoalRequest, request: Request
    ) -> GoalResponse:
        """Replace the user's goal."""
        goal = _container(request).profile_service.set_goal(user_id, body.to_domain())
        return GoalResponse.from_domain(goal)

    @app.post("/users/{user_id}/goal/preset")
    async def apply_goal_preset(
        user_id: UUID, body: GoalPresetRequest, request: Request
    ) -> GoalResponse:
        """Replace the user's goal with the defaults for a goal type."""
        goal = _container(request).profile_service.apply_goal_preset(
            user_id, body.type
        )
        return GoalResponse.from_domain(goal)

    @app.get("/users/{user_id}/targets")
    async def get_targets(user_id: UUID, request: Request) -> TargetsResponse:
        """Return the user's daily target."""
        profile_service = _container(request).profile_service
        if not is_profile_complete(profile_service.get_user(user_id).profile):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Age, gender, height and weight are required for a target.",
            )
        breakdown = profile_service.target_breakdown(user_id)
        if breakdown is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile and goal are required for a target.",
            )
        return TargetsResponse(
            bmr=breakdown.bmr,
            tdee=breakdown.tdee,
            calorie_target=breakdown.calorie_target,
            macros=SignedMacrosModel.from_domain(breakdown.macros)
            if breakdown.macros
            else None,
        )

    @app.get("/users/{user_id}/dashboard")
    async def get_dashboard(
        user_id: UUID, request: Request, day: date | None = None
    ) -> DashboardResponse:
        """Return consumed versus target macros for a day."""
        dashboard = _container(request).dashboard_service.get_dashboard(user_id, day)
        return DashboardResponse.from_domain(dashboard)

    @app.get("/users/{user_id}/meals")
    async def list_meals(
        user_id: UUID, request: Request, day: date | None = None
    ) -> list[MealEntryResponse]:
        """Return the meals logged on a day (today by default)."""
        state = _container(request)
        timezone_name = state.profile_service.timezone_for(user_id)
        entries = state.meal_log_service.entries_for_day(
            user_id, _resolve_day(state, user_id, day), timezone_name
        )
        return [MealEntryResponse.from_domain(entry) for entry in entries]

    @app.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
    async def log_meal(
        user_id: UUID, body: MealEntryRequest, request: Request
    ) -> MealEntryResponse:
        """Log a meal at the current server time."""
        state = _container(request)
        state.profile_service.ensure_user(user_id)
        entry = state.meal_log_service.log_meal(
            user_id, body.meal_category, body.description, body.domain_items()
        )
        return MealEntryResponse.from_domain(entry)

    @app.put("/users/{user_id}/meals/{meal_id}")
    async def replace_meal(
        user_id: UUID, meal_id: UUID, body: MealEntryRequest, request: Request
    ) -> MealEntryResponse:
        """Replace a logged meal."""
        entry = _container(request).meal_log_service.replace_entry(
            user_id, meal_id, body.meal_category, body.description, body.domain_items()
        )
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return MealEntryResponse.from_domain(entry)

    @app.delete("/users/{user_id}/meals/{meal_id}")
    async def delete_meal(
        user_id: UUID, meal_id: UUID, request: Request
    ) -> dict[str, str]:
        """Delete a logged meal."""
        if not _container(request).meal_log_service.delete_entry(user_id, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    @app.delete("/users/{user_id}/meals")
    async def delete_meals_for_day(
        user_id: UUID, request: Request, day: date | None = None
    ) -> dict[str, int]:
        """Delete every meal logged on a day."""
        state = _container(request)
        deleted = state.meal_log_service.delete_entries_for_day(
            user_id,
            _resolve_day(state, user_id, day),
            state.profile_service.timezone_for(user_id),
        )
        return {"deleted": deleted}

    @app.post("/users/{user_id}/meals/analyze/text")
    async def analyze_text(
        user_id: UUID, body: TextAnalysisRequest, request: Request
    ) -> MealEstimate:
        """Estimate a meal from a typed description."""
        try:
            return await _container(request).extraction_service.from_text(
                body.description
            )
        except Exception as exc:
            logger.exception("Text meal analysis failed", extra={"user_id": user_id})
            raise _extraction_failed() from exc

    @app.post("/users/{user_id}/meals/analyze/transcript")
    async def analyze_transcript(
        user_id: UUID, body: TranscriptAnalysisRequest, request: Request
    ) -> MealEstimate:
        """Estimate a meal from a voice note transcript."""
        try:
            return await _container(request).extraction_service.from_transcript(
                body.transcript
            )
        except Exception as exc:
            logger.exception(
                "Transcript meal analysis failed", extra={"user_id": user_id}
            )
            raise _extraction_failed() from exc

    @app.post("/users/{user_id}/meals/analyze/photo")
    async def analyze_photo(
        user_id: UUID, body: PhotoAnalysisRequest, request: Request
    ) -> MealEstimate:
        """Estimate a meal from a base64-encoded photo."""
        try:
            image_bytes = base64.b64decode(body.image_base64, validate=True)
        except binascii.Error as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="image_base64 is not valid base64",
            ) from exc
        try:
            return await _container(request).extraction_service.from_image(
                image_bytes, note=body.note
            )
        except Exception as exc:
            logger.exception("Photo meal analysis failed", extra={"user_id": user_id})
            raise _extraction_failed() from exc

    @app.post("/users/{user_id}/meals/estimate")
    async def estimate_macros(
        user_id: UUID, body: TextAnalysisRequest, request: Request
    ) -> MacrosModel:
        """Estimate the macros of a single food description."""
        try:
            estimate = await _container(request).extraction_service.estimate_macros(
                body.description
            )
        except Exception as exc:
            logger.exception("Macro estimate failed", extra={"user_id": user_id})
            raise _extraction_failed() from exc
        return MacrosModel.from_domain(estimate.to_macros())

    @app.get("/users/{user_id}/recap")
    async def get_recap(
        user_id: UUID, start: date, end: date, request: Request
    ) -> RecapResponse:
        """Return adherence metrics for an inclusive date range."""
        if end < start:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="end must not be before start",
            )
        metrics = _container(request).recap_service.generate_recap(user_id, start, end)
        if metrics is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No recap available for this range.",
            )
        return RecapResponse.from_domain(metrics)

    @app.get("/users/{user_id}/recaps/cached")
    async def get_cached_recaps(
        user_id: UUID, request: Request
    ) -> list[CachedRecapResponse]:
        """Return the recaps stored by the scheduled jobs."""
        recaps = _container(request).recap_service.cached_recaps(user_id)
        return [CachedRecapResponse.from_cached(recap) for recap in recaps]

    return app
