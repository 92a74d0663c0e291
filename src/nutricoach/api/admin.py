"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from nutricoach.api.schemas import RecapRunResponse

if TYPE_CHECKING:
    from nutricoach.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/recaps/daily", dependencies=[Depends(require_admin)])
async def run_daily_recaps(request: Request) -> RecapRunResponse:
    """Recap yesterday for every user."""
    container: AppContainer = request.app.state.container
    summary = container.recap_service.run_daily_recaps()
    return RecapRunResponse.from_summary(summary)


@router.post("/recaps/weekly", dependencies=[Depends(require_admin)])
async def run_weekly_recaps(request: Request) -> RecapRunResponse:
    """Recap the previous week for every user."""
    container: AppContainer = request.app.state.container
    summary = container.recap_service.run_weekly_recaps()
    return RecapRunResponse.from_summary(summary)


@router.post("/recaps/monthly", dependencies=[Depends(require_admin)])
async def run_monthly_recaps(request: Request) -> RecapRunResponse:
    """Recap the previous month for every user."""
    container: AppContainer = request.app.state.container
    summary = container.recap_service.run_monthly_recaps()
    return RecapRunResponse.from_summary(summary)
