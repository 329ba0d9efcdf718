"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from ai_fusion.containers import AppContainer

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


@router.post("/usage/reset-daily", dependencies=[Depends(require_admin)])
async def reset_daily_usage(request: Request) -> dict[str, object]:
    """Zero daily message counts; meant to be called by a scheduler at UTC midnight."""
    container: AppContainer = request.app.state.container
    return {"reset": container.usage_service.reset_daily_counts()}


@router.get("/profiles/{user_id}", dependencies=[Depends(require_admin)])
async def profile_detail(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the stored entitlement profile for a user."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.load(user_id)
    return {
        "id": str(profile.id),
        "tier": profile.tier.value,
        "daily_message_count": profile.daily_message_count,
        "image_generation_count": profile.image_generation_count,
    }
