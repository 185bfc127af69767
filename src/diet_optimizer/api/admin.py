"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from diet_optimizer.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


class CooldownUpdate(BaseModel):
    """Request body for changing the recompute cooldown."""

    minutes: int = Field(ge=0)


class DebugUpdate(BaseModel):
    """Request body for toggling verbose diagnostics."""

    enabled: bool


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


@router.get("/config", dependencies=[Depends(require_admin)])
async def get_config(request: Request) -> dict[str, object]:
    """Return the current runtime options."""
    container: AppContainer = request.app.state.container
    return _config_payload(container)


@router.post("/cooldown", dependencies=[Depends(require_admin)])
async def set_cooldown(update: CooldownUpdate, request: Request) -> dict[str, object]:
    """Change the global recompute cooldown."""
    container: AppContainer = request.app.state.container
    container.diet_service.set_cooldown(update.minutes)
    return _config_payload(container)


@router.post("/debug", dependencies=[Depends(require_admin)])
async def set_debug(update: DebugUpdate, request: Request) -> dict[str, object]:
    """Turn verbose diagnostics on or off."""
    container: AppContainer = request.app.state.container
    container.diet_service.set_debug(update.enabled)
    return _config_payload(container)


@router.get("/cache", dependencies=[Depends(require_admin)])
async def list_cache(request: Request) -> dict[str, object]:
    """Return every cached plan."""
    container: AppContainer = request.app.state.container
    entries = container.diet_service.cache.entries()
    return {
        "entries": [
            {
                "user_id": entry.user_id,
                "generated_at": entry.generated_at.isoformat(),
                "foods": entry.plan.foods,
                "score": entry.plan.score if math.isfinite(entry.plan.score) else None,
                "total_calories": entry.plan.total_calories,
                "average_tier": entry.plan.average_tier,
            }
            for entry in entries
        ]
    }


@router.delete("/cache/{user_id}", dependencies=[Depends(require_admin)])
async def clear_cache(user_id: str, request: Request) -> dict[str, bool]:
    """Remove one user's cached plan."""
    container: AppContainer = request.app.state.container
    return {"cleared": container.diet_service.clear(user_id)}


def _config_payload(container: AppContainer) -> dict[str, object]:
    service = container.diet_service
    return {
        "cooldown_minutes": int(service.cache.cooldown.total_seconds() // 60),
        "strict_mode": service.options.strict,
        "debug": service.options.debug,
        "cached_users": len(service.cache.entries()),
    }
