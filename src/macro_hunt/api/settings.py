"""Credentials and preference endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from macro_hunt.api.deps import require_app_token
from macro_hunt.api.models import SettingsResponse, SettingsUpdateRequest

if TYPE_CHECKING:
    from macro_hunt.containers import AppContainer
    from macro_hunt.domain.credentials import Credentials

router = APIRouter(
    prefix="/settings", tags=["settings"], dependencies=[Depends(require_app_token)]
)


@router.get("")
async def get_settings(request: Request) -> SettingsResponse:
    """Return current settings with secrets masked."""
    container: AppContainer = request.app.state.container
    return _to_response(container.credentials_service.current)


@router.put("")
async def update_settings(
    payload: SettingsUpdateRequest, request: Request
) -> SettingsResponse:
    """Update settings; omitted fields are left unchanged."""
    container: AppContainer = request.app.state.container
    changes = payload.model_dump(exclude_none=True)
    credentials = container.credentials_service.update(**changes)
    return _to_response(credentials)


@router.delete("/secrets")
async def clear_secrets(request: Request) -> SettingsResponse:
    """Forget the stored document token and AI key."""
    container: AppContainer = request.app.state.container
    return _to_response(container.credentials_service.clear_secrets())


def _to_response(credentials: Credentials) -> SettingsResponse:
    return SettingsResponse(
        craft_token_set=bool(credentials.craft_token),
        space_id=credentials.space_id,
        collection_id=credentials.collection_id,
        gemini_key_set=bool(credentials.gemini_key),
        daily_calorie_goal=credentials.daily_calorie_goal,
        protein_ratio=credentials.protein_ratio,
        carbs_ratio=credentials.carbs_ratio,
        fat_ratio=credentials.fat_ratio,
        is_valid=credentials.is_valid,
    )
