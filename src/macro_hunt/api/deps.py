"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

if TYPE_CHECKING:
    from macro_hunt.containers import AppContainer


async def require_app_token(
    request: Request, x_app_token: str | None = Header(default=None)
) -> None:
    """Ensure requests carry the app token when one is configured."""
    container: AppContainer = request.app.state.container
    expected = container.settings.app_token
    if expected and x_app_token != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
