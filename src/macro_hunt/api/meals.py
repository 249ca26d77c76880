"""Meal and statistics endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from macro_hunt.api.deps import require_app_token
from macro_hunt.api.models import (
    AnalyzeMealRequest,
    DailyTotalsResponse,
    MealCreateRequest,
    MealResponse,
    SaveMealResponse,
)

if TYPE_CHECKING:
    from macro_hunt.containers import AppContainer
    from macro_hunt.domain.stats import DailyTotals

router = APIRouter(tags=["meals"], dependencies=[Depends(require_app_token)])


@router.post("/meals/analyze")
async def analyze_meal(
    payload: AnalyzeMealRequest, request: Request
) -> dict[str, object]:
    """Estimate nutrition for meal photos."""
    container: AppContainer = request.app.state.container
    if not container.credentials_service.current.gemini_key.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="AI service key is not configured",
        )
    estimate = await container.vision_service.analyze(
        payload.photo_bytes(), payload.description, payload.meal_type
    )
    return estimate.model_dump(by_alias=True)


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: MealCreateRequest, request: Request, local_only: bool = False
) -> SaveMealResponse:
    """Save a meal, mirroring it to the document service first."""
    container: AppContainer = request.app.state.container
    service = container.meal_sync_service
    meal = payload.to_record()
    if local_only:
        result = service.save_local_only(meal)
    else:
        result = await service.save_with_sync(meal)
    return SaveMealResponse(
        meal=MealResponse.from_record(result.meal),
        state=result.state.value,
        synced=result.synced,
        attach_error=result.attach_error.description if result.attach_error else None,
    )


@router.get("/meals")
async def list_meals(request: Request, day: date | None = None) -> dict[str, object]:
    """List all meals newest first, or one day's meals oldest first."""
    container: AppContainer = request.app.state.container
    stats = container.stats_service
    meals = stats.meals_for_day(day) if day else stats.all_meals()
    return {
        "meals": [
            MealResponse.from_record(meal).model_dump(mode="json") for meal in meals
        ]
    }


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(meal_id: UUID, request: Request) -> Response:
    """Delete a meal remotely and locally."""
    container: AppContainer = request.app.state.container
    service = container.meal_sync_service
    meal = service.repository.get(meal_id)
    if meal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    await service.delete_with_sync(meal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats/today")
async def today_stats(request: Request) -> dict[str, object]:
    """Return today's totals against the configured goals."""
    container: AppContainer = request.app.state.container
    progress = container.stats_service.today_progress(
        container.credentials_service.current
    )
    return {
        "totals": _totals(progress.totals),
        "calorie_goal": progress.calorie_goal,
        "calories_remaining": progress.calories_remaining,
        "calorie_fraction": progress.calorie_fraction,
        "macro_goals": progress.macro_goals.model_dump(),
    }


@router.get("/stats/week")
async def week_stats(request: Request) -> dict[str, object]:
    """Return average daily intake over the last seven days."""
    container: AppContainer = request.app.state.container
    return asdict(container.stats_service.weekly_averages())


@router.get("/stats/calories")
async def calorie_stats(
    request: Request, days: int = Query(default=7, ge=1, le=90)
) -> dict[str, object]:
    """Return per-day totals for a trailing window."""
    container: AppContainer = request.app.state.container
    daily = container.stats_service.daily_calories(days)
    return {"days": [_totals(entry) for entry in daily]}


def _totals(totals: DailyTotals) -> dict[str, object]:
    return DailyTotalsResponse(**asdict(totals)).model_dump(mode="json")
