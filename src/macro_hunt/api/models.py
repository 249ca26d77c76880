"""Request and response bodies for the HTTP API."""

import base64
import binascii
from datetime import UTC, date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from macro_hunt.domain.meals import MealRecord, MealType


def _decode_photos(values: list[str]) -> list[bytes]:
    try:
        return [base64.b64decode(value, validate=True) for value in values]
    except binascii.Error as exc:
        raise ValueError("photos must be base64 encoded") from exc


class AnalyzeMealRequest(BaseModel):
    """Photos to analyze, base64 encoded."""

    photos: list[str] = Field(min_length=1)
    description: str = ""
    meal_type: MealType = MealType.SNACK

    @field_validator("photos")
    @classmethod
    def _check_photos(cls, value: list[str]) -> list[str]:
        _decode_photos(value)
        return value

    def photo_bytes(self) -> list[bytes]:
        return _decode_photos(self.photos)


class MealCreateRequest(BaseModel):
    """Meal to save, usually an edited analysis result."""

    name: str = Field(min_length=1)
    meal_type: MealType
    calories: int = Field(ge=0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    key_nutrients: str = ""
    notes: str = ""
    photos: list[str] = Field(default_factory=list)
    date: datetime | None = None

    @field_validator("photos")
    @classmethod
    def _check_photos(cls, value: list[str]) -> list[str]:
        _decode_photos(value)
        return value

    def to_record(self) -> MealRecord:
        """Build a new meal record from the request."""
        record = MealRecord(
            name=self.name.strip(),
            meal_type=self.meal_type,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            key_nutrients=self.key_nutrients,
            notes=self.notes,
            photos=_decode_photos(self.photos),
        )
        if self.date is not None:
            record.date = (
                self.date if self.date.tzinfo else self.date.replace(tzinfo=UTC)
            )
        return record


class MealResponse(BaseModel):
    """Meal as returned by the API (photos are counted, not returned)."""

    id: UUID
    name: str
    date: datetime
    meal_type: MealType
    calories: int
    protein: float
    carbs: float
    fat: float
    key_nutrients: str
    notes: str
    photo_count: int
    remote_document_id: str | None
    created_at: datetime

    @classmethod
    def from_record(cls, meal: MealRecord) -> "MealResponse":
        return cls(
            id=meal.id,
            name=meal.name,
            date=meal.date,
            meal_type=meal.meal_type,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            key_nutrients=meal.key_nutrients,
            notes=meal.notes,
            photo_count=len(meal.photos),
            remote_document_id=meal.remote_document_id,
            created_at=meal.created_at,
        )


class SaveMealResponse(BaseModel):
    meal: MealResponse
    state: str
    synced: bool
    attach_error: str | None = None


class DailyTotalsResponse(BaseModel):
    day: date
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    meal_count: int


class SettingsResponse(BaseModel):
    """Credentials with secrets masked."""

    craft_token_set: bool
    space_id: str
    collection_id: str
    gemini_key_set: bool
    daily_calorie_goal: int
    protein_ratio: float
    carbs_ratio: float
    fat_ratio: float
    is_valid: bool


class SettingsUpdateRequest(BaseModel):
    """Partial settings update; omitted fields keep their value."""

    craft_token: str | None = None
    space_id: str | None = None
    collection_id: str | None = None
    gemini_key: str | None = None
    daily_calorie_goal: int | None = Field(default=None, gt=0)
    protein_ratio: float | None = Field(default=None, ge=0.0, le=1.0)
    carbs_ratio: float | None = Field(default=None, ge=0.0, le=1.0)
    fat_ratio: float | None = Field(default=None, ge=0.0, le=1.0)
