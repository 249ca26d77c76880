"""Supabase repository for meals."""

import base64
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from macro_hunt.domain.meals import MealRecord, MealType
from macro_hunt.services.meals import MealRepository

_COLUMNS = (
    "id, name, date, meal_type, calories, protein, carbs, fat, key_nutrients, "
    "notes, photos, remote_document_id, created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal persistence."""

    client: Client
    table_name: str = "meals"

    def insert(self, meal: MealRecord) -> None:
        """Upsert a meal row."""
        response = self.client.table(self.table_name).upsert(_to_row(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to save meal")

    def delete(self, meal: MealRecord) -> None:
        """Delete a meal row."""
        self.client.table(self.table_name).delete().eq("id", str(meal.id)).execute()

    def get(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_in_range(self, start: datetime, end: datetime) -> list[MealRecord]:
        """Return meals in [start, end) ordered by date ascending."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .gte("date", start.isoformat())
            .lt("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_all(self) -> list[MealRecord]:
        """Return all meals ordered by date descending."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _to_row(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "name": meal.name,
        "date": meal.date.isoformat(),
        "meal_type": meal.meal_type.value,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fat,
        "key_nutrients": meal.key_nutrients,
        "notes": meal.notes,
        "photos": [base64.b64encode(photo).decode("ascii") for photo in meal.photos],
        "remote_document_id": meal.remote_document_id,
        "created_at": meal.created_at.isoformat(),
    }


def _parse_row(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        date=datetime.fromisoformat(str(row["date"])),
        meal_type=MealType.parse(row.get("meal_type")),
        calories=int(row.get("calories") or 0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        key_nutrients=str(row.get("key_nutrients") or ""),
        notes=str(row.get("notes") or ""),
        photos=[base64.b64decode(photo) for photo in row.get("photos") or []],
        remote_document_id=row.get("remote_document_id") or None,
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
