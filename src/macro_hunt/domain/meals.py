"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from macro_hunt.domain.nutrition import NutritionEstimate


class MealType(str, Enum):
    """Meal category tag."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"

    @classmethod
    def parse(cls, raw: str | None) -> "MealType":
        """Parse a stored or submitted value, falling back to snack."""
        for member in cls:
            if raw and raw.strip().lower() == member.value.lower():
                return member
        return cls.SNACK


@dataclass
class MealRecord:
    """A meal as stored locally and mirrored to the document service.

    ``remote_document_id`` stays ``None`` until the remote record has been
    created; nothing but the sync service assigns it.
    """

    name: str
    meal_type: MealType
    calories: int
    protein: float
    carbs: float
    fat: float
    key_nutrients: str = ""
    notes: str = ""
    photos: list[bytes] = field(default_factory=list)
    date: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    remote_document_id: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @classmethod
    def from_estimate(  # noqa: PLR0913
        cls,
        estimate: NutritionEstimate,
        meal_type: MealType,
        *,
        notes: str = "",
        photos: list[bytes] | None = None,
        date: datetime | None = None,
    ) -> "MealRecord":
        """Build a meal from an analysis result."""
        return cls(
            name=estimate.meal_name,
            meal_type=meal_type,
            calories=estimate.calories,
            protein=estimate.protein,
            carbs=estimate.carbs,
            fat=estimate.fat,
            key_nutrients=estimate.key_nutrients,
            notes=notes,
            photos=list(photos or []),
            date=date or datetime.now(tz=UTC),
        )

    @property
    def has_content(self) -> bool:
        """Return True when there are photos or notes to attach remotely."""
        return bool(self.photos) or bool(self.notes.strip())

    @property
    def total_macros(self) -> float:
        """Return protein, carbs and fat in grams combined."""
        return self.protein + self.carbs + self.fat

    @property
    def macro_percentages(self) -> tuple[float, float, float]:
        """Return (protein, carbs, fat) as percentages of total grams."""
        total = self.total_macros
        if total <= 0:
            return 0.0, 0.0, 0.0
        return (
            self.protein / total * 100,
            self.carbs / total * 100,
            self.fat / total * 100,
        )
