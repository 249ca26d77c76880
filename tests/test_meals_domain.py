"""Tests for meal domain models."""

import pytest

from macro_hunt.domain.meals import MealRecord, MealType
from macro_hunt.domain.nutrition import NutritionEstimate


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Breakfast", MealType.BREAKFAST),
        (" dinner ", MealType.DINNER),
        ("LUNCH", MealType.LUNCH),
        ("brunch", MealType.SNACK),
        (None, MealType.SNACK),
    ],
)
def test_meal_type_parse(raw: str | None, expected: MealType) -> None:
    assert MealType.parse(raw) is expected


def test_from_estimate_copies_fields() -> None:
    estimate = NutritionEstimate.model_validate(
        {
            "mealName": "Salmon Bowl",
            "calories": 610,
            "protein": 38.0,
            "carbs": 55.0,
            "fat": 22.5,
            "keyNutrients": "Omega-3",
        }
    )

    meal = MealRecord.from_estimate(
        estimate, MealType.DINNER, notes="no soy", photos=[b"A"]
    )

    assert meal.name == "Salmon Bowl"
    assert meal.key_nutrients == "Omega-3"
    assert meal.photos == [b"A"]
    assert meal.remote_document_id is None
    assert meal.date.tzinfo is not None


def test_has_content() -> None:
    meal = MealRecord(
        name="Apple", meal_type=MealType.SNACK, calories=95, protein=0, carbs=25, fat=0
    )

    assert not meal.has_content
    meal.notes = "  "
    assert not meal.has_content
    meal.photos = [b"A"]
    assert meal.has_content


def test_macro_percentages() -> None:
    meal = MealRecord(
        name="Mix", meal_type=MealType.SNACK, calories=1, protein=25, carbs=50, fat=25
    )
    empty = MealRecord(
        name="Water", meal_type=MealType.SNACK, calories=0, protein=0, carbs=0, fat=0
    )

    assert meal.macro_percentages == (25.0, 50.0, 25.0)
    assert empty.macro_percentages == (0.0, 0.0, 0.0)
