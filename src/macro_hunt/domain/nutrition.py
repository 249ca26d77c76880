"""Models for vision analysis results."""

from pydantic import BaseModel, ConfigDict, Field


class NutritionEstimate(BaseModel):
    """Nutrition estimate returned by the vision model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    meal_name: str = Field(alias="mealName")
    calories: int
    protein: float
    carbs: float
    fat: float
    key_nutrients: str = Field(default="", alias="keyNutrients")
