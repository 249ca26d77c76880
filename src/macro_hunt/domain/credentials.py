"""Credentials and nutrition preferences."""

from pydantic import BaseModel, ConfigDict, Field

CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_FAT = 9


class MacroGoals(BaseModel):
    """Daily gram targets derived from the calorie goal."""

    model_config = ConfigDict(frozen=True)

    protein_g: float
    carbs_g: float
    fat_g: float


class Credentials(BaseModel):
    """Remote service credentials plus daily goal preferences."""

    model_config = ConfigDict(frozen=True)

    craft_token: str = ""
    space_id: str = ""
    collection_id: str = ""
    gemini_key: str = ""
    daily_calorie_goal: int = Field(default=2000, gt=0)
    protein_ratio: float = Field(default=0.30, ge=0.0, le=1.0)
    carbs_ratio: float = Field(default=0.40, ge=0.0, le=1.0)
    fat_ratio: float = Field(default=0.30, ge=0.0, le=1.0)

    @property
    def is_valid(self) -> bool:
        """Return True when every remote credential is present."""
        return all(
            value.strip()
            for value in (
                self.craft_token,
                self.space_id,
                self.collection_id,
                self.gemini_key,
            )
        )

    def macro_goals(self) -> MacroGoals:
        """Convert the calorie goal and macro split into grams."""
        goal = self.daily_calorie_goal
        return MacroGoals(
            protein_g=goal * self.protein_ratio / CALORIES_PER_GRAM_PROTEIN,
            carbs_g=goal * self.carbs_ratio / CALORIES_PER_GRAM_CARBS,
            fat_g=goal * self.fat_ratio / CALORIES_PER_GRAM_FAT,
        )
