"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from macro_hunt.domain.credentials import MacroGoals


@dataclass(frozen=True)
class DailyTotals:
    """Daily total calories and macros."""

    day: date
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    meal_count: int = 0


@dataclass(frozen=True)
class WeeklyAverages:
    """Average daily intake over the trailing week."""

    start: date
    end: date
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float


@dataclass(frozen=True)
class GoalProgress:
    """Today's totals measured against the configured goals."""

    totals: DailyTotals
    calorie_goal: int
    macro_goals: MacroGoals

    @property
    def calories_remaining(self) -> int:
        """Calories left before reaching the goal, never negative."""
        return max(self.calorie_goal - self.totals.calories, 0)

    @property
    def calorie_fraction(self) -> float:
        """Share of the calorie goal already eaten."""
        return self.totals.calories / self.calorie_goal
