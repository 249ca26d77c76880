"""Meal history and statistics."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from macro_hunt.domain.credentials import Credentials
from macro_hunt.domain.meals import MealRecord
from macro_hunt.domain.stats import DailyTotals, GoalProgress, WeeklyAverages
from macro_hunt.services.meals import MealRepository

WEEK_DAYS = 7


@dataclass
class StatsService:
    """Service for daily totals and trends in the configured timezone."""

    repository: MealRepository
    timezone_name: str = "UTC"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    def today(self) -> date:
        """Return the current date in the configured timezone."""
        return datetime.now(tz=self.tz).date()

    def all_meals(self) -> list[MealRecord]:
        """Return every meal, newest first."""
        return self.repository.list_all()

    def meals_for_day(self, day: date) -> list[MealRecord]:
        """Return the meals logged on a calendar day, oldest first."""
        start, end = self._bounds(day, day + timedelta(days=1))
        return self.repository.list_in_range(start, end)

    def daily_totals(self, day: date) -> DailyTotals:
        """Sum calories and macros for a calendar day."""
        return _sum_day(day, self.meals_for_day(day))

    def weekly_averages(self, today: date | None = None) -> WeeklyAverages:
        """Average intake over the seven days before today."""
        end_day = today or self.today()
        start_day = end_day - timedelta(days=WEEK_DAYS)
        start, end = self._bounds(start_day, end_day)
        meals = self.repository.list_in_range(start, end)
        total = _sum_day(start_day, meals)
        return WeeklyAverages(
            start=start_day,
            end=end_day,
            avg_calories=total.calories / WEEK_DAYS,
            avg_protein_g=total.protein_g / WEEK_DAYS,
            avg_carbs_g=total.carbs_g / WEEK_DAYS,
            avg_fat_g=total.fat_g / WEEK_DAYS,
        )

    def daily_calories(self, days: int, today: date | None = None) -> list[DailyTotals]:
        """Return per-day totals for the last ``days`` days, oldest first."""
        end_day = today or self.today()
        start_day = end_day - timedelta(days=days - 1)
        start, end = self._bounds(start_day, end_day + timedelta(days=1))
        by_day: dict[date, list[MealRecord]] = {}
        for meal in self.repository.list_in_range(start, end):
            by_day.setdefault(self._local_day(meal), []).append(meal)
        return [
            _sum_day(day, by_day.get(day, []))
            for day in (start_day + timedelta(days=offset) for offset in range(days))
        ]

    def today_progress(
        self, credentials: Credentials, today: date | None = None
    ) -> GoalProgress:
        """Return today's totals against the calorie and macro goals."""
        return GoalProgress(
            totals=self.daily_totals(today or self.today()),
            calorie_goal=credentials.daily_calorie_goal,
            macro_goals=credentials.macro_goals(),
        )

    def _bounds(self, start_day: date, end_day: date) -> tuple[datetime, datetime]:
        start = datetime.combine(start_day, time.min, tzinfo=self.tz)
        end = datetime.combine(end_day, time.min, tzinfo=self.tz)
        return start.astimezone(UTC), end.astimezone(UTC)

    def _local_day(self, meal: MealRecord) -> date:
        value = meal.date if meal.date.tzinfo else meal.date.replace(tzinfo=UTC)
        return value.astimezone(self.tz).date()


def _sum_day(day: date, meals: list[MealRecord]) -> DailyTotals:
    return DailyTotals(
        day=day,
        calories=sum(meal.calories for meal in meals),
        protein_g=sum(meal.protein for meal in meals),
        carbs_g=sum(meal.carbs for meal in meals),
        fat_g=sum(meal.fat for meal in meals),
        meal_count=len(meals),
    )
