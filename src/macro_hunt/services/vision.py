"""Meal photo analysis using a vision model."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from macro_hunt.domain.meals import MealType
from macro_hunt.domain.nutrition import NutritionEstimate
from macro_hunt.errors import DecodingError

_logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200

PROMPT_TEMPLATE = """Analyze these meal photos and estimate nutritional content.
User description: {description}
Meal type: {meal_type}

Return ONLY valid JSON with these exact keys:
- mealName: A descriptive name for this meal (string, 2-5 words)
- calories: Estimated total calories (integer)
- protein: Grams of protein (number, one decimal place)
- carbs: Grams of carbohydrates (number, one decimal place)
- fat: Grams of fat (number, one decimal place)
- keyNutrients: Notable vitamins/minerals present, comma-separated (string)

Be realistic with portions shown in photos. If multiple items visible, sum the totals.
If you cannot identify the food, make your best estimate based on what you see.

Example response:
{{"mealName": "Grilled Chicken Salad", "calories": 450, "protein": 35.0, \
"carbs": 20.5, "fat": 25.0, "keyNutrients": "Vitamin A, Vitamin C, Iron, Fiber"}}
"""


class VisionClient(Protocol):
    """Interface for a multimodal model call."""

    async def generate(self, *, prompt: str, images: list[bytes]) -> str:
        """Return the model's text output for a prompt and images."""


@dataclass
class VisionService:
    """Builds the analysis prompt and parses the model's answer."""

    client_factory: Callable[[str], VisionClient]
    api_key_provider: Callable[[], str]

    async def analyze(
        self,
        images: list[bytes],
        description: str,
        meal_type: MealType,
    ) -> NutritionEstimate:
        """Estimate nutrition for the photographed meal."""
        prompt = build_prompt(description, meal_type)
        client = self.client_factory(self.api_key_provider())
        text = await client.generate(prompt=prompt, images=images)
        estimate = parse_estimate(text)
        _logger.info(
            "Analyzed meal: images=%s name=%s calories=%s",
            len(images),
            estimate.meal_name,
            estimate.calories,
        )
        return estimate


def build_prompt(description: str, meal_type: MealType) -> str:
    """Render the analysis instruction."""
    cleaned = description.strip()
    return PROMPT_TEMPLATE.format(
        description=cleaned or "No description provided",
        meal_type=meal_type.value,
    )


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fence markers around model output."""
    return text.replace("```json", "").replace("```", "").strip()


def parse_estimate(text: str) -> NutritionEstimate:
    """Parse model output into a nutrition estimate."""
    cleaned = strip_code_fences(text)
    try:
        return NutritionEstimate.model_validate_json(cleaned)
    except ValidationError as exc:
        raise DecodingError(
            f"Failed to parse nutrition analysis: {cleaned[:SNIPPET_LENGTH]}"
        ) from exc
