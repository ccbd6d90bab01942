"""Free-text food lookup via an LLM text completion."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from caloritons.domain.foods import FoodLookupResult

_logger = logging.getLogger(__name__)

FOOD_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories100g": {"type": "number"},
        "protein100g": {"type": "number"},
        "carbs100g": {"type": "number"},
        "fat100g": {"type": "number"},
        "standardPortionGrams": {"type": "number"},
        "standardPortionName": {"type": "string"},
    },
    "required": [
        "name",
        "calories100g",
        "protein100g",
        "carbs100g",
        "fat100g",
        "standardPortionGrams",
        "standardPortionName",
    ],
    "additionalProperties": False,
}


class FoodLookupError(RuntimeError):
    """Raised when the lookup backend cannot be reached or errors out."""


class FoodLookupClient(Protocol):
    """Interface for structured LLM completions."""

    async def complete(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> str:
        """Return the raw completion text for a prompt."""


@dataclass
class FoodLookupService:
    """Service that prompts for nutrition facts and validates the reply."""

    client: FoodLookupClient
    model: str
    language: str = "pt-BR"

    async def lookup(self, query: str) -> FoodLookupResult | None:
        """Return nutrition facts for a food description, or None if not found.

        Raises FoodLookupError when the backend call itself fails.
        """
        description = query.strip()
        if not description:
            return None
        try:
            raw = await self.client.complete(
                model=self.model,
                prompt=build_prompt(description, self.language),
                schema=FOOD_SCHEMA,
            )
        except Exception as exc:
            _logger.warning("Food lookup failed: query=%s error=%s", description, exc)
            raise FoodLookupError(str(exc)) from exc
        return parse_result(raw, description)


def build_prompt(description: str, language: str) -> str:
    """Build the lookup instruction for a food description."""
    return (
        f'Identify the nutrition facts for the food: "{description}". '
        f"Always answer in {language}, including the food name and portion name. "
        "Return standard average values. "
        "Give calories, protein, carbs and fat per 100 grams. "
        "Also give a standard portion weight in grams and its name "
        "(e.g. the weight of 1 medium apple or 1 slice of bread). "
        "If the food is not edible or cannot be identified, return all zeros."
    )


def parse_result(raw: str | None, description: str) -> FoodLookupResult | None:
    """Validate a completion; malformed, empty or all-zero replies are no match."""
    if not raw:
        _logger.info("Food lookup returned an empty response: query=%s", description)
        return None
    try:
        result = FoodLookupResult.model_validate_json(raw)
    except ValidationError as exc:
        _logger.warning(
            "Food lookup returned malformed data: query=%s error=%s", description, exc
        )
        return None
    if result.is_blank():
        _logger.info("Food lookup found no match: query=%s", description)
        return None
    return result
