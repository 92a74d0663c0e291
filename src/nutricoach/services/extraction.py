"""Meal extraction service using LLMs."""

import base64
from dataclasses import dataclass
from typing import Protocol

from openai import OpenAIError
from pydantic import ValidationError

from nutricoach.domain.extraction import MacroEstimate, MealEstimate

_MACROS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "caloriesKcal": {"type": "number"},
        "proteinG": {"type": "number"},
        "carbohydrateG": {"type": "number"},
        "fatG": {"type": "number"},
    },
    "required": ["caloriesKcal", "proteinG", "carbohydrateG", "fatG"],
    "additionalProperties": False,
}

MEAL_ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "mealDescription": {"type": "string"},
        "mealCategory": {
            "type": "string",
            "enum": ["breakfast", "lunch", "dinner", "snack", "unknown"],
        },
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "macros": _MACROS_SCHEMA,
                },
                "required": ["name", "macros"],
                "additionalProperties": False,
            },
        },
        "totalMacros": _MACROS_SCHEMA,
    },
    "required": ["mealDescription", "mealCategory", "items", "totalMacros"],
    "additionalProperties": False,
}

MACRO_ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "estimatedKcal": {"type": "number"},
        "estimatedProteinGrams": {"type": "number"},
        "estimatedCarbGrams": {"type": "number"},
        "estimatedFatGrams": {"type": "number"},
    },
    "required": [
        "estimatedKcal",
        "estimatedProteinGrams",
        "estimatedCarbGrams",
        "estimatedFatGrams",
    ],
    "additionalProperties": False,
}

_MEAL_INSTRUCTIONS = (
    "Break the meal into individual foods with realistic portion sizes. "
    "Estimate calories, protein, carbohydrate and fat for each food and for "
    "the whole meal. Pick the meal category if it is clear, otherwise use "
    "'unknown'. Write a short description of the meal."
)


class MealExtractionError(RuntimeError):
    """Raised when the model output cannot be turned into a meal."""


class MealExtractionClient(Protocol):
    """Interface for LLM structured extraction."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured data matching ``schema``."""


@dataclass
class MealExtractionService:
    """Service that prepares extraction prompts and validates results."""

    client: MealExtractionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def from_text(self, description: str) -> MealEstimate:
        """Extract a meal from a typed description."""
        prompt = f"{_MEAL_INSTRUCTIONS}\n\nMeal description: {description}"
        return await self._extract_meal(prompt)

    async def from_transcript(self, transcript: str) -> MealEstimate:
        """Extract a meal from a voice note transcript."""
        prompt = (
            f"{_MEAL_INSTRUCTIONS} The text is a spoken transcript, so ignore "
            f"filler words and false starts.\n\nTranscript: {transcript}"
        )
        return await self._extract_meal(prompt)

    async def from_image(
        self, image_bytes: bytes, note: str | None = None
    ) -> MealEstimate:
        """Extract a meal from a photo, optionally with a user note."""
        prompt = f"{_MEAL_INSTRUCTIONS} Use only what is visible in the photo."
        if note:
            prompt = f"{prompt}\n\nUser note: {note}"
        data_url = _to_data_url(image_bytes)
        return await self._extract_meal(prompt, image_data_url=data_url)

    async def estimate_macros(self, description: str) -> MacroEstimate:
        """Estimate the macros of a single food description."""
        prompt = (
            "Estimate the calories, protein, carbohydrate and fat of the food "
            f"below. Assume a typical serving if none is given.\n\nFood: {description}"
        )
        raw = await self._generate(prompt, MACRO_ESTIMATE_SCHEMA, "macro_estimate")
        try:
            return MacroEstimate.model_validate(raw)
        except ValidationError as exc:
            raise MealExtractionError("Invalid macro estimate") from exc

    async def _extract_meal(
        self, prompt: str, image_data_url: str | None = None
    ) -> MealEstimate:
        raw = await self._generate(
            prompt, MEAL_ESTIMATE_SCHEMA, "meal_estimate", image_data_url
        )
        try:
            return MealEstimate.model_validate(raw)
        except ValidationError as exc:
            raise MealExtractionError("Invalid meal estimate") from exc

    async def _generate(
        self,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        try:
            return await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=schema,
                schema_name=schema_name,
                image_data_url=image_data_url,
            )
        except (OpenAIError, RuntimeError, ValueError) as exc:
            raise MealExtractionError("Meal extraction request failed") from exc


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return "image/jpeg"
