"""OpenAI Responses API client for meal extraction."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutricoach.services.extraction import MealExtractionClient


@dataclass
class OpenAIMealExtractionClient(MealExtractionClient):
    """Extraction client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMealExtractionClient":
        """Create an OpenAI extraction client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Call OpenAI Responses API with structured outputs."""
        content: list[dict[str, str]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
