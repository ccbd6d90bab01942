"""OpenAI Responses API client for food lookups."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from caloritons.services.lookup import FoodLookupClient


@dataclass
class OpenAIFoodLookupClient(FoodLookupClient):
    """Lookup client backed by OpenAI structured outputs."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIFoodLookupClient":
        """Create an OpenAI lookup client with a managed httpx session."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, http_client=httpx.AsyncClient())
        )

    async def complete(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> str:
        """Call the Responses API and return the JSON text."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_lookup",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=False,
        )
        return response.output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
