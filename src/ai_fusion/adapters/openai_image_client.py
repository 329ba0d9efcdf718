"""OpenAI images client."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from ai_fusion.services.images import ImageClient


@dataclass
class OpenAIImageClient(ImageClient):
    """Image client backed by the OpenAI images API."""

    client: AsyncOpenAI
    model: str
    size: str = "1024x1024"

    @classmethod
    def create(
        cls, api_key: str, model: str, size: str, timeout_seconds: float = 60
    ) -> "OpenAIImageClient":
        """Create an image client with a managed, single-attempt httpx session."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                max_retries=0,
                http_client=httpx.AsyncClient(timeout=timeout_seconds),
            ),
            model=model,
            size=size,
        )

    async def generate(self, prompt: str) -> str:
        """Generate one image and return its URL or a base64 data URL."""
        response = await self.client.images.generate(
            model=self.model, prompt=prompt, size=self.size, n=1
        )
        if not response.data:
            raise RuntimeError("OpenAI returned no image")
        image = response.data[0]
        if image.url:
            return image.url
        if image.b64_json:
            return f"data:image/png;base64,{image.b64_json}"
        raise RuntimeError("OpenAI returned an image without a URL")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
