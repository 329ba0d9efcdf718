"""Image generation service built on the request orchestrator."""

from dataclasses import dataclass
from typing import Protocol

from ai_fusion.domain.profiles import Identity
from ai_fusion.domain.quota import QuotaAction
from ai_fusion.domain.results import ActionResult, GeneratedImage
from ai_fusion.services.orchestrator import RequestOrchestrator


class ImageClient(Protocol):
    """Interface for the AI image backend."""

    async def generate(self, prompt: str) -> str:
        """Generate an image and return a fetchable URL for it."""


@dataclass
class ImageService:
    """Generates images within quota."""

    orchestrator: RequestOrchestrator
    client: ImageClient

    async def generate(
        self, access_token: str | None, prompt: str
    ) -> ActionResult[GeneratedImage]:
        """Generate an image for the caller."""

        async def invoke(_identity: Identity) -> GeneratedImage:
            image_url = await self.client.generate(prompt)
            if not image_url:
                raise RuntimeError("Image backend returned no image")
            return GeneratedImage(image_url=image_url)

        return await self.orchestrator.perform(
            access_token, QuotaAction.GENERATE_IMAGE, invoke
        )
