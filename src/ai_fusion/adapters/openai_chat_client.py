"""OpenAI chat completions client."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from ai_fusion.services.chat import ChatClient


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the OpenAI chat completions API."""

    client: AsyncOpenAI
    model: str
    system_prompt: str | None = None

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        system_prompt: str | None = None,
        timeout_seconds: float = 60,
    ) -> "OpenAIChatClient":
        """Create a chat client with a managed, single-attempt httpx session."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                max_retries=0,
                http_client=httpx.AsyncClient(timeout=timeout_seconds),
            ),
            model=model,
            system_prompt=system_prompt,
        )

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Return the assistant reply for the conversation."""
        request_messages: list[dict[str, str]] = []
        if self.system_prompt:
            request_messages.append({"role": "system", "content": self.system_prompt})
        request_messages.extend(messages)

        response = await self.client.chat.completions.create(
            model=self.model, messages=request_messages
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("OpenAI returned an empty response")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
