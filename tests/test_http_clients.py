"""Tests for OpenAI-backed adapters."""

import asyncio
from types import SimpleNamespace

import pytest

from ai_fusion.adapters.openai_chat_client import OpenAIChatClient
from ai_fusion.adapters.openai_image_client import OpenAIImageClient


class _FakeCompletions:
    def __init__(self, content: str | None) -> None:
        self.content = content
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeImages:
    def __init__(self, url: str | None, b64_json: str | None = None) -> None:
        self.image = SimpleNamespace(url=url, b64_json=b64_json)
        self.last_payload: dict[str, object] | None = None

    async def generate(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return SimpleNamespace(data=[self.image])


def _fake_openai(completions=None, images=None):  # type: ignore[no-untyped-def]
    return SimpleNamespace(
        chat=SimpleNamespace(completions=completions), images=images
    )


def test_chat_client_prepends_system_prompt() -> None:
    completions = _FakeCompletions("Sure!")
    client = OpenAIChatClient(
        client=_fake_openai(completions=completions),
        model="gpt-4o-mini",
        system_prompt="Be brief.",
    )

    reply = asyncio.run(client.complete([{"role": "user", "content": "Hi"}]))

    assert reply == "Sure!"
    assert completions.last_payload == {
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Hi"},
        ],
    }


def test_chat_client_rejects_empty_reply() -> None:
    client = OpenAIChatClient(
        client=_fake_openai(completions=_FakeCompletions(None)), model="gpt-4o-mini"
    )

    with pytest.raises(RuntimeError):
        asyncio.run(client.complete([{"role": "user", "content": "Hi"}]))


def test_image_client_returns_url() -> None:
    images = _FakeImages("https://images.example.com/1.png")
    client = OpenAIImageClient(
        client=_fake_openai(images=images), model="dall-e-3", size="512x512"
    )

    url = asyncio.run(client.generate("a fox"))

    assert url == "https://images.example.com/1.png"
    assert images.last_payload == {
        "model": "dall-e-3",
        "prompt": "a fox",
        "size": "512x512",
        "n": 1,
    }


def test_image_client_falls_back_to_data_url() -> None:
    client = OpenAIImageClient(
        client=_fake_openai(images=_FakeImages(None, "aGVsbG8=")), model="gpt-image-1"
    )

    assert asyncio.run(client.generate("a fox")) == "data:image/png;base64,aGVsbG8="


def test_clients_create_and_close() -> None:
    chat = OpenAIChatClient.create(api_key="key", model="gpt-4o-mini")
    image = OpenAIImageClient.create(api_key="key", model="dall-e-3", size="1024x1024")

    asyncio.run(chat.close())
    asyncio.run(image.close())
