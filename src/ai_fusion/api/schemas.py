"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field, field_validator


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class SendMessageRequest(BaseModel):
    """Chat message sent by the user."""

    content: str = Field(max_length=32_000)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class GenerateImageRequest(BaseModel):
    """Image prompt sent by the user."""

    prompt: str = Field(max_length=4_000)

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _not_blank(value)
