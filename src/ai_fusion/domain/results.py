"""Result models for AI-consuming actions."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from ai_fusion.domain.errors import CommitError
from ai_fusion.domain.profiles import Profile
from ai_fusion.domain.quota import QuotaDecision

T = TypeVar("T")


@dataclass(frozen=True)
class ChatReply:
    """Assistant reply to a chat message."""

    content: str


@dataclass(frozen=True)
class GeneratedImage:
    """Reference to a generated image."""

    image_url: str


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Successful outcome of an orchestrated action."""

    value: T
    profile: Profile
    decision: QuotaDecision
    usage_recorded: bool
    commit_error: CommitError | None = None


@dataclass(frozen=True)
class UsageSummary:
    """Tier and remaining quota for both metered actions."""

    profile: Profile
    messages: QuotaDecision
    images: QuotaDecision
