"""Domain models for quota decisions."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Literal

from ai_fusion.domain.profiles import UsageCounter

UNLIMITED: Final = "unlimited"

Remaining = int | Literal["unlimited"]


class QuotaAction(StrEnum):
    """AI-consuming actions that are metered."""

    SEND_MESSAGE = "send_message"
    GENERATE_IMAGE = "generate_image"

    @property
    def counter(self) -> UsageCounter:
        """Return the counter this action consumes."""
        if self is QuotaAction.SEND_MESSAGE:
            return UsageCounter.DAILY_MESSAGES
        return UsageCounter.IMAGE_GENERATIONS


class QuotaReason(StrEnum):
    """Why a quota decision came out the way it did."""

    OK = "ok"
    LIMIT_REACHED = "limit_reached"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of evaluating a profile against the quota policy."""

    action: QuotaAction
    allowed: bool
    remaining: Remaining
    reason: QuotaReason
