"""Domain models for user entitlement profiles."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Tier(StrEnum):
    """Entitlement level controlling quota limits."""

    FREE = "free"
    PRO = "pro"


class UsageCounter(StrEnum):
    """Usage counters stored on a profile, valued by column name."""

    DAILY_MESSAGES = "daily_usage_count"
    IMAGE_GENERATIONS = "image_generation_count"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller resolved from an access token."""

    user_id: UUID
    email: str | None = None


@dataclass(frozen=True)
class Profile:
    """Entitlement record for a user."""

    id: UUID
    tier: Tier
    daily_message_count: int
    image_generation_count: int

    @classmethod
    def from_row(cls, row: dict[str, object]) -> "Profile":
        """Build a profile from a stored row, filling absent fields."""
        return cls(
            id=UUID(str(row["id"])),
            tier=_parse_tier(row.get("role")),
            daily_message_count=_parse_count(row.get(UsageCounter.DAILY_MESSAGES)),
            image_generation_count=_parse_count(
                row.get(UsageCounter.IMAGE_GENERATIONS)
            ),
        )

    def count_for(self, counter: UsageCounter) -> int:
        """Return the current value of a usage counter."""
        if counter is UsageCounter.DAILY_MESSAGES:
            return self.daily_message_count
        return self.image_generation_count


def _parse_tier(value: object) -> Tier:
    try:
        return Tier(str(value).lower())
    except ValueError:
        return Tier.FREE


def _parse_count(value: object) -> int:
    if value is None:
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0
