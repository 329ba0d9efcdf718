"""Profile store access for entitlement records."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from ai_fusion.domain.errors import ProfileLoadError, ProfileNotFound
from ai_fusion.domain.profiles import Profile, UsageCounter

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""

    def increment_counter(
        self, user_id: UUID, counter: UsageCounter, delta: int
    ) -> Profile:
        """Atomically add delta to a usage counter and return the updated profile."""

    def reset_daily_counts(self) -> int:
        """Zero the daily message counter for all profiles; return rows changed."""


@dataclass
class ProfileService:
    """Application service around the profile store."""

    repository: ProfileRepository

    def load(self, user_id: UUID) -> Profile:
        """Load a profile, raising typed errors on absence or store failure."""
        try:
            profile = self.repository.get_profile(user_id)
        except Exception as exc:
            raise ProfileLoadError(user_id, f"Failed to load profile: {exc}") from exc
        if profile is None:
            raise ProfileNotFound(user_id)
        return profile

    def increment_counter(
        self, user_id: UUID, counter: UsageCounter, delta: int = 1
    ) -> Profile:
        """Increment a usage counter at the store."""
        if delta < 1:
            raise ValueError("delta must be positive")
        return self.repository.increment_counter(user_id, counter, delta)

    def reset_daily_counts(self) -> int:
        """Reset daily message usage for every profile."""
        changed = self.repository.reset_daily_counts()
        logger.info("Reset daily message counts for %s profiles", changed)
        return changed
