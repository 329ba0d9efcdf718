"""Supabase-backed profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from ai_fusion.domain.profiles import Profile, UsageCounter
from ai_fusion.services.profiles import ProfileRepository

_PROFILE_COLUMNS = "id, role, daily_usage_count, image_generation_count"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return Profile.from_row(response.data[0])

    def increment_counter(
        self, user_id: UUID, counter: UsageCounter, delta: int
    ) -> Profile:
        """Increment a counter with a single UPDATE inside a database function."""
        response = self.client.rpc(
            "increment_profile_counter",
            {
                "profile_id": str(user_id),
                "counter_name": counter.value,
                "delta": delta,
            },
        ).execute()
        rows = response.data
        if isinstance(rows, dict):
            rows = [rows]
        if not rows:
            raise RuntimeError(f"Failed to increment {counter.value} for {user_id}")
        return Profile.from_row(rows[0])

    def reset_daily_counts(self) -> int:
        """Zero daily_usage_count for every profile."""
        response = self.client.rpc("reset_daily_usage_counts", {}).execute()
        return int(response.data or 0)
