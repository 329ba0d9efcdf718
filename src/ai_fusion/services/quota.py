"""Quota policy for free and pro tiers."""

from dataclasses import dataclass

from ai_fusion.domain.profiles import Profile, Tier
from ai_fusion.domain.quota import UNLIMITED, QuotaAction, QuotaDecision, QuotaReason

FREE_DAILY_MESSAGE_LIMIT = 15
FREE_IMAGE_GENERATION_LIMIT = 5


@dataclass(frozen=True)
class QuotaPolicy:
    """Per-tier limits for metered actions. Pure, no I/O."""

    free_daily_message_limit: int = FREE_DAILY_MESSAGE_LIMIT
    free_image_generation_limit: int = FREE_IMAGE_GENERATION_LIMIT

    def limit_for(self, tier: Tier, action: QuotaAction) -> int | None:
        """Return the limit for a tier and action, or None when unlimited."""
        if tier is Tier.PRO:
            return None
        if action is QuotaAction.SEND_MESSAGE:
            return self.free_daily_message_limit
        return self.free_image_generation_limit

    def evaluate(self, profile: Profile, action: QuotaAction) -> QuotaDecision:
        """Decide whether the profile may perform the action."""
        limit = self.limit_for(profile.tier, action)
        if limit is None:
            return QuotaDecision(
                action=action, allowed=True, remaining=UNLIMITED, reason=QuotaReason.OK
            )
        current = profile.count_for(action.counter)
        allowed = current < limit
        return QuotaDecision(
            action=action,
            allowed=allowed,
            remaining=max(0, limit - current),
            reason=QuotaReason.OK if allowed else QuotaReason.LIMIT_REACHED,
        )
