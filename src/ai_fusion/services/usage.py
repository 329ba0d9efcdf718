"""Usage reporting and scheduled counter resets."""

from dataclasses import dataclass

from ai_fusion.domain.quota import QuotaAction
from ai_fusion.domain.results import UsageSummary
from ai_fusion.services.orchestrator import RequestOrchestrator


@dataclass
class UsageService:
    """Reports remaining quota and resets daily counters."""

    orchestrator: RequestOrchestrator

    def get_summary(self, access_token: str | None) -> UsageSummary:
        """Return the caller's tier, counters and remaining quota."""
        identity = self.orchestrator.authenticate(access_token)
        profile = self.orchestrator.profile_service.load(identity.user_id)
        policy = self.orchestrator.policy
        return UsageSummary(
            profile=profile,
            messages=policy.evaluate(profile, QuotaAction.SEND_MESSAGE),
            images=policy.evaluate(profile, QuotaAction.GENERATE_IMAGE),
        )

    def reset_daily_counts(self) -> int:
        """Zero daily message counts; image counts are lifetime and kept."""
        return self.orchestrator.profile_service.reset_daily_counts()
