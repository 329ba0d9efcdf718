"""Orchestration of metered AI actions.

Every AI-consuming action runs the same sequence: resolve the session, load
the profile, check the quota, invoke the AI backend and record the usage.
Calls for the same user are serialized from profile load to commit, and the
counter is incremented at the store in a single atomic statement.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from ai_fusion.domain.errors import (
    AppError,
    CommitError,
    QuotaExceeded,
    Stage,
    Unauthenticated,
    UpstreamError,
)
from ai_fusion.domain.profiles import Identity, Profile
from ai_fusion.domain.quota import QuotaAction
from ai_fusion.domain.results import ActionResult
from ai_fusion.services.locks import KeyedLock
from ai_fusion.services.profiles import ProfileService
from ai_fusion.services.quota import QuotaPolicy
from ai_fusion.services.sessions import SessionResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")

Invoke = Callable[[Identity], Awaitable[T]]


@dataclass
class RequestOrchestrator:
    """Runs the auth, quota, invoke and commit sequence for one action."""

    session_resolver: SessionResolver
    profile_service: ProfileService
    policy: QuotaPolicy
    locks: KeyedLock = field(default_factory=KeyedLock)

    def authenticate(self, access_token: str | None) -> Identity:
        """Resolve the caller or raise Unauthenticated."""
        identity = self.session_resolver.resolve(access_token)
        if identity is None:
            logger.info("Rejected unauthenticated request")
            raise Unauthenticated()
        return identity

    async def perform(
        self,
        access_token: str | None,
        action: QuotaAction,
        invoke: Invoke[T],
        precheck: Callable[[Identity], None] | None = None,
    ) -> ActionResult[T]:
        """Run a metered action and return its result with updated usage.

        ``precheck`` runs right after authentication and may raise an
        ``AppError`` to reject the request before any quota is consulted.
        """
        _trace(action, Stage.AUTHENTICATING)
        identity = self.authenticate(access_token)
        if precheck is not None:
            precheck(identity)

        async with self.locks.hold(identity.user_id):
            _trace(action, Stage.LOADING_PROFILE)
            profile = self.profile_service.load(identity.user_id)

            _trace(action, Stage.CHECKING_QUOTA)
            decision = self.policy.evaluate(profile, action)
            if not decision.allowed:
                logger.info(
                    "Quota reached for user %s on %s", identity.user_id, action.value
                )
                raise QuotaExceeded(action, decision.reason, decision.remaining)

            _trace(action, Stage.INVOKING)
            try:
                value = await invoke(identity)
            except AppError:
                raise
            except Exception as exc:
                logger.exception(
                    "AI backend failed for user %s on %s",
                    identity.user_id,
                    action.value,
                )
                raise UpstreamError(exc) from exc

            _trace(action, Stage.COMMITTING)
            updated, commit_error = self._commit(identity, profile, action)

        _trace(action, Stage.DONE)
        return ActionResult(
            value=value,
            profile=updated,
            decision=self.policy.evaluate(updated, action),
            usage_recorded=commit_error is None,
            commit_error=commit_error,
        )

    def _commit(
        self, identity: Identity, profile: Profile, action: QuotaAction
    ) -> tuple[Profile, CommitError | None]:
        try:
            updated = self.profile_service.increment_counter(
                identity.user_id, action.counter, 1
            )
        except Exception as exc:
            logger.error(
                "Usage drift: failed to record %s for user %s: %s",
                action.counter.value,
                identity.user_id,
                exc,
            )
            return profile, CommitError(identity.user_id, exc)
        return updated, None


def _trace(action: QuotaAction, stage: Stage) -> None:
    logger.debug("%s -> %s", action.value, stage.value)
