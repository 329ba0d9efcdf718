"""Typed failures raised while serving AI-consuming actions."""

from enum import StrEnum
from uuid import UUID

from ai_fusion.domain.quota import QuotaAction, QuotaReason, Remaining


class Stage(StrEnum):
    """Orchestration stages for a single action."""

    INIT = "init"
    AUTHENTICATING = "authenticating"
    LOADING_PROFILE = "loading_profile"
    CHECKING_QUOTA = "checking_quota"
    INVOKING = "invoking"
    COMMITTING = "committing"
    DONE = "done"


class AppError(Exception):
    """Base class for per-request failures."""

    code = "error"
    retryable = False

    def __init__(self, message: str, stage: Stage = Stage.INIT) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage


class Unauthenticated(AppError):
    """No live session for the caller."""

    code = "unauthenticated"

    def __init__(self, stage: Stage = Stage.AUTHENTICATING) -> None:
        super().__init__("Authentication required", stage)


class AuthUnavailable(AppError):
    """The auth provider could not be reached to verify the session."""

    code = "auth_unavailable"
    retryable = True

    def __init__(self, stage: Stage = Stage.AUTHENTICATING) -> None:
        super().__init__("Authentication service unavailable", stage)


class ProfileLoadError(AppError):
    """The caller's profile could not be read."""

    code = "profile_unavailable"
    retryable = True

    def __init__(
        self,
        user_id: UUID,
        message: str | None = None,
        stage: Stage = Stage.LOADING_PROFILE,
    ) -> None:
        super().__init__(message or f"Failed to load profile {user_id}", stage)
        self.user_id = user_id


class ProfileNotFound(ProfileLoadError):
    """No profile row exists for an authenticated user."""

    code = "profile_not_found"
    retryable = False

    def __init__(self, user_id: UUID, stage: Stage = Stage.LOADING_PROFILE) -> None:
        super().__init__(user_id, f"No profile for user {user_id}", stage)


class QuotaExceeded(AppError):
    """The caller's tier does not permit the action right now."""

    code = "quota_exceeded"

    def __init__(
        self,
        action: QuotaAction,
        reason: QuotaReason,
        remaining: Remaining,
        stage: Stage = Stage.CHECKING_QUOTA,
    ) -> None:
        super().__init__(f"Quota exceeded for {action.value}", stage)
        self.action = action
        self.reason = reason
        self.remaining = remaining


class UpstreamError(AppError):
    """The AI backend call failed."""

    code = "upstream_error"
    retryable = True

    def __init__(self, cause: BaseException, stage: Stage = Stage.INVOKING) -> None:
        super().__init__(f"AI backend call failed: {cause}", stage)
        self.cause = cause


class CommitError(AppError):
    """A usage counter could not be persisted after a successful AI call."""

    code = "commit_error"

    def __init__(
        self, user_id: UUID, cause: BaseException, stage: Stage = Stage.COMMITTING
    ) -> None:
        super().__init__(f"Failed to record usage for user {user_id}: {cause}", stage)
        self.user_id = user_id
        self.cause = cause


class ConversationNotFound(AppError):
    """The conversation does not exist, has expired, or belongs to another user."""

    code = "conversation_not_found"

    def __init__(self, conversation_id: UUID) -> None:
        super().__init__(f"Conversation {conversation_id} not found", Stage.INVOKING)
        self.conversation_id = conversation_id
