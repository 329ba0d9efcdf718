"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import Depends, FastAPI, Header, Request, status
from fastapi.responses import JSONResponse

from ai_fusion.api.admin import router as admin_router
from ai_fusion.api.schemas import GenerateImageRequest, SendMessageRequest
from ai_fusion.app_logging import configure_logging
from ai_fusion.containers import AppContainer
from ai_fusion.domain.conversation import ChatMessage
from ai_fusion.domain.errors import (
    AppError,
    AuthUnavailable,
    ConversationNotFound,
    ProfileLoadError,
    ProfileNotFound,
    QuotaExceeded,
    Unauthenticated,
    UpstreamError,
)
from ai_fusion.domain.profiles import Profile
from ai_fusion.domain.quota import QuotaDecision
from ai_fusion.domain.results import ActionResult

LOGIN_PATH = "/login"
UPGRADE_PATH = "/subscription"


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the access token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(AppError)
    async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, ProfileNotFound):
            logger.warning("Profile missing at %s: %s", exc.stage.value, exc)
        elif isinstance(exc, ProfileLoadError):
            logger.error(
                "Profile unavailable at %s: %s", exc.stage.value, exc, exc_info=exc
            )
        return _error_response(exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/usage")
    async def usage(
        request: Request, access_token: str | None = Depends(bearer_token)
    ) -> dict[str, object]:
        """Return tier, counters and remaining quota for the caller."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.usage_service.get_summary(access_token)
        return {
            **_serialize_profile(summary.profile),
            "messages": _serialize_decision(summary.messages),
            "images": _serialize_decision(summary.images),
        }

    @app.post("/auth/sign-out")
    async def sign_out(
        request: Request, access_token: str | None = Depends(bearer_token)
    ) -> dict[str, object]:
        """Revoke the caller's session."""
        state_container: AppContainer = request.app.state.container
        if not state_container.session_resolver.sign_out(access_token):
            raise Unauthenticated()
        return {"status": "ok", "redirect": "/"}

    @app.post("/chat/conversations", status_code=status.HTTP_201_CREATED)
    async def start_conversation(
        request: Request, access_token: str | None = Depends(bearer_token)
    ) -> dict[str, object]:
        """Open a new chat conversation."""
        state_container: AppContainer = request.app.state.container
        conversation_id = state_container.chat_service.start_conversation(access_token)
        return {"conversation_id": str(conversation_id), "messages": []}

    @app.get("/chat/conversations/{conversation_id}")
    async def get_conversation(
        conversation_id: UUID,
        request: Request,
        access_token: str | None = Depends(bearer_token),
    ) -> dict[str, object]:
        """Return the messages exchanged so far."""
        state_container: AppContainer = request.app.state.container
        messages = state_container.chat_service.get_messages(
            access_token, conversation_id
        )
        return {
            "conversation_id": str(conversation_id),
            "messages": [_serialize_message(message) for message in messages],
        }

    @app.delete("/chat/conversations/{conversation_id}")
    async def end_conversation(
        conversation_id: UUID,
        request: Request,
        access_token: str | None = Depends(bearer_token),
    ) -> dict[str, str]:
        """Discard a conversation."""
        state_container: AppContainer = request.app.state.container
        state_container.chat_service.end_conversation(access_token, conversation_id)
        return {"status": "ok"}

    @app.post("/chat/conversations/{conversation_id}/messages")
    async def send_message(
        conversation_id: UUID,
        body: SendMessageRequest,
        request: Request,
        access_token: str | None = Depends(bearer_token),
    ) -> dict[str, object]:
        """Send a chat message and return the assistant reply."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.chat_service.send_message(
            access_token, conversation_id, body.content
        )
        return {
            "reply": {"role": "assistant", "content": result.value.content},
            **_serialize_result(result),
        }

    @app.post("/images")
    async def generate_image(
        body: GenerateImageRequest,
        request: Request,
        access_token: str | None = Depends(bearer_token),
    ) -> dict[str, object]:
        """Generate an image from a prompt."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.image_service.generate(access_token, body.prompt)
        return {"image_url": result.value.image_url, **_serialize_result(result)}

    return app


def _error_response(exc: AppError) -> JSONResponse:
    body: dict[str, object] = {"error": exc.code, "detail": exc.message}
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, Unauthenticated):
        status_code = status.HTTP_401_UNAUTHORIZED
        body["redirect"] = LOGIN_PATH
    elif isinstance(exc, QuotaExceeded):
        status_code = status.HTTP_402_PAYMENT_REQUIRED
        body.update(
            {
                "action": exc.action.value,
                "reason": exc.reason.value,
                "remaining": exc.remaining,
                "upgrade_url": UPGRADE_PATH,
            }
        )
    elif isinstance(exc, ProfileNotFound | ConversationNotFound):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ProfileLoadError | AuthUnavailable):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, UpstreamError):
        status_code = status.HTTP_502_BAD_GATEWAY
    body["retryable"] = exc.retryable
    return JSONResponse(status_code=status_code, content=body)


def _serialize_profile(profile: Profile) -> dict[str, object]:
    return {
        "tier": profile.tier.value,
        "daily_message_count": profile.daily_message_count,
        "image_generation_count": profile.image_generation_count,
    }


def _serialize_decision(decision: QuotaDecision) -> dict[str, object]:
    return {
        "allowed": decision.allowed,
        "remaining": decision.remaining,
        "reason": decision.reason.value,
    }


def _serialize_message(message: ChatMessage) -> dict[str, str]:
    return message.as_payload()


def _serialize_result(result: ActionResult[object]) -> dict[str, object]:
    return {
        "usage": {
            **_serialize_profile(result.profile),
            **_serialize_decision(result.decision),
        },
        "usage_recorded": result.usage_recorded,
    }
