"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from ai_fusion.adapters.openai_chat_client import OpenAIChatClient
from ai_fusion.adapters.openai_image_client import OpenAIImageClient
from ai_fusion.adapters.supabase_auth_client import SupabaseAuthClient
from ai_fusion.adapters.supabase_profile_repository import SupabaseProfileRepository
from ai_fusion.config import Settings
from ai_fusion.services.cache import InMemoryCache
from ai_fusion.services.chat import ChatService
from ai_fusion.services.conversations import ConversationRegistry
from ai_fusion.services.images import ImageService
from ai_fusion.services.orchestrator import RequestOrchestrator
from ai_fusion.services.profiles import ProfileService
from ai_fusion.services.quota import QuotaPolicy
from ai_fusion.services.sessions import SessionResolver
from ai_fusion.services.usage import UsageService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_resolver: SessionResolver
    profile_service: ProfileService
    orchestrator: RequestOrchestrator
    chat_service: ChatService
    image_service: ImageService
    usage_service: UsageService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_resolver = SessionResolver(SupabaseAuthClient(supabase_client))
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    orchestrator = RequestOrchestrator(
        session_resolver=session_resolver,
        profile_service=profile_service,
        policy=QuotaPolicy(
            free_daily_message_limit=resolved_settings.free_daily_message_limit,
            free_image_generation_limit=resolved_settings.free_image_generation_limit,
        ),
    )
    chat_client = OpenAIChatClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_chat_model,
        system_prompt=resolved_settings.chat_system_prompt,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    image_client = OpenAIImageClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_image_model,
        size=resolved_settings.openai_image_size,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    chat_service = ChatService(
        orchestrator=orchestrator,
        conversations=ConversationRegistry(
            cache=InMemoryCache(),
            ttl_seconds=resolved_settings.conversation_ttl_seconds,
        ),
        client=chat_client,
        context_messages=resolved_settings.chat_context_messages,
    )
    image_service = ImageService(orchestrator=orchestrator, client=image_client)
    usage_service = UsageService(orchestrator)

    async def close_resources() -> None:
        await chat_client.close()
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_resolver=session_resolver,
        profile_service=profile_service,
        orchestrator=orchestrator,
        chat_service=chat_service,
        image_service=image_service,
        usage_service=usage_service,
        close_resources=close_resources,
    )
