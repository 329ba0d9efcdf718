"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field, replace
from uuid import UUID

import pytest

from ai_fusion.config import Settings
from ai_fusion.containers import AppContainer
from ai_fusion.domain.profiles import Identity, Profile, Tier, UsageCounter
from ai_fusion.services.cache import InMemoryCache
from ai_fusion.services.chat import ChatClient, ChatService
from ai_fusion.services.conversations import ConversationRegistry
from ai_fusion.services.images import ImageClient, ImageService
from ai_fusion.services.orchestrator import RequestOrchestrator
from ai_fusion.services.profiles import ProfileRepository, ProfileService
from ai_fusion.services.quota import QuotaPolicy
from ai_fusion.services.sessions import AuthClient, SessionResolver
from ai_fusion.services.usage import UsageService

USER_ID = UUID("7c9e6679-7425-40de-944b-e07fc1f90ae7")
USER_TOKEN = "user-token"
AUTH_HEADERS = {"Authorization": f"Bearer {USER_TOKEN}"}


def make_profile(
    tier: Tier = Tier.FREE,
    messages: int = 0,
    images: int = 0,
    user_id: UUID = USER_ID,
) -> Profile:
    return Profile(
        id=user_id,
        tier=tier,
        daily_message_count=messages,
        image_generation_count=images,
    )


@dataclass
class FakeAuthClient(AuthClient):
    """Auth client that knows a fixed set of tokens."""

    tokens: dict[str, Identity] = field(
        default_factory=lambda: {USER_TOKEN: Identity(user_id=USER_ID)}
    )
    lookups: list[str] = field(default_factory=list)
    signed_out: list[str] = field(default_factory=list)
    error: Exception | None = None

    def get_identity(self, access_token: str) -> Identity | None:
        self.lookups.append(access_token)
        if self.error is not None:
            raise self.error
        return self.tokens.get(access_token)

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.tokens.pop(access_token, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)
    load_error: Exception | None = None
    increment_error: Exception | None = None
    loads: int = 0
    increments: list[tuple[UUID, UsageCounter, int]] = field(default_factory=list)

    def get_profile(self, user_id: UUID) -> Profile | None:
        self.loads += 1
        if self.load_error is not None:
            raise self.load_error
        return self.profiles.get(user_id)

    def increment_counter(
        self, user_id: UUID, counter: UsageCounter, delta: int
    ) -> Profile:
        if self.increment_error is not None:
            raise self.increment_error
        self.increments.append((user_id, counter, delta))
        current = self.profiles[user_id]
        if counter is UsageCounter.DAILY_MESSAGES:
            updated = replace(
                current, daily_message_count=current.daily_message_count + delta
            )
        else:
            updated = replace(
                current, image_generation_count=current.image_generation_count + delta
            )
        self.profiles[user_id] = updated
        return updated

    def reset_daily_counts(self) -> int:
        changed = 0
        for user_id, profile in list(self.profiles.items()):
            if profile.daily_message_count:
                self.profiles[user_id] = replace(profile, daily_message_count=0)
                changed += 1
        return changed


@dataclass
class FakeChatClient(ChatClient):
    """Chat client returning a canned reply."""

    reply: str = "Hello from the assistant"
    error: Exception | None = None
    calls: list[list[dict[str, str]]] = field(default_factory=list)

    async def complete(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class FakeImageClient(ImageClient):
    """Image client returning a fixed URL."""

    image_url: str = "https://images.example.com/generated.png"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.image_url


def build_orchestrator(
    repository: InMemoryProfileRepository,
    auth_client: FakeAuthClient | None = None,
    policy: QuotaPolicy | None = None,
) -> RequestOrchestrator:
    return RequestOrchestrator(
        session_resolver=SessionResolver(auth_client or FakeAuthClient()),
        profile_service=ProfileService(repository),
        policy=policy or QuotaPolicy(),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository(profiles={USER_ID: make_profile()})


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def container(
    settings: Settings,
    auth_client: FakeAuthClient,
    profile_repository: InMemoryProfileRepository,
    chat_client: FakeChatClient,
    image_client: FakeImageClient,
) -> AppContainer:
    orchestrator = build_orchestrator(profile_repository, auth_client)
    chat_service = ChatService(
        orchestrator=orchestrator,
        conversations=ConversationRegistry(cache=InMemoryCache()),
        client=chat_client,
        context_messages=settings.chat_context_messages,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_resolver=orchestrator.session_resolver,
        profile_service=orchestrator.profile_service,
        orchestrator=orchestrator,
        chat_service=chat_service,
        image_service=ImageService(orchestrator=orchestrator, client=image_client),
        usage_service=UsageService(orchestrator),
        close_resources=close_resources,
    )
