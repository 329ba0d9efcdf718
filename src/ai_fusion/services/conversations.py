"""In-memory registry of active chat conversations."""

from dataclasses import dataclass
from uuid import UUID, uuid4

from ai_fusion.domain.conversation import ConversationState
from ai_fusion.domain.errors import ConversationNotFound
from ai_fusion.services.cache import Cache

DEFAULT_TTL_SECONDS = 3600


@dataclass
class ConversationRegistry:
    """Holds conversation state for the lifetime of a chat session."""

    cache: Cache
    ttl_seconds: int = DEFAULT_TTL_SECONDS

    def start(self, user_id: UUID) -> UUID:
        """Open a new, empty conversation and return its id."""
        conversation_id = uuid4()
        self.cache.set(
            _key(user_id, conversation_id), ConversationState(), self.ttl_seconds
        )
        return conversation_id

    def get(self, user_id: UUID, conversation_id: UUID) -> ConversationState:
        """Return a conversation owned by the user."""
        state = self.cache.get(_key(user_id, conversation_id))
        if not isinstance(state, ConversationState):
            raise ConversationNotFound(conversation_id)
        return state

    def touch(self, user_id: UUID, conversation_id: UUID) -> bool:
        """Restart the idle timer; return False when the conversation is gone."""
        key = _key(user_id, conversation_id)
        state = self.cache.get(key)
        if not isinstance(state, ConversationState):
            return False
        self.cache.set(key, state, self.ttl_seconds)
        return True

    def end(self, user_id: UUID, conversation_id: UUID) -> None:
        """Discard a conversation."""
        if not self.cache.delete(_key(user_id, conversation_id)):
            raise ConversationNotFound(conversation_id)


def _key(user_id: UUID, conversation_id: UUID) -> str:
    return f"conversation:{user_id}:{conversation_id}"
