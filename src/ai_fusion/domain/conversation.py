"""Domain models for chat conversations."""

from dataclasses import dataclass, field
from enum import StrEnum


class ChatRole(StrEnum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """A single exchanged chat message."""

    role: ChatRole
    content: str

    def as_payload(self) -> dict[str, str]:
        """Return the message in the shape chat backends accept."""
        return {"role": self.role.value, "content": self.content}


@dataclass
class ConversationState:
    """Append-only, ordered log of messages for one chat session."""

    _messages: list[ChatMessage] = field(default_factory=list)

    def append(self, message: ChatMessage) -> None:
        """Append a message to the end of the conversation."""
        self._messages.append(message)

    @property
    def messages(self) -> list[ChatMessage]:
        """Return a copy of the full conversation in order."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def snapshot_for_request(
        self, max_messages: int | None = None
    ) -> list[ChatMessage]:
        """Return the most recent messages to send as chat context.

        ``max_messages`` bounds the context window; ``None`` or ``0`` returns
        the whole history.
        """
        if not max_messages:
            return list(self._messages)
        return self._messages[-max_messages:]
