"""Chat service built on the request orchestrator."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from ai_fusion.domain.conversation import ChatMessage, ChatRole
from ai_fusion.domain.profiles import Identity
from ai_fusion.domain.quota import QuotaAction
from ai_fusion.domain.results import ActionResult, ChatReply
from ai_fusion.services.conversations import ConversationRegistry
from ai_fusion.services.orchestrator import RequestOrchestrator


class ChatClient(Protocol):
    """Interface for the AI chat backend."""

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Return the assistant reply for an ordered message list."""


@dataclass
class ChatService:
    """Sends user messages to the chat backend within quota."""

    orchestrator: RequestOrchestrator
    conversations: ConversationRegistry
    client: ChatClient
    context_messages: int | None = None

    def start_conversation(self, access_token: str | None) -> UUID:
        """Open a conversation for the caller."""
        identity = self.orchestrator.authenticate(access_token)
        return self.conversations.start(identity.user_id)

    def get_messages(
        self, access_token: str | None, conversation_id: UUID
    ) -> list[ChatMessage]:
        """Return the caller's conversation history in order."""
        identity = self.orchestrator.authenticate(access_token)
        return self.conversations.get(identity.user_id, conversation_id).messages

    def end_conversation(self, access_token: str | None, conversation_id: UUID) -> None:
        """Discard the caller's conversation."""
        identity = self.orchestrator.authenticate(access_token)
        self.conversations.end(identity.user_id, conversation_id)

    async def send_message(
        self, access_token: str | None, conversation_id: UUID, content: str
    ) -> ActionResult[ChatReply]:
        """Send a message and append the exchange on success."""
        user_message = ChatMessage(role=ChatRole.USER, content=content)

        def precheck(identity: Identity) -> None:
            self.conversations.get(identity.user_id, conversation_id)

        async def invoke(identity: Identity) -> ChatReply:
            conversation = self.conversations.get(identity.user_id, conversation_id)
            context = conversation.snapshot_for_request(self.context_messages)
            payload = [message.as_payload() for message in [*context, user_message]]
            reply = await self.client.complete(payload)
            # The conversation may have ended or expired during the call; the
            # reply is still delivered and counted.
            conversation.append(user_message)
            conversation.append(ChatMessage(role=ChatRole.ASSISTANT, content=reply))
            self.conversations.touch(identity.user_id, conversation_id)
            return ChatReply(content=reply)

        return await self.orchestrator.perform(
            access_token, QuotaAction.SEND_MESSAGE, invoke, precheck=precheck
        )
