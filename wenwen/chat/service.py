"""Conversation service tying the store, the completion client and the accumulator.

Each user turn is persisted before the request goes out, and the growing reply
is persisted as fragments land (at most once per persist interval, always on
the first fragment and on completion), so a crash mid-reply leaves the partial
answer (still flagged as streaming) in the history.
"""

import logging
import time
from collections.abc import Callable
from uuid import UUID

from wenwen.chat.accumulator import append_fragment, finish
from wenwen.client.chat_client import ChatCompletionClient, get_chat_client
from wenwen.models.schemas import ChatMessage, ChatSession, MessageRole
from wenwen.store.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

PERSIST_INTERVAL = 0.5

CONVERSATION_STARTERS: tuple[str, ...] = (
    "教我三十六计的一个计谋，用ASCII艺术来解释",
    "给我念一首王梵志的古诗",
    "教我在上海和出租车司机聊天的话题，比如美食和生活",
)


class EmptyMessageError(ValueError):
    """Raised when a user turn has no text after stripping whitespace."""


class ConversationBusyError(Exception):
    """Raised when a conversation already has a reply in progress."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__(f"Session {session_id} is already awaiting a reply")
        self.session_id = session_id


class ConversationService:
    """Sends user turns and assembles the streamed replies into sessions.

    Allows one outstanding request per conversation; different conversations
    may stream concurrently.
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        client: ChatCompletionClient | None = None,
        persist_interval: float = PERSIST_INTERVAL,
    ) -> None:
        """Initialize the service.

        Args:
            store: Session store; the global one if not provided.
            client: Completion client; the global one if not provided.
            persist_interval: Minimum seconds between saves of a partial reply.
        """
        self._store = store or get_session_store()
        self._client = client or get_chat_client()
        self._persist_interval = persist_interval
        self._in_flight: set[UUID] = set()

    @property
    def store(self) -> SessionStore:
        return self._store

    def is_busy(self, session_id: UUID) -> bool:
        return session_id in self._in_flight

    def build_context(self, session: ChatSession) -> list[dict[str, str]]:
        """Role/content turns sent with a request, system prompt first."""
        context: list[dict[str, str]] = []
        if system_prompt := self._client.config.system_prompt:
            context.append({"role": MessageRole.SYSTEM.value, "content": system_prompt})
        context.extend(message.to_api_dict() for message in session.messages)
        return context

    async def send_message(
        self,
        session_id: UUID,
        content: str,
        on_partial: Callable[[str], None] | None = None,
    ) -> ChatMessage | None:
        """Add a user turn and stream the assistant's reply into the session.

        Args:
            session_id: The conversation to extend.
            content: The user's text; surrounding whitespace is dropped.
            on_partial: Optional observer called with each reply fragment.

        Returns:
            The completed assistant message, or None if the endpoint
            returned no text at all.

        Raises:
            EmptyMessageError: If content is blank.
            SessionNotFoundError: If the session does not exist.
            ConversationBusyError: If a reply is already in progress.
        """
        text = content.strip()
        if not text:
            raise EmptyMessageError("Message is empty")
        if self.is_busy(session_id):
            raise ConversationBusyError(session_id)

        session = self._store.get_session(session_id)
        self._in_flight.add(session_id)
        try:
            session.add_message(ChatMessage(role=MessageRole.USER, content=text))
            self._store.update_session(session)
            context = self.build_context(session)
            last_saved = float("-inf")

            def handle_partial(fragment: str) -> None:
                nonlocal last_saved
                if append_fragment(session, fragment) is None:
                    return
                now = time.monotonic()
                if now - last_saved >= self._persist_interval:
                    self._store.update_session(session, make_current=False)
                    last_saved = now
                if on_partial is not None:
                    on_partial(fragment)

            def handle_complete() -> None:
                finish(session)
                self._store.update_session(session, make_current=False)

            logger.info(f"Sending turn {len(session.messages)} of session {session_id}")
            await self._client.send_streaming_request(context, handle_partial, handle_complete)
        finally:
            self._in_flight.discard(session_id)

        reply = session.last_message
        if reply is None or reply.role != MessageRole.ASSISTANT:
            logger.warning(f"Empty reply for session {session_id}")
            return None
        return reply

    async def start_conversation(
        self,
        starter: str,
        on_partial: Callable[[str], None] | None = None,
    ) -> tuple[ChatSession, ChatMessage | None]:
        """Open a new session whose first user turn is the starter prompt."""
        session = self._store.create_session()
        reply = await self.send_message(session.id, starter, on_partial=on_partial)
        return session, reply


# Module-level singleton instance
_conversation_service: ConversationService | None = None


def get_conversation_service() -> ConversationService:
    """Get or create the global conversation service.

    Returns:
        The ConversationService instance.
    """
    global _conversation_service
    if _conversation_service is None:
        _conversation_service = ConversationService()
    return _conversation_service
