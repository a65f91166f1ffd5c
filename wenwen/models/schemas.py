from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

DEFAULT_SESSION_TITLE = "新对话"
TITLE_PREVIEW_CHARS = 20


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MessageRole(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """A single turn in a conversation.

    Attributes:
        id: Stable identifier, preserved across save/load.
        role: The speaker (user, assistant, or system).
        content: The message text. Grows while the reply is streaming.
        is_streaming: True while fragments are still arriving for this turn.
        created_at: UTC timestamp of when the turn was created.
    """

    id: UUID = Field(default_factory=uuid4)
    role: MessageRole
    content: str
    is_streaming: bool = False
    created_at: datetime = Field(default_factory=_utcnow)

    def to_api_dict(self) -> dict[str, str]:
        """Return the role/content pair sent to the completion endpoint."""
        return {"role": self.role.value, "content": self.content}


class ChatSession(BaseModel):
    """An ordered conversation with its own title and timestamps.

    Attributes:
        id: Unique session identifier.
        title: Display title, derived from the first message.
        messages: Turns in insertion order.
        created_at: UTC timestamp of session creation.
        last_modified: UTC timestamp of the last added message.
    """

    id: UUID = Field(default_factory=uuid4)
    title: str = DEFAULT_SESSION_TITLE
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    last_modified: datetime = Field(default_factory=_utcnow)

    @property
    def last_message(self) -> ChatMessage | None:
        return self.messages[-1] if self.messages else None

    def generate_title(self) -> None:
        """Derive the title from the first message's leading characters."""
        if not self.messages:
            return
        first = self.messages[0].content
        preview = first[:TITLE_PREVIEW_CHARS]
        self.title = preview + ("..." if len(first) > TITLE_PREVIEW_CHARS else "")

    def add_message(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self.last_modified = _utcnow()
        if len(self.messages) == 1:
            self.generate_title()


class SendMessageRequest(BaseModel):
    """Request payload for sending a user turn.

    Attributes:
        message: The user's text, stripped before validation.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class SelectSessionRequest(BaseModel):
    session_id: UUID


class StreamChunk(BaseModel):
    """A chunk of streamed reply data.

    Attributes:
        content: The text fragment carried by this chunk.
        done: Whether this is the final chunk.
        error: Error message if the reply could not be produced.
    """

    content: str
    done: bool
    error: str | None = None


class SessionSummary(BaseModel):
    """Lightweight view of a session for history listings."""

    id: UUID
    title: str
    created_at: datetime
    last_modified: datetime
    message_count: int = Field(..., ge=0)

    @classmethod
    def from_session(cls, session: ChatSession) -> "SessionSummary":
        return cls(
            id=session.id,
            title=session.title,
            created_at=session.created_at,
            last_modified=session.last_modified,
            message_count=len(session.messages),
        )


class AnnotatedCharacter(BaseModel):
    """A character paired with its pinyin, if the dictionary knows it."""

    character: str
    pinyin: str | None = None


class AnnotatedMessage(BaseModel):
    """A message laid out as fixed-width lines of annotated characters."""

    id: UUID
    role: MessageRole
    content: str
    is_streaming: bool
    lines: list[list[AnnotatedCharacter]]
