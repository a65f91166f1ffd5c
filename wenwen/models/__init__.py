"""Pydantic models for conversations and API payloads.

Provides type safety, validation, and JSON persistence for the session store.

Models:
    - ChatMessage: Individual turn in a conversation
    - ChatSession: Ordered conversation with title and timestamps
    - SendMessageRequest: Incoming user turn payload
    - StreamChunk: One SSE event of a streamed reply
    - SessionSummary: Session details for history listings
    - AnnotatedMessage: Message laid out with pinyin per character
"""

from wenwen.models.schemas import (
    AnnotatedCharacter,
    AnnotatedMessage,
    ChatMessage,
    ChatSession,
    MessageRole,
    SelectSessionRequest,
    SendMessageRequest,
    SessionSummary,
    StreamChunk,
)

__all__ = [
    "AnnotatedCharacter",
    "AnnotatedMessage",
    "ChatMessage",
    "ChatSession",
    "MessageRole",
    "SelectSessionRequest",
    "SendMessageRequest",
    "SessionSummary",
    "StreamChunk",
]
