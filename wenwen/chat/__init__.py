"""Conversation flow between the user, the session store and the remote model.

Responsibilities:
    - Appending user turns and persisting them before each request
    - Accumulating streamed fragments into the trailing assistant turn
    - One outstanding request per conversation
    - Built-in conversation starters
"""

from wenwen.chat.accumulator import append_fragment, finish
from wenwen.chat.service import (
    CONVERSATION_STARTERS,
    ConversationBusyError,
    ConversationService,
    EmptyMessageError,
    get_conversation_service,
)

__all__ = [
    "CONVERSATION_STARTERS",
    "ConversationBusyError",
    "ConversationService",
    "EmptyMessageError",
    "append_fragment",
    "finish",
    "get_conversation_service",
]
