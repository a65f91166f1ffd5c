"""Assembly of streamed reply fragments into the conversation."""

from wenwen.models.schemas import ChatMessage, ChatSession, MessageRole


def append_fragment(session: ChatSession, fragment: str) -> ChatMessage | None:
    """Add a reply fragment to the session's trailing assistant turn.

    The fragment extends the last message when it is an assistant turn that is
    still streaming; otherwise it opens a new streaming assistant turn.

    Returns:
        The assistant message that received the fragment, or None for an
        empty fragment.
    """
    if not fragment:
        return None

    last = session.last_message
    if last is not None and last.role == MessageRole.ASSISTANT and last.is_streaming:
        last.content += fragment
        return last

    message = ChatMessage(role=MessageRole.ASSISTANT, content=fragment, is_streaming=True)
    session.add_message(message)
    return message


def finish(session: ChatSession) -> None:
    """Mark the trailing turn as complete."""
    if session.last_message is not None:
        session.last_message.is_streaming = False
