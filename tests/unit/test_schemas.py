"""Unit tests for conversation models and request payloads."""

from datetime import timedelta

import pytest
import pytest_check as check
from pydantic import ValidationError

from wenwen.models.schemas import (
    ChatMessage,
    ChatSession,
    MessageRole,
    SendMessageRequest,
    SessionSummary,
)


class TestChatMessage:
    """Tests for ChatMessage."""

    def test_to_api_dict_has_role_and_content_only(self) -> None:
        message = ChatMessage(role=MessageRole.USER, content="你好", is_streaming=True)

        assert message.to_api_dict() == {"role": "user", "content": "你好"}

    def test_defaults(self) -> None:
        """New messages are complete and get distinct ids."""
        first = ChatMessage(role=MessageRole.ASSISTANT, content="a")
        second = ChatMessage(role=MessageRole.ASSISTANT, content="b")

        check.is_false(first.is_streaming)
        check.not_equal(first.id, second.id)

    def test_rejects_unknown_role(self) -> None:
        with pytest.raises(ValidationError):
            ChatMessage(role="narrator", content="...")


class TestChatSession:
    """Tests for ChatSession title and message bookkeeping."""

    def test_new_session_has_default_title(self) -> None:
        session = ChatSession()

        check.equal(session.title, "新对话")
        check.equal(session.messages, [])
        check.is_none(session.last_message)

    def test_first_message_sets_short_title_verbatim(self) -> None:
        session = ChatSession()
        session.add_message(ChatMessage(role=MessageRole.USER, content="给我念一首古诗"))

        assert session.title == "给我念一首古诗"

    def test_long_first_message_is_truncated_with_ellipsis(self) -> None:
        """Titles keep the first 20 characters and mark the cut."""
        content = "教我在上海和出租车司机聊天的话题，比如美食和生活"
        session = ChatSession()
        session.add_message(ChatMessage(role=MessageRole.USER, content=content))

        assert session.title == content[:20] + "..."

    def test_exactly_twenty_characters_has_no_ellipsis(self) -> None:
        content = "一" * 20
        session = ChatSession()
        session.add_message(ChatMessage(role=MessageRole.USER, content=content))

        assert session.title == content

    def test_later_messages_do_not_change_title(self) -> None:
        session = ChatSession()
        session.add_message(ChatMessage(role=MessageRole.USER, content="第一句"))
        session.add_message(ChatMessage(role=MessageRole.ASSISTANT, content="第二句"))

        check.equal(session.title, "第一句")
        check.equal(session.last_message.content, "第二句")

    def test_generate_title_on_empty_session_is_noop(self) -> None:
        session = ChatSession(title="自定义")
        session.generate_title()

        assert session.title == "自定义"

    def test_add_message_bumps_last_modified(self) -> None:
        session = ChatSession()
        session.last_modified = session.created_at - timedelta(days=1)

        session.add_message(ChatMessage(role=MessageRole.USER, content="你好"))

        assert session.last_modified >= session.created_at

    def test_json_round_trip_preserves_turns(self) -> None:
        session = ChatSession()
        session.add_message(ChatMessage(role=MessageRole.USER, content="你好"))
        session.add_message(
            ChatMessage(role=MessageRole.ASSISTANT, content="你好！", is_streaming=True)
        )

        restored = ChatSession.model_validate_json(session.model_dump_json())

        assert restored == session

    def test_summary_counts_messages(self) -> None:
        session = ChatSession()
        session.add_message(ChatMessage(role=MessageRole.USER, content="你好"))

        summary = SessionSummary.from_session(session)

        check.equal(summary.id, session.id)
        check.equal(summary.title, "你好")
        check.equal(summary.message_count, 1)


class TestSendMessageRequest:
    """Tests for SendMessageRequest validation."""

    def test_strips_whitespace(self) -> None:
        assert SendMessageRequest(message="  你好 \n").message == "你好"

    def test_rejects_whitespace_only(self) -> None:
        with pytest.raises(ValidationError):
            SendMessageRequest(message="   ")
