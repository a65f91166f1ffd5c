"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - test_data_dir: Path to sample files directory
    - pinyin_dictionary: Dictionary loaded from the sample dataset
    - client_config: Client configuration pointing at a fake endpoint
    - session_store: Session store backed by a temporary file
    - sse_body / completion_body: Builders for fake completion responses
    - async_client: HTTPX client for API testing against a fake endpoint
    - route_completions: Swap the fake endpoint behind async_client

The remote completion endpoint is always replaced by httpx.MockTransport.
"""

import json
from collections.abc import AsyncIterator, Callable
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from wenwen.api import app
from wenwen.chat.service import ConversationService, get_conversation_service
from wenwen.client.chat_client import ChatCompletionClient
from wenwen.client.config import ClientConfig
from wenwen.pinyin.dictionary import PinyinDictionary, get_pinyin_dictionary
from wenwen.store.session_store import SessionStore, get_session_store


@pytest.fixture
def test_data_dir() -> Path:
    """Return path to test data directory.

    Returns:
        Absolute path to tests/data/ directory.
    """
    return Path(__file__).parent / "data"


@pytest.fixture
def pinyin_dictionary(test_data_dir: Path) -> PinyinDictionary:
    return PinyinDictionary.from_file(test_data_dir / "pinyin_sample.json")


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(api_key="sk-test-key", base_url="https://api.test")


@pytest.fixture
def session_store(tmp_path: Path) -> SessionStore:
    """Empty session store writing to a temporary directory."""
    return SessionStore(tmp_path / "chat_sessions.json")


@pytest.fixture
def sse_body() -> Callable[..., bytes]:
    """Build a chat completion SSE body from text deltas."""

    def build(*deltas: str, done: bool = True) -> bytes:
        events = [
            f"data: {json.dumps({'choices': [{'index': 0, 'delta': {'content': d}}]})}\n\n"
            for d in deltas
        ]
        if done:
            events.append("data: [DONE]\n\n")
        return "".join(events).encode()

    return build


@pytest.fixture
def completion_body() -> Callable[[str], bytes]:
    """Build a non-streamed chat completion JSON body."""

    def build(content: str) -> bytes:
        payload = {
            "id": "chatcmpl-test",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        }
        return json.dumps(payload).encode()

    return build


@pytest.fixture
def sse_transport(sse_body: Callable[..., bytes]) -> httpx.MockTransport:
    """Fake completion endpoint streaming the reply '你好！'."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=sse_body("你", "好", "！"),
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def conversation_service(
    session_store: SessionStore,
    client_config: ClientConfig,
    sse_transport: httpx.MockTransport,
) -> ConversationService:
    client = ChatCompletionClient(config=client_config, transport=sse_transport)
    return ConversationService(store=session_store, client=client)


@pytest.fixture
async def async_client(
    conversation_service: ConversationService,
    pinyin_dictionary: PinyinDictionary,
) -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_session_store] = lambda: conversation_service.store
    app.dependency_overrides[get_conversation_service] = lambda: conversation_service
    app.dependency_overrides[get_pinyin_dictionary] = lambda: pinyin_dictionary

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def route_completions(
    async_client: AsyncClient,
    session_store: SessionStore,
    client_config: ClientConfig,
) -> Callable[[Callable[[httpx.Request], object]], ConversationService]:
    """Point the API at a fresh service whose completion endpoint is handler.

    The new service shares the session store used by async_client.
    """

    def install(handler: Callable[[httpx.Request], object]) -> ConversationService:
        client = ChatCompletionClient(config=client_config, transport=httpx.MockTransport(handler))
        service = ConversationService(store=session_store, client=client)
        app.dependency_overrides[get_conversation_service] = lambda: service
        return service

    return install
