"""Client for the remote chat completion endpoint.

Sends one request per user turn through the OpenAI SDK and turns the reply
into a sequence of text fragments, whether it arrives as a server-sent-event
stream or as a single completion body. Network and protocol failures never
escape as exceptions: they surface as an in-band error fragment so the
conversation always gets a completed assistant turn.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import aclosing

import httpx
from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from wenwen.client.config import ClientConfig, get_client_config

logger = logging.getLogger(__name__)

REQUEST_FAILED_TEXT = "（请求出错）"
UNPARSEABLE_RESPONSE_TEXT = "（无法解析服务器响应）"


def _delta_content(chunk: object) -> str:
    """Pull choices[0].delta.content out of a stream chunk, or ''."""
    choices = getattr(chunk, "choices", None) or []
    if not choices:
        return ""
    delta = getattr(choices[0], "delta", None)
    content = getattr(delta, "content", None) if delta else None
    return content if isinstance(content, str) else ""


def _message_content(completion: object) -> str | None:
    """Pull choices[0].message.content out of a full completion."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


class ChatCompletionClient:
    """Client for an OpenAI-compatible chat completions endpoint.

    Wraps AsyncOpenAI with:
    - The configured key, base URL, model and timeout
    - Per-character replay of non-streamed replies
    - In-band error fragments instead of raised API errors
    - A callback interface mirroring the streaming UI contract
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, mainly for tests.
        """
        self._config = config or get_client_config()
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _openai_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.api_base_url,
            timeout=self._config.timeout,
            max_retries=0,
            http_client=httpx.AsyncClient(
                transport=self._transport, timeout=self._config.timeout
            ),
        )

    async def stream_deltas(self, messages: list[dict[str, str]]) -> AsyncIterator[str]:
        """Stream reply fragments for one user turn.

        Args:
            messages: Conversation context as role/content dicts.

        Yields:
            Text fragments in arrival order. A full (non-streamed) reply is
            yielded one character at a time.
        """
        logger.debug(f"POST {self._config.completions_url} (stream={self._config.stream})")
        async with self._openai_client() as client:
            try:
                if self._config.stream:
                    stream = await client.chat.completions.create(
                        model=self._config.model_name,
                        messages=messages,
                        stream=True,
                    )
                    async with stream:
                        async for chunk in stream:
                            if content := _delta_content(chunk):
                                yield content
                    return

                completion = await client.chat.completions.create(
                    model=self._config.model_name,
                    messages=messages,
                    stream=False,
                )
                content = _message_content(completion)
                if content is None:
                    logger.warning("Completion response could not be parsed")
                    yield UNPARSEABLE_RESPONSE_TEXT
                    return
                for char in content:
                    yield char
            except APIStatusError as e:
                logger.warning(f"Completion request failed: HTTP {e.status_code}")
                yield REQUEST_FAILED_TEXT
            except APIConnectionError as e:
                logger.warning(f"Completion request failed: {e!r}")
                yield REQUEST_FAILED_TEXT
            except APIError as e:
                logger.warning(f"Completion endpoint reported an error: {e}")
                yield REQUEST_FAILED_TEXT
            except ValueError as e:
                logger.warning(f"Completion response could not be decoded: {e}")
                yield UNPARSEABLE_RESPONSE_TEXT

    async def send_streaming_request(
        self,
        messages: list[dict[str, str]],
        on_partial: Callable[[str], None],
        on_complete: Callable[[], None],
    ) -> None:
        """Send one turn, reporting each fragment and then completion.

        Args:
            messages: Conversation context as role/content dicts.
            on_partial: Called with every text fragment, in order.
            on_complete: Called exactly once after the last fragment.
        """
        try:
            async with aclosing(self.stream_deltas(messages)) as fragments:
                async for fragment in fragments:
                    on_partial(fragment)
        finally:
            on_complete()

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Get the complete reply text for one turn."""
        async with aclosing(self.stream_deltas(messages)) as fragments:
            return "".join([fragment async for fragment in fragments])


# Module-level singleton instance
_chat_client: ChatCompletionClient | None = None


def get_chat_client() -> ChatCompletionClient:
    """Get or create the global chat completion client.

    Returns:
        The ChatCompletionClient instance.
    """
    global _chat_client
    if _chat_client is None:
        _chat_client = ChatCompletionClient()
    return _chat_client
