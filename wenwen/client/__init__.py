"""Remote chat completion access.

Talks to a DeepSeek-compatible completion endpoint through the OpenAI SDK.

Responsibilities:
    - Client configuration from environment / .env
    - One POST per user turn with the full conversation context
    - Streamed deltas, or a single body replayed per character
    - Per-fragment and completion callbacks for streaming consumers

Knows nothing about sessions or persistence.
"""

from wenwen.client.chat_client import ChatCompletionClient, get_chat_client
from wenwen.client.config import ClientConfig, get_client_config

__all__ = ["ChatCompletionClient", "ClientConfig", "get_chat_client", "get_client_config"]
