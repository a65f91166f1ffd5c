"""WenWen - chat with a language model to practise Chinese, with pinyin annotations.

Combines httpx for the streaming completion client, FastAPI for the local
HTTP surface, and Pydantic for data validation and JSON persistence.

Components:
    - client: Remote chat completion access (SSE and single-body replies)
    - chat: Reply accumulation and the per-turn conversation flow
    - store: JSON-file session history
    - pinyin: Per-character pinyin lookup and annotated layout
    - api: HTTP endpoints and streaming responses
    - models: Conversation and request/response schemas
"""

__version__ = "0.1.0"
