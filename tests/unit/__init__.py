"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - models/: Pydantic validation, titles and serialization
    - store/: JSON persistence and session bookkeeping
    - client/: Request shape, SSE parsing and error fragments
    - chat/: Fragment accumulation and the conversation flow
    - pinyin/: Dictionary loading, wrapping and rendering

Follows single responsibility per test function. Leverages pytest-check for
multiple assertions per test.
"""
