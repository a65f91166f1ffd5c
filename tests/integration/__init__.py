"""Integration tests for components working together as a system.

No mocks for core functionality - tests real interactions between the API,
the conversation service and the session store.

Coverage:
    - API endpoints with real HTTP requests over ASGITransport
    - SSE reply streaming from fragment to persisted session
    - Pinyin annotation against the sample dataset

Only the remote completion endpoint is faked. No API key is required.
"""
