"""FastAPI endpoints for the WenWen chat backend.

HTTP and streaming routes for any front-end that renders the conversation.
Supports Server-Sent Events for real-time reply streaming.

Endpoints:
    - GET /health: Service health status
    - /sessions: Conversation history (list, create, select, delete)
    - POST /sessions/{id}/messages[/stream]: Send a user turn
    - GET /sessions/{id}/annotated, GET /pinyin: Pinyin annotation
    - /starters: Suggested opening prompts
"""

from wenwen.api.app import app, create_app

__all__ = ["app", "create_app"]
