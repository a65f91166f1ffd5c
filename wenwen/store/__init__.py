"""Local persistence for conversations.

Holds the ordered session collection and the current selection, and mirrors
it to a JSON file so history survives restarts.
"""

from wenwen.store.session_store import (
    SessionNotFoundError,
    SessionStore,
    SessionStoreError,
    get_session_store,
)

__all__ = ["SessionNotFoundError", "SessionStore", "SessionStoreError", "get_session_store"]
