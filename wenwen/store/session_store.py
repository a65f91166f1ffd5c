"""JSON-file session store.

Keeps every conversation in memory, ordered by creation, and mirrors the whole
collection to a single JSON file after each change.
"""

import logging
import os
from pathlib import Path
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from wenwen.models.schemas import ChatSession

logger = logging.getLogger(__name__)

SESSIONS_FILENAME = "chat_sessions.json"

_SESSIONS_ADAPTER = TypeAdapter(list[ChatSession])


def _default_sessions_path() -> Path:
    """Session file location under $WENWEN_DATA_DIR (default ./data)."""
    return Path(os.getenv("WENWEN_DATA_DIR", "data")) / SESSIONS_FILENAME


class SessionStoreError(Exception):
    """Raised when the session file cannot be written."""


class SessionNotFoundError(KeyError):
    """Raised when no session has the requested id."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__(str(session_id))
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"


class SessionStore:
    """Ordered collection of chat sessions persisted as JSON.

    Attributes:
        path: Location of the JSON file.
        sessions: Sessions in creation order.
        current_session: The session the user is looking at, if any.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _default_sessions_path()
        self.sessions: list[ChatSession] = []
        self.current_session: ChatSession | None = None

    def load(self) -> None:
        """Replace the in-memory sessions with the file's contents.

        A missing file means no history yet. An unreadable or corrupt file is
        logged and treated as empty; it is only overwritten by the next save.
        """
        self.current_session = None
        if not self.path.exists():
            self.sessions = []
            return

        try:
            self.sessions = _SESSIONS_ADAPTER.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning(f"Could not load sessions from {self.path}: {e}")
            self.sessions = []
            return

        logger.info(f"Loaded {len(self.sessions)} sessions from {self.path}")

    def save(self) -> None:
        """Write all sessions to disk, replacing the previous file atomically.

        Raises:
            SessionStoreError: If the file cannot be written.
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(_SESSIONS_ADAPTER.dump_json(self.sessions, indent=2))
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise SessionStoreError(f"Failed to save sessions to {self.path}: {e}") from e

    def _index_of(self, session_id: UUID) -> int:
        for index, session in enumerate(self.sessions):
            if session.id == session_id:
                return index
        raise SessionNotFoundError(session_id)

    def get_session(self, session_id: UUID) -> ChatSession:
        return self.sessions[self._index_of(session_id)]

    def create_session(self) -> ChatSession:
        """Start a new empty session and make it current."""
        session = ChatSession()
        self.sessions.append(session)
        self.current_session = session
        self.save()
        logger.info(f"Created session {session.id}")
        return session

    def select_session(self, session_id: UUID) -> ChatSession:
        """Make an existing session current."""
        session = self.get_session(session_id)
        self.current_session = session
        return session

    def update_session(self, session: ChatSession, make_current: bool = True) -> None:
        """Store a modified session in place and save.

        Args:
            session: The modified session; matched by id.
            make_current: Also make it the current session.

        Raises:
            SessionNotFoundError: If no stored session has this id.
        """
        self.sessions[self._index_of(session.id)] = session
        if make_current:
            self.current_session = session
        elif self.current_session is not None and self.current_session.id == session.id:
            self.current_session = session
        self.save()

    def delete_session(self, session_id: UUID) -> None:
        del self.sessions[self._index_of(session_id)]
        if self.current_session is not None and self.current_session.id == session_id:
            self.current_session = None
        self.save()
        logger.info(f"Deleted session {session_id}")

    def list_sessions(self) -> list[ChatSession]:
        """Sessions ordered by last activity, newest first."""
        return sorted(self.sessions, key=lambda s: s.last_modified, reverse=True)


# Module-level singleton instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get or create the global session store, loaded from disk.

    Returns:
        The SessionStore instance.
    """
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
        _session_store.load()
    return _session_store
