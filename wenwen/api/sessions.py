"""Session history endpoints.

Create, list, select and delete conversations in the local store.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from wenwen.models.schemas import ChatSession, SelectSessionRequest, SessionSummary
from wenwen.store.session_store import SessionNotFoundError, SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

StoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_session_or_404(store: SessionStore, session_id: UUID) -> ChatSession:
    """Look up a session, translating a miss into a 404.

    Raises:
        HTTPException: 404 if the session does not exist.
    """
    try:
        return store.get_session(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("", response_model=list[SessionSummary])
async def list_sessions(store: StoreDep) -> list[SessionSummary]:
    """List sessions, most recently active first."""
    return [SessionSummary.from_session(session) for session in store.list_sessions()]


@router.post("", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def create_session(store: StoreDep) -> ChatSession:
    """Start a new empty session and make it current."""
    return store.create_session()


@router.get("/current", response_model=ChatSession)
async def get_current_session(store: StoreDep) -> ChatSession:
    if store.current_session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No session selected",
        )
    return store.current_session


@router.put("/current", response_model=ChatSession)
async def select_session(request: SelectSessionRequest, store: StoreDep) -> ChatSession:
    try:
        return store.select_session(request.session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/{session_id}", response_model=ChatSession)
async def get_session(session_id: UUID, store: StoreDep) -> ChatSession:
    return get_session_or_404(store, session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID, store: StoreDep) -> Response:
    try:
        store.delete_session(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
