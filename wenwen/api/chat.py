"""Chat endpoints for sending user turns.

Supports a blocking request/response form and a Server-Sent Events form that
forwards reply fragments as they arrive from the completion endpoint.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from wenwen.api.sessions import get_session_or_404
from wenwen.chat.service import (
    CONVERSATION_STARTERS,
    ConversationBusyError,
    ConversationService,
    EmptyMessageError,
    get_conversation_service,
)
from wenwen.models.schemas import ChatMessage, ChatSession, SendMessageRequest, StreamChunk
from wenwen.store.session_store import SessionNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

ServiceDep = Annotated[ConversationService, Depends(get_conversation_service)]

# Streaming replies in progress, referenced until they finish
_reply_tasks: set[asyncio.Task[ChatMessage | None]] = set()


def _ensure_idle(service: ConversationService, session_id: UUID) -> None:
    """Reject the request before any work if the session is unknown or busy.

    Raises:
        HTTPException: 404 if the session does not exist, 409 if it is busy.
    """
    get_session_or_404(service.store, session_id)
    if service.is_busy(session_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Session {session_id} is already awaiting a reply",
        )


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


@router.post("/sessions/{session_id}/messages", response_model=ChatMessage)
async def send_message(
    session_id: UUID,
    request: SendMessageRequest,
    service: ServiceDep,
) -> ChatMessage:
    """Send a user turn and wait for the complete assistant reply.

    Raises:
        404: Session does not exist.
        409: Session already has a reply in progress.
        422: Empty message.
        502: Completion endpoint returned no text.
    """
    _ensure_idle(service, session_id)
    try:
        reply = await service.send_message(session_id, request.message)
    except EmptyMessageError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(e)
        ) from e
    except ConversationBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    if reply is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Completion service returned an empty reply",
        )
    return reply


@router.post("/sessions/{session_id}/messages/stream")
async def stream_message(
    session_id: UUID,
    request: SendMessageRequest,
    service: ServiceDep,
) -> StreamingResponse:
    """Send a user turn and stream the reply as Server-Sent Events.

    Each event is a StreamChunk. Content chunks have done=false; the final
    chunk has done=true and carries an error message if sending failed.
    """
    _ensure_idle(service, session_id)

    async def event_stream() -> AsyncIterator[str]:
        fragments: asyncio.Queue[str | None] = asyncio.Queue()

        def on_reply_done(finished: asyncio.Task[ChatMessage | None]) -> None:
            _reply_tasks.discard(finished)
            if not finished.cancelled() and (error := finished.exception()) is not None:
                logger.error(f"Streaming reply failed for session {session_id}: {error}")
            fragments.put_nowait(None)

        # Runs to completion even if the client disconnects
        task = asyncio.create_task(
            service.send_message(session_id, request.message, on_partial=fragments.put_nowait)
        )
        _reply_tasks.add(task)
        task.add_done_callback(on_reply_done)

        while (fragment := await fragments.get()) is not None:
            yield _sse(StreamChunk(content=fragment, done=False))

        error = None if task.cancelled() else task.exception()
        if error is not None:
            yield _sse(StreamChunk(content="", done=True, error=str(error)))
            return

        yield _sse(StreamChunk(content="", done=True))

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.get("/starters", response_model=list[str])
async def list_starters() -> list[str]:
    """Suggested opening prompts for a new conversation."""
    return list(CONVERSATION_STARTERS)


@router.post("/starters/{index}", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def start_from_starter(index: int, service: ServiceDep) -> ChatSession:
    """Open a new session with a starter prompt and wait for the reply."""
    if not 0 <= index < len(CONVERSATION_STARTERS):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No conversation starter at index {index}",
        )
    session, _ = await service.start_conversation(CONVERSATION_STARTERS[index])
    return session
