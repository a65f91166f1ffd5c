"""Pinyin annotation endpoints.

Returns text laid out as fixed-width lines of characters paired with their
pinyin, ready for a front-end to draw.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wenwen.api.sessions import StoreDep, get_session_or_404
from wenwen.models.schemas import AnnotatedCharacter, AnnotatedMessage
from wenwen.pinyin.annotate import MAX_CHARS_PER_LINE, annotate, annotate_message, split_into_lines
from wenwen.pinyin.dictionary import PinyinDictionary, get_pinyin_dictionary

router = APIRouter(tags=["pinyin"])

DictionaryDep = Annotated[PinyinDictionary, Depends(get_pinyin_dictionary)]
MaxCharsQuery = Annotated[int, Query(ge=1, le=200)]


@router.get("/pinyin", response_model=list[list[AnnotatedCharacter]])
async def annotate_text(
    dictionary: DictionaryDep,
    text: Annotated[str, Query(min_length=1)],
    max_chars: MaxCharsQuery = MAX_CHARS_PER_LINE,
) -> list[list[AnnotatedCharacter]]:
    """Annotate arbitrary text, one list per display line."""
    return [annotate(line, dictionary) for line in split_into_lines(text, max_chars)]


@router.get("/sessions/{session_id}/annotated", response_model=list[AnnotatedMessage])
async def annotate_session(
    session_id: UUID,
    store: StoreDep,
    dictionary: DictionaryDep,
    max_chars: MaxCharsQuery = MAX_CHARS_PER_LINE,
) -> list[AnnotatedMessage]:
    """All turns of a session with pinyin per character."""
    session = get_session_or_404(store, session_id)
    return [annotate_message(message, dictionary, max_chars) for message in session.messages]
