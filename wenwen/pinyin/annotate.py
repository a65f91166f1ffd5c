"""Pinyin annotation and fixed-width layout of message text."""

import unicodedata

from wenwen.models.schemas import AnnotatedCharacter, AnnotatedMessage, ChatMessage
from wenwen.pinyin.dictionary import PinyinDictionary

MAX_CHARS_PER_LINE = 15


def split_into_lines(text: str, max_chars: int = MAX_CHARS_PER_LINE) -> list[str]:
    """Wrap text into lines of at most max_chars characters.

    Explicit newlines always end a line. Blank lines between paragraphs are
    kept; trailing blank lines are not.
    """
    if max_chars < 1:
        raise ValueError("max_chars must be at least 1")

    lines: list[str] = []
    for paragraph in text.splitlines():
        if not paragraph:
            lines.append("")
            continue
        for start in range(0, len(paragraph), max_chars):
            lines.append(paragraph[start : start + max_chars])

    while lines and not lines[-1]:
        lines.pop()
    return lines


def annotate(text: str, dictionary: PinyinDictionary) -> list[AnnotatedCharacter]:
    return [AnnotatedCharacter(character=char, pinyin=dictionary.lookup(char)) for char in text]


def annotate_message(
    message: ChatMessage,
    dictionary: PinyinDictionary,
    max_chars: int = MAX_CHARS_PER_LINE,
) -> AnnotatedMessage:
    """Lay out a message as lines of characters with their pinyin."""
    return AnnotatedMessage(
        id=message.id,
        role=message.role,
        content=message.content,
        is_streaming=message.is_streaming,
        lines=[annotate(line, dictionary) for line in split_into_lines(message.content, max_chars)],
    )


def _display_width(text: str) -> int:
    return sum(2 if unicodedata.east_asian_width(char) in ("W", "F") else 1 for char in text)


def _render_line(cells: list[AnnotatedCharacter]) -> list[str]:
    if not any(cell.pinyin for cell in cells):
        return ["".join(cell.character for cell in cells)]

    top: list[str] = []
    bottom: list[str] = []
    for cell in cells:
        pinyin = cell.pinyin or ""
        width = max(_display_width(pinyin), _display_width(cell.character))
        top.append(pinyin + " " * (width - _display_width(pinyin)))
        bottom.append(cell.character + " " * (width - _display_width(cell.character)))
    return [" ".join(top).rstrip(), " ".join(bottom).rstrip()]


def render_text(
    message: ChatMessage,
    dictionary: PinyinDictionary,
    show_pinyin: bool = True,
    max_chars: int = MAX_CHARS_PER_LINE,
) -> str:
    """Render a message for a terminal, pinyin row above each text row."""
    if not show_pinyin:
        return message.content

    rendered: list[str] = []
    for line in annotate_message(message, dictionary, max_chars).lines:
        rendered.extend(_render_line(line))
    return "\n".join(rendered)
