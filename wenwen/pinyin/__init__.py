"""Pinyin annotation for displaying conversation turns.

Responsibilities:
    - Loading the per-character pinyin dataset
    - Character lookups with graceful fallback for unknown characters
    - Fixed-width line layout for annotated rendering
    - Plain-text rendering for terminals

The dataset itself is supplied by the operator; without it, text renders
unannotated.
"""

from wenwen.pinyin.annotate import annotate, annotate_message, render_text, split_into_lines
from wenwen.pinyin.dictionary import (
    PinyinDictionary,
    PinyinDictionaryError,
    get_pinyin_dictionary,
)

__all__ = [
    "PinyinDictionary",
    "PinyinDictionaryError",
    "annotate",
    "annotate_message",
    "get_pinyin_dictionary",
    "render_text",
    "split_into_lines",
]
