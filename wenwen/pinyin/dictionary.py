"""Per-character pinyin dictionary loaded from a JSON dataset.

The dataset maps each character to an entry object, for example::

    {"好": {"pinyin_tone_lines": "hǎo"}}

Only the ``pinyin_tone_lines`` field is used for annotation; other entry
fields are kept but ignored.
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Constants
DEFAULT_DICTIONARY_PATH = Path("data") / "chinese_to_pinyin_dictionary_with_tones.json"
PINYIN_FIELD = "pinyin_tone_lines"


class PinyinDictionaryError(Exception):
    """Raised when the pinyin dataset cannot be loaded."""

    pass


class PinyinDictionary:
    """Character to pinyin lookup table."""

    def __init__(self, entries: dict[str, dict[str, str]] | None = None) -> None:
        self._entries = entries or {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, character: object) -> bool:
        return character in self._entries

    @classmethod
    def from_file(cls, path: Path) -> "PinyinDictionary":
        """Load the dataset from a JSON file.

        Args:
            path: Location of the JSON dataset.

        Returns:
            A populated PinyinDictionary.

        Raises:
            PinyinDictionaryError: If the file is missing, not JSON, or not a
                mapping of character to entry object.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise PinyinDictionaryError(f"Pinyin dictionary not found: {path}") from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PinyinDictionaryError(f"Invalid pinyin dictionary {path}: {e}") from e

        if not isinstance(raw, dict):
            raise PinyinDictionaryError(
                f"Invalid pinyin dictionary {path}: top level must be an object"
            )

        # Skip malformed entries rather than rejecting the whole dataset
        entries = {k: v for k, v in raw.items() if isinstance(v, dict)}
        skipped = len(raw) - len(entries)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed entries in {path}")

        return cls(entries)

    def lookup(self, character: str) -> str | None:
        """Return the toned pinyin for a character, or None if unknown."""
        entry = self._entries.get(character)
        if entry is None:
            return None
        pinyin = entry.get(PINYIN_FIELD)
        return pinyin if isinstance(pinyin, str) and pinyin else None


# Module-level singleton instance
_pinyin_dictionary: PinyinDictionary | None = None


def get_pinyin_dictionary() -> PinyinDictionary:
    """Get or create the global pinyin dictionary.

    Reads the dataset from WENWEN_PINYIN_DICT. Without a usable dataset the
    dictionary is empty and text is shown without annotations.

    Returns:
        The PinyinDictionary instance.
    """
    global _pinyin_dictionary
    if _pinyin_dictionary is None:
        path = Path(os.getenv("WENWEN_PINYIN_DICT", str(DEFAULT_DICTIONARY_PATH)))
        try:
            _pinyin_dictionary = PinyinDictionary.from_file(path)
            logger.info(f"Loaded {len(_pinyin_dictionary)} pinyin entries from {path}")
        except PinyinDictionaryError as e:
            logger.warning(f"{e}; pinyin annotation disabled")
            _pinyin_dictionary = PinyinDictionary()
    return _pinyin_dictionary
