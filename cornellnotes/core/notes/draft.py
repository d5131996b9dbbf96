"""
Draft cache for a note that has not been saved yet.
"""
from enum import Enum
from typing import Dict


class DraftField(Enum):
    TITLE = "title"
    CUES = "cues"
    NOTES = "notes_html"
    SUMMARY = "summary_html"


class DraftCache:
    """
    Per-session key-value store for an unsaved note's fields.

    Owned by the editing session; cleared explicitly on save or discard.
    """

    def __init__(self):
        self._values: Dict[DraftField, str] = {}

    def set(self, field: DraftField, value: str) -> None:
        self._values[field] = value

    def get(self, field: DraftField, default: str = "") -> str:
        return self._values.get(field, default)

    def has(self, field: DraftField) -> bool:
        return field in self._values

    def clear(self) -> None:
        self._values.clear()

    @property
    def is_empty(self) -> bool:
        return not self._values

    def snapshot(self) -> Dict[str, str]:
        return {field.value: value for field, value in self._values.items()}
