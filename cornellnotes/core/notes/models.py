from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from cornellnotes.core.content import ContentTree, from_html, to_html


@dataclass
class Note:
    """A Cornell note: title, cue column, rich body and rich summary."""
    title: str = ""
    cues: str = ""
    body: ContentTree = field(default_factory=ContentTree)
    summary: ContentTree = field(default_factory=ContentTree)

    # Assigned by the record store on first save
    id: Optional[str] = None
    updated_at: Optional[int] = None  # epoch millis

    @property
    def is_saved(self) -> bool:
        return self.id is not None

    def to_fields(self) -> Dict[str, Any]:
        """Editable fields in record form, as sent to the store."""
        return {
            'title': self.title,
            'cues': self.cues,
            'notes': to_html(self.body),
            'summary': to_html(self.summary),
        }

    def to_record(self) -> Dict[str, Any]:
        data = self.to_fields()
        if self.id is not None:
            data['id'] = self.id
        if self.updated_at is not None:
            data['updatedAt'] = self.updated_at
        return data

    @staticmethod
    def from_record(data: Dict[str, Any]) -> "Note":
        """Create a note from a stored record; missing fields default to empty."""
        return Note(
            title=data.get('title') or '',
            cues=data.get('cues') or '',
            body=from_html(data.get('notes') or ''),
            summary=from_html(data.get('summary') or ''),
            id=data.get('id'),
            updated_at=data.get('updatedAt'),
        )
