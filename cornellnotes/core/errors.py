"""
Error taxonomy. Every failure is scoped to one user operation and retryable.
"""


class CornellNotesError(Exception):
    """Base class for all application errors."""


class NotFound(CornellNotesError):
    """An operation targeted a note id that does not exist."""

    def __init__(self, note_id: str):
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id


class DecodeError(CornellNotesError):
    """Image bytes could not be decoded."""


class CompressionSkipped(CornellNotesError):
    """A single embedded image could not be recompressed during export."""


class ExportFailure(CornellNotesError):
    """Rasterization, pagination or assembly failed; the export is aborted."""


class SaveFailure(CornellNotesError):
    """The record store could not persist a note."""


class AnnotationStateError(CornellNotesError):
    """An annotation operation was called in a state that does not allow it."""
