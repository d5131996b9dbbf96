"""
Core business logic for Cornell Notes.
"""
from .errors import (
    AnnotationStateError,
    CompressionSkipped,
    CornellNotesError,
    DecodeError,
    ExportFailure,
    NotFound,
    SaveFailure,
)
from .results import Result, ResultStatus

__all__ = [
    "AnnotationStateError",
    "CompressionSkipped",
    "CornellNotesError",
    "DecodeError",
    "ExportFailure",
    "NotFound",
    "SaveFailure",
    "Result",
    "ResultStatus",
]
