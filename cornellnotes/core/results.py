"""
Explicit result values for store, save and export operations.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Type

from .errors import CornellNotesError, NotFound


class ResultStatus(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class Result:
    """Outcome of one operation: success, missing target or transient failure."""

    status: ResultStatus
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def not_found(self) -> bool:
        return self.status == ResultStatus.NOT_FOUND

    @property
    def failed(self) -> bool:
        return self.status == ResultStatus.FAILED

    def unwrap(self, failure_cls: Type[CornellNotesError] = CornellNotesError,
               note_id: Optional[str] = None) -> Any:
        """
        Return the value or raise the matching error.

        Args:
            failure_cls: Exception raised for a FAILED result
            note_id: Id reported by NotFound for a NOT_FOUND result

        Raises:
            NotFound: For a NOT_FOUND result
            failure_cls: For a FAILED result
        """
        if self.status == ResultStatus.NOT_FOUND:
            raise NotFound(note_id or "")
        if self.status == ResultStatus.FAILED:
            raise failure_cls(self.error or "Operation failed")
        return self.value

    @staticmethod
    def success(value: Any = None) -> "Result":
        return Result(ResultStatus.OK, value=value)

    @staticmethod
    def missing(note_id: str) -> "Result":
        return Result(ResultStatus.NOT_FOUND, error=f"Note not found: {note_id}")

    @staticmethod
    def failure(error: str) -> "Result":
        return Result(ResultStatus.FAILED, error=error)
