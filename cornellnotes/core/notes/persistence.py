"""
JSON file record store for notes.
"""
import json
import os
import shutil
import tempfile
import time
import uuid
from typing import Any, Dict, List, Optional

from cornellnotes.core.results import Result
from cornellnotes.utils.logger import get_logger

logger = get_logger(__name__)

Record = Dict[str, Any]

RECORD_FIELDS = ('title', 'cues', 'notes', 'summary')


def _now_millis() -> int:
    return int(time.time() * 1000)


class NoteStore:
    """
    Stores note records in a single JSON file.

    Records look like ``{id, title, cues, notes, summary, updatedAt}`` where
    ``notes`` and ``summary`` hold serialized rich text. Writes are
    last-write-wins; there is no concurrency control.
    """

    def __init__(self, file_path: str):
        self.file_path = str(file_path)

    def _read(self) -> List[Record]:
        if not os.path.exists(self.file_path):
            return []
        with open(self.file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Unexpected notes file layout in {self.file_path}")
        return data

    def _write(self, notes: List[Record]) -> None:
        """Replace the notes file; the previous file survives any failure."""
        payload = json.dumps(notes, indent=2)
        directory = os.path.dirname(self.file_path) or '.'
        os.makedirs(directory, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(suffix='.json', dir=directory)
        try:
            with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            shutil.move(temp_path, self.file_path)
        except OSError:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    @staticmethod
    def _index_of(notes: List[Record], note_id: str) -> Optional[int]:
        for index, note in enumerate(notes):
            if note.get('id') == note_id:
                return index
        return None

    def list(self) -> Result:
        """
        List every stored note.

        Returns:
            Result whose value is the records, most recently updated first
        """
        try:
            notes = self._read()
        except (OSError, ValueError) as e:
            logger.error("Failed to read notes: %s", e)
            return Result.failure(str(e))
        notes.sort(key=lambda n: n.get('updatedAt') or 0, reverse=True)
        return Result.success(notes)

    def get(self, note_id: str) -> Result:
        try:
            notes = self._read()
        except (OSError, ValueError) as e:
            logger.error("Failed to read notes: %s", e)
            return Result.failure(str(e))
        index = self._index_of(notes, note_id)
        if index is None:
            return Result.missing(note_id)
        return Result.success(notes[index])

    def create(self, fields: Record) -> Result:
        """
        Store a new note and assign its id.

        Args:
            fields: Record fields; any ``id`` given here is ignored

        Returns:
            Result whose value is the stored record
        """
        try:
            notes = self._read()
            record = dict(fields)
            record['id'] = uuid.uuid4().hex
            record['updatedAt'] = _now_millis()
            notes.append(record)
            self._write(notes)
        except (OSError, ValueError, TypeError) as e:
            logger.error("Failed to create note: %s", e)
            return Result.failure(str(e))
        logger.info("Created note %s", record['id'])
        return Result.success(record)

    def update(self, note_id: str, fields: Record) -> Result:
        """
        Shallow-merge ``fields`` onto an existing record.

        The id never changes; ``updatedAt`` is stamped on every update.
        """
        try:
            notes = self._read()
            index = self._index_of(notes, note_id)
            if index is None:
                return Result.missing(note_id)
            record = {**notes[index], **fields}
            record['id'] = note_id
            record['updatedAt'] = _now_millis()
            notes[index] = record
            self._write(notes)
        except (OSError, ValueError, TypeError) as e:
            logger.error("Failed to update note %s: %s", note_id, e)
            return Result.failure(str(e))
        return Result.success(record)

    def delete(self, note_id: str) -> Result:
        try:
            notes = self._read()
            index = self._index_of(notes, note_id)
            if index is None:
                return Result.missing(note_id)
            notes.pop(index)
            self._write(notes)
        except (OSError, ValueError) as e:
            logger.error("Failed to delete note %s: %s", note_id, e)
            return Result.failure(str(e))
        logger.info("Deleted note %s", note_id)
        return Result.success()
