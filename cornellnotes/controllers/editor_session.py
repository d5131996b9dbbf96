"""
Editing session for one note: content trees, selections, draft and saving.
"""
from enum import Enum
from typing import Any, Callable, Dict, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from cornellnotes.core.annotations import AnnotationCapture
from cornellnotes.core.content import (
    ContentTree,
    Cursor,
    Selection,
    apply_font_size,
    apply_highlight,
    apply_text_color,
    apply_weight,
    from_html,
    to_html,
)
from cornellnotes.core.errors import DecodeError
from cornellnotes.core.images import insert_from_annotation, insert_from_file
from cornellnotes.core.notes import DraftCache, DraftField, Note, NoteStore
from cornellnotes.core.results import Result
from cornellnotes.utils.config import STATUS_TIMEOUT_MS
from cornellnotes.utils.logger import get_logger

from .status import TransientStatus

logger = get_logger(__name__)


class Region(Enum):
    """Rich-text regions of a note."""
    BODY = "body"
    SUMMARY = "summary"


_DRAFT_FIELDS = {
    Region.BODY: DraftField.NOTES,
    Region.SUMMARY: DraftField.SUMMARY,
}


class EditorSession(QObject):
    """
    Owns the state of one editing session.

    - One content tree and one selection per rich region
    - The last known cursor, used for image and annotation insertion
    - The draft cache, mirrored on every edit while the note is unsaved
    - Saving through the record store
    """

    # Signals
    status_changed = pyqtSignal(str)  # transient notice, "" when cleared
    content_changed = pyqtSignal(str)  # region value
    note_saved = pyqtSignal(dict)  # stored record

    def __init__(self, store: NoteStore, draft: Optional[DraftCache] = None,
                 status_timeout_ms: int = STATUS_TIMEOUT_MS, parent=None):
        super().__init__(parent)
        self.store = store
        self.draft = draft if draft is not None else DraftCache()

        self.status = TransientStatus(status_timeout_ms, self)
        self.status.changed.connect(self.status_changed)

        self.note_id: Optional[str] = None
        self.updated_at: Optional[int] = None
        self.title = ""
        self.cues = ""
        self._trees: Dict[Region, ContentTree] = {}
        self._selections: Dict[Region, Selection] = {}
        self.active_region = Region.BODY
        self.cursor = Cursor(0)

        self._reset()

    # --- Loading ---

    def _reset(self) -> None:
        self.note_id = None
        self.updated_at = None
        self.title = ""
        self.cues = ""
        self._trees = {region: ContentTree() for region in Region}
        self._selections = {region: Selection(0, 0) for region in Region}
        self.active_region = Region.BODY
        self.cursor = Cursor(0)

    def open_note(self, record: Optional[Dict[str, Any]] = None) -> None:
        """
        Load a stored record, or start an unsaved note restored from the draft.

        Args:
            record: Stored note record; None (or a record without id) edits a new note
        """
        self._reset()
        if record and record.get('id'):
            note = Note.from_record(record)
            self.note_id = note.id
            self.updated_at = note.updated_at
            self.title = note.title
            self.cues = note.cues
            self._trees[Region.BODY] = note.body
            self._trees[Region.SUMMARY] = note.summary
        else:
            self.title = self.draft.get(DraftField.TITLE)
            self.cues = self.draft.get(DraftField.CUES)
            self._trees[Region.BODY] = from_html(self.draft.get(DraftField.NOTES))
            self._trees[Region.SUMMARY] = from_html(self.draft.get(DraftField.SUMMARY))
        for region in Region:
            self.content_changed.emit(region.value)

    def new_note(self) -> None:
        """Start a blank note; any leftover draft is discarded."""
        self.draft.clear()
        self.open_note(None)

    def discard_draft(self) -> None:
        self.draft.clear()

    @property
    def is_saved(self) -> bool:
        return self.note_id is not None

    # --- Plain fields ---

    def set_title(self, title: str) -> None:
        self.title = title
        if not self.is_saved:
            self.draft.set(DraftField.TITLE, title)

    def set_cues(self, cues: str) -> None:
        self.cues = cues
        if not self.is_saved:
            self.draft.set(DraftField.CUES, cues)

    # --- Trees, selection and cursor ---

    def tree(self, region: Region) -> ContentTree:
        return self._trees[region]

    def selection(self, region: Region) -> Selection:
        return self._selections[region]

    def set_tree(self, region: Region, tree: ContentTree) -> None:
        """Replace a region's content, e.g. after plain typing in the view."""
        self._trees[region] = tree
        self._content_edited(region)

    def select(self, region: Region, start: int, end: int) -> None:
        """Make ``region`` active with the given selection; the cursor moves to its end."""
        selection = Selection(start, end)
        self.active_region = region
        self._selections[region] = selection
        self.cursor = Cursor(selection.normalized(len(self._trees[region])).end)

    def set_cursor(self, region: Region, position: int) -> None:
        self.select(region, position, position)

    # --- Styling ---

    def _apply_style(self, operation: Callable, *args) -> bool:
        region = self.active_region
        tree = self._trees[region]
        new_tree, selection = operation(tree, self._selections[region], *args)
        if new_tree is tree:
            return False
        self._trees[region] = new_tree
        self._selections[region] = selection
        self.cursor = Cursor(selection.end)
        self._content_edited(region)
        return True

    def apply_weight(self) -> bool:
        return self._apply_style(apply_weight)

    def apply_font_size(self, px) -> bool:
        return self._apply_style(apply_font_size, px)

    def apply_text_color(self, color: str) -> bool:
        return self._apply_style(apply_text_color, color)

    def apply_highlight(self, color: str) -> bool:
        return self._apply_style(apply_highlight, color)

    # --- Images ---

    def _insert(self, insert: Callable, data: bytes) -> None:
        region = self.active_region
        tree, cursor = insert(self._trees[region], self.cursor, data)
        self._trees[region] = tree
        self.cursor = cursor
        self._selections[region] = Selection.collapsed_at(cursor.position)
        self._content_edited(region)

    def insert_image_file(self, file_bytes: bytes) -> bool:
        """
        Insert an image file at the last known cursor.

        Returns:
            True if inserted; unreadable images are reported and skipped
        """
        try:
            self._insert(insert_from_file, file_bytes)
        except DecodeError as e:
            logger.warning("Image insert skipped: %s", e)
            self.status.show("Could not read image")
            return False
        return True

    def insert_image_path(self, path: str) -> bool:
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.warning("Could not open image %s: %s", path, e)
            self.status.show("Could not read image")
            return False
        return self.insert_image_file(data)

    def insert_annotation(self, png_bytes: bytes) -> None:
        self._insert(insert_from_annotation, png_bytes)

    def start_annotation(self, pen_color: str = "#000000",
                         pen_width: float = 3.0) -> AnnotationCapture:
        """Create a capture whose committed bitmap lands at the last known cursor."""
        capture = AnnotationCapture(pen_color, pen_width, self)
        capture.committed.connect(self.insert_annotation)
        return capture

    # --- Saving ---

    def to_note(self) -> Note:
        return Note(
            title=self.title,
            cues=self.cues,
            body=self._trees[Region.BODY],
            summary=self._trees[Region.SUMMARY],
            id=self.note_id,
            updated_at=self.updated_at,
        )

    def save(self) -> Result:
        """
        Create or update the note in the store.

        On success the note keeps its id for later saves and the draft is
        cleared. Failures are shown as a transient notice.

        Returns:
            The store's Result
        """
        fields = self.to_note().to_fields()
        if self.is_saved:
            result = self.store.update(self.note_id, fields)
        else:
            result = self.store.create(fields)

        if not result.ok:
            logger.error("Save failed: %s", result.error)
            self.status.show("Save failed")
            return result

        record = result.value
        self.note_id = record['id']
        self.updated_at = record.get('updatedAt')
        self.draft.clear()
        self.status.show("Saved")
        self.note_saved.emit(record)
        return result

    def _content_edited(self, region: Region) -> None:
        if not self.is_saved:
            self.draft.set(_DRAFT_FIELDS[region], to_html(self._trees[region]))
        self.content_changed.emit(region.value)
