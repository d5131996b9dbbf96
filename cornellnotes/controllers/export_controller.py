"""
Controller for exporting notes to PDF.
"""
from typing import List

from PyQt5.QtCore import QObject, pyqtSignal

from cornellnotes.core.export import ExportWorker, NoteExporter
from cornellnotes.core.notes import Note
from cornellnotes.core.results import Result
from cornellnotes.utils.config import STATUS_TIMEOUT_MS, get_settings
from cornellnotes.utils.logger import get_logger

from .status import TransientStatus

logger = get_logger(__name__)

EXPORT_FAILED_MESSAGE = "Failed to generate PDF."


class ExportController(QObject):
    """Runs exports either inline or on a worker thread and reports the outcome."""

    # Signals
    export_finished = pyqtSignal(bool, str)  # success, output path or message
    status_changed = pyqtSignal(str)

    def __init__(self, output_dir: str, exporter: NoteExporter = None,
                 status_timeout_ms: int = STATUS_TIMEOUT_MS, parent=None):
        super().__init__(parent)
        self.output_dir = output_dir
        self.exporter = exporter or NoteExporter.from_settings(get_settings())
        self.status = TransientStatus(status_timeout_ms, self)
        self.status.changed.connect(self.status_changed)
        self._workers: List[ExportWorker] = []

    def export_now(self, note: Note) -> Result:
        """
        Export and write the PDF on the calling thread.

        Returns:
            Result whose value is the written file path
        """
        result = self.exporter.export(note)
        if not result.ok:
            self.status.show(EXPORT_FAILED_MESSAGE)
            self.export_finished.emit(False, EXPORT_FAILED_MESSAGE)
            return result
        try:
            path = result.value.save(self.output_dir)
        except OSError as e:
            logger.error("Failed to write %s: %s", result.value.filename, e)
            self.status.show(EXPORT_FAILED_MESSAGE)
            self.export_finished.emit(False, EXPORT_FAILED_MESSAGE)
            return Result.failure(str(e))
        self.export_finished.emit(True, str(path))
        return Result.success(path)

    def start_export(self, note: Note) -> ExportWorker:
        """
        Export on a worker thread. Each call gets its own worker and surface.

        Returns:
            The started worker
        """
        worker = ExportWorker(note, self.output_dir, NoteExporter(
            self.exporter.max_image_width,
            self.exporter.jpeg_quality,
            self.exporter.max_device_scale,
            self.exporter.device_scale,
        ))
        worker.finished.connect(lambda success, message: self._on_finished(worker, success, message))
        self._workers.append(worker)
        worker.start()
        return worker

    @property
    def active_exports(self) -> int:
        return len(self._workers)

    def _on_finished(self, worker: ExportWorker, success: bool, message: str) -> None:
        # run() may still be unwinding; the thread must exit before release
        worker.wait()
        if worker in self._workers:
            self._workers.remove(worker)
        if not success:
            logger.error("Export failed: %s", message)
            self.status.show(EXPORT_FAILED_MESSAGE)
        self.export_finished.emit(success, message)
