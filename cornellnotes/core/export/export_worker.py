from PyQt5.QtCore import QThread, pyqtSignal

from cornellnotes.core.notes import Note

from .pdf_exporter import NoteExporter


class ExportWorker(QThread):
    """Worker thread for exporting a note to PDF without freezing the UI."""

    # Signals
    finished = pyqtSignal(bool, str)  # success, output path or error message
    progress = pyqtSignal(str)  # status message
    page_progress = pyqtSignal(int, int)  # current, total pages

    def __init__(self, note: Note, output_dir: str, exporter: NoteExporter = None):
        super().__init__()
        self.note = note
        self.output_dir = output_dir
        self.exporter = exporter or NoteExporter()
        self.output_path = None

    def run(self):
        """Execute the export in a background thread."""
        self.exporter.progress_signal.connect(self._on_page_progress)
        try:
            self.progress.emit("Rendering note...")
            result = self.exporter.export(self.note)
            if not result.ok:
                self.finished.emit(False, "Failed to generate PDF.")
                return

            self.progress.emit("Writing PDF...")
            try:
                self.output_path = result.value.save(self.output_dir)
            except OSError as e:
                self.finished.emit(False, f"Failed to write PDF: {e}")
                return
            self.finished.emit(True, str(self.output_path))
        finally:
            self.exporter.progress_signal.disconnect(self._on_page_progress)

    def _on_page_progress(self, current, total):
        """Handle page-level progress updates."""
        self.page_progress.emit(current, total)
