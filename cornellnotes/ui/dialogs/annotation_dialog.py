from PyQt5.QtWidgets import QDialog, QVBoxLayout

from cornellnotes.core.annotations import AnnotationCapture
from cornellnotes.ui.toolbars import DrawingToolbar
from cornellnotes.ui.widgets import AnnotationCanvas


class AnnotationDialog(QDialog):
    """Modal drawing surface; a saved drawing is inserted at the editor cursor."""

    def __init__(self, capture: AnnotationCapture, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Drawing canvas")
        self.capture = capture

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        self.toolbar = DrawingToolbar(capture.pen_color, capture.pen_width, self)
        self.canvas = AnnotationCanvas(capture, self)
        layout.addWidget(self.toolbar)
        layout.addWidget(self.canvas, 1)

        self.toolbar.pen_changed.connect(capture.set_pen)
        self.toolbar.clear_requested.connect(capture.clear)
        self.toolbar.save_requested.connect(self._save)
        self.toolbar.close_requested.connect(self.reject)
        capture.close_requested.connect(self.accept)

    def _save(self):
        self.capture.end_stroke()
        self.capture.commit()

    def done(self, result):
        # Closing mid-stroke keeps what was already drawn
        self.capture.close()
        super().done(result)
