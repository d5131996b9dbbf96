from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QPainter
from PyQt5.QtWidgets import QSizePolicy, QWidget

from cornellnotes.core.annotations import AnnotationCapture


class AnnotationCanvas(QWidget):
    """
    Drawing surface that forwards pointer events to an AnnotationCapture.

    Event positions are already widget-local, so they are the canvas-local
    stroke coordinates.
    """

    def __init__(self, capture: AnnotationCapture, parent=None):
        super().__init__(parent)
        self.capture = capture
        self.capture.bitmap_changed.connect(self.update)

        self.setAttribute(Qt.WA_StaticContents)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(480, 320)
        self.setCursor(Qt.CrossCursor)

    def setup_surface(self):
        """Allocate the capture bitmap for the current size and screen ratio."""
        self.capture.setup_surface(self.width(), self.height(), self.devicePixelRatioF())

    def showEvent(self, event):
        super().showEvent(event)
        if self.capture.bitmap is None:
            self.setup_surface()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(Qt.white))
        if self.capture.bitmap is not None:
            painter.drawImage(0, 0, self.capture.bitmap)
        painter.end()

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        if not self.capture.is_stroking:
            self.capture.begin_stroke((event.pos().x(), event.pos().y()))

    def mouseMoveEvent(self, event):
        # The capture ignores moves without an active stroke
        self.capture.extend_stroke((event.pos().x(), event.pos().y()))

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.capture.end_stroke()

    def leaveEvent(self, event):
        self.capture.end_stroke()
        super().leaveEvent(event)
