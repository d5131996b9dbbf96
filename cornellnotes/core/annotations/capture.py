"""
Freehand annotation capture: a three-state stroke machine drawing into a bitmap.
"""
from typing import List, Optional, Tuple

from PyQt5.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QImage, QPainter, QPen

from cornellnotes.core.errors import AnnotationStateError
from cornellnotes.core.images.codec import encode_png
from cornellnotes.utils.logger import get_logger

from .models import CaptureState, Stroke

logger = get_logger(__name__)

Point = Tuple[float, float]

DEFAULT_PEN_COLOR = "#000000"
DEFAULT_PEN_WIDTH = 3.0


def to_canvas_point(pointer: Point, origin: Point) -> Point:
    """Pointer position minus the canvas's on-screen origin."""
    return (pointer[0] - origin[0], pointer[1] - origin[1])


class AnnotationCapture(QObject):
    """
    Captures pointer-driven strokes into an annotation bitmap.

    States:
    - IDLE: no active stroke; clear() and commit() are allowed
    - STROKING: between begin_stroke() and end_stroke(); moves draw segments
    """

    # Signals
    committed = pyqtSignal(bytes)  # PNG bytes of the bitmap
    close_requested = pyqtSignal()
    bitmap_changed = pyqtSignal()

    def __init__(self, pen_color: str = DEFAULT_PEN_COLOR,
                 pen_width: float = DEFAULT_PEN_WIDTH, parent=None):
        super().__init__(parent)
        self.state = CaptureState.IDLE
        self.pen_color = pen_color
        self.pen_width = pen_width

        self.strokes: List[Stroke] = []
        self.active_stroke: Optional[Stroke] = None

        self.bitmap: Optional[QImage] = None
        self.device_pixel_ratio = 1.0

    # --- Surface ---

    def setup_surface(self, width: int, height: int, device_pixel_ratio: float = 1.0) -> None:
        """
        Allocate the bitmap for a canvas of the given logical size.

        The device pixel ratio is applied once here; strokes are given in
        logical coordinates and land on the high-resolution bitmap.

        Args:
            width: Logical canvas width
            height: Logical canvas height
            device_pixel_ratio: Screen pixels per logical pixel
        """
        dpr = device_pixel_ratio if device_pixel_ratio and device_pixel_ratio > 0 else 1.0
        self.device_pixel_ratio = dpr
        self.bitmap = QImage(
            max(1, int(round(width * dpr))),
            max(1, int(round(height * dpr))),
            QImage.Format_ARGB32_Premultiplied,
        )
        self.bitmap.setDevicePixelRatio(dpr)
        self.bitmap.fill(Qt.transparent)
        self.bitmap_changed.emit()

    def set_pen(self, color: str, width: float) -> None:
        """Set the pen used by strokes begun from now on."""
        self.pen_color = color
        self.pen_width = width

    @property
    def is_stroking(self) -> bool:
        return self.state == CaptureState.STROKING

    @property
    def is_empty(self) -> bool:
        return not self.strokes

    # --- State machine ---

    def begin_stroke(self, point: Point) -> None:
        """
        Start a new stroke at a canvas-local point.

        Raises:
            AnnotationStateError: If a stroke is already active or no surface exists
        """
        if self.state != CaptureState.IDLE:
            raise AnnotationStateError("begin_stroke requires the idle state")
        if self.bitmap is None:
            raise AnnotationStateError("setup_surface must be called before drawing")

        self.active_stroke = Stroke(
            color=self.pen_color,
            width=self.pen_width,
            points=[(float(point[0]), float(point[1]))],
        )
        self.strokes.append(self.active_stroke)
        self.state = CaptureState.STROKING

    def extend_stroke(self, point: Point) -> bool:
        """
        Append a point and rasterize the new segment immediately.

        Returns:
            True if a segment was drawn, False when no stroke is active
        """
        if self.state != CaptureState.STROKING or self.active_stroke is None:
            return False

        stroke = self.active_stroke
        start = stroke.points[-1]
        end = (float(point[0]), float(point[1]))
        stroke.points.append(end)
        self._draw_segment(stroke, start, end)
        self.bitmap_changed.emit()
        return True

    def end_stroke(self) -> None:
        """Finish the active stroke; safe to call without a matching begin."""
        self.active_stroke = None
        self.state = CaptureState.IDLE

    def clear(self) -> None:
        """Reset the bitmap to empty."""
        self._require_idle("clear")
        self.strokes.clear()
        if self.bitmap is not None:
            self.bitmap.fill(Qt.transparent)
        self.bitmap_changed.emit()

    def commit(self) -> bytes:
        """
        Encode the bitmap as PNG and hand it over for insertion.

        Emits ``committed`` with the PNG bytes, then ``close_requested``.

        Returns:
            The PNG bytes
        """
        self._require_idle("commit")
        if self.bitmap is None:
            raise AnnotationStateError("Nothing to commit: surface was never set up")

        png = encode_png(self.bitmap)
        logger.info("Committed annotation with %d stroke(s), %d bytes", len(self.strokes), len(png))
        self.committed.emit(png)
        self.close_requested.emit()
        return png

    def close(self) -> None:
        """Surface closed; an active stroke ends, drawn pixels stay."""
        self.end_stroke()

    # --- Internals ---

    def _require_idle(self, operation: str) -> None:
        if self.state != CaptureState.IDLE:
            raise AnnotationStateError(f"{operation} requires the idle state")

    def _draw_segment(self, stroke: Stroke, start: Point, end: Point) -> None:
        painter = QPainter(self.bitmap)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            pen = QPen(QColor(stroke.color), stroke.width)
            pen.setCapStyle(Qt.RoundCap)
            pen.setJoinStyle(Qt.RoundJoin)
            painter.setPen(pen)
            painter.drawLine(QPointF(*start), QPointF(*end))
        finally:
            painter.end()
