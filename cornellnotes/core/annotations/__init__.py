"""
Freehand annotation capture.
"""
from .models import CaptureState, Stroke
from .capture import AnnotationCapture, to_canvas_point

__all__ = [
    'AnnotationCapture',
    'CaptureState',
    'Stroke',
    'to_canvas_point'
]
