"""
Custom widgets.
"""
from .annotation_canvas import AnnotationCanvas

__all__ = ['AnnotationCanvas']
