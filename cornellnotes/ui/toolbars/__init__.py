"""
Toolbar components.
"""
from .drawing_toolbar import DrawingToolbar

__all__ = ['DrawingToolbar']
