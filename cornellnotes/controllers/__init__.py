"""
Application controllers for managing interactions between UI and core logic.
"""
from .editor_session import EditorSession, Region
from .export_controller import ExportController
from .status import TransientStatus

__all__ = [
    'EditorSession',
    'ExportController',
    'Region',
    'TransientStatus'
]
