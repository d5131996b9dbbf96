"""
Note model, record store and draft cache.
"""
from .models import Note
from .persistence import NoteStore
from .draft import DraftCache, DraftField

__all__ = [
    'Note',
    'NoteStore',
    'DraftCache',
    'DraftField'
]
