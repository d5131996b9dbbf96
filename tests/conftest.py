import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QImage

from cornellnotes.core.images.codec import encode_png
from cornellnotes.core.notes import NoteStore


@pytest.fixture
def make_png(qapp):
    """Build PNG bytes of a solid image."""

    def _make(width=40, height=20, color=Qt.red, alpha=False):
        fmt = QImage.Format_ARGB32 if alpha else QImage.Format_RGB32
        image = QImage(width, height, fmt)
        image.fill(QColor(color))
        return encode_png(image)

    return _make


@pytest.fixture
def store(tmp_path):
    return NoteStore(str(tmp_path / "notes.json"))
