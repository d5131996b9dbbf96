from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QColorDialog, QToolButton, QComboBox,
    QSizePolicy
)

# Pen widths offered in the width picker
PEN_WIDTHS = [1, 2, 3, 4, 6, 8, 12]


class DrawingToolbar(QFrame):
    """Compact toolbar for the annotation surface: pen settings and actions."""

    pen_changed = pyqtSignal(str, float)  # color, width
    clear_requested = pyqtSignal()
    save_requested = pyqtSignal()
    close_requested = pyqtSignal()

    def __init__(self, color: str = "#000000", width: float = 3.0, parent=None):
        super().__init__(parent)
        self.setObjectName("DrawingToolbar")
        self.current_color = color
        self.current_stroke_width = float(width)

        self.setup_ui()

    def setup_ui(self):
        self.setSizePolicy(QSizePolicy.Preferred, QSizePolicy.Fixed)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        layout.setSpacing(8)

        # Color picker
        self.color_button = QToolButton(self)
        self.color_button.setToolTip("Pen color")
        self.color_button.setFixedSize(28, 28)
        self.color_button.clicked.connect(self._choose_color)
        self._update_color_button()
        layout.addWidget(self.color_button)

        # Stroke width
        width_label = QLabel("Width:", self)
        width_label.setStyleSheet("color: #B5B5C5;")
        layout.addWidget(width_label)

        self.width_combo = QComboBox(self)
        for width in PEN_WIDTHS:
            self.width_combo.addItem(str(width), width)
        if int(self.current_stroke_width) in PEN_WIDTHS:
            self.width_combo.setCurrentIndex(PEN_WIDTHS.index(int(self.current_stroke_width)))
        self.width_combo.currentIndexChanged.connect(self._on_width_changed)
        layout.addWidget(self.width_combo)

        layout.addStretch()

        for text, signal in (("Clear", self.clear_requested),
                             ("Save", self.save_requested),
                             ("Close", self.close_requested)):
            button = QToolButton(self)
            button.setText(text)
            button.clicked.connect(signal)
            layout.addWidget(button)

    def _on_width_changed(self, index):
        """Update stroke width."""
        self.current_stroke_width = float(self.width_combo.itemData(index))
        self._emit_pen_changed()

    def _choose_color(self):
        """Open color picker dialog."""
        color = QColorDialog.getColor(QColor(self.current_color), self, "Choose Pen Color")
        if color.isValid():
            self.set_color(color.name())

    def set_color(self, color: str):
        self.current_color = color
        self._update_color_button()
        self._emit_pen_changed()

    def _update_color_button(self):
        """Update the color button to show the current color."""
        self.color_button.setStyleSheet(f"""
            QToolButton {{
                background-color: {self.current_color};
                border: 2px solid #555555;
                border-radius: 4px;
            }}
            QToolButton:hover {{
                border: 2px solid #777777;
            }}
        """)

    def _emit_pen_changed(self):
        self.pen_changed.emit(self.current_color, self.current_stroke_width)
