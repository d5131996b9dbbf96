"""
Style engine: one operation per inline attribute family.

Each operation wraps the selection in a new styled run that sets exactly one
attribute. Values are passed through verbatim.
"""
from typing import Tuple, Union

from .editing import wrap_selection
from .models import ContentTree, Selection, StyleDescriptor

BOLD_WEIGHT = "700"

Edit = Tuple[ContentTree, Selection]


def apply_weight(tree: ContentTree, selection: Selection) -> Edit:
    """Set bold weight on the selection. Repeated calls nest another wrap."""
    return wrap_selection(tree, selection, StyleDescriptor(weight=BOLD_WEIGHT))


def apply_font_size(tree: ContentTree, selection: Selection,
                    px: Union[int, float, str]) -> Edit:
    return wrap_selection(tree, selection, StyleDescriptor(font_size_px=px))


def apply_text_color(tree: ContentTree, selection: Selection, color: str) -> Edit:
    return wrap_selection(tree, selection, StyleDescriptor(text_color=color))


def apply_highlight(tree: ContentTree, selection: Selection, color: str) -> Edit:
    return wrap_selection(tree, selection, StyleDescriptor(highlight_color=color))
