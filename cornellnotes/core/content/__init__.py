"""
Rich content model, editing engine and style operations.
"""
from .models import (
    EMPTY_STYLE,
    ContentTree,
    Cursor,
    ImageNode,
    LineBreak,
    Node,
    Selection,
    StyleDescriptor,
    StyledLeaf,
    StyledRun,
    TextRun,
    iter_images,
    iter_styled_leaves,
    node_length,
    plain_text,
    replace_images,
    tree_length,
)
from .editing import insert_at_cursor, wrap_selection
from .styles import apply_font_size, apply_highlight, apply_text_color, apply_weight
from .serialization import from_html, to_html

__all__ = [
    'EMPTY_STYLE',
    'ContentTree',
    'Cursor',
    'ImageNode',
    'LineBreak',
    'Node',
    'Selection',
    'StyleDescriptor',
    'StyledLeaf',
    'StyledRun',
    'TextRun',
    'iter_images',
    'iter_styled_leaves',
    'node_length',
    'plain_text',
    'replace_images',
    'tree_length',
    'insert_at_cursor',
    'wrap_selection',
    'apply_font_size',
    'apply_highlight',
    'apply_text_color',
    'apply_weight',
    'from_html',
    'to_html',
]
