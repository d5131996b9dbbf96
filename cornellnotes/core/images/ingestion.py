"""
Insert file-sourced or annotation-sourced images into a content tree.

Images are kept at full resolution; downscaling only happens at export.
"""
from typing import Tuple

from cornellnotes.core.content import ContentTree, Cursor, ImageNode, insert_at_cursor

from .codec import decode_image, detect_mime_type


def insert_from_file(tree: ContentTree, cursor: Cursor,
                     file_bytes: bytes) -> Tuple[ContentTree, Cursor]:
    """
    Insert an image read from a file at the cursor.

    Args:
        tree: Tree to edit
        cursor: Insertion point
        file_bytes: Raw file contents

    Returns:
        Tuple of (new tree, cursor after the image)

    Raises:
        DecodeError: If the bytes are not a valid image. Nothing is inserted.
    """
    decode_image(file_bytes)
    node = ImageNode(data=bytes(file_bytes), mime_type=detect_mime_type(file_bytes))
    return insert_at_cursor(tree, cursor, node)


def insert_from_annotation(tree: ContentTree, cursor: Cursor,
                           png_bytes: bytes) -> Tuple[ContentTree, Cursor]:
    """Insert a committed annotation bitmap (PNG) at the cursor."""
    node = ImageNode(data=bytes(png_bytes), mime_type="image/png")
    return insert_at_cursor(tree, cursor, node)
