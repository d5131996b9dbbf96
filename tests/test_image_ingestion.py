import pytest

from cornellnotes.core.content import ContentTree, Cursor, ImageNode, TextRun, from_html, to_html
from cornellnotes.core.errors import DecodeError
from cornellnotes.core.images import insert_from_annotation, insert_from_file


def test_file_image_is_inserted_at_full_resolution(make_png):
    data = make_png(3000, 100)
    tree = ContentTree((TextRun("abcd"),))

    new_tree, cursor = insert_from_file(tree, Cursor(2), data)

    assert new_tree.nodes == (TextRun("ab"), ImageNode(data, "image/png"), TextRun("cd"))
    assert cursor == Cursor(3)


def test_invalid_file_leaves_tree_unchanged():
    tree = ContentTree((TextRun("abcd"),))
    with pytest.raises(DecodeError):
        insert_from_file(tree, Cursor(2), b"not an image")
    assert tree.nodes == (TextRun("abcd"),)


def test_annotation_png_survives_persistence(make_png):
    png = make_png(50, 50, alpha=True)

    tree, _ = insert_from_annotation(ContentTree(), Cursor(0), png)

    restored = from_html(to_html(tree))
    assert restored.nodes == (ImageNode(png, "image/png"),)
