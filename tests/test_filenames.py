import pytest

from cornellnotes.core.export import export_filename, sanitize_title


@pytest.mark.parametrize("title, expected", [
    ("My/Notes: 2024", "My_Notes__2024"),
    ("lecture-03_v2.final", "lecture-03_v2.final"),
    ("Café", "Caf_"),
    ("", "note"),
    ("   ", "note"),
])
def test_sanitize_title(title, expected):
    assert sanitize_title(title) == expected


def test_export_filename_appends_extension():
    assert export_filename("Algebra") == "Algebra.pdf"
    assert export_filename(None) == "note.pdf"
