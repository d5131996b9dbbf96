from cornellnotes.core.notes import DraftCache, DraftField


def test_draft_values_and_defaults():
    draft = DraftCache()
    assert draft.is_empty
    assert draft.get(DraftField.TITLE) == ""
    assert draft.get(DraftField.TITLE, "Untitled") == "Untitled"

    draft.set(DraftField.TITLE, "Physics")
    draft.set(DraftField.NOTES, "<b>F=ma</b>")

    assert draft.has(DraftField.TITLE)
    assert not draft.has(DraftField.CUES)
    assert draft.snapshot() == {'title': "Physics", 'notes_html': "<b>F=ma</b>"}


def test_clear_empties_the_draft():
    draft = DraftCache()
    draft.set(DraftField.SUMMARY, "summary")
    draft.clear()
    assert draft.is_empty
    assert draft.snapshot() == {}
