import pytest

from cornellnotes.controllers import EditorSession, Region
from cornellnotes.core.content import ContentTree, Cursor, ImageNode, StyledRun, TextRun
from cornellnotes.core.notes import DraftCache, DraftField, NoteStore


@pytest.fixture
def session(qapp, store):
    return EditorSession(store, status_timeout_ms=20)


def _text(value):
    return ContentTree((TextRun(value),))


def test_unsaved_edits_are_mirrored_to_the_draft(session):
    session.set_title("Physics")
    session.set_cues("force")
    session.set_tree(Region.BODY, _text("F = ma"))

    assert session.draft.get(DraftField.TITLE) == "Physics"
    assert session.draft.get(DraftField.CUES) == "force"
    assert session.draft.get(DraftField.NOTES) == "F = ma"


def test_reopening_an_unsaved_note_restores_the_draft(qapp, store):
    draft = DraftCache()
    first = EditorSession(store, draft)
    first.set_title("Chemistry")
    first.set_tree(Region.SUMMARY, _text("moles"))

    second = EditorSession(store, draft)
    second.open_note()

    assert second.title == "Chemistry"
    assert second.tree(Region.SUMMARY) == _text("moles")


def test_new_note_discards_the_draft(session):
    session.set_title("Leftover")
    session.new_note()
    assert session.title == ""
    assert session.draft.is_empty


def test_style_applies_to_active_region_selection(session):
    session.set_tree(Region.SUMMARY, _text("hello world"))
    session.select(Region.SUMMARY, 0, 5)

    assert session.apply_weight()

    tree = session.tree(Region.SUMMARY)
    assert tree.nodes[0] == StyledRun(tree.nodes[0].style, (TextRun("hello"),))
    assert session.selection(Region.SUMMARY).is_collapsed
    assert session.cursor == Cursor(5)
    assert session.tree(Region.BODY) == ContentTree()


def test_collapsed_style_reports_no_change(session):
    session.set_tree(Region.BODY, _text("hello"))
    session.set_cursor(Region.BODY, 2)
    before = session.tree(Region.BODY)

    assert not session.apply_text_color("#ff0000")
    assert session.tree(Region.BODY) is before


def test_consecutive_image_inserts_keep_order(session, make_png):
    first, second = make_png(10, 10), make_png(20, 10)
    session.set_tree(Region.BODY, _text("abcd"))
    session.set_cursor(Region.BODY, 2)

    assert session.insert_image_file(first)
    assert session.insert_image_file(second)

    assert session.tree(Region.BODY).nodes == (
        TextRun("ab"),
        ImageNode(first, "image/png"),
        ImageNode(second, "image/png"),
        TextRun("cd"),
    )


def test_unreadable_image_is_reported(session):
    messages = []
    session.status_changed.connect(messages.append)
    session.set_tree(Region.BODY, _text("abc"))

    assert not session.insert_image_file(b"garbage")

    assert session.tree(Region.BODY) == _text("abc")
    assert messages == ["Could not read image"]


def test_missing_image_path_is_reported(session, tmp_path):
    assert not session.insert_image_path(str(tmp_path / "nope.png"))
    assert session.status.message == "Could not read image"


def test_committed_annotation_lands_at_the_cursor(session):
    session.set_tree(Region.BODY, _text("ab"))
    session.set_cursor(Region.BODY, 1)

    capture = session.start_annotation()
    capture.setup_surface(30, 30)
    capture.begin_stroke((2, 2))
    capture.extend_stroke((20, 20))
    capture.end_stroke()
    png = capture.commit()

    assert session.tree(Region.BODY).nodes == (
        TextRun("a"),
        ImageNode(png, "image/png"),
        TextRun("b"),
    )


def test_save_creates_then_updates(session, store):
    session.set_title("Algebra")
    session.set_tree(Region.BODY, _text("y=mx+b"))

    created = session.save()

    assert created.ok
    assert session.is_saved
    assert session.draft.is_empty
    assert session.status.message == "Saved"

    session.set_title("Algebra II")
    assert session.draft.is_empty
    updated = session.save()

    assert updated.value['id'] == created.value['id']
    assert len(store.list().value) == 1
    assert store.get(session.note_id).value['title'] == "Algebra II"


def test_failed_save_keeps_draft_and_notifies(qapp, tmp_path):
    path = tmp_path / "notes.json"
    path.write_text("broken", encoding='utf-8')
    session = EditorSession(NoteStore(str(path)))
    session.set_title("Unsaved")

    result = session.save()

    assert result.failed
    assert not session.is_saved
    assert session.draft.get(DraftField.TITLE) == "Unsaved"
    assert session.status.message == "Save failed"


def test_opening_a_stored_note_bypasses_the_draft(session, store):
    record = store.create({'title': "Stored", 'cues': "", 'notes': "body", 'summary': ""}).value
    session.draft.set(DraftField.TITLE, "Draft title")

    session.open_note(record)

    assert session.title == "Stored"
    assert session.tree(Region.BODY) == _text("body")
    session.set_title("Edited")
    assert session.draft.get(DraftField.TITLE) == "Draft title"


def test_status_notice_clears_itself(session, qtbot):
    session.set_title("x")
    session.save()
    assert session.status.message == "Saved"

    with qtbot.waitSignal(session.status_changed, timeout=2000) as blocker:
        pass
    assert blocker.args == [""]
    assert session.status.message == ""
