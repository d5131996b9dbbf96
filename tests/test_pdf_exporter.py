import fitz  # PyMuPDF
import pytest

from cornellnotes.core.content import ContentTree, ImageNode, LineBreak, TextRun
from cornellnotes.core.errors import ExportFailure
from cornellnotes.core.export import ExportWorker, NoteExporter, RenderSurface, render_scale
from cornellnotes.core.export import pdf_exporter
from cornellnotes.core.images import decode_image
from cornellnotes.core.notes import Note
from cornellnotes.utils.config import PAGE_HEIGHT_PT, PAGE_WIDTH_PT


@pytest.fixture
def exporter(qapp):
    return NoteExporter(device_scale=1)


def _open_pdf(data):
    return fitz.open(stream=data, filetype="pdf")


def _tall_note(make_png, images=3):
    nodes = [TextRun("Figures")]
    for _ in range(images):
        nodes += [LineBreak(), ImageNode(make_png(600, 1000), "image/png")]
    return Note(title="Figures", body=ContentTree(tuple(nodes)))


def test_render_scale_is_capped():
    assert render_scale(1.0) == 1.0
    assert render_scale(1.5) == 1.5
    assert render_scale(3.0) == 2.0
    assert render_scale(None) == 2.0


def test_short_note_is_one_a4_page(exporter):
    note = Note(title="Algebra", cues="slope", body=ContentTree((TextRun("y = mx + b"),)))

    artifact = exporter.export_note(note)

    assert artifact.filename == "Algebra.pdf"
    assert artifact.page_count == 1
    doc = _open_pdf(artifact.pdf_bytes)
    try:
        assert doc.page_count == 1
        assert doc[0].rect.width == pytest.approx(PAGE_WIDTH_PT, abs=0.01)
        assert doc[0].rect.height == pytest.approx(PAGE_HEIGHT_PT, abs=0.01)
    finally:
        doc.close()


def test_tall_note_is_sliced_into_contiguous_pages(exporter, make_png):
    artifact = exporter.export_note(_tall_note(make_png))

    assert artifact.page_count >= 3
    assert artifact.pages[0].pixel_top == 0
    for previous, current in zip(artifact.pages, artifact.pages[1:]):
        assert current.pixel_top == previous.pixel_top + previous.pixel_height
    last = artifact.pages[-1]
    assert last.pixel_top + last.pixel_height == artifact.bitmap_height
    assert last.height_pt <= artifact.pages[0].height_pt

    doc = _open_pdf(artifact.pdf_bytes)
    try:
        assert doc.page_count == artifact.page_count
        for page in doc:
            assert page.rect.width == pytest.approx(PAGE_WIDTH_PT, abs=0.01)
    finally:
        doc.close()


def test_export_leaves_note_untouched(exporter, make_png):
    image = ImageNode(make_png(2400, 300), "image/png")
    note = Note(title="Wide", body=ContentTree((image,)))

    exporter.export_note(note)

    assert note.body.nodes == (image,)
    assert note.title == "Wide"


def test_surface_recompresses_working_copy_images(qapp, make_png):
    png = make_png(2000, 1000)
    note = Note(title="Wide", body=ContentTree((ImageNode(png, "image/png"),)))

    with RenderSurface(note) as surface:
        skipped = surface.compress_images(max_width=1400, quality=0.85)
        compressed = surface.body.nodes[0]

    assert skipped == 0
    assert compressed.mime_type == "image/jpeg"
    image = decode_image(compressed.data)
    assert (image.width(), image.height()) == (1400, 700)
    assert note.body.nodes == (ImageNode(png, "image/png"),)


def test_surface_keeps_original_bytes_when_an_image_cannot_be_compressed(qapp):
    broken = ImageNode(b"not an image", "image/png")
    note = Note(summary=ContentTree((broken,)))

    with RenderSurface(note) as surface:
        assert surface.compress_images() == 1
        assert surface.summary.nodes == (broken,)


def test_device_scale_is_capped_at_two(qapp):
    artifact = NoteExporter(device_scale=3).export_note(Note(title="Scale"))
    assert artifact.scale == 2.0
    assert artifact.bitmap_width == 1600


def test_unreadable_image_does_not_abort_export(exporter):
    note = Note(
        title="Broken",
        body=ContentTree((TextRun("before"), ImageNode(b"not an image"), TextRun("after"))),
    )

    result = exporter.export(note)

    assert result.ok
    assert result.value.page_count == 1


def test_raster_failure_aborts_and_releases_surface(exporter, monkeypatch):
    released = []
    original_release = RenderSurface.release

    def _release(surface):
        released.append(surface)
        original_release(surface)

    def _rasterize(surface, scale):
        raise ExportFailure("no raster")

    monkeypatch.setattr(RenderSurface, "release", _release)
    monkeypatch.setattr(RenderSurface, "rasterize", _rasterize)

    result = exporter.export(Note(title="Doomed"))

    assert result.failed
    assert "no raster" in result.error
    assert released


def test_unexpected_pipeline_error_becomes_export_failure(exporter, monkeypatch):
    def _broken(*args, **kwargs):
        raise RuntimeError("band planner exploded")

    monkeypatch.setattr(pdf_exporter, "plan_page_bands", _broken)

    with pytest.raises(ExportFailure):
        exporter.export_note(Note(title="Doomed"))


def test_progress_is_reported_per_page(exporter, make_png):
    events = []
    exporter.progress_signal.connect(lambda current, total: events.append((current, total)))

    artifact = exporter.export_note(_tall_note(make_png, images=2))

    total = artifact.page_count
    assert events[0] == (0, total)
    assert events[-1] == (total, total)


def test_artifact_save_writes_pdf(exporter, tmp_path):
    artifact = exporter.export_note(Note(title="My/Notes: 2024"))

    path = artifact.save(str(tmp_path / "exports"))

    assert path.name == "My_Notes__2024.pdf"
    assert path.read_bytes() == artifact.pdf_bytes
    assert list(path.parent.iterdir()) == [path]


def test_worker_exports_off_the_gui_thread(qtbot, tmp_path):
    note = Note(title="Threaded", body=ContentTree((TextRun("hello"),)))
    worker = ExportWorker(note, str(tmp_path), NoteExporter(device_scale=1))

    with qtbot.waitSignal(worker.finished, timeout=20000) as blocker:
        worker.start()
    worker.wait()

    success, message = blocker.args
    assert success
    assert message == str(tmp_path / "Threaded.pdf")
    assert (tmp_path / "Threaded.pdf").exists()
