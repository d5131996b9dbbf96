import fitz  # PyMuPDF
from typing import List, Optional
from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QImage

from cornellnotes.core.errors import ExportFailure
from cornellnotes.core.images.codec import encode_jpeg
from cornellnotes.core.notes import Note
from cornellnotes.core.results import Result
from cornellnotes.utils import config
from cornellnotes.utils.logger import get_logger

from .filenames import export_filename
from .models import ExportArtifact, Page
from .pagination import plan_page_bands
from .render_surface import RenderSurface, native_device_scale, render_scale

logger = get_logger(__name__)


class NoteExporter(QObject):
    """Exports a note as a paginated, raster-based PDF."""

    # Signal for progress updates (optional, can be unconnected)
    progress_signal = pyqtSignal(int, int)  # current page, total pages

    def __init__(self, max_image_width: int = config.MAX_IMAGE_WIDTH,
                 jpeg_quality: float = config.JPEG_QUALITY,
                 max_device_scale: float = config.MAX_DEVICE_SCALE,
                 device_scale: Optional[float] = None):
        super().__init__()
        self.max_image_width = max_image_width
        self.jpeg_quality = jpeg_quality
        self.max_device_scale = max_device_scale
        # None means "ask the primary screen at export time"
        self.device_scale = device_scale

    @classmethod
    def from_settings(cls, settings: config.Settings) -> "NoteExporter":
        return cls(settings.max_image_width, settings.jpeg_quality, settings.max_device_scale)

    def export(self, note: Note) -> Result:
        """
        Export a note, reporting failure as a value.

        Returns:
            Result whose value is the ExportArtifact
        """
        try:
            return Result.success(self.export_note(note))
        except ExportFailure as e:
            logger.error("Failed to export note %r: %s", note.title, e)
            return Result.failure(str(e))

    def export_note(self, note: Note) -> ExportArtifact:
        """
        Run the export pipeline for one note.

        Steps run strictly in order: assemble a working copy, compress its
        images, rasterize, paginate, assemble the PDF. The working surface is
        released on every exit path and the note itself is never modified.

        Args:
            note: Note to export

        Returns:
            The export artifact

        Raises:
            ExportFailure: If rasterization, pagination or assembly fails
        """
        with RenderSurface(note) as surface:
            skipped = surface.compress_images(self.max_image_width, self.jpeg_quality)
            if skipped:
                logger.info("%d image(s) kept their original encoding", skipped)

            scale = self._scale()
            try:
                surface.build_document()
                bitmap = surface.rasterize(scale)
                pages = self._paginate(bitmap)
                pdf_bytes = self._assemble_pdf(pages)
            except ExportFailure:
                raise
            except Exception as e:
                raise ExportFailure(f"Export pipeline failed: {e}") from e

        artifact = ExportArtifact(
            filename=export_filename(note.title),
            pdf_bytes=pdf_bytes,
            pages=pages,
            bitmap_width=bitmap.width(),
            bitmap_height=bitmap.height(),
            scale=scale,
        )
        logger.info("Exported %s (%d page(s))", artifact.filename, artifact.page_count)
        return artifact

    def _scale(self) -> float:
        device_scale = self.device_scale
        if device_scale is None:
            device_scale = native_device_scale()
        return render_scale(device_scale, self.max_device_scale)

    def _paginate(self, bitmap: QImage) -> List[Page]:
        bands = plan_page_bands(
            bitmap.width(), bitmap.height(), config.PAGE_WIDTH_PT, config.PAGE_HEIGHT_PT
        )
        pages = []
        for index, band in enumerate(bands):
            self.progress_signal.emit(index, len(bands))
            slice_ = bitmap.copy(0, band.top, bitmap.width(), band.height)
            if slice_.isNull():
                raise ExportFailure(f"Could not cut page band at row {band.top}")
            pages.append(Page(
                image_data=encode_jpeg(slice_, self.jpeg_quality),
                pixel_top=band.top,
                pixel_height=band.height,
                width_pt=band.width_pt,
                height_pt=band.height_pt,
            ))
        self.progress_signal.emit(len(bands), len(bands))
        return pages

    def _assemble_pdf(self, pages: List[Page]) -> bytes:
        doc = fitz.open()
        try:
            for page in pages:
                pdf_page = doc.new_page(width=config.PAGE_WIDTH_PT, height=config.PAGE_HEIGHT_PT)
                rect = fitz.Rect(0, 0, page.width_pt, page.height_pt)
                pdf_page.insert_image(rect, stream=page.image_data)
            return doc.tobytes(garbage=4, deflate=True)
        finally:
            doc.close()
