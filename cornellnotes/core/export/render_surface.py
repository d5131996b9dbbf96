"""
Detached rendering surface used by one export call.
"""
import html
import math
from typing import Dict, List, Optional

from PyQt5.QtCore import QUrl
from PyQt5.QtGui import QColor, QFont, QGuiApplication, QImage, QPainter, QTextDocument

from cornellnotes.core.content import ContentTree, ImageNode, iter_images, replace_images, to_html
from cornellnotes.core.errors import CompressionSkipped, DecodeError, ExportFailure
from cornellnotes.core.images.codec import compress_image, decode_image
from cornellnotes.core.notes import Note
from cornellnotes.utils import config
from cornellnotes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled"
BASE_FONT_PX = 16
TITLE_FONT_PX = 22


def native_device_scale() -> Optional[float]:
    """Device pixel ratio of the primary screen, or None without a GUI application."""
    app = QGuiApplication.instance()
    if app is None:
        return None
    screen = app.primaryScreen()
    if screen is None:
        return None
    return screen.devicePixelRatio()


def render_scale(device_scale: Optional[float] = None,
                 max_scale: float = config.MAX_DEVICE_SCALE) -> float:
    """``min(max_scale, device_scale)``; an unknown device scale counts as ``max_scale``."""
    if device_scale is None or device_scale <= 0:
        return max_scale
    return min(max_scale, device_scale)


class RenderSurface:
    """
    Working copy of a note laid out for rasterization.

    Holds its own copies of the note's content trees and its own
    QTextDocument, so the source note is never touched and concurrent
    exports never share a surface. Use as a context manager; the document is
    released on every exit path.
    """

    def __init__(self, note: Note, width_px: int = config.RENDER_WIDTH_PX,
                 padding_px: int = config.RENDER_PADDING_PX):
        self.width_px = width_px
        self.padding_px = padding_px

        self.title = note.title
        self.cues = note.cues
        self.body: ContentTree = note.body
        self.summary: ContentTree = note.summary

        self.document: Optional[QTextDocument] = None
        self.skipped_images = 0

    def __enter__(self) -> "RenderSurface":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    @property
    def images(self) -> List[ImageNode]:
        return list(iter_images(self.body)) + list(iter_images(self.summary))

    # --- Step 2: compress ---

    def compress_images(self, max_width: int = config.MAX_IMAGE_WIDTH,
                        quality: float = config.JPEG_QUALITY) -> int:
        """
        Downscale and re-encode every embedded image of the working copy.

        Failures are per image: the image keeps its original encoding.

        Returns:
            Number of images that were skipped
        """
        self.skipped_images = 0

        def _compress(image: ImageNode) -> ImageNode:
            try:
                data = compress_image(image.data, max_width, quality)
            except CompressionSkipped as e:
                self.skipped_images += 1
                logger.warning("Image compression failed, keeping original: %s", e)
                return image
            return ImageNode(data=data, mime_type="image/jpeg")

        self.body = replace_images(self.body, _compress)
        self.summary = replace_images(self.summary, _compress)
        return self.skipped_images

    # --- Step 3: rasterize ---

    def build_document(self) -> QTextDocument:
        """Lay out title, cues, body and summary in a fresh QTextDocument."""
        self.release()
        document = QTextDocument()
        document.setDocumentMargin(self.padding_px)
        font = QFont(config.RENDER_FONT_FAMILY)
        font.setPixelSize(BASE_FONT_PX)
        document.setDefaultFont(font)
        document.setDefaultStyleSheet("body { color: #000000; }")
        document.setTextWidth(self.width_px)

        resources: Dict[str, QImage] = {}
        content_width = self.width_px - 2 * self.padding_px

        def _image_html(image: ImageNode) -> str:
            try:
                decoded = decode_image(image.data)
            except DecodeError:
                logger.warning("Skipping undecodable image in export")
                return ""
            name = f"cornell-image-{len(resources)}"
            resources[name] = decoded
            width = min(decoded.width(), content_width)
            return f'<img src="{name}" width="{width}">'

        markup = self._markup(_image_html)
        for name, image in resources.items():
            document.addResource(QTextDocument.ImageResource, QUrl(name), image)
        document.setHtml(markup)

        self.document = document
        return document

    def _markup(self, image_html) -> str:
        parts = [
            f'<h1 style="font-size: {TITLE_FONT_PX}px; margin-bottom: 12px;">'
            f'{html.escape(self.title or DEFAULT_TITLE)}</h1>'
        ]
        if self.cues:
            cues = html.escape(self.cues).replace("\n", "<br>")
            parts.append(f'<div style="margin-bottom: 10px;"><b>Cues:</b> {cues}</div>')
        parts.append(f'<div style="margin-bottom: 12px;">{to_html(self.body, image_html)}</div>')
        if len(self.summary):
            parts.append(f'<div><b>Summary:</b> {to_html(self.summary, image_html)}</div>')
        return "".join(parts)

    def rasterize(self, scale: float) -> QImage:
        """
        Render the whole surface into one bitmap on a white background.

        Raises:
            ExportFailure: If nothing could be painted
        """
        document = self.document or self.build_document()
        size = document.size()
        width = max(1, int(math.ceil(size.width() * scale)))
        height = max(1, int(math.ceil(size.height() * scale)))

        bitmap = QImage(width, height, QImage.Format_RGB32)
        if bitmap.isNull():
            raise ExportFailure(f"Could not allocate a {width}x{height} raster")
        bitmap.fill(QColor(config.RENDER_BACKGROUND))

        painter = QPainter(bitmap)
        if not painter.isActive():
            raise ExportFailure("Could not paint the export raster")
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.setRenderHint(QPainter.TextAntialiasing)
            painter.setRenderHint(QPainter.SmoothPixmapTransform)
            painter.scale(scale, scale)
            document.drawContents(painter)
        finally:
            painter.end()
        return bitmap

    # --- Step 6: cleanup ---

    def release(self) -> None:
        if self.document is not None:
            self.document.clear()
            self.document = None
