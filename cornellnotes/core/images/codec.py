"""
Image decode/encode helpers on top of QImage.
"""
from typing import Tuple

from PyQt5.QtCore import QBuffer, QByteArray, QIODevice, Qt
from PyQt5.QtGui import QColor, QImage, QImageReader, QPainter

from cornellnotes.core.errors import CompressionSkipped, DecodeError
from cornellnotes.utils.config import JPEG_QUALITY, MAX_IMAGE_WIDTH

_MIME_ALIASES = {"jpg": "jpeg", "svg": "svg+xml"}


def decode_image(data: bytes) -> QImage:
    """
    Decode encoded image bytes.

    Raises:
        DecodeError: If the bytes are not a readable image
    """
    image = QImage()
    if not data or not image.loadFromData(data) or image.isNull():
        raise DecodeError("Could not decode image data")
    return image


def detect_mime_type(data: bytes, default: str = "image/png") -> str:
    array = QByteArray(data)
    buffer = QBuffer(array)
    buffer.open(QIODevice.ReadOnly)
    try:
        fmt = bytes(QImageReader.imageFormat(buffer)).decode("ascii", "ignore").lower()
    finally:
        buffer.close()
    if not fmt:
        return default
    return f"image/{_MIME_ALIASES.get(fmt, fmt)}"


def _encode(image: QImage, fmt: str, quality: int = -1) -> bytes:
    array = QByteArray()
    buffer = QBuffer(array)
    buffer.open(QIODevice.WriteOnly)
    try:
        saved = image.save(buffer, fmt, quality)
    finally:
        buffer.close()
    if not saved:
        raise ValueError(f"Could not encode image as {fmt}")
    return bytes(array)


def quality_percent(quality: float) -> int:
    """Map a 0..1 quality factor to Qt's 0..100 scale."""
    return max(0, min(100, int(round(quality * 100))))


def flatten_onto_white(image: QImage, width: int, height: int) -> QImage:
    """Redraw ``image`` into an opaque ``width`` x ``height`` buffer on white."""
    target = QImage(width, height, QImage.Format_RGB32)
    target.fill(QColor(Qt.white))
    painter = QPainter(target)
    try:
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.drawImage(target.rect(), image, image.rect())
    finally:
        painter.end()
    return target


def encode_jpeg(image: QImage, quality: float = JPEG_QUALITY) -> bytes:
    """Encode lossily; transparent pixels end up white instead of black."""
    if image.hasAlphaChannel():
        image = flatten_onto_white(image, image.width(), image.height())
    return _encode(image, "JPEG", quality_percent(quality))


def encode_png(image: QImage) -> bytes:
    return _encode(image, "PNG")


def export_dimensions(width: int, height: int,
                      max_width: int = MAX_IMAGE_WIDTH) -> Tuple[int, int]:
    """
    Target size of an embedded image in the exported document.

    Args:
        width: Natural width in pixels
        height: Natural height in pixels
        max_width: Downscale ceiling

    Returns:
        (width, height) scaled by ``min(1, max_width / width)``
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")
    ratio = min(1.0, max_width / width)
    return round(width * ratio), round(height * ratio)


def compress_image(data: bytes, max_width: int = MAX_IMAGE_WIDTH,
                   quality: float = JPEG_QUALITY) -> bytes:
    """
    Downscale to the width ceiling and re-encode as JPEG.

    Raises:
        CompressionSkipped: If the image cannot be decoded, redrawn or encoded
    """
    try:
        image = decode_image(data)
        width, height = export_dimensions(image.width(), image.height(), max_width)
        redrawn = flatten_onto_white(image, width, height)
        return _encode(redrawn, "JPEG", quality_percent(quality))
    except (DecodeError, ValueError) as e:
        raise CompressionSkipped(str(e)) from e
