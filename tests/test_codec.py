import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QImage

from cornellnotes.core.errors import CompressionSkipped, DecodeError
from cornellnotes.core.images import (
    compress_image,
    decode_image,
    detect_mime_type,
    encode_jpeg,
    export_dimensions,
)


def test_export_dimensions_downscale_wide_images():
    assert export_dimensions(2000, 1000, 1400) == (1400, 700)


def test_export_dimensions_keep_narrow_images():
    assert export_dimensions(800, 600, 1400) == (800, 600)


def test_export_dimensions_reject_empty_size():
    with pytest.raises(ValueError):
        export_dimensions(0, 10)


def test_compress_produces_bounded_jpeg(make_png):
    data = compress_image(make_png(2000, 1000), max_width=1400, quality=0.85)

    image = decode_image(data)
    assert (image.width(), image.height()) == (1400, 700)
    assert detect_mime_type(data) == "image/jpeg"


def test_compress_keeps_narrow_images_at_natural_size(make_png):
    image = decode_image(compress_image(make_png(800, 400)))
    assert (image.width(), image.height()) == (800, 400)


def test_compress_flattens_transparency_onto_white(make_png):
    data = compress_image(make_png(30, 30, color=Qt.transparent, alpha=True))
    color = decode_image(data).pixelColor(15, 15)
    assert color.red() > 245 and color.green() > 245 and color.blue() > 245


def test_compress_rejects_garbage():
    with pytest.raises(CompressionSkipped):
        compress_image(b"definitely not an image")


def test_decode_rejects_empty_and_garbage(qapp):
    with pytest.raises(DecodeError):
        decode_image(b"")
    with pytest.raises(DecodeError):
        decode_image(b"\x00\x01\x02")


def test_encode_jpeg_flattens_alpha(qapp):
    image = QImage(10, 10, QImage.Format_ARGB32)
    image.fill(QColor(0, 0, 0, 0))
    color = decode_image(encode_jpeg(image)).pixelColor(5, 5)
    assert color.lightness() > 245


def test_detect_mime_type(make_png):
    assert detect_mime_type(make_png()) == "image/png"
    assert detect_mime_type(b"???", default="application/octet-stream") == "application/octet-stream"
