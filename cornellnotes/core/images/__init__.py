"""
Image ingestion and encoding.
"""
from .codec import (
    compress_image,
    decode_image,
    detect_mime_type,
    encode_jpeg,
    encode_png,
    export_dimensions,
)
from .ingestion import insert_from_annotation, insert_from_file

__all__ = [
    'compress_image',
    'decode_image',
    'detect_mime_type',
    'encode_jpeg',
    'encode_png',
    'export_dimensions',
    'insert_from_annotation',
    'insert_from_file',
]
