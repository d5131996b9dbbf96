"""
Export pipeline: render a note, recompress its images and paginate it into a PDF.
"""
from .filenames import export_filename, sanitize_title
from .models import ExportArtifact, Page
from .pagination import PageBand, plan_page_bands
from .render_surface import RenderSurface, native_device_scale, render_scale
from .pdf_exporter import NoteExporter
from .export_worker import ExportWorker

__all__ = [
    'ExportArtifact',
    'ExportWorker',
    'NoteExporter',
    'Page',
    'PageBand',
    'RenderSurface',
    'export_filename',
    'native_device_scale',
    'plan_page_bands',
    'render_scale',
    'sanitize_title',
]
