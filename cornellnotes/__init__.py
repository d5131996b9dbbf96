"""
Cornell Notes: structured note editing with raster PDF export.
"""
__version__ = "0.1.0"
