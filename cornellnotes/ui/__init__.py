"""
PyQt5 widgets for the annotation surface.
"""
