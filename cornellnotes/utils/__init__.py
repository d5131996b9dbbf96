"""
Utility functions and helpers.
"""
from .config import Settings, get_app_data_dir, get_settings, load_settings
from .logger import get_logger, init_logger

__all__ = [
    # Configuration
    'Settings',
    'get_app_data_dir',
    'get_settings',
    'load_settings',

    # Logging
    'get_logger',
    'init_logger',
]
