"""
Application settings, overridable through environment variables.
"""
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

APP_NAME = "CornellNotes"

# Export policy
MAX_IMAGE_WIDTH = 1400
JPEG_QUALITY = 0.85
MAX_DEVICE_SCALE = 2.0
PAGE_WIDTH_PT = 595.28
PAGE_HEIGHT_PT = 841.89
EXPORT_EXTENSION = "pdf"
DEFAULT_EXPORT_NAME = "note"

# Render surface
RENDER_WIDTH_PX = 800
RENDER_PADDING_PX = 24
RENDER_BACKGROUND = "#ffffff"
RENDER_FONT_FAMILY = "Arial"

STATUS_TIMEOUT_MS = 2000


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None or value == "" else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def get_app_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the application data directory for storing user data.

    Args:
        app_name: Name of the application

    Returns:
        Path to the app data directory (not created here)
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.path.expanduser('~/.local/share')
    return Path(base_dir) / app_name


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    export_dir: Path
    max_image_width: int = MAX_IMAGE_WIDTH
    jpeg_quality: float = JPEG_QUALITY
    max_device_scale: float = MAX_DEVICE_SCALE
    status_timeout_ms: int = STATUS_TIMEOUT_MS

    @property
    def notes_file(self) -> Path:
        return self.data_dir / "notes.json"


def load_settings(data_dir: Optional[str] = None) -> Settings:
    """Build settings from the environment; ``data_dir`` overrides ``CORNELL_DATA_DIR``."""
    base = Path(data_dir or _getenv_str("CORNELL_DATA_DIR", str(get_app_data_dir())))
    export_dir = Path(_getenv_str("CORNELL_EXPORT_DIR", str(base / "exports")))
    return Settings(
        data_dir=base.expanduser(),
        export_dir=export_dir.expanduser(),
        max_image_width=_getenv_int("CORNELL_MAX_IMAGE_WIDTH", MAX_IMAGE_WIDTH),
        jpeg_quality=_getenv_float("CORNELL_JPEG_QUALITY", JPEG_QUALITY),
        max_device_scale=_getenv_float("CORNELL_MAX_DEVICE_SCALE", MAX_DEVICE_SCALE),
        status_timeout_ms=_getenv_int("CORNELL_STATUS_TIMEOUT_MS", STATUS_TIMEOUT_MS),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
