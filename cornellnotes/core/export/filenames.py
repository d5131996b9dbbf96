import re

from cornellnotes.utils.config import DEFAULT_EXPORT_NAME, EXPORT_EXTENSION

_DISALLOWED = re.compile(r"[^a-z0-9\-_.]", re.IGNORECASE)


def sanitize_title(title: str) -> str:
    """Replace every character outside ``[a-z0-9-_.]`` with ``_``; blank titles fall back."""
    if not title or not title.strip():
        return DEFAULT_EXPORT_NAME
    return _DISALLOWED.sub("_", title)


def export_filename(title: str, extension: str = EXPORT_EXTENSION) -> str:
    return f"{sanitize_title(title)}.{extension}"
