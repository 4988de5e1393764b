"""Response headers for served upload media."""
from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Dict
from urllib.parse import quote

VIDEO_PATTERN = re.compile(r"\.(mp4|webm|ogg|mov|avi|mkv)$", re.IGNORECASE)
PDF_PATTERN = re.compile(r"\.pdf$", re.IGNORECASE)
LONG_CACHE = "public, max-age=31536000"


def inline_disposition(filename: str) -> str:
    """Build an ``inline`` Content-Disposition value safe for latin-1 headers."""

    if filename.isascii() and '"' not in filename:
        return f'inline; filename="{filename}"'
    return f"inline; filename*=utf-8''{quote(filename)}"


def media_headers(path: str) -> Dict[str, str]:
    """Extra headers for an upload response, keyed on the file extension."""

    headers = {"Cross-Origin-Resource-Policy": "cross-origin"}
    if VIDEO_PATTERN.search(path):
        headers["Accept-Ranges"] = "bytes"
        headers["Cache-Control"] = LONG_CACHE
    elif PDF_PATTERN.search(path):
        headers["Content-Disposition"] = inline_disposition(PurePosixPath(path).name)
        headers["Cache-Control"] = LONG_CACHE
    return headers
