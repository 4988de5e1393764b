"""Upload path normalization helpers."""
from __future__ import annotations

import posixpath
import re

ALLOWED_DIRS = ("/videos/", "/pdfs/", "/lectures/", "/gallery/")

_LEADING_PARENTS = re.compile(r"^(\.\.[/\\])+")


def normalize_request_path(path: str) -> str:
    """Collapse ``path`` and strip any leading run of ``../`` segments."""

    if not path:
        return "."
    normalized = posixpath.normpath(path)
    # POSIX keeps a leading "//" intact; request paths should not.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if path.endswith(("/", "\\")) and not normalized.endswith("/"):
        normalized += "/"
    return _LEADING_PARENTS.sub("", normalized)


def has_allowed_prefix(path: str) -> bool:
    """Return ``True`` when a normalized path sits under an allowed directory."""

    return any(path.startswith(prefix) for prefix in ALLOWED_DIRS)


def allowed_dir_names() -> tuple[str, ...]:
    """Bare directory names of the allow-list, e.g. ``videos``."""

    return tuple(prefix.strip("/") for prefix in ALLOWED_DIRS)
