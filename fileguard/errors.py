"""Failures raised by the upload guards."""
from __future__ import annotations

from typing import Any, Dict


class FileAccessError(Exception):
    """Base class for a request the upload guards refuse to serve."""

    status_code = 500
    message = "File access failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class AccessDenied(FileAccessError):
    """The path is outside the allow-list or escapes the upload root."""

    status_code = 403
    message = "Access denied to this file path"


class FileNotFound(FileAccessError):
    """The path is allowed but has no backing file."""

    status_code = 404
    message = "File not found"


class TooManyDownloads(FileAccessError):
    """The client used up its download quota for the current window."""

    status_code = 429
    message = "Too many download requests. Please try again later."
