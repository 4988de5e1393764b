"""Path validation for files served out of the upload root."""
from __future__ import annotations

import logging
from pathlib import Path

from fileguard.errors import AccessDenied, FileNotFound
from fileguard.utils import allowed_dir_names, has_allowed_prefix, normalize_request_path

LOGGER = logging.getLogger(__name__)


class PathValidator:
    """Map request paths onto files inside the upload root, or refuse them."""

    def __init__(self, upload_root: Path | str) -> None:
        self.upload_root = Path(upload_root).resolve()
        self._allowed = set(allowed_dir_names())

    def validate(self, request_path: str) -> Path:
        """Return the file ``request_path`` refers to.

        Raises :class:`AccessDenied` when the path is not under one of the
        allowed directories (or resolves outside them), and
        :class:`FileNotFound` when it is allowed but there is no such file.
        """

        if "\x00" in request_path:
            raise AccessDenied()

        normalized = normalize_request_path(request_path)
        if not has_allowed_prefix(normalized):
            raise AccessDenied()

        try:
            candidate = (self.upload_root / normalized.lstrip("/")).resolve()
        except (OSError, RuntimeError):
            # Symlink loops raise RuntimeError before Python 3.13.
            raise FileNotFound() from None
        if not self._inside_allowed_dir(candidate):
            LOGGER.warning("path resolved outside upload root", extra={"path": normalized})
            raise AccessDenied()

        if not _is_file(candidate):
            raise FileNotFound()
        return candidate

    def _inside_allowed_dir(self, candidate: Path) -> bool:
        if not candidate.is_relative_to(self.upload_root):
            return False
        parts = candidate.relative_to(self.upload_root).parts
        return bool(parts) and parts[0] in self._allowed

    def ensure_directories(self) -> None:
        """Create the upload root and each allowed category directory."""

        for name in sorted(self._allowed):
            (self.upload_root / name).mkdir(parents=True, exist_ok=True)


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False
