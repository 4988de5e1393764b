"""HTTP middleware that guards the upload mount."""
from __future__ import annotations

import logging

import anyio.to_thread
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fileguard.errors import FileAccessError, TooManyDownloads
from fileguard.file_security import PathValidator
from fileguard.rate_limit import DownloadLimiter
from fileguard.utils import client_identifier, media_headers

LOGGER = logging.getLogger(__name__)

UPLOADS_PREFIX = "/uploads"


def mount_relative_path(path: str, prefix: str = UPLOADS_PREFIX) -> str | None:
    """Return ``path`` relative to ``prefix``, or ``None`` when outside it."""

    if path == prefix:
        return ""
    if path.startswith(prefix + "/"):
        return path[len(prefix):]
    return None


def install_upload_guard(
    app: FastAPI,
    *,
    validator: PathValidator,
    limiter: DownloadLimiter,
    trust_proxy: bool = False,
    prefix: str = UPLOADS_PREFIX,
) -> None:
    """Validate the path, then charge the client's quota, before serving a file."""

    @app.middleware("http")
    async def guard_uploads(request: Request, call_next):  # type: ignore[override]
        relative = mount_relative_path(request.scope["path"], prefix)
        if relative is None:
            return await call_next(request)

        client_ip = client_identifier(request, trust_proxy=trust_proxy)
        try:
            await anyio.to_thread.run_sync(validator.validate, relative)
            if not limiter.check(client_ip):
                raise TooManyDownloads()
        except FileAccessError as exc:
            LOGGER.warning(
                "upload request rejected",
                extra={"client_ip": client_ip, "path": relative, "status": exc.status_code},
            )
            return JSONResponse(status_code=exc.status_code, content=exc.to_body())

        try:
            response = await call_next(request)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Unhandled exception", extra={"client_ip": client_ip})
            raise exc
        response.headers.update(media_headers(relative))
        return response
