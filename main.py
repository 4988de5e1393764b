"""FastAPI application that serves guarded lecture uploads."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from fileguard import __version__
from fileguard.config import Settings, get_settings
from fileguard.file_security import PathValidator
from fileguard.guard import UPLOADS_PREFIX, install_upload_guard
from fileguard.logging_config import configure_logging
from fileguard.rate_limit import DownloadLimiter, FixedWindowRateLimiter

LOGGER = logging.getLogger(__name__)


def create_app(settings: Settings, rate_limiter: Optional[DownloadLimiter] = None) -> FastAPI:
    """Build the application around one validator and one download limiter."""

    validator = PathValidator(settings.upload_root)
    validator.ensure_directories()
    if rate_limiter is None:
        rate_limiter = FixedWindowRateLimiter(
            settings.max_downloads,
            settings.download_window_ms,
            sweep_interval_seconds=settings.sweep_interval_seconds,
        )

    app = FastAPI(title="Upload File Guard", version=__version__)
    app.state.settings = settings
    app.state.rate_limiter = rate_limiter

    install_upload_guard(
        app,
        validator=validator,
        limiter=rate_limiter,
        trust_proxy=settings.trust_proxy,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )
    app.mount(
        UPLOADS_PREFIX,
        StaticFiles(directory=str(validator.upload_root)),
        name="uploads",
    )

    @app.get("/")
    async def index() -> dict:
        """Report that the service is up."""

        return {
            "message": "Upload File Guard",
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
        }

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    LOGGER.info(
        "upload guard ready",
        extra={"path": str(validator.upload_root)},
    )
    return app


settings = get_settings()
configure_logging(settings.log_level)
app = create_app(settings)
