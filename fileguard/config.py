"""Application settings and environment loading utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:5174")


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


_load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid integer for environment variable: {name}") from exc


def _bool_from_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _split_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return DEFAULT_CORS_ORIGINS
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    upload_root: Path = Path("uploads")
    max_downloads: int = 100
    download_window_ms: int = 60_000
    sweep_interval_seconds: int = 300
    trust_proxy: bool = False
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            upload_root=Path(os.getenv("FILEGUARD_UPLOAD_ROOT", "uploads")),
            max_downloads=_int_from_env("FILEGUARD_MAX_DOWNLOADS", 100),
            download_window_ms=_int_from_env("FILEGUARD_DOWNLOAD_WINDOW_MS", 60_000),
            sweep_interval_seconds=_int_from_env("FILEGUARD_SWEEP_INTERVAL_SECONDS", 300),
            trust_proxy=_bool_from_env("FILEGUARD_TRUST_PROXY"),
            cors_origins=_split_origins(os.getenv("FILEGUARD_CORS_ORIGINS")),
            log_level=os.getenv("FILEGUARD_LOG_LEVEL", "INFO"),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings.from_env()
