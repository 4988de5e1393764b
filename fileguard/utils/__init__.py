"""Utility helpers."""
from .clients import UNKNOWN_CLIENT, client_identifier, forwarded_client  # noqa: F401
from .media import media_headers  # noqa: F401
from .paths import (  # noqa: F401
    ALLOWED_DIRS,
    allowed_dir_names,
    has_allowed_prefix,
    normalize_request_path,
)
