"""Package exports commonly used helpers for convenience."""

from .config import Settings, get_settings
from .logging_config import configure_logging

__version__ = "1.0.0"

__all__ = ["Settings", "get_settings", "configure_logging", "__version__"]
