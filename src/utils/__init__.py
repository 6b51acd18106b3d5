"""
ReClip utilities module.
"""

from src.utils.config import get_settings
from src.utils.errors import (
    EnrichmentUnavailableError,
    PreviewError,
    PreviewErrorCode,
    UnsupportedKindError,
)
from src.utils.logging import (
    LogContext,
    bind_context,
    configure_logging,
    get_logger,
    unbind_context,
)

__all__ = [
    # Config
    "get_settings",
    # Errors
    "PreviewError",
    "PreviewErrorCode",
    "UnsupportedKindError",
    "EnrichmentUnavailableError",
    # Logging
    "get_logger",
    "configure_logging",
    "bind_context",
    "unbind_context",
    "LogContext",
]
