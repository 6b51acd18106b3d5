"""
Error codes and exceptions for ReClip preview.

Malformed clip content is never an error: extractors degrade to a plain-text
preview instead. The exceptions here cover the two remaining cases:

- UNSUPPORTED_KIND: an extractor was requested for a kind that has none.
  This is a programmer error and is allowed to propagate.
- ENRICHMENT_UNAVAILABLE: an asynchronous collaborator (path check, link
  metadata, OCR, palette) could not produce a result. Callers resolve this
  to an "unavailable" state rather than surfacing it.
"""

from enum import Enum
from typing import Any


class PreviewErrorCode(str, Enum):
    """Error codes for preview and enrichment failures."""

    UNSUPPORTED_KIND = "UNSUPPORTED_KIND"
    """No extractor is registered for the requested kind."""

    ENRICHMENT_UNAVAILABLE = "ENRICHMENT_UNAVAILABLE"
    """An external enrichment could not be produced."""

    INVALID_INPUT = "INVALID_INPUT"
    """Caller passed an argument of the wrong shape (CLI, config)."""


class PreviewError(Exception):
    """Base exception for preview errors."""

    def __init__(
        self,
        code: PreviewErrorCode,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize preview error.

        Args:
            code: Error code from PreviewErrorCode enum.
            message: Human-readable error message.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a structured error payload."""
        result: dict[str, Any] = {
            "ok": False,
            "error_code": self.code.value,
            "error": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class UnsupportedKindError(PreviewError):
    """Extractor dispatch was asked for a kind it does not handle."""

    def __init__(self, kind: Any):
        super().__init__(
            PreviewErrorCode.UNSUPPORTED_KIND,
            f"No extractor registered for kind: {kind!r}",
            details={"kind": str(kind)},
        )
        self.kind = kind


class EnrichmentUnavailableError(PreviewError):
    """An enrichment collaborator could not produce a result."""

    def __init__(self, source: str, key: str, reason: str = ""):
        super().__init__(
            PreviewErrorCode.ENRICHMENT_UNAVAILABLE,
            f"{source} unavailable for {key}" + (f": {reason}" if reason else ""),
            details={"source": source, "key": key},
        )
        self.source = source
        self.key = key
