"""
Tests for preview error codes and exceptions.

## Test Perspectives Table
| Case ID | Input / Precondition | Perspective (Equivalence / Boundary) | Expected Result | Notes |
|---------|----------------------|---------------------------------------|-----------------|-------|
| TC-ER-01 | PreviewError with details | Equivalence – payload | ok=False, code, details | - |
| TC-ER-02 | PreviewError without details | Boundary – optional field | no "details" key | - |
| TC-ER-03 | UnsupportedKindError | Equivalence – subclass | UNSUPPORTED_KIND | - |
| TC-ER-04 | EnrichmentUnavailableError | Equivalence – subclass | ENRICHMENT_UNAVAILABLE | - |
"""

import pytest

# All tests in this module are unit tests (no external dependencies)
pytestmark = pytest.mark.unit

from src.utils.errors import (
    EnrichmentUnavailableError,
    PreviewError,
    PreviewErrorCode,
    UnsupportedKindError,
)


class TestPreviewError:
    """Tests for PreviewError.to_dict()."""

    def test_payload_with_details(self) -> None:
        """TC-ER-01: Structured error payload."""
        error = PreviewError(PreviewErrorCode.INVALID_INPUT, "bad clip", details={"path": "x"})

        assert error.to_dict() == {
            "ok": False,
            "error_code": "INVALID_INPUT",
            "error": "bad clip",
            "details": {"path": "x"},
        }
        assert str(error) == "bad clip"

    def test_payload_without_details(self) -> None:
        """TC-ER-02: Empty details are omitted."""
        assert "details" not in PreviewError(PreviewErrorCode.INVALID_INPUT, "bad").to_dict()

    def test_codes_are_strings(self) -> None:
        assert PreviewErrorCode.UNSUPPORTED_KIND == "UNSUPPORTED_KIND"


class TestErrorSubclasses:
    """Tests for the specific preview errors."""

    def test_unsupported_kind(self) -> None:
        """TC-ER-03: Dispatch error carries the kind."""
        error = UnsupportedKindError("spreadsheet")

        assert isinstance(error, PreviewError)
        assert error.code == PreviewErrorCode.UNSUPPORTED_KIND
        assert error.kind == "spreadsheet"
        assert "spreadsheet" in error.message

    def test_enrichment_unavailable(self) -> None:
        """TC-ER-04: Message names the source, key and reason."""
        error = EnrichmentUnavailableError("url_metadata", "https://x.test", "no preview fields")

        assert error.code == PreviewErrorCode.ENRICHMENT_UNAVAILABLE
        assert error.message == "url_metadata unavailable for https://x.test: no preview fields"
        assert error.to_dict()["details"] == {"source": "url_metadata", "key": "https://x.test"}

    def test_enrichment_unavailable_without_reason(self) -> None:
        assert EnrichmentUnavailableError("ocr", "/a.png").message == "ocr unavailable for /a.png"
