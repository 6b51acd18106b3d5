"""
Content Kind Classifier for ReClip.

Decides what kind of content a text clip holds so the matching preview
extractor can run.

Rules are tried in a fixed order and the first match wins:
- html: markup from a known tag allow-list
- diff: git/unified diff headers, hunk headers, or paired +/- lines
- json: object/array that parses
- latex: $$...$$ or $...$ math
- markdown: one strong signal, or two distinct weak signals
- table: tab- or comma-delimited rows (tabs preferred)
- email / phone: the whole clip is a single contact value
- code: the language guesser recognizes it
- text: fallback, always matches

Structural markers come first because they are the least ambiguous; the
permissive contact/code checks come last so they cannot shadow richer kinds.
Non-text clips (image, files, html captured as rich text) are never
reclassified and always yield text.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from src.classifier.kinds import CoarseType, ContentKind
from src.classifier.language import guess_language
from src.classifier.signals import (
    detect_table_delimiter,
    is_diff,
    is_email,
    is_html,
    is_json,
    is_latex,
    is_phone,
    scan_markdown,
)
from src.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ClassificationResult:
    """Result of content classification."""

    kind: ContentKind
    reason: str
    signals: dict[str, Any] = field(default_factory=dict)


# A rule returns None when it does not match, or the signals it matched on.
Rule = Callable[[str], dict[str, Any] | None]


def _flag(predicate: Callable[[str], bool]) -> Rule:
    def rule(content: str) -> dict[str, Any] | None:
        return {} if predicate(content) else None

    return rule


def _markdown_rule(content: str) -> dict[str, Any] | None:
    signals = scan_markdown(content)
    if signals.strong is not None:
        return {"strong": signals.strong}
    if signals.is_markdown:
        return {"weak": signals.weak}
    if signals.weak:
        logger.debug("Markdown below weak-signal threshold", weak=signals.weak)
    return None


def _table_rule(content: str) -> dict[str, Any] | None:
    delimiter = detect_table_delimiter(content)
    if delimiter is None:
        return None
    return {"delimiter": "tab" if delimiter == "\t" else "comma"}


def _code_rule(content: str) -> dict[str, Any] | None:
    language = guess_language(content)
    if language is None:
        return None
    return {"language": language}


class ContentClassifier:
    """Ordered, first-match-wins classifier for text clips."""

    RULES: tuple[tuple[ContentKind, Rule], ...] = (
        (ContentKind.HTML, _flag(is_html)),
        (ContentKind.DIFF, _flag(is_diff)),
        (ContentKind.JSON, _flag(is_json)),
        (ContentKind.LATEX, _flag(is_latex)),
        (ContentKind.MARKDOWN, _markdown_rule),
        (ContentKind.TABLE, _table_rule),
        (ContentKind.EMAIL, _flag(is_email)),
        (ContentKind.PHONE, _flag(is_phone)),
        (ContentKind.CODE, _code_rule),
    )

    def classify(
        self,
        content: str,
        coarse_type: CoarseType | str = CoarseType.TEXT,
    ) -> ClassificationResult:
        """Classify clip content.

        Args:
            content: Clip payload.
            coarse_type: Capture-time clip type. Anything but text skips
                classification.

        Returns:
            ClassificationResult with the kind, the rule that matched, and
            the signals it matched on.
        """
        if content is None:
            content = ""

        if coarse_type != CoarseType.TEXT:
            return ClassificationResult(
                kind=ContentKind.TEXT,
                reason=f"coarse type {getattr(coarse_type, 'value', coarse_type)} is not reclassified",
            )

        for kind, rule in self.RULES:
            signals = rule(content)
            if signals is not None:
                logger.debug(
                    "Content classification complete",
                    kind=kind.value,
                    signals=signals,
                    length=len(content),
                )
                return ClassificationResult(kind=kind, reason=f"matched {kind.value} rule", signals=signals)

        return ClassificationResult(kind=ContentKind.TEXT, reason="no rule matched")


# Singleton instance
_classifier: ContentClassifier | None = None


def get_classifier() -> ContentClassifier:
    """Get or create the singleton ContentClassifier instance.

    Returns:
        ContentClassifier instance.
    """
    global _classifier
    if _classifier is None:
        _classifier = ContentClassifier()
    return _classifier


def classify(content: str, coarse_type: CoarseType | str = CoarseType.TEXT) -> ContentKind:
    """Classify clip content into a ContentKind.

    Convenience function that uses the singleton classifier. Deterministic
    and total: the same input always yields the same kind, and it never raises
    on any string input.

    Args:
        content: Clip payload.
        coarse_type: Capture-time clip type ("text", "image", "files", "html").

    Returns:
        ContentKind for the content.
    """
    return get_classifier().classify(content, coarse_type).kind
