"""
Content classification module for ReClip.

Provides the ordered content-kind classifier, its signal detectors,
and the code language guesser.
"""

from src.classifier.classifier import (
    ClassificationResult,
    ContentClassifier,
    classify,
    get_classifier,
)
from src.classifier.kinds import CoarseType, ContentKind
from src.classifier.language import guess_language, language_color
from src.classifier.signals import (
    MarkdownSignals,
    detect_table_delimiter,
    is_color_code,
    is_url,
    parse_json,
    scan_markdown,
)

__all__ = [
    # Kinds
    "CoarseType",
    "ContentKind",
    # Classification
    "ClassificationResult",
    "ContentClassifier",
    "classify",
    "get_classifier",
    # Signals
    "MarkdownSignals",
    "scan_markdown",
    "detect_table_delimiter",
    "parse_json",
    "is_url",
    "is_color_code",
    # Language guessing
    "guess_language",
    "language_color",
]
