"""
Content signal detectors.

Each detector is a cheap, pure predicate over clip text. The classifier tries
them in a fixed order; extractors reuse the parsing helpers (JSON parsing,
table delimiter detection) so both sides agree on what they saw.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

# =============================================================================
# HTML
# =============================================================================

HTML_TAGS = (
    "html", "head", "body", "div", "span", "p", "h[1-6]", "ul", "ol", "li",
    "table", "tr", "td", "th", "form", "input", "button", "a", "img", "br",
    "hr", "strong", "em", "b", "i", "u", "script", "style", "link", "meta",
)  # fmt: skip

# Tag name must end at whitespace, "/" or ">" so "<bogus>" is not "<b>"
_HTML_TAG_PATTERN = re.compile(
    r"<(?:" + "|".join(HTML_TAGS) + r")(?=[\s/>])[^>]*>",
    re.IGNORECASE,
)


def is_html(content: str) -> bool:
    """Check for markup from the known HTML tag allow-list."""
    trimmed = content.strip()
    if not trimmed.startswith("<"):
        return False
    return _HTML_TAG_PATTERN.search(trimmed) is not None


# =============================================================================
# Diff
# =============================================================================

_HUNK_HEADER = re.compile(r"^@@\s*-\d+,?\d*\s*\+\d+,?\d*\s*@@", re.MULTILINE)
_ADDED_LINE = re.compile(r"^\+[^+]", re.MULTILINE)
_REMOVED_LINE = re.compile(r"^-[^-]", re.MULTILINE)


def is_diff(content: str) -> bool:
    """Check for unified diff / patch output."""
    trimmed = content.strip()
    return (
        trimmed.startswith("diff --git")
        or trimmed.startswith("--- ")
        or _HUNK_HEADER.search(trimmed) is not None
        or (_ADDED_LINE.search(trimmed) is not None and _REMOVED_LINE.search(trimmed) is not None)
    )


# =============================================================================
# JSON
# =============================================================================


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_json(text: str) -> Any:
    """Parse strict JSON.

    NaN/Infinity are rejected and runaway nesting is reported as ValueError,
    so callers only need to handle one exception type.

    Raises:
        ValueError: If text is not valid JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nesting too deep") from e


def is_json(content: str) -> bool:
    """Check for a JSON object or array that actually parses."""
    trimmed = content.strip()
    if not (trimmed.startswith("{") or trimmed.startswith("[")):
        return False
    try:
        parse_json(trimmed)
    except ValueError:
        return False
    return True


# =============================================================================
# LaTeX
# =============================================================================

BLOCK_MATH_PATTERN = re.compile(r"\$\$(.+?)\$\$", re.DOTALL)
INLINE_MATH_PATTERN = re.compile(r"\$([^$\n]+)\$")


def is_latex(content: str) -> bool:
    """Check for $$...$$ display math or $...$ inline math."""
    return BLOCK_MATH_PATTERN.search(content) is not None or INLINE_MATH_PATTERN.search(content) is not None


# =============================================================================
# Markdown
# =============================================================================

# Any one of these classifies alone
MARKDOWN_STRONG_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("header", re.compile(r"^#{1,6}\s+.+$", re.MULTILINE)),
    ("codeblock", re.compile(r"```.*?```", re.DOTALL)),
    ("hr", re.compile(r"^[-*_]{3,}\s*$", re.MULTILINE)),
    ("table", re.compile(r"^\|.+\|.+\|$", re.MULTILINE)),
)

# Need matches from two distinct categories
MARKDOWN_WEAK_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("bold", re.compile(r"\*\*[^*]+\*\*")),
    ("italic", re.compile(r"(?<!\*)\*[^*]+\*(?!\*)")),
    ("unordered", re.compile(r"^[-*+]\s+", re.MULTILINE)),
    ("ordered", re.compile(r"^\d+\.\s+", re.MULTILINE)),
    ("blockquote", re.compile(r"^>\s+", re.MULTILINE)),
    ("inlinecode", re.compile(r"`[^`]+`")),
    ("link", re.compile(r"\[([^\]]+)\]\([^)]+\)")),
    ("image", re.compile(r"!\[([^\]]*)\]\([^)]+\)")),
    ("checkbox", re.compile(r"^\[[ x]\]", re.MULTILINE)),
)

MARKDOWN_WEAK_THRESHOLD = 2


@dataclass
class MarkdownSignals:
    """Markdown evidence found in a piece of text."""

    strong: str | None = None
    weak: list[str] = field(default_factory=list)

    @property
    def is_markdown(self) -> bool:
        return self.strong is not None or len(self.weak) >= MARKDOWN_WEAK_THRESHOLD


def scan_markdown(content: str) -> MarkdownSignals:
    """Score markdown signals.

    Strong patterns short-circuit. Weak patterns are counted per distinct
    category (not per occurrence) and scanning stops at the threshold.
    """
    for name, pattern in MARKDOWN_STRONG_PATTERNS:
        if pattern.search(content):
            return MarkdownSignals(strong=name)

    signals = MarkdownSignals()
    for name, pattern in MARKDOWN_WEAK_PATTERNS:
        if pattern.search(content):
            signals.weak.append(name)
            if len(signals.weak) >= MARKDOWN_WEAK_THRESHOLD:
                break
    return signals


def is_markdown(content: str) -> bool:
    """Check for markdown using the strong/weak signal tiers."""
    return scan_markdown(content).is_markdown


# =============================================================================
# Delimited tables
# =============================================================================

TABLE_SAMPLE_LINES = 3


def _uniform_count(lines: list[str], char: str) -> bool:
    counts = [line.count(char) for line in lines]
    return counts[0] > 0 and all(c == counts[0] for c in counts)


def detect_table_delimiter(content: str) -> str | None:
    """Detect the delimiter of tab- or comma-separated data.

    Only the first three lines are sampled: each must carry the same,
    non-zero number of delimiters. Tabs win over commas.

    Returns:
        "\\t", "," or None when the content is not delimited data.
    """
    lines = content.strip().split("\n")
    if len(lines) < 2:
        return None

    sample = lines[:TABLE_SAMPLE_LINES]
    if _uniform_count(sample, "\t"):
        return "\t"
    if _uniform_count(sample, ","):
        return ","
    return None


def is_table_data(content: str) -> bool:
    """Check for tab- or comma-separated tabular data."""
    return detect_table_delimiter(content) is not None


# =============================================================================
# Contact values
# =============================================================================

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_PATTERN = re.compile(r"[+]?[(]?[0-9]{1,4}[)]?[-\s./0-9]{7,}")
_WHITESPACE = re.compile(r"\s+")
MIN_PHONE_DIGITS = 7


def is_email(content: str) -> bool:
    """Check whether the whole trimmed content is one email address."""
    return _EMAIL_PATTERN.fullmatch(content.strip()) is not None


def compact_phone(content: str) -> str:
    """Strip all whitespace from a phone number."""
    return _WHITESPACE.sub("", content.strip())


def is_phone(content: str) -> bool:
    """Check whether the whole trimmed content is a phone number."""
    compacted = compact_phone(content)
    if _PHONE_PATTERN.fullmatch(compacted) is None:
        return False
    return sum(ch.isdigit() for ch in compacted) >= MIN_PHONE_DIGITS


# =============================================================================
# Side signals (not content kinds)
# =============================================================================

_COLOR_CODE_PATTERN = re.compile(
    r"(#[0-9A-F]{3,8}|rgba?\([^)]+\)|hsla?\([^)]+\))",
    re.IGNORECASE,
)


def is_url(content: str) -> bool:
    """Check whether the clip is a single absolute http(s) URL."""
    trimmed = content.strip()
    if not trimmed or _WHITESPACE.search(trimmed):
        return False
    try:
        parsed = urlparse(trimmed)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_color_code(content: str) -> bool:
    """Check whether the clip is a CSS colour literal (hex, rgb(a), hsl(a))."""
    return _COLOR_CODE_PATTERN.fullmatch(content.strip()) is not None
