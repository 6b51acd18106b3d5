"""
Per-kind preview extractors.

Each extractor turns clip text into a bounded PreviewModel for one
ContentKind. Extractors are pure and total: malformed input (JSON that does
not parse, text without a table delimiter) degrades to a TextPreview tagged
with ``fallback_from`` instead of raising.
"""

import json
import re
from collections.abc import Callable

from src.classifier.kinds import ContentKind
from src.classifier.language import guess_language
from src.classifier.signals import (
    BLOCK_MATH_PATTERN,
    INLINE_MATH_PATTERN,
    compact_phone,
    detect_table_delimiter,
    parse_json,
)
from src.preview.budget import clip_chars, clip_items, pick, resolve_config
from src.preview.models import (
    CodePreview,
    ContactPreview,
    DiffLine,
    DiffLineType,
    DiffPreview,
    DisplayMode,
    HtmlPreview,
    JsonLine,
    JsonPreview,
    LatexPreview,
    LatexSegment,
    MarkdownPreview,
    PreviewModel,
    TablePreview,
    TextPreview,
)
from src.preview.sanitizer import sanitize_html
from src.utils.config import PreviewConfig
from src.utils.errors import UnsupportedKindError
from src.utils.logging import get_logger

logger = get_logger(__name__)

Extractor = Callable[[str, DisplayMode, PreviewConfig], PreviewModel]


# =============================================================================
# Text
# =============================================================================


def extract_text(
    content: str,
    mode: DisplayMode,
    config: PreviewConfig,
    fallback_from: ContentKind | None = None,
) -> TextPreview:
    """Plain text, cut to the text character budget."""
    limit = pick(mode, config.compact_text_chars, config.full_text_chars)
    text, truncated = clip_chars(content, limit)
    return TextPreview(
        text=text,
        truncated=truncated,
        total_chars=len(content),
        fallback_from=fallback_from,
    )


# =============================================================================
# JSON
# =============================================================================

_JSON_KEY = re.compile(r'^(\s*)"([^"]+)":')
_JSON_VALUE = re.compile(r':\s*(".*"|[\d.]+|true|false|null)')


def _json_line(line: str) -> JsonLine:
    key_match = _JSON_KEY.match(line)
    value_match = _JSON_VALUE.search(line)
    indent = key_match.group(1) if key_match else line[: len(line) - len(line.lstrip())]
    return JsonLine(
        text=line,
        indent=indent,
        key=key_match.group(2) if key_match else None,
        value=value_match.group(1) if value_match else None,
    )


def extract_json(content: str, mode: DisplayMode, config: PreviewConfig) -> PreviewModel:
    """Pretty-print JSON with 2-space indentation and pick out key/value spans.

    Compact mode shows the first few lines; full mode shows more and marks
    the preview expandable when lines remain, revealing all of them once
    the display mode is expanded.
    """
    try:
        parsed = parse_json(content.strip())
    except ValueError as e:
        logger.debug("JSON extractor degraded to text", error=str(e))
        return extract_text(content, mode, config, fallback_from=ContentKind.JSON)

    lines = json.dumps(parsed, indent=2, ensure_ascii=False).split("\n")
    expandable = not mode.compact and len(lines) > config.full_json_lines
    expanded = expandable and mode.expanded

    if mode.compact:
        shown, _ = clip_items(lines, config.compact_json_lines)
    elif expanded:
        shown = lines
    else:
        shown, _ = clip_items(lines, config.full_json_lines)

    return JsonPreview(
        lines=[_json_line(line) for line in shown],
        total_lines=len(lines),
        expandable=expandable,
        expanded=expanded,
    )


# =============================================================================
# Diff
# =============================================================================


def classify_diff_line(line: str) -> DiffLineType:
    """Classify one diff line by its prefix."""
    if line.startswith("+") and not line.startswith("+++"):
        return DiffLineType.ADDITION
    if line.startswith("-") and not line.startswith("---"):
        return DiffLineType.DELETION
    if line.startswith("@@"):
        return DiffLineType.HUNK_HEADER
    if line.startswith("diff") or line.startswith("index"):
        return DiffLineType.META
    return DiffLineType.CONTEXT


def extract_diff(content: str, mode: DisplayMode, config: PreviewConfig) -> DiffPreview:
    all_lines = content.split("\n")
    shown, truncated = clip_items(all_lines, pick(mode, config.compact_diff_lines, config.full_diff_lines))
    return DiffPreview(
        lines=[DiffLine(text=line, line_type=classify_diff_line(line)) for line in shown],
        total_lines=len(all_lines),
        truncated=truncated,
    )


# =============================================================================
# LaTeX
# =============================================================================


def split_latex(content: str) -> list[LatexSegment]:
    """Split text into text, block-math and inline-math segments.

    $$...$$ blocks are cut out first; the text between them is then scanned
    for $...$ spans. Segments keep their original left-to-right order and
    math content is stripped of surrounding whitespace.
    """
    segments: list[LatexSegment] = []

    def add_inline(text: str) -> None:
        last = 0
        for match in INLINE_MATH_PATTERN.finditer(text):
            if match.start() > last:
                segments.append(LatexSegment(type="text", content=text[last : match.start()]))
            segments.append(LatexSegment(type="inline-math", content=match.group(1).strip()))
            last = match.end()
        if last < len(text):
            segments.append(LatexSegment(type="text", content=text[last:]))

    last = 0
    for match in BLOCK_MATH_PATTERN.finditer(content):
        add_inline(content[last : match.start()])
        segments.append(LatexSegment(type="block-math", content=match.group(1).strip()))
        last = match.end()
    add_inline(content[last:])

    if not segments:
        segments.append(LatexSegment(type="text", content=content))
    return segments


def extract_latex(content: str, mode: DisplayMode, config: PreviewConfig) -> LatexPreview:
    segments = split_latex(content)
    shown, _ = clip_items(segments, pick(mode, config.compact_latex_segments, None))
    return LatexPreview(segments=shown, total_segments=len(segments))


# =============================================================================
# Table
# =============================================================================


def extract_table(content: str, mode: DisplayMode, config: PreviewConfig) -> PreviewModel:
    """Split delimited rows into cells; the first row is the header.

    The delimiter is detected the same way the classifier does it. Only the
    first three lines were checked for a uniform delimiter count, so later
    ragged rows are accepted as-is.
    """
    delimiter = detect_table_delimiter(content)
    if delimiter is None:
        logger.debug("Table extractor found no delimiter, degraded to text")
        return extract_text(content, mode, config, fallback_from=ContentKind.TABLE)

    rows = [[cell.strip() for cell in line.split(delimiter)] for line in content.strip().split("\n")]
    header, data = rows[0], rows[1:]
    shown, _ = clip_items(data, pick(mode, config.compact_table_data_rows, config.full_table_data_rows))

    return TablePreview(
        delimiter="tab" if delimiter == "\t" else "comma",
        header=header,
        rows=shown,
        total_rows=len(data),
        remaining_rows=len(data) - len(shown),
    )


# =============================================================================
# Contact values
# =============================================================================


def extract_email(content: str, mode: DisplayMode, config: PreviewConfig) -> ContactPreview:
    value = content.strip()
    return ContactPreview(kind="email", value=value, href=f"mailto:{value}")


def extract_phone(content: str, mode: DisplayMode, config: PreviewConfig) -> ContactPreview:
    return ContactPreview(kind="phone", value=content.strip(), href=f"tel:{compact_phone(content)}")


# =============================================================================
# Code, markdown, HTML
# =============================================================================


def extract_code(content: str, mode: DisplayMode, config: PreviewConfig) -> CodePreview:
    language = guess_language(content) or "text"
    line_count = len(content.split("\n"))
    text, truncated = clip_chars(content, pick(mode, config.compact_code_chars, None))
    return CodePreview(
        language=language,
        text=text,
        line_count=line_count,
        show_line_numbers=not mode.compact and line_count > config.line_numbers_min_lines,
        truncated=truncated,
    )


def extract_markdown(content: str, mode: DisplayMode, config: PreviewConfig) -> MarkdownPreview:
    # Rendering is left to the view layer; only the budget applies here.
    text, truncated = clip_chars(content, pick(mode, config.compact_markdown_chars, None))
    return MarkdownPreview(text=text, truncated=truncated)


def extract_html(content: str, mode: DisplayMode, config: PreviewConfig) -> HtmlPreview:
    return HtmlPreview(
        sanitized=sanitize_html(content),
        max_height=pick(mode, config.compact_html_height, config.full_html_height),
    )


def _extract_plain(content: str, mode: DisplayMode, config: PreviewConfig) -> TextPreview:
    return extract_text(content, mode, config)


EXTRACTORS: dict[ContentKind, Extractor] = {
    ContentKind.HTML: extract_html,
    ContentKind.MARKDOWN: extract_markdown,
    ContentKind.JSON: extract_json,
    ContentKind.DIFF: extract_diff,
    ContentKind.LATEX: extract_latex,
    ContentKind.TABLE: extract_table,
    ContentKind.EMAIL: extract_email,
    ContentKind.PHONE: extract_phone,
    ContentKind.CODE: extract_code,
    ContentKind.TEXT: _extract_plain,
}


def extract(
    kind: ContentKind | str,
    content: str,
    mode: DisplayMode | None = None,
    config: PreviewConfig | None = None,
) -> PreviewModel:
    """Build the preview for an already classified clip.

    Args:
        kind: ContentKind chosen by the classifier.
        content: Clip text.
        mode: Display mode (defaults to full).
        config: Output budgets (defaults to configured budgets).

    Returns:
        PreviewModel variant for the kind.

    Raises:
        UnsupportedKindError: If no extractor exists for ``kind``.
    """
    try:
        extractor = EXTRACTORS[ContentKind(kind)]
    except (ValueError, KeyError):
        raise UnsupportedKindError(kind) from None

    mode = mode or DisplayMode()
    config = resolve_config(config)
    content = content or ""

    try:
        return extractor(content, mode, config)
    except Exception as e:
        logger.warning(
            "Extractor failed, falling back to text",
            kind=ContentKind(kind).value,
            error=str(e),
            exc_info=True,
        )
        return extract_text(content, mode, config, fallback_from=ContentKind(kind))
