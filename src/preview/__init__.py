"""
Preview extraction module for ReClip.

Turns classified clip content into bounded, render-ready preview models,
plus the fixed previews for image, files and rich-HTML clips.
"""

from src.preview.extractors import EXTRACTORS, classify_diff_line, extract, split_latex
from src.preview.models import (
    CodePreview,
    ContactPreview,
    DiffLine,
    DiffLineType,
    DiffPreview,
    DisplayMode,
    FileEntry,
    FilesPreview,
    HtmlPreview,
    ImagePreview,
    JsonLine,
    JsonPreview,
    LatexPreview,
    LatexSegment,
    MarkdownPreview,
    PreviewModel,
    RawClip,
    RawPreview,
    TablePreview,
    TextPreview,
)
from src.preview.nontext import apply_path_checks, file_icon, parse_file_list
from src.preview.render import badge_label, render
from src.preview.sanitizer import sanitize_html

__all__ = [
    # Inputs
    "RawClip",
    "DisplayMode",
    # Entry points
    "render",
    "extract",
    "badge_label",
    "EXTRACTORS",
    # Preview variants
    "PreviewModel",
    "JsonPreview",
    "JsonLine",
    "DiffPreview",
    "DiffLine",
    "DiffLineType",
    "LatexPreview",
    "LatexSegment",
    "TablePreview",
    "ContactPreview",
    "CodePreview",
    "MarkdownPreview",
    "HtmlPreview",
    "TextPreview",
    "RawPreview",
    "FilesPreview",
    "FileEntry",
    "ImagePreview",
    # Helpers
    "classify_diff_line",
    "split_latex",
    "parse_file_list",
    "file_icon",
    "apply_path_checks",
    "sanitize_html",
]
