"""
Clip type enumerations.

CoarseType is the capture-time tag stored with every clip. ContentKind is the
fine-grained classification computed for text clips.
"""

from enum import Enum


class CoarseType(str, Enum):
    """Capture-time clip type."""

    TEXT = "text"
    IMAGE = "image"
    FILES = "files"
    HTML = "html"  # Rich HTML captured from Word/Excel/browsers


class ContentKind(str, Enum):
    """Fine-grained content classification for text clips.

    Closed set: every classification yields exactly one of these,
    with TEXT as the universal fallback.
    """

    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"
    DIFF = "diff"
    LATEX = "latex"
    TABLE = "table"
    EMAIL = "email"
    PHONE = "phone"
    CODE = "code"
    TEXT = "text"
