"""
Preview data contracts.

RawClip and DisplayMode are the inputs of render(); every PreviewModel variant
is a bounded, render-ready projection of the clip text. Variants are tagged by
``kind`` so a serialized preview can be dispatched on by the view layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.classifier.kinds import CoarseType, ContentKind


class RawClip(BaseModel):
    """A captured clip as stored by the history service."""

    model_config = ConfigDict(frozen=True)

    content: str = Field("", description="Clip payload (text, HTML, image path or JSON path list)")
    coarse_type: CoarseType = Field(CoarseType.TEXT, description="Capture-time clip type")


class DisplayMode(BaseModel):
    """How a preview will be shown. Scales budgets only, never the kind."""

    model_config = ConfigDict(frozen=True)

    compact: bool = Field(False, description="Compact list row instead of full card")
    show_raw: bool = Field(False, description="Show the literal clip text instead of a structured view")
    expanded: bool = Field(False, description="User toggled 'show all' on an expandable preview")


# =============================================================================
# Per-kind variants
# =============================================================================


class JsonLine(BaseModel):
    """One pretty-printed JSON line with its key/value spans picked out."""

    text: str
    indent: str = ""
    key: str | None = Field(None, description="Object key on this line (without quotes)")
    value: str | None = Field(None, description="Literal value on this line (string, number, bool, null)")


class JsonPreview(BaseModel):
    kind: Literal["json"] = "json"
    lines: list[JsonLine] = Field(default_factory=list)
    total_lines: int = 0
    expandable: bool = Field(False, description="More lines exist behind a 'show all' toggle")
    expanded: bool = False

    @property
    def toggle_label(self) -> str | None:
        if not self.expandable:
            return None
        return "Collapse" if self.expanded else f"Show all ({self.total_lines} lines)"


class DiffLineType(str, Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    HUNK_HEADER = "hunk-header"
    META = "meta"
    CONTEXT = "context"


class DiffLine(BaseModel):
    text: str
    line_type: DiffLineType


class DiffPreview(BaseModel):
    kind: Literal["diff"] = "diff"
    lines: list[DiffLine] = Field(default_factory=list)
    total_lines: int = 0
    truncated: bool = False


class LatexSegment(BaseModel):
    type: Literal["text", "block-math", "inline-math"]
    content: str


class LatexPreview(BaseModel):
    kind: Literal["latex"] = "latex"
    segments: list[LatexSegment] = Field(default_factory=list)
    total_segments: int = 0


class TablePreview(BaseModel):
    kind: Literal["table"] = "table"
    delimiter: Literal["tab", "comma"]
    header: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list, description="Visible data rows (header excluded)")
    total_rows: int = Field(0, description="Data rows in the clip (header excluded)")
    remaining_rows: int = Field(0, description="Data rows hidden by the row budget")


class ContactPreview(BaseModel):
    kind: Literal["email", "phone"]
    value: str
    href: str = Field(..., description="mailto: or tel: link target")


class CodePreview(BaseModel):
    kind: Literal["code"] = "code"
    language: str
    text: str
    line_count: int = 0
    show_line_numbers: bool = False
    truncated: bool = False


class MarkdownPreview(BaseModel):
    kind: Literal["markdown"] = "markdown"
    text: str
    truncated: bool = False


class HtmlPreview(BaseModel):
    kind: Literal["html"] = "html"
    sanitized: str = Field(..., description="Allow-list sanitized markup, safe for DOM insertion")
    max_height: int = Field(..., description="Clip height in px; overflow is hidden")


class TextPreview(BaseModel):
    kind: Literal["text"] = "text"
    text: str
    truncated: bool = False
    total_chars: int = 0
    fallback_from: ContentKind | None = Field(
        None, description="Kind whose extractor degraded to plain text"
    )


# =============================================================================
# Fixed variants (raw view, non-text clips)
# =============================================================================


class RawPreview(BaseModel):
    kind: Literal["raw"] = "raw"
    detected_kind: ContentKind
    text: str
    truncated: bool = False


class FileEntry(BaseModel):
    path: str
    name: str
    icon: str = Field("file", description="Icon category derived from extension or path check")
    exists: bool | None = Field(None, description="None until the path has been checked")
    is_dir: bool | None = None


class FilesPreview(BaseModel):
    kind: Literal["files"] = "files"
    paths: list[str] = Field(default_factory=list)
    item_count: int = 0
    entries: list[FileEntry] = Field(default_factory=list, description="Visible entries")
    more_count: int = 0
    checked: bool = False
    missing_count: int = 0

    @property
    def valid(self) -> bool:
        return self.missing_count == 0


class ImagePreview(BaseModel):
    kind: Literal["image"] = "image"
    path: str
    resource_url: str
    max_height: int


PreviewModel = Annotated[
    JsonPreview
    | DiffPreview
    | LatexPreview
    | TablePreview
    | ContactPreview
    | CodePreview
    | MarkdownPreview
    | HtmlPreview
    | TextPreview
    | RawPreview
    | FilesPreview
    | ImagePreview,
    Field(discriminator="kind"),
]
