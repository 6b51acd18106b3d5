"""
Previews for non-text clips.

Image, file-list and rich-HTML clips bypass the classifier and map to fixed
preview variants. Anything that needs the file system or the network (path
existence, image URLs, OCR, palettes) is supplied by a collaborator; this
module only shapes the result.
"""

import json
from collections.abc import Callable, Iterable
from pathlib import PurePath

from src.preview.budget import excerpt, pick
from src.preview.extractors import extract_html
from src.preview.models import (
    DisplayMode,
    FileEntry,
    FilesPreview,
    HtmlPreview,
    ImagePreview,
    TextPreview,
)
from src.utils.config import PreviewConfig
from src.utils.logging import get_logger

logger = get_logger(__name__)

INVALID_FILE_DATA = "Invalid file data"

# Extension -> icon category
FILE_ICON_CATEGORIES: dict[str, str] = {
    # Documents
    "pdf": "pdf", "doc": "document", "docx": "document", "txt": "text", "rtf": "text",
    "xls": "spreadsheet", "xlsx": "spreadsheet", "csv": "spreadsheet",
    "ppt": "presentation", "pptx": "presentation",
    # Code
    "js": "javascript", "jsx": "javascript", "ts": "typescript", "tsx": "typescript",
    "py": "python", "rs": "rust", "go": "go",
    "html": "web", "css": "style", "scss": "style", "sass": "style",
    "json": "data", "xml": "data", "yaml": "data", "yml": "data",
    "md": "markdown", "markdown": "markdown",
    # Media
    "jpg": "image", "jpeg": "image", "png": "image", "gif": "image", "svg": "image",
    "webp": "image", "ico": "image",
    "mp3": "audio", "wav": "audio", "ogg": "audio", "flac": "audio",
    "mp4": "video", "avi": "video", "mkv": "video", "mov": "video", "webm": "video",
    # Archives and executables
    "zip": "archive", "rar": "archive", "7z": "archive", "tar": "archive", "gz": "archive",
    "exe": "executable", "msi": "executable", "dmg": "executable", "app": "executable",
    "deb": "executable",
    # Config
    "env": "config", "ini": "config", "conf": "config", "config": "config",
}  # fmt: skip

PathToUrl = Callable[[str], str]


# =============================================================================
# Files
# =============================================================================


def file_display_name(path: str) -> str:
    """Last path component, splitting on both / and \\."""
    return path.replace("\\", "/").rstrip("/").split("/")[-1] or path


def file_icon(path: str, is_dir: bool = False, is_missing: bool = False) -> str:
    """Icon category for a path."""
    if is_missing:
        return "missing"
    if is_dir:
        return "folder"
    name = file_display_name(path)
    if "." not in name:
        return "file"
    return FILE_ICON_CATEGORIES.get(name.rsplit(".", 1)[-1].lower(), "file")


def parse_file_list(content: str) -> list[str]:
    """Parse the JSON path array stored for a files clip.

    Returns:
        Path list, or ["Invalid file data"] when the payload is not a JSON
        array.
    """
    try:
        parsed = json.loads(content)
    except (ValueError, RecursionError):
        logger.debug("Files clip payload is not JSON")
        return [INVALID_FILE_DATA]

    if not isinstance(parsed, list):
        logger.debug("Files clip payload is not a list", payload_type=type(parsed).__name__)
        return [INVALID_FILE_DATA]
    return [p if isinstance(p, str) else str(p) for p in parsed]


def files_preview(content: str, mode: DisplayMode, config: PreviewConfig) -> FilesPreview:
    """Summarize a files clip: item count and the first few entries."""
    paths = parse_file_list(content)
    visible = [] if mode.compact else paths[: config.visible_file_entries]
    return FilesPreview(
        paths=paths,
        item_count=len(paths),
        entries=[FileEntry(path=p, name=file_display_name(p), icon=file_icon(p)) for p in visible],
        more_count=0 if mode.compact else max(len(paths) - len(visible), 0),
    )


def apply_path_checks(
    preview: FilesPreview,
    checks: Iterable[tuple[str, bool, bool]],
) -> FilesPreview:
    """Fold (path, exists, is_dir) results from a path check into a preview.

    Args:
        preview: Files preview built by files_preview().
        checks: Triples from the path validation collaborator.

    Returns:
        A new FilesPreview with per-entry status and the missing count.
    """
    status = {path: (exists, is_dir) for path, exists, is_dir in checks}
    missing = sum(1 for exists, _ in status.values() if not exists)

    entries = []
    for entry in preview.entries:
        if entry.path not in status:
            entries.append(entry)
            continue
        exists, is_dir = status[entry.path]
        entries.append(
            entry.model_copy(
                update={
                    "exists": exists,
                    "is_dir": exists and is_dir,
                    "icon": file_icon(entry.path, is_dir=exists and is_dir, is_missing=not exists),
                }
            )
        )

    return preview.model_copy(update={"entries": entries, "checked": True, "missing_count": missing})


# =============================================================================
# Image
# =============================================================================


def default_path_to_url(path: str) -> str:
    """Absolute paths become file:// URIs; anything else is passed through."""
    pure = PurePath(path)
    if pure.is_absolute():
        try:
            return pure.as_uri()
        except ValueError:
            return path
    return path


def image_preview(
    content: str,
    mode: DisplayMode,
    config: PreviewConfig,
    to_resource_url: PathToUrl | None = None,
) -> ImagePreview:
    """Image clip: content is the stored image path."""
    path = content.strip()
    converter = to_resource_url or default_path_to_url
    return ImagePreview(
        path=path,
        resource_url=converter(path),
        max_height=pick(mode, config.compact_image_height, config.full_image_height),
    )


# =============================================================================
# Rich HTML
# =============================================================================


def html_clip_preview(content: str, mode: DisplayMode, config: PreviewConfig) -> HtmlPreview | TextPreview:
    """Rich HTML clip: source excerpt when compact or raw, sanitized otherwise."""
    if mode.compact or mode.show_raw:
        limit = pick(mode, config.compact_html_source_chars, config.full_html_source_chars)
        return TextPreview(
            text=excerpt(content, limit),
            truncated=len(content) > limit,
            total_chars=len(content),
        )
    return extract_html(content, mode, config)
