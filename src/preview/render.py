"""
Single entry point from a stored clip to its preview.

render() = extract(classify(clip.content, clip.coarse_type), mode) for text
clips; image, files and rich-HTML clips go to their dedicated variants.
"""

from src.classifier.classifier import classify
from src.classifier.kinds import CoarseType, ContentKind
from src.preview.budget import clip_chars, pick, resolve_config
from src.preview.extractors import extract
from src.preview.models import DisplayMode, PreviewModel, RawClip, RawPreview
from src.preview.nontext import PathToUrl, files_preview, html_clip_preview, image_preview
from src.utils.config import PreviewConfig
from src.utils.logging import get_logger

logger = get_logger(__name__)


def render(
    clip: RawClip,
    mode: DisplayMode | None = None,
    config: PreviewConfig | None = None,
    *,
    to_resource_url: PathToUrl | None = None,
) -> PreviewModel:
    """Build the preview for a clip.

    Args:
        clip: Stored clip.
        mode: Display mode (defaults to full, structured view).
        config: Output budgets (defaults to configured budgets).
        to_resource_url: Image path to displayable URL converter.

    Returns:
        PreviewModel variant.
    """
    mode = mode or DisplayMode()
    config = resolve_config(config)
    content = clip.content or ""

    if clip.coarse_type == CoarseType.FILES:
        return files_preview(content, mode, config)
    if clip.coarse_type == CoarseType.IMAGE:
        return image_preview(content, mode, config, to_resource_url)
    if clip.coarse_type == CoarseType.HTML:
        return html_clip_preview(content, mode, config)

    kind = classify(content, clip.coarse_type)

    if mode.show_raw:
        text, truncated = clip_chars(content, pick(mode, config.compact_raw_chars, None))
        logger.debug("Raw view requested", detected_kind=kind.value, truncated=truncated)
        return RawPreview(detected_kind=kind, text=text, truncated=truncated)

    return extract(kind, content, mode, config)


def badge_label(kind: ContentKind, mode: DisplayMode | None = None) -> str | None:
    """Upper-case content badge shown on full cards for non-text kinds."""
    mode = mode or DisplayMode()
    if mode.compact or kind == ContentKind.TEXT:
        return None
    return kind.value.upper()
