"""
Output budget helpers shared by the extractors.
"""

from typing import TypeVar

from src.preview.models import DisplayMode
from src.utils.config import PreviewConfig, get_settings

T = TypeVar("T")


def resolve_config(config: PreviewConfig | None) -> PreviewConfig:
    """Use the given budgets, or the configured ones."""
    return config if config is not None else get_settings().preview


def pick(mode: DisplayMode, compact: int | None, full: int | None) -> int | None:
    """Select the budget for the display mode (None = unbounded)."""
    return compact if mode.compact else full


def clip_chars(text: str, limit: int | None) -> tuple[str, bool]:
    """Cut text to at most ``limit`` characters.

    Returns:
        (text, truncated)
    """
    if limit is None or len(text) <= limit:
        return text, False
    return text[:limit], True


def clip_items(items: list[T], limit: int | None) -> tuple[list[T], bool]:
    """Keep at most ``limit`` leading items.

    Returns:
        (items, truncated)
    """
    if limit is None or len(items) <= limit:
        return list(items), False
    return items[:limit], True


def excerpt(text: str, limit: int) -> str:
    """Cut text and mark the cut with an ellipsis."""
    clipped, truncated = clip_chars(text, limit)
    return clipped + "..." if truncated else clipped
