"""
Image clip enrichments.

OCR, palette extraction and image probing are performed by external
collaborators; this module defines the hooks, memoizes their results per
image path, and formats what they return for display.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from src.enrichment.cache import EnrichmentCache
from src.utils.config import EnrichmentConfig, get_settings
from src.utils.logging import get_logger

logger = get_logger(__name__)

RGB = tuple[int, int, int]

OcrFunc = Callable[[str], Awaitable[str]]
PaletteFunc = Callable[[str], Awaitable[Sequence[RGB]]]
ProbeFunc = Callable[[str], Awaitable["ImageInfo"]]


@dataclass(frozen=True)
class ImageInfo:
    """Dimensions and file size of an image clip."""

    width: int
    height: int
    size: int

    @property
    def summary(self) -> str:
        return f"{self.width}×{self.height} • {format_size(self.size)}"


def format_size(num_bytes: int) -> str:
    """Human-readable size: B below 1 KiB, then KB / MB with one decimal."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + "".join(f"{max(0, min(255, c)):02x}" for c in (r, g, b))


def contrast_color(r: int, g: int, b: int) -> str:
    """Black or white, whichever reads better on the given colour."""
    return "#000" if (r * 0.299 + g * 0.587 + b * 0.114) > 150 else "#fff"


def dedupe_palette(palette: Sequence[RGB], limit: int = 15, bucket: int = 10) -> list[RGB]:
    """Drop near-duplicate colours, keeping the first of each bucket.

    Each channel is rounded to ``bucket`` steps, so e.g. #1a1a1a and #1b1b1b
    collapse into one swatch.
    """
    seen: set[RGB] = set()
    unique: list[RGB] = []
    for r, g, b in palette:
        key = (round(r / bucket), round(g / bucket), round(b / bucket))
        if key in seen:
            continue
        seen.add(key)
        unique.append((r, g, b))
        if len(unique) >= limit:
            break
    return unique


class ImageEnrichments:
    """Opt-in, memoized OCR / palette / probe lookups keyed by image path.

    Any hook may be omitted; the corresponding lookup then resolves to None.
    """

    def __init__(
        self,
        ocr: OcrFunc | None = None,
        palette: PaletteFunc | None = None,
        probe: ProbeFunc | None = None,
        config: EnrichmentConfig | None = None,
    ) -> None:
        self._config = config or get_settings().enrichment
        self._ocr = EnrichmentCache("ocr", ocr) if ocr else None
        self._palette = EnrichmentCache("palette", palette) if palette else None
        self._probe = EnrichmentCache("image_probe", probe) if probe else None

    async def text(self, path: str) -> str | None:
        """OCR text of the image."""
        if self._ocr is None:
            return None
        return await self._ocr.get(path)

    async def swatches(self, path: str) -> list[str]:
        """Deduplicated palette as hex strings (empty when unavailable)."""
        if self._palette is None:
            return []
        palette = await self._palette.get(path)
        if not palette:
            return []
        colors = dedupe_palette(palette, self._config.palette_limit, self._config.palette_bucket)
        logger.debug("Palette extracted", path=path, colors=len(colors))
        return [rgb_to_hex(*color) for color in colors]

    async def info(self, path: str) -> ImageInfo | None:
        """Image dimensions and size."""
        if self._probe is None:
            return None
        return await self._probe.get(path)
