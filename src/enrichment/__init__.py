"""
Asynchronous enrichment collaborators for ReClip previews.

Path validation, link metadata, OCR and palette lookups run outside the
synchronous preview core, each memoized per stable key.
"""

from src.enrichment.cache import EnrichmentCache
from src.enrichment.image import (
    ImageEnrichments,
    ImageInfo,
    contrast_color,
    dedupe_palette,
    format_size,
    rgb_to_hex,
)
from src.enrichment.paths import FileValidity, PathValidator, check_paths
from src.enrichment.url_metadata import LinkCard, UrlMetadata, UrlMetadataClient, parse_metadata

__all__ = [
    "EnrichmentCache",
    # Files
    "PathValidator",
    "FileValidity",
    "check_paths",
    # Links
    "UrlMetadata",
    "UrlMetadataClient",
    "LinkCard",
    "parse_metadata",
    # Images
    "ImageEnrichments",
    "ImageInfo",
    "format_size",
    "rgb_to_hex",
    "contrast_color",
    "dedupe_palette",
]
