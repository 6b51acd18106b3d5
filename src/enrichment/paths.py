"""
File path validation for files clips.

A files clip stores a JSON array of paths captured at copy time; by the time
the clip is looked at, some of them may have moved. Validation runs lazily
(e.g. on first hover), off the event loop, and its result is cached for the
displayed item.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from src.enrichment.cache import EnrichmentCache
from src.preview.nontext import INVALID_FILE_DATA, parse_file_list
from src.utils.logging import get_logger

logger = get_logger(__name__)

PathCheck = tuple[str, bool, bool]  # (path, exists, is_dir)


@dataclass
class FileValidity:
    """Summary of a path check for one files clip."""

    checked: bool = False
    invalid_paths: list[str] = field(default_factory=list)
    dir_paths: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.invalid_paths

    @classmethod
    def from_checks(cls, checks: list[PathCheck]) -> "FileValidity":
        return cls(
            checked=True,
            invalid_paths=[path for path, exists, _ in checks if not exists],
            dir_paths=[path for path, exists, is_dir in checks if exists and is_dir],
        )


def check_paths(paths: list[str]) -> list[PathCheck]:
    """Stat each path (blocking).

    Args:
        paths: Paths to check.

    Returns:
        (path, exists, is_dir) per input path, in input order.
    """
    results: list[PathCheck] = []
    for raw in paths:
        if raw == INVALID_FILE_DATA:
            results.append((raw, False, False))
            continue
        try:
            path = Path(raw)
            exists = path.exists()
            is_dir = exists and path.is_dir()
        except (OSError, ValueError) as e:
            logger.debug("Path check failed", path=raw, error=str(e))
            exists, is_dir = False, False
        results.append((raw, exists, is_dir))
    return results


class PathValidator:
    """Lazily validates files clips, memoized per clip payload."""

    def __init__(self) -> None:
        self._cache: EnrichmentCache[str, list[PathCheck]] = EnrichmentCache("path_check", self._load)

    async def _load(self, content: str) -> list[PathCheck]:
        paths = parse_file_list(content)
        loop = asyncio.get_running_loop()
        checks = await loop.run_in_executor(None, check_paths, paths)
        logger.debug(
            "Validated clip paths",
            count=len(checks),
            missing=sum(1 for _, exists, _ in checks if not exists),
        )
        return checks

    async def validate(self, content: str) -> list[PathCheck] | None:
        """Check every path of a files clip.

        Args:
            content: Files clip payload (JSON array of paths).

        Returns:
            Path check triples, or None if validation was unavailable.
        """
        return await self._cache.get(content)

    async def validity(self, content: str) -> FileValidity:
        """Validation summary; unchecked when validation was unavailable."""
        checks = await self.validate(content)
        if checks is None:
            return FileValidity()
        return FileValidity.from_checks(checks)
