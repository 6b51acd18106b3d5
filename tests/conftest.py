"""
Pytest fixtures and configuration for ReClip preview tests.

=============================================================================
Test Classification
=============================================================================

- @pytest.mark.unit: Single class/function, no external dependencies
  - Classifier rules, extractors, sanitizer, config, helpers
  - Fast, runs anywhere

- @pytest.mark.integration: Multiple components, external services mocked
  - render() end to end, CLI, enrichment collaborators
  - HTTP uses httpx.MockTransport, file system uses tmp_path

=============================================================================
Mock Strategy
=============================================================================

- Network: never touched; link metadata tests inject a mock transport
- File I/O: tmp_path fixture
- Settings: RECLIP_CONFIG_DIR points at the repository config/ directory,
  and the settings cache is cleared around every test
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

# Set test environment before importing anything else
os.environ["RECLIP_CONFIG_DIR"] = str(Path(__file__).parent.parent / "config")
os.environ["RECLIP_GENERAL__LOG_LEVEL"] = "DEBUG"

from src.preview.models import DisplayMode
from src.utils.config import PreviewConfig, get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reload settings for every test so env overrides do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def preview_config() -> PreviewConfig:
    """Default preview budgets."""
    return PreviewConfig()


@pytest.fixture
def full_mode() -> DisplayMode:
    """Full card display."""
    return DisplayMode()


@pytest.fixture
def compact_mode() -> DisplayMode:
    """Compact list row display."""
    return DisplayMode(compact=True)


@pytest.fixture
def make_lines():
    """Build newline-joined content of N numbered lines."""

    def _make(count: int, template: str = "line {i}") -> str:
        return "\n".join(template.format(i=i) for i in range(count))

    return _make
