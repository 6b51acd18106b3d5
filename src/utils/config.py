"""
Configuration management for ReClip preview.
Loads and validates settings from YAML files and environment variables.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeneralConfig(BaseModel):
    """General configuration."""

    project_name: str = "reclip-preview"
    version: str = "0.1.0"
    log_level: str = "INFO"


class PreviewConfig(BaseModel):
    """Output budgets for preview extraction.

    Every value is a count of lines, rows, segments, characters or pixels.
    Budgets shape what an extractor emits; they never influence which
    ContentKind a clip is classified as.
    """

    model_config = ConfigDict(extra="forbid")

    # JSON: pretty-printed lines
    compact_json_lines: int = 3
    full_json_lines: int = 15

    # Diff: raw lines
    compact_diff_lines: int = 5
    full_diff_lines: int = 50

    # LaTeX: segments (full mode shows all)
    compact_latex_segments: int = 2

    # Table: data rows below the header
    compact_table_data_rows: int = 2
    full_table_data_rows: int = 19

    # Character budgets
    compact_code_chars: int = 200
    compact_markdown_chars: int = 200
    compact_text_chars: int = 150
    full_text_chars: int = 500
    compact_raw_chars: int = 150
    compact_html_source_chars: int = 50
    full_html_source_chars: int = 500

    # Height budgets (px) for clipped renderers
    compact_html_height: int = 60
    full_html_height: int = 200
    compact_image_height: int = 40
    full_image_height: int = 200

    line_numbers_min_lines: int = 3
    visible_file_entries: int = 5

    @field_validator("*")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("preview budgets must be positive")
        return value


class EnrichmentConfig(BaseModel):
    """Asynchronous enrichment (link preview, palette) configuration."""

    model_config = ConfigDict(extra="forbid")

    url_timeout_seconds: float = 5.0
    user_agent: str = "ReClip/1.0 (Mozilla/5.0 compatible)"
    max_metadata_bytes: int = 512 * 1024  # Enough for <head> of most pages
    max_keywords: int = 8
    palette_limit: int = 15
    palette_bucket: int = 10


class Settings(BaseModel):
    """Main settings container."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary.
        override: Override dictionary.

    Returns:
        Merged dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, returning {} for a missing or empty file."""
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_yaml_config(config_dir: Path) -> dict[str, Any]:
    """Load settings.yaml with local.yaml overrides.

    local.yaml holds machine-specific overrides under a top-level
    ``settings`` key, e.g.:

        settings:
          preview:
            compact_text_chars: 120

    Args:
        config_dir: Configuration directory path.

    Returns:
        Merged configuration dictionary.
    """
    config = _load_yaml_file(config_dir / "settings.yaml")
    local_overrides = _load_yaml_file(config_dir / "local.yaml")

    if "settings" in local_overrides:
        config = _deep_merge(config, local_overrides["settings"])

    return config


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Environment variables should be prefixed with RECLIP_ and use
    double underscores for nested keys.

    Example:
        RECLIP_GENERAL__LOG_LEVEL=DEBUG

    Args:
        config: Configuration dictionary.

    Returns:
        Configuration with environment overrides.
    """
    prefix = "RECLIP_"

    for key, value in os.environ.items():
        if not key.startswith(prefix) or key == "RECLIP_CONFIG_DIR":
            continue

        key_path = key[len(prefix) :].lower().split("__")

        current = config
        for part in key_path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        final_key = key_path[-1]
        try:
            if value.lower() in ("true", "false"):
                current[final_key] = value.lower() == "true"
            elif "." in value:
                current[final_key] = float(value)
            else:
                current[final_key] = int(value)
        except ValueError:
            current[final_key] = value

    return config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get application settings.

    Settings are loaded from:
    1. Default values
    2. YAML configuration files
    3. Environment variables (highest priority)

    Returns:
        Settings instance.
    """
    config_dir = Path(os.environ.get("RECLIP_CONFIG_DIR", "config"))

    config = _load_yaml_config(config_dir)
    config = _apply_env_overrides(config)

    return Settings(**config)

