"""Application configuration primitives."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("material_flow.toml")


class Settings(BaseSettings):
    """Central configuration for the material flow graph processor."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    default_emissions_unit: str = "kgCO2e"
    unnamed_entity_label: str = "Unnamed Object"
    uncategorized_label: str = "Uncategorized"
    cycle_label_id_chars: int = 8

    statement_predicate: str = "IS_INPUT_OF"
    fetch_max_retries: int = 3
    fetch_retry_backoff: float = 0.5
    fetch_max_parallel: int = 2

    model_config = SettingsConfigDict(env_prefix="MFG_", env_file=(), extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    overrides = _load_settings_overrides()
    return Settings(**overrides)


def _load_settings_overrides(config_path: Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load configuration overrides from the optional TOML file."""
    if not config_path.exists():
        return {}
    data = _read_toml(config_path)
    section = _extract_section(data, "material_flow", "mfg")
    if not section:
        return {}
    return {key: value for key, value in section.items() if key in Settings.model_fields and value is not None}


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _extract_section(data: dict[str, Any], *candidates: str) -> dict[str, Any] | None:
    for key in candidates:
        section = data.get(key)
        if isinstance(section, dict):
            return section
    return None
