"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (DESYMCP__SERVER__TRANSPORT=http)
  2. desymcp.yaml           (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_INDEX_URL = "https://desy.aragon.es/llms.txt"


def _find_config_file() -> str | None:
    """Return the path of the first desymcp.yaml found, or None."""
    candidates = [
        Path("desymcp.yaml"),
        Path(platformdirs.user_config_dir("desymcp")) / "desymcp.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 5000
    # Empty list: only localhost origins. ["*"]: any origin.
    allowed_origins: list[str] = []


class CatalogSettings(BaseModel):
    index_url: str = DEFAULT_INDEX_URL
    ttl_hours: float = Field(default=24, gt=0)
    warm_on_startup: bool = True


class FetcherSettings(BaseModel):
    timeout_seconds: float = Field(default=30.0, gt=0)


class SearchSettings(BaseModel):
    max_results: int = Field(default=100, ge=1)
    category_component_limit: int = Field(default=30, ge=1)
    not_found_key_limit: int = Field(default=10, ge=1)
    suggestion_limit: int = Field(default=5, ge=0)
    suggestion_score_cutoff: int = Field(default=60, ge=0, le=100)
    suggestion_min_length: int = Field(default=3, ge=1)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: DESYMCP__SERVER__PORT=9090
        env_prefix="DESYMCP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    catalog: CatalogSettings = CatalogSettings()
    fetcher: FetcherSettings = FetcherSettings()
    search: SearchSettings = SearchSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
