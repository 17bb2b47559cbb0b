"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (OMNIBOX__ORGANIZATION__BASE_URL=https://github.com/acme/)
  2. omnibox.yaml           (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional, every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("omnibox")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "cache.db")

FALLBACK_REPOSITORIES = ["movida", "sequence", "sheriff", "support", "tron"]


def _find_config_file() -> str | None:
    """Return the path of the first omnibox.yaml found, or None."""
    candidates = [
        Path("omnibox.yaml"),
        Path(platformdirs.user_config_dir("omnibox")) / "omnibox.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class OrganizationSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = "https://github.com/bebanjo/"
    # Served when the organization page cannot be fetched and nothing is cached
    fallback_repositories: list[str] = Field(default_factory=lambda: list(FALLBACK_REPOSITORIES))


class StoreSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ttl_seconds: int = Field(default=5 * 60, ge=0)
    db_path: str = _DEFAULT_DB_PATH


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = Field(default=10.0, gt=0)
    max_redirects: int = Field(default=3, ge=0)


class SuggestionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    limit: int = Field(default=5, ge=1)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: OMNIBOX__STORE__TTL_SECONDS=60
        env_prefix="OMNIBOX__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    organization: OrganizationSettings = OrganizationSettings()
    store: StoreSettings = StoreSettings()
    fetcher: FetcherSettings = FetcherSettings()
    suggestions: SuggestionSettings = SuggestionSettings()
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
