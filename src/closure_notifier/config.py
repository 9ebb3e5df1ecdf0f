"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (CLOSURE_NOTIFIER__REFRESH__INTERVAL_HOURS=6)
  2. closure-notifier.yaml  (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
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

APP_NAME = "closure-notifier"

_DEFAULT_DATA_DIR = platformdirs.user_data_dir(APP_NAME)
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "cache.db")
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir(APP_NAME)


def _find_config_file() -> str | None:
    """Return the path of the first closure-notifier.yaml found, or None."""
    candidates = [
        Path(f"{APP_NAME}.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / f"{APP_NAME}.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class RegistrySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = "https://wordpress.org"
    timeout_seconds: float = 10.0
    user_agent: str = f"{APP_NAME}/1.0"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    db_path: str = _DEFAULT_DB_PATH
    app_prefix: str = "pcn"
    # None keeps the record until the next refresh replaces it
    ttl_hours: int | None = None

    @property
    def status_key(self) -> str:
        return f"{self.app_prefix}_closed"


class RefreshSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    interval_hours: float = Field(default=12, gt=0)
    max_concurrency: int = Field(default=8, ge=1)


class SourcesSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    installed_path: str = "installed.json"
    update_status_path: str = "update-status.json"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: CLOSURE_NOTIFIER__CACHE__DB_PATH=...
        env_prefix="CLOSURE_NOTIFIER__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    registry: RegistrySettings = RegistrySettings()
    cache: CacheSettings = CacheSettings()
    refresh: RefreshSettings = RefreshSettings()
    sources: SourcesSettings = SourcesSettings()
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


def load_settings(config_path: str | None = None) -> Settings:
    """Build Settings, optionally from an explicit YAML path instead of the search list."""
    if config_path is None:
        return Settings()

    class _ExplicitSettings(Settings):
        model_config = SettingsConfigDict(yaml_file=config_path)

    return _ExplicitSettings()
