from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PluginMetadata(BaseModel):
    """Subset of an installed plugin's header fields."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    version: str | None = Field(default=None, alias="Version")
    update_uri: str | None = Field(default=None, alias="UpdateURI")

    @property
    def has_custom_update_uri(self) -> bool:
        """Plugins declaring their own update server are not tracked by the registry."""
        return bool(self.update_uri and self.update_uri.strip())


class UpdateStatus(BaseModel):
    """Result of the host's last ordinary update check."""

    responses: set[str] = set()  # Plugins with an update available
    no_update: set[str] = set()  # Plugins confirmed up to date

    @field_validator("responses", "no_update", mode="before")
    @classmethod
    def keys_of_mapping(cls, v: Any) -> Any:
        # The host stores both as identifier-keyed objects; only the keys matter here
        if isinstance(v, dict):
            return set(v)
        return v

    @property
    def live(self) -> frozenset[str]:
        return frozenset(self.responses | self.no_update)
