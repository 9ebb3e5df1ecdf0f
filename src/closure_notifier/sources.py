"""Host-side inputs to a refresh pass.

The host application owns the installed-plugin inventory and the result of its
own update check; the refresh pass only reads them through these protocols.
The JSON implementations back the command-line entry point.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

import structlog
from pydantic import TypeAdapter

from closure_notifier.models.plugins import PluginMetadata, UpdateStatus

log = structlog.get_logger()

_INVENTORY_ADAPTER = TypeAdapter(dict[str, PluginMetadata])


class InstalledPackageSource(Protocol):
    async def list_installed(self) -> Mapping[str, PluginMetadata]: ...


class UpdateStatusSource(Protocol):
    async def get_update_status(self) -> UpdateStatus: ...


class StaticInstalledPackages:
    """In-memory inventory, for hosts that already hold the plugin list."""

    def __init__(self, plugins: Mapping[str, PluginMetadata]) -> None:
        self._plugins = dict(plugins)

    async def list_installed(self) -> Mapping[str, PluginMetadata]:
        return self._plugins


class StaticUpdateStatus:
    def __init__(self, status: UpdateStatus | None = None) -> None:
        self._status = status or UpdateStatus()

    async def get_update_status(self) -> UpdateStatus:
        return self._status


class JsonInstalledPackages:
    """Inventory file: ``{"akismet/akismet.php": {"Name": "Akismet", "UpdateURI": ""}, ...}``."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def list_installed(self) -> Mapping[str, PluginMetadata]:
        raw = self._path.read_text(encoding="utf-8")
        return _INVENTORY_ADAPTER.validate_json(raw)


class JsonUpdateStatus:
    """Update-check file with ``response`` / ``no_update`` maps keyed by plugin identifier.

    A missing file means no update check has run yet, which leaves every plugin
    eligible for probing.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def get_update_status(self) -> UpdateStatus:
        if not self._path.exists():
            log.debug("update_status_missing", path=str(self._path))
            return UpdateStatus()

        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Update status must be a JSON object, got: {type(data).__name__}")
        return UpdateStatus(
            responses=data.get("response", data.get("responses", {})),
            no_update=data.get("no_update", {}),
        )
