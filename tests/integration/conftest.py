"""Integration test fixtures.

Provides a fully wired AppState with in-memory SQLite and the real HTTP
client; tests mock the registry with respx. Plugin fixtures come from
tests/conftest.py (sample_plugins, sample_update_status).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from closure_notifier.config import Settings
from closure_notifier.sources import StaticInstalledPackages, StaticUpdateStatus
from closure_notifier.state import AppState, open_app_state

if TYPE_CHECKING:
    from pathlib import Path

    from closure_notifier.models.plugins import PluginMetadata, UpdateStatus


@pytest.fixture()
async def app_state(
    sample_plugins: dict[str, PluginMetadata],
    sample_update_status: UpdateStatus,
) -> AppState:
    """Full AppState wired for integration tests."""
    settings = Settings(cache={"db_path": ":memory:"}, refresh={"max_concurrency": 2})
    async with open_app_state(
        settings,
        StaticInstalledPackages(sample_plugins),
        StaticUpdateStatus(sample_update_status),
    ) as state:
        yield state


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Environment for running the CLI against files under tmp_path."""
    env = os.environ.copy()
    env["CLOSURE_NOTIFIER__CACHE__DB_PATH"] = str(tmp_path / "data" / "cache.db")
    env["CLOSURE_NOTIFIER__SOURCES__INSTALLED_PATH"] = str(tmp_path / "installed.json")
    env["CLOSURE_NOTIFIER__SOURCES__UPDATE_STATUS_PATH"] = str(tmp_path / "update-status.json")
    env["CLOSURE_NOTIFIER__LOGGING__LEVEL"] = "DEBUG"
    return env
