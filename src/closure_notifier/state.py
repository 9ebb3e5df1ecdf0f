"""Process-wide application state.

Built once by ``open_app_state`` and handed to whatever needs it, instead of a
module-level singleton.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from closure_notifier.cache import StatusCache
from closure_notifier.fetcher import Fetcher, build_http_client
from closure_notifier.resolver import ClosedStatusResolver
from closure_notifier.scheduler import RefreshScheduler

if TYPE_CHECKING:
    import httpx

    from closure_notifier.config import Settings
    from closure_notifier.sources import InstalledPackageSource, UpdateStatusSource

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    cache: StatusCache
    fetcher: Fetcher
    resolver: ClosedStatusResolver
    scheduler: RefreshScheduler
    initialised: bool = False


@asynccontextmanager
async def open_app_state(
    settings: Settings,
    installed: InstalledPackageSource,
    updates: UpdateStatusSource,
) -> AsyncIterator[AppState]:
    """Open the cache database and HTTP client, wire all components, close both on exit."""
    db_path = settings.cache.db_path
    if db_path != ":memory:":
        db_path = str(Path(db_path).expanduser())
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db, build_http_client(settings.registry) as client:
        cache = StatusCache(
            db,
            key=settings.cache.status_key,
            ttl_hours=settings.cache.ttl_hours,
        )
        await cache.init_db()

        fetcher = Fetcher(client, settings.registry)
        resolver = ClosedStatusResolver(fetcher)
        scheduler = RefreshScheduler(
            cache,
            resolver,
            installed,
            updates,
            interval=timedelta(hours=settings.refresh.interval_hours),
            max_concurrency=settings.refresh.max_concurrency,
        )
        state = AppState(
            settings=settings,
            http_client=client,
            cache=cache,
            fetcher=fetcher,
            resolver=resolver,
            scheduler=scheduler,
        )
        state.initialised = True
        log.debug("app_state_ready", db_path=db_path, cache_key=cache.key)

        yield state
