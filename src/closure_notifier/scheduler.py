"""Closed-status refresh: throttle check and full refresh pass.

There is no background worker. Callers trigger passes inline:

* ``maybe_refresh()`` on every relevant admin page load (cheap, throttled)
* ``refresh()`` when the host finishes its own update check (forced)

A pass probes every installed plugin that the host's update check did not
already account for, then replaces the cached record in one write. Concurrent
passes are not coordinated; the last write wins.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from closure_notifier.models.cache import StatusCacheRecord

if TYPE_CHECKING:
    from closure_notifier.cache import StatusCache
    from closure_notifier.models.plugins import PluginMetadata
    from closure_notifier.resolver import ClosedStatusResolver
    from closure_notifier.sources import InstalledPackageSource, UpdateStatusSource

log = structlog.get_logger()

DEFAULT_REFRESH_INTERVAL = timedelta(hours=12)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_refresh_due(
    last_checked: datetime | None,
    now: datetime,
    interval: timedelta = DEFAULT_REFRESH_INTERVAL,
) -> bool:
    """A pass is due when nothing has been checked yet or the last check is ``interval`` old."""
    if last_checked is None:
        return True
    return now - last_checked >= interval


def select_candidates(
    installed: dict[str, PluginMetadata],
    live: frozenset[str],
) -> list[str]:
    """Identifiers worth probing, in a stable order.

    Skipped: plugins the update check already saw (an update response implies
    the plugin is still listed) and plugins with their own update server.
    """
    return sorted(
        identifier
        for identifier, metadata in installed.items()
        if identifier not in live and not metadata.has_custom_update_uri
    )


class RefreshScheduler:
    def __init__(
        self,
        cache: StatusCache,
        resolver: ClosedStatusResolver,
        installed: InstalledPackageSource,
        updates: UpdateStatusSource,
        *,
        interval: timedelta = DEFAULT_REFRESH_INTERVAL,
        max_concurrency: int = 8,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache = cache
        self._resolver = resolver
        self._installed = installed
        self._updates = updates
        self._interval = interval
        self._max_concurrency = max_concurrency
        self._clock = clock

    async def maybe_refresh(self) -> bool:
        """Run a full pass if the cached record is missing or older than the interval.

        Returns True when a pass ran.
        """
        record = await self._cache.read()
        if not is_refresh_due(record.last_checked, self._clock(), self._interval):
            log.debug("refresh_throttled", last_checked=record.last_checked)
            return False

        await self.refresh()
        return True

    async def refresh(self) -> StatusCacheRecord:
        """Recompute the closed set for all candidate plugins and replace the cached record."""
        installed = dict(await self._installed.list_installed())
        status = await self._updates.get_update_status()
        candidates = select_candidates(installed, status.live)

        log.info(
            "refresh_started",
            installed=len(installed),
            candidates=len(candidates),
        )

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _probe(identifier: str) -> str | None:
            async with semaphore:
                try:
                    return await self._resolver.resolve(identifier)
                except Exception:
                    # One bad plugin page must not sink the pass
                    log.warning("refresh_probe_failed", identifier=identifier, exc_info=True)
                    return None

        notices = await asyncio.gather(*(_probe(identifier) for identifier in candidates))

        # gather preserves argument order, so the result is keyed in sorted identifier order
        closed = {
            identifier: notice
            for identifier, notice in zip(candidates, notices, strict=True)
            if notice
        }
        record = StatusCacheRecord(closed=closed, last_checked=self._clock())
        await self._cache.write(record)

        log.info("refresh_complete", closed=len(closed), checked=len(candidates))
        return record
