"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

import aiosqlite
import pytest

from closure_notifier.cache import StatusCache


@pytest.fixture()
async def cache():
    """In-memory SQLite status cache for unit tests."""
    async with aiosqlite.connect(":memory:") as db:
        c = StatusCache(db)
        await c.init_db()
        yield c
