from __future__ import annotations

from closure_notifier.models.cache import StatusCacheRecord
from closure_notifier.models.plugins import PluginMetadata, UpdateStatus

__all__ = [
    # cache
    "StatusCacheRecord",
    # plugins
    "PluginMetadata",
    "UpdateStatus",
]
