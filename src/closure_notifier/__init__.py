"""Flags installed plugins that were closed in the plugin registry."""

from __future__ import annotations

__version__ = "1.0.0"
