"""Markup for the plugin list screen and the admin menu.

These helpers only read a StatusCacheRecord; they never trigger a refresh.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from html import escape

from closure_notifier.models.cache import StatusCacheRecord
from closure_notifier.models.plugins import PluginMetadata
from closure_notifier.resolver import plugin_slug

RowRenderer = Callable[[PluginMetadata], str]

# Drops the separator shadow on the plugin row sitting directly above a closed-notice row
STYLE_FIXES = (
    "<style>"
    ".plugins tr:has(+ tr.plugin-closed-tr).inactive > th, "
    ".plugins tr:has(+ tr.plugin-closed-tr).inactive > td, "
    ".plugins tr:has(+ tr.plugin-closed-tr).active > th, "
    ".plugins tr:has(+ tr.plugin-closed-tr).active > td "
    "{-webkit-box-shadow: none; -moz-box-shadow: none; box-shadow: none;}"
    "</style>\n"
)


def render_closed_row(
    identifier: str,
    metadata: PluginMetadata,
    notice: str,
    *,
    column_count: int = 4,
    active: bool = False,
) -> str:
    """Table row shown under a closed plugin. Empty string when there is no notice.

    The notice is emitted as-is: it is the registry's own notice text.
    """
    if not notice:
        return ""

    slug = plugin_slug(identifier)
    active_class = " active" if active else ""
    return (
        f'<tr class="plugin-update-tr{active_class} plugin-closed-tr" '
        f'id="{escape(slug + "-update")}" data-slug="{escape(slug)}" '
        f'data-plugin="{escape(identifier)}" aria-label="{escape(metadata.name)}">'
        f'<td colspan="{int(column_count)}" class="plugin-update colspanchange">'
        '<div class="update-message notice inline notice-error notice-alt"><p>'
        f"{notice}"
        "</p></div></td></tr>"
    )


def closed_row_renderers(
    record: StatusCacheRecord,
    *,
    column_count: int = 4,
    active: frozenset[str] = frozenset(),
) -> dict[str, RowRenderer]:
    """One row renderer per closed plugin, keyed by plugin identifier."""
    return {
        identifier: partial(
            _render_for,
            identifier,
            notice,
            column_count=column_count,
            active=identifier in active,
        )
        for identifier, notice in record.closed.items()
        if notice
    }


def _render_for(
    identifier: str,
    notice: str,
    metadata: PluginMetadata,
    *,
    column_count: int,
    active: bool,
) -> str:
    return render_closed_row(
        identifier, metadata, notice, column_count=column_count, active=active
    )


def menu_badge(record: StatusCacheRecord, title: str = "Closed plugins") -> str:
    """Count bubble appended to the Plugins menu label; empty when nothing is closed."""
    count = record.closed_count
    if count == 0:
        return ""
    return (
        f'<span class="update-plugins count-{count}">'
        f'<span class="closed-count" title="{escape(title)}">{count:,}</span></span>'
    )
