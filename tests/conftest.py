"""Shared fixtures: sample plugin inventories and registry page markup."""

from __future__ import annotations

import pytest

from closure_notifier.models.plugins import PluginMetadata, UpdateStatus

REGISTRY = "https://wordpress.org"


def plugin_page(*notices: str, extra: str = "") -> str:
    """A registry plugin page whose description tab holds the given notice texts."""
    blocks = "".join(
        f'<div class="plugin-notice notice notice-error notice-alt"><p>{text}</p></div>'
        for text in notices
    )
    return (
        "<!DOCTYPE html><html><head><title>Plugin</title></head><body>"
        '<div id="main"><div id="tab-description" class="plugin-description section">'
        f"{blocks}<p>An ordinary plugin description.</p>{extra}"
        "</div></div></body></html>"
    )


CLOSED_NOTICE = "This plugin has been closed as of March 1, 2024 and is not available for download."


@pytest.fixture()
def make_page():
    return plugin_page


@pytest.fixture()
def closed_notice() -> str:
    return CLOSED_NOTICE


@pytest.fixture()
def sample_plugins() -> dict[str, PluginMetadata]:
    return {
        "akismet/akismet.php": PluginMetadata(name="Akismet Anti-spam", version="5.3"),
        "abandoned-gallery/abandoned-gallery.php": PluginMetadata(name="Abandoned Gallery"),
        "private-tool/private-tool.php": PluginMetadata(
            name="Private Tool", update_uri="https://updates.example.com/private-tool"
        ),
        "quiet-widget/quiet-widget.php": PluginMetadata(name="Quiet Widget"),
    }


@pytest.fixture()
def sample_update_status() -> UpdateStatus:
    return UpdateStatus(responses={"akismet/akismet.php"}, no_update=set())
