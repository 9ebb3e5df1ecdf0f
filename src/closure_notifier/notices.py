"""Closure notice extraction from registry plugin pages.

A closed plugin's page carries one or more notice blocks as direct children of
the description tab::

    <div id="tab-description">
        <div class="plugin-notice notice notice-error"><p>This plugin has been closed ...</p></div>
        ...
    </div>

Each call builds its own BeautifulSoup tree, so concurrent extractions share
no parser state.
"""

from __future__ import annotations

import structlog
from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

log = structlog.get_logger()

DESCRIPTION_ID = "tab-description"
NOTICE_CLASS_MARKER = "plugin-notice"


def _has_notice_class(tag: Tag) -> bool:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    # Substring match on the raw attribute, like XPath contains(@class, ...)
    return NOTICE_CLASS_MARKER in " ".join(classes)


def extract_notices(html: str) -> list[str]:
    """Return the text of every notice block in the description tab, in document order.

    Malformed or empty markup never raises; it simply yields fewer (or no) notices.
    """
    if not html:
        return []

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup:
        log.debug("notice_parse_rejected", length=len(html))
        return []

    # Duplicate ids happen in the wild; every matching region contributes
    return [
        child.get_text()
        for description in soup.find_all(id=DESCRIPTION_ID)
        for child in description.find_all(True, recursive=False)
        if _has_notice_class(child)
    ]
