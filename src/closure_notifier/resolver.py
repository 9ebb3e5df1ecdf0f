from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

import structlog

from closure_notifier.errors import FetchError
from closure_notifier.notices import extract_notices

if TYPE_CHECKING:
    from closure_notifier.fetcher import Fetcher

log = structlog.get_logger()


def plugin_slug(identifier: str) -> str:
    """Registry slug for a plugin identifier: its parent directory name.

    ``"akismet/akismet.php"`` → ``"akismet"``. A bare file such as ``"hello.php"``
    has no directory and yields ``"."``.
    """
    normalised = identifier.replace("\\", "/").rstrip("/")
    parent = posixpath.dirname(normalised)
    if not parent:
        return "."
    return posixpath.basename(parent)


class ClosedStatusResolver:
    """Decides whether one installed plugin has been closed in the registry."""

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def resolve(self, identifier: str) -> str | None:
        """Return the closure notice for ``identifier``, or None when it is not closed.

        A page that cannot be fetched counts as not closed.
        """
        slug = plugin_slug(identifier)
        try:
            body = await self._fetcher.fetch(slug)
        except FetchError as exc:
            log.debug(
                "closed_status_unavailable",
                identifier=identifier,
                slug=slug,
                code=exc.code,
            )
            return None

        notice = "".join(extract_notices(body))
        if not notice:
            return None

        log.info("plugin_closed", identifier=identifier, slug=slug)
        return notice
