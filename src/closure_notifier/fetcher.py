"""Registry page fetcher.

One GET per call, no retries and no caching: the refresh pass caches the
derived result, not the page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from closure_notifier.errors import ErrorCode, FetchError

if TYPE_CHECKING:
    from closure_notifier.config import RegistrySettings

log = structlog.get_logger()


def plugin_page_url(slug: str, base_url: str = "https://wordpress.org") -> str:
    """Public registry page for a plugin slug. The slug is used verbatim."""
    return f"{base_url.rstrip('/')}/plugins/{slug}/"


def build_http_client(settings: RegistrySettings | None = None) -> httpx.AsyncClient:
    """Shared client used for every registry request in the process."""
    if settings is None:
        from closure_notifier.config import RegistrySettings

        settings = RegistrySettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


class Fetcher:
    """Retrieves plugin pages from the registry."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: RegistrySettings | None = None,
    ) -> None:
        if settings is None:
            from closure_notifier.config import RegistrySettings

            settings = RegistrySettings()
        self._client = client
        self._base_url = settings.base_url

    async def fetch(self, slug: str) -> str:
        """Return the page body for ``slug``. Raises FetchError on any failure."""
        url = plugin_page_url(slug, self._base_url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            log.debug("registry_fetch_transport_error", slug=slug, url=url, error=str(exc))
            raise FetchError(
                ErrorCode.PAGE_FETCH_FAILED,
                f"Request to {url} failed: {exc}",
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise FetchError(ErrorCode.PAGE_NOT_FOUND, f"No registry page at {url}")
        if not response.is_success:
            raise FetchError(
                ErrorCode.PAGE_FETCH_FAILED,
                f"Registry returned HTTP {response.status_code} for {url}",
                recoverable=True,
            )

        body = response.text
        if not body:
            raise FetchError(ErrorCode.EMPTY_BODY, f"Empty response body from {url}")

        log.debug("registry_fetch_complete", slug=slug, status=response.status_code, size=len(body))
        return body
