"""HTTP client that retrieves the price page."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from timpris.core.config import SourceConfig
from timpris.core.exceptions import FetchError
from timpris.core.models import FetchedPage

logger = logging.getLogger(__name__)


class PageClient:
    """Synchronous page fetcher.

    One GET per run, no retries: a failed fetch raises FetchError and the
    external scheduler tries again on its next invocation.

    Use via ``with PageClient(config) as client:``.
    """

    def __init__(self, config: SourceConfig) -> None:
        self._config = config
        self._client = httpx.Client(
            headers={"User-Agent": config.user_agent},
            timeout=httpx.Timeout(config.request_timeout),
            follow_redirects=True,
        )

    def __enter__(self) -> PageClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client. Called automatically by __exit__."""
        self._client.close()

    def fetch(self, url: str | None = None) -> FetchedPage:
        """Download one HTML page.

        Args:
            url: Page to fetch. Defaults to the configured source URL.

        Returns:
            FetchedPage with the final URL after redirects.

        Raises:
            FetchError: Network error or non-200 status.
        """
        url = url or self._config.url
        logger.debug("Visiting %s", url)

        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(
                f"Failed to fetch {url}: {e}",
                context={"url": url, "error": str(e)},
            ) from e

        if response.status_code != 200:
            raise FetchError(
                f"HTTP {response.status_code} from {url}",
                context={"url": url, "status_code": response.status_code},
            )

        logger.info("Fetched %s (%d bytes)", url, len(response.content))
        return FetchedPage(
            url=str(response.url),
            html=response.text,
            fetched_at=datetime.now(timezone.utc),
        )
