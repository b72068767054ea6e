from __future__ import annotations

import logging

import httpx

from page_analyzer.common.config import settings
from page_analyzer.common.errors import FetchError
from page_analyzer.models import FetchResult

logger = logging.getLogger(__name__)


class PageFetcher:
    """Blocking GET with redirect following.

    Any HTTP status is a successful fetch; only transport failures
    (connection errors, timeouts, redirect loops) raise ``FetchError``.
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(settings.request_timeout_s),
            headers={"User-Agent": settings.user_agent},
        )

    def fetch(self, url: str) -> FetchResult:
        logger.info("fetching url=%s", url)
        try:
            res = self._client.get(url, headers={"Accept": "text/html"}, follow_redirects=True)
        except httpx.RequestError as exc:
            logger.warning("fetch failed url=%s error=%r", url, exc)
            raise FetchError(url, str(exc) or exc.__class__.__name__) from exc

        if res.history:
            logger.info(
                "followed redirects url=%s hops=%s final_url=%s",
                url, len(res.history), res.url,
            )
        logger.info("fetched url=%s status_code=%s", url, res.status_code)
        return FetchResult(status_code=res.status_code, body=res.text, final_url=str(res.url))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PageFetcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
