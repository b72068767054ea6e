from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import httpx
import pytest

from page_analyzer.checker.fetcher import PageFetcher
from page_analyzer.common.errors import StorageError
from page_analyzer.models import PageMarkup, Url, UrlCheck, UrlSummary
from page_analyzer.service import PageAnalyzer

FROZEN_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class MemoryUrlRepository:
    def __init__(self) -> None:
        self.rows: list[Url] = []
        self._ids = count(1)
        self.checks: MemoryCheckRepository | None = None

    def save(self, name: str) -> Url:
        if self.find_by_name(name) is not None:
            raise StorageError(f"duplicate key value violates unique constraint name={name}")
        url = Url(id=next(self._ids), name=name, created_at=FROZEN_NOW)
        self.rows.append(url)
        return url

    def find_by_name(self, name: str) -> Url | None:
        return next((u for u in self.rows if u.name == name), None)

    def find_by_id(self, url_id: int) -> Url | None:
        return next((u for u in self.rows if u.id == url_id), None)

    def list_all(self) -> list[UrlSummary]:
        summaries = []
        for url in sorted(self.rows, key=lambda u: u.id):
            history = self.checks.list_by_url_id(url.id) if self.checks else []
            latest = history[0] if history else None
            summaries.append(
                UrlSummary(
                    url=url,
                    last_status_code=latest.status_code if latest else None,
                    last_checked_at=latest.created_at if latest else None,
                )
            )
        return summaries

    def count(self) -> int:
        return len(self.rows)


class MemoryCheckRepository:
    """Stamps every check with the same instant so ordering relies on the id."""

    def __init__(self) -> None:
        self.rows: list[UrlCheck] = []
        self._ids = count(1)

    def save(self, url_id: int, status_code: int, markup: PageMarkup) -> UrlCheck:
        check = UrlCheck(
            id=next(self._ids),
            url_id=url_id,
            status_code=status_code,
            title=markup.title,
            h1=markup.h1,
            description=markup.description,
            created_at=FROZEN_NOW,
        )
        self.rows.append(check)
        return check

    def list_by_url_id(self, url_id: int) -> list[UrlCheck]:
        rows = [c for c in self.rows if c.url_id == url_id]
        return sorted(rows, key=lambda c: (c.created_at, c.id), reverse=True)

    def count_by_url_id(self, url_id: int) -> int:
        return len([c for c in self.rows if c.url_id == url_id])


class RoutedTransport:
    """Serves canned responses per URL and counts requests."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = request.url
        key = f"{url.scheme}://{url.netloc.decode('ascii')}{url.path}".rstrip("/")
        self.requests.append(key)
        route = self.routes.get(key)
        if route is None:
            raise httpx.ConnectError("connection refused", request=request)
        if callable(route):
            return route(request)
        return route


@pytest.fixture
def transport() -> RoutedTransport:
    return RoutedTransport()


@pytest.fixture
def analyzer(transport: RoutedTransport) -> PageAnalyzer:
    checks = MemoryCheckRepository()
    urls = MemoryUrlRepository()
    urls.checks = checks
    fetcher = PageFetcher(httpx.Client(transport=httpx.MockTransport(transport)))
    return PageAnalyzer(urls, checks, fetcher)
