from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from page_analyzer.models import Url


class PageAnalyzerError(Exception):
    """Base class for every error raised by the analyzer core."""


class InvalidUrlError(PageAnalyzerError):
    def __init__(self, raw_url: str, reason: str) -> None:
        super().__init__(f"invalid url {raw_url!r}: {reason}")
        self.raw_url = raw_url
        self.reason = reason


class DuplicateUrlError(PageAnalyzerError):
    def __init__(self, existing: Url) -> None:
        super().__init__(f"url already registered: {existing.name}")
        self.existing = existing


class UrlNotFoundError(PageAnalyzerError):
    def __init__(self, url_id: int) -> None:
        super().__init__(f"url id={url_id} not found")
        self.url_id = url_id


class FetchError(PageAnalyzerError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class StorageError(PageAnalyzerError):
    """Persistence failure: lost connection, constraint violation and the like."""
