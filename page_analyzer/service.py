from __future__ import annotations

import logging

from page_analyzer.checker.extractor import extract_markup
from page_analyzer.checker.fetcher import PageFetcher
from page_analyzer.checker.normalization import normalize_url
from page_analyzer.common.errors import DuplicateUrlError, UrlNotFoundError
from page_analyzer.models import Url, UrlCheck, UrlSummary
from page_analyzer.storage.checks import CheckRepository
from page_analyzer.storage.urls import UrlRepository

logger = logging.getLogger(__name__)


class PageAnalyzer:
    """Operations offered to the API and the CLI.

    Each call is an independent unit of work. There is no transaction around
    the duplicate lookup and the insert in ``register_url``; two racing
    submissions are settled by the unique constraint on ``urls.name``.
    """

    def __init__(self, urls: UrlRepository, checks: CheckRepository, fetcher: PageFetcher) -> None:
        self.urls = urls
        self.checks = checks
        self.fetcher = fetcher

    def normalize_url(self, raw_url: str) -> str:
        return normalize_url(raw_url)

    def register_url(self, canonical_url: str) -> Url:
        existing = self.urls.find_by_name(canonical_url)
        if existing is not None:
            logger.info("duplicate url name=%s id=%s", canonical_url, existing.id)
            raise DuplicateUrlError(existing)
        return self.urls.save(canonical_url)

    def add_url(self, raw_url: str) -> Url:
        return self.register_url(self.normalize_url(raw_url))

    def get_url(self, url_id: int) -> Url:
        url = self.urls.find_by_id(url_id)
        if url is None:
            raise UrlNotFoundError(url_id)
        return url

    def list_urls(self) -> list[UrlSummary]:
        return self.urls.list_all()

    def run_check(self, url_id: int) -> UrlCheck:
        url = self.get_url(url_id)
        result = self.fetcher.fetch(url.name)
        markup = extract_markup(result.body)
        check = self.checks.save(url.id, result.status_code, markup)
        logger.info(
            "checked url=%s status_code=%s title=%r h1=%r",
            url.name, check.status_code, check.title, check.h1,
        )
        return check

    def list_checks(self, url_id: int) -> list[UrlCheck]:
        return self.checks.list_by_url_id(url_id)
