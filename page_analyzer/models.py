from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Url:
    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class UrlCheck:
    id: int
    url_id: int
    status_code: int
    title: str
    h1: str
    description: str
    created_at: datetime


@dataclass(frozen=True)
class UrlSummary:
    """A registered url together with its most recent check, if any."""

    url: Url
    last_status_code: int | None = None
    last_checked_at: datetime | None = None


@dataclass(frozen=True)
class PageMarkup:
    title: str = ""
    h1: str = ""
    description: str = ""


@dataclass(frozen=True)
class FetchResult:
    status_code: int
    body: str
    final_url: str
