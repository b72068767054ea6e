from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from page_analyzer.models import PageMarkup

logger = logging.getLogger(__name__)

DESCRIPTION_NAME_RE = re.compile(r"^\s*description\s*$", re.IGNORECASE)


def _text(tag: Tag | None) -> str:
    if tag is None:
        return ""
    return " ".join(tag.get_text().split())


def extract_markup(html: str | None) -> PageMarkup:
    """Pull the SEO fields out of a page; anything missing comes back as ""."""
    if not html:
        return PageMarkup()

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup:
        logger.warning("markup rejected by parser length=%s", len(html))
        return PageMarkup()

    desc_tag = soup.find("meta", attrs={"name": DESCRIPTION_NAME_RE})
    description = (desc_tag.get("content") or "").strip() if desc_tag else ""

    return PageMarkup(
        title=_text(soup.find("title")),
        h1=_text(soup.find("h1")),
        description=description,
    )
