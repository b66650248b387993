"""Content Locator — pick the element most likely to hold the article body."""

from __future__ import annotations

from typing import Optional

import structlog
from bs4 import BeautifulSoup, Tag

from contentvault.config import ExtractionConfig

logger = structlog.get_logger(__name__)

# Semantic containers first, then common CMS class/id conventions
CONTENT_SELECTORS: tuple[str, ...] = (
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".post-content",
    ".entry-content",
    ".article-content",
    ".post-body",
    "#content",
    "#main-content",
    ".story-body",
    ".article-body",
    ".page-content",
)

# Generic containers scanned when no selector qualifies
FALLBACK_TAGS: tuple[str, ...] = ("div", "section")


def text_length(element: Tag) -> int:
    return len(element.get_text().strip())


class ContentLocator:
    """Finds the main-content element of a sanitized document.

    1. The first selector in :data:`CONTENT_SELECTORS` whose first match has
       more than ``selector_min_length`` characters of text wins outright.
    2. Otherwise the largest ``div``/``section`` by text length is taken.
    3. A candidate under ``candidate_min_length`` characters is rejected and
       ``None`` is returned.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()

    def locate(self, soup: BeautifulSoup) -> Optional[Tag]:
        for selector in CONTENT_SELECTORS:
            element = soup.select_one(selector)
            if element is not None and text_length(element) > self.config.selector_min_length:
                logger.debug("content_selector_matched", selector=selector)
                return element

        candidate = self._largest_block(soup)
        if candidate is None or text_length(candidate) < self.config.candidate_min_length:
            logger.debug(
                "content_not_located",
                candidate_length=text_length(candidate) if candidate is not None else 0,
            )
            return None

        logger.debug("content_fallback_block", tag=candidate.name, length=text_length(candidate))
        return candidate

    @staticmethod
    def _largest_block(soup: BeautifulSoup) -> Optional[Tag]:
        largest: Optional[Tag] = None
        largest_len = 0
        for block in soup.find_all(list(FALLBACK_TAGS)):
            length = text_length(block)
            if largest is None or length > largest_len:
                largest, largest_len = block, length
        return largest
