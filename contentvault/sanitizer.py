"""Sanitizer — strip boilerplate subtrees before locating content."""

from __future__ import annotations

import structlog
from bs4 import BeautifulSoup

logger = structlog.get_logger(__name__)

# Tags and class patterns that never hold article text
DENY_SELECTORS: tuple[str, ...] = (
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    ".advertisement",
    ".ads",
    ".sidebar",
    ".menu",
    ".social-share",
    ".comments",
    ".related-posts",
)


class Sanitizer:
    """Removes every subtree matching :data:`DENY_SELECTORS` from a document.

    The document is modified in place. Running it twice is a no-op the
    second time.
    """

    def __init__(self, selectors: tuple[str, ...] = DENY_SELECTORS) -> None:
        self.selectors = selectors

    def sanitize(self, soup: BeautifulSoup) -> int:
        """Decompose deny-listed subtrees and return how many were removed."""
        removed = 0
        for selector in self.selectors:
            for tag in soup.select(selector):
                # already gone with a matching ancestor
                if tag.decomposed:
                    continue
                tag.decompose()
                removed += 1
        logger.debug("document_sanitized", removed=removed)
        return removed
