"""Image collector — find images in the content element and absolutize their URLs."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

import structlog
from bs4 import Tag

from contentvault.models import ExtractedImage

logger = structlog.get_logger(__name__)

# Primary source first, then common lazy-load attributes
SOURCE_ATTRS: tuple[str, ...] = ("src", "data-src", "data-lazy-src")
DEFAULT_ALT = "Image from article"

_LEADING_INT = re.compile(r"^\s*(\d+)")


class ImageCollector:
    """Collect images from a content element.

    Always returns at least one entry: when the element holds no usable
    image, a single placeholder (see :meth:`ExtractedImage.placeholder`) is
    returned so callers can tell it apart by its fixed URL.
    """

    def collect(self, element: Tag, page_url: str) -> list[ExtractedImage]:
        images: list[ExtractedImage] = []
        seen: set[str] = set()

        for img in element.find_all("img"):
            src = self._resolve_source(img)
            if not src:
                continue
            abs_url = self.normalize_url(src, page_url)
            if abs_url in seen:
                continue
            seen.add(abs_url)
            images.append(
                ExtractedImage(
                    src=abs_url,
                    alt=self._alt_text(img),
                    width=self._dimension(img.get("width")),
                    height=self._dimension(img.get("height")),
                )
            )

        if not images:
            logger.debug("no_images_found", url=page_url)
            return [ExtractedImage.placeholder()]

        logger.debug("images_collected", url=page_url, count=len(images))
        return images

    # ── helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _resolve_source(img: Tag) -> str:
        """First usable source attribute; inline ``data:`` stubs are skipped."""
        for attr in SOURCE_ATTRS:
            value = (img.get(attr) or "").strip()
            if value and not value.startswith("data:"):
                return value
        return ""

    @staticmethod
    def normalize_url(src: str, page_url: str) -> str:
        """Make *src* absolute relative to *page_url*.

        ``//host/x`` gets ``https:``, ``/x`` is joined to the page origin,
        anything with a scheme is left alone and other relative paths are
        resolved against the full page URL.
        """
        if src.startswith("//"):
            return "https:" + src
        if src.startswith("/"):
            parsed = urlparse(page_url)
            return f"{parsed.scheme}://{parsed.netloc}{src}"
        if urlparse(src).scheme:
            return src
        return urljoin(page_url, src)

    @staticmethod
    def _alt_text(img: Tag) -> str:
        alt = (img.get("alt") or "").strip()
        if alt:
            return alt
        title = (img.get("title") or "").strip()
        return title or DEFAULT_ALT

    @staticmethod
    def _dimension(value: Optional[str]) -> Optional[int]:
        """Leading integer of a width/height attribute (``"640px"`` → 640)."""
        if not value:
            return None
        match = _LEADING_INT.match(str(value))
        if not match:
            return None
        return int(match.group(1)) or None
