"""Extraction pipeline — raw HTML in, ``ExtractionResult`` or a typed failure out."""

from __future__ import annotations

import math
from typing import Optional
from urllib.parse import urlparse

import structlog

from contentvault.config import ExtractionConfig, ExtractionInput
from contentvault.errors import InsufficientContent, NoContentFound
from contentvault.extractors import (
    ContentClassifier,
    ImageCollector,
    TagExtractor,
    TextFormatter,
    extract_title,
)
from contentvault.locator import ContentLocator
from contentvault.models import ExtractionMetadata, ExtractionResult
from contentvault.parser import HtmlParser
from contentvault.sanitizer import Sanitizer

logger = structlog.get_logger(__name__)


class ExtractionPipeline:
    """Runs every extraction stage over one page.

    1. Parse the HTML and sanitize the tree.
    2. Locate the main-content element (``NoContentFound`` if none).
    3. Format its text and collect its images.
    4. Validate the formatted length (``InsufficientContent`` if too short).
    5. Derive tags, content type, reading time and metadata.

    The pipeline keeps no per-call state, so one instance can be shared
    between threads.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()
        self.parser = HtmlParser()
        self.sanitizer = Sanitizer()
        self.locator = ContentLocator(self.config)
        self.formatter = TextFormatter(self.config)
        self.image_collector = ImageCollector()
        self.tag_extractor = TagExtractor(max_tags=self.config.max_tags)
        self.classifier = ContentClassifier()

    def extract(self, html: str, source_url: str) -> ExtractionResult:
        """Extract the article from *html*, fetched from *source_url*.

        Raises:
            NoContentFound: no element holds enough text.
            InsufficientContent: the formatted text is below the threshold.
            pydantic.ValidationError: *source_url* is not an http(s) URL.
        """
        request = ExtractionInput(html=html, source_url=source_url)
        url = request.source_url
        log = logger.bind(url=url)

        # ── sanitize ──────────────────────────────────────────────────
        soup = self.parser.parse(request.html)
        self.sanitizer.sanitize(soup)
        title = extract_title(soup)

        # ── locate ────────────────────────────────────────────────────
        element = self.locator.locate(soup)
        if element is None:
            log.warning("extraction_failed", reason="no_content_found")
            raise NoContentFound(url=url)

        # ── format + images ───────────────────────────────────────────
        structured = self.formatter.format(element)
        images = self.image_collector.collect(element, url)
        log.debug("content_formatted", words=structured.word_count, images=len(images))

        # ── validate ──────────────────────────────────────────────────
        if len(structured.formatted.strip()) < self.config.content_min_length:
            log.warning(
                "extraction_failed",
                reason="insufficient_content",
                length=len(structured.formatted.strip()),
            )
            raise InsufficientContent(url=url)

        result = ExtractionResult(
            title=title,
            content=structured.formatted,
            summary=structured.summary,
            reading_time=self.reading_time(structured.word_count),
            word_count=structured.word_count,
            tags=self.tag_extractor.extract(title, structured.formatted),
            images=images,
            content_type=self.classifier.classify(url),
            metadata=ExtractionMetadata(
                source_url=url,
                domain=urlparse(url).hostname or "",
                content_length=len(structured.formatted),
            ),
        )
        log.info(
            "extraction_complete",
            title=result.title,
            words=result.word_count,
            content_type=result.content_type.value,
            tags=len(result.tags),
        )
        return result

    def reading_time(self, word_count: int) -> int:
        """Minutes to read *word_count* words, never less than one."""
        return max(1, math.ceil(word_count / self.config.words_per_minute))
