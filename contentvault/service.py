"""Extraction service — ties the retrieval strategies to the pipeline."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

import structlog

from contentvault.config import FetchConfig, validate_http_url
from contentvault.errors import ExtractionError, RetrievalError
from contentvault.fetcher import FetchStrategy, PageFetcher
from contentvault.models import ExtractionResult
from contentvault.pipeline import ExtractionPipeline

logger = structlog.get_logger(__name__)


class ExtractionService:
    """Entry point used by the CLI and the API.

    ``extract_url`` tries each fetch strategy in order and runs the pipeline
    on whatever HTML it returns; the first strategy whose HTML extracts
    cleanly wins. An extraction failure on one strategy's HTML moves on to
    the next strategy. The pipeline itself never retries.
    """

    def __init__(
        self,
        pipeline: Optional[ExtractionPipeline] = None,
        fetch_config: Optional[FetchConfig] = None,
        strategies: Optional[Sequence[tuple[str, FetchStrategy]]] = None,
    ) -> None:
        self.pipeline = pipeline or ExtractionPipeline()
        self.fetch_config = fetch_config or FetchConfig()
        self._strategies = strategies

    def extract_html(self, html: str, url: str) -> ExtractionResult:
        """Run the pipeline on HTML the caller already has."""
        return self.pipeline.extract(html, url)

    def extract_url(self, url: str) -> ExtractionResult:
        """Synchronous entry — fetch *url* and extract it."""
        return asyncio.run(self.extract_url_async(url))

    async def extract_url_async(self, url: str) -> ExtractionResult:
        url = validate_http_url(url)
        logger.info("url_extraction_started", url=url)

        if self._strategies is not None:
            return await self._first_success(url, self._strategies)

        async with PageFetcher(self.fetch_config) as fetcher:
            return await self._first_success(url, fetcher.strategies)

    async def _first_success(
        self, url: str, strategies: Sequence[tuple[str, FetchStrategy]],
    ) -> ExtractionResult:
        attempts: list[str] = []
        last_error: Optional[ExtractionError] = None

        for name, strategy in strategies:
            result = await strategy(url)
            if not result.ok:
                reason = result.describe_failure()
                attempts.append(reason)
                logger.info("fetch_strategy_failed", url=url, strategy=name, reason=reason)
                continue

            try:
                extraction = self.pipeline.extract(result.html, url)
            except ExtractionError as exc:
                attempts.append(f"{name}: {exc.message}")
                last_error = exc
                logger.info("strategy_extraction_failed", url=url, strategy=name, error=exc.message)
                continue

            logger.info(
                "url_extracted", url=url, strategy=name,
                words=extraction.word_count, response_time=round(result.response_time, 2),
            )
            return extraction

        if last_error is not None:
            raise last_error
        raise RetrievalError(url, attempts)
