"""Page Fetcher — ordered fetch strategies feeding HTML to the pipeline."""

from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import aiohttp
import structlog

from contentvault.config import FetchConfig
from contentvault.parser import HtmlParser

logger = structlog.get_logger(__name__)


@dataclass
class FetchResult:
    """Outcome of one fetch attempt."""
    url: str
    status_code: int
    html: str
    response_time: float = 0.0
    method: str = "static"  # "static" or "dynamic"
    error: Optional[str] = None
    min_length: int = 200

    @property
    def ok(self) -> bool:
        return (
            200 <= self.status_code < 400
            and not self.error
            and len(self.html) >= self.min_length
        )

    def describe_failure(self) -> str:
        if self.error:
            return f"{self.method}: {self.error}"
        if not 200 <= self.status_code < 400:
            return f"{self.method}: HTTP {self.status_code}"
        return f"{self.method}: response too short ({len(self.html)} chars)"


FetchStrategy = Callable[[str], Awaitable[FetchResult]]


class PageFetcher:
    """Async fetcher exposing its strategies in the order they should be tried.

    Usage::

        async with PageFetcher(config) as fetcher:
            for name, strategy in fetcher.strategies:
                result = await strategy(url)
    """

    def __init__(self, config: Optional[FetchConfig] = None) -> None:
        self.config = config or FetchConfig()
        self._session: Optional[aiohttp.ClientSession] = None
        self._playwright = None
        self._browser = None

    async def __aenter__(self) -> "PageFetcher":
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
        self._session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, *exc) -> None:
        if self._session:
            await self._session.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

    @property
    def strategies(self) -> list[tuple[str, FetchStrategy]]:
        strategies: list[tuple[str, FetchStrategy]] = [("static", self.fetch_static)]
        if self.config.dynamic_fallback:
            strategies.append(("dynamic", self.fetch_dynamic))
        return strategies

    # ── static fetching ───────────────────────────────────────────────

    async def fetch_static(self, url: str) -> FetchResult:
        """Plain GET, retried with exponential backoff on transport errors."""
        last_error = ""
        for attempt in range(self.config.max_retries + 1):
            try:
                return await self._get(url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                last_error = str(exc) or exc.__class__.__name__
                if attempt == self.config.max_retries:
                    break
                wait = min(2 ** attempt, 30)
                logger.warning(
                    "fetch_retry", url=url, attempt=attempt + 1,
                    max_retries=self.config.max_retries, wait=wait, error=last_error,
                )
                await asyncio.sleep(wait)

        return FetchResult(
            url=url, status_code=0, html="", error=last_error,
            min_length=self.config.min_html_length,
        )

    async def _get(self, url: str) -> FetchResult:
        assert self._session is not None, "PageFetcher must be used as an async context manager"
        headers = {"User-Agent": random.choice(self.config.user_agents)}
        start = time.monotonic()
        async with self._session.get(url, headers=headers, allow_redirects=True) as resp:
            raw = await resp.read()
            elapsed = time.monotonic() - start
            charset = HtmlParser.charset_from_content_type(resp.headers.get("Content-Type", ""))
            html = HtmlParser.decode(raw, charset)
            logger.debug("fetch_static_ok", url=url, status=resp.status, time=f"{elapsed:.2f}s")
            return FetchResult(
                url=str(resp.url),
                status_code=resp.status,
                html=html,
                response_time=elapsed,
                method="static",
                min_length=self.config.min_html_length,
            )

    # ── dynamic fetching (Playwright) ─────────────────────────────────

    async def fetch_dynamic(self, url: str) -> FetchResult:
        """Render the page in headless Chromium and return the final DOM."""
        try:
            if self._playwright is None:
                from playwright.async_api import async_playwright
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(headless=True)

            assert self._browser is not None
            page = await self._browser.new_page()
            start = time.monotonic()
            try:
                response = await page.goto(
                    url, wait_until="networkidle", timeout=self.config.request_timeout * 1000,
                )
                html = await page.content()
                elapsed = time.monotonic() - start
                status = response.status if response else 200
                logger.debug("fetch_dynamic_ok", url=url, status=status, time=f"{elapsed:.2f}s")
                return FetchResult(
                    url=url, status_code=status, html=html, response_time=elapsed,
                    method="dynamic", min_length=self.config.min_html_length,
                )
            finally:
                await page.close()
        except Exception as exc:
            logger.error("fetch_dynamic_error", url=url, error=str(exc))
            return FetchResult(
                url=url, status_code=0, html="", method="dynamic", error=str(exc),
                min_length=self.config.min_html_length,
            )
