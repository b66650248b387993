"""Tests for PageFetcher against a local aiohttp server (no external network)."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

import pytest
from aiohttp import web

from contentvault import fetcher as fetcher_module
from contentvault.config import DEFAULT_USER_AGENTS, FetchConfig
from contentvault.fetcher import PageFetcher
from contentvault.parser import HtmlParser

ACCENTED = "Café crème brûlée à la carte, déjà vu, naïve façade"
PAGE = (
    "<html><head><title>Menu</title></head><body><article>"
    f"<p>{ACCENTED}.</p>"
    + "<p>" + "Plain filler text for the length check. " * 6 + "</p>"
    + "</article></body></html>"
)
UNREACHABLE_URL = "http://127.0.0.1:1/"


@asynccontextmanager
async def serve(routes: dict):
    """Run a throwaway aiohttp app on a free local port and yield its base URL."""
    app = web.Application()
    for path, handler in routes.items():
        app.router.add_get(path, handler)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


async def latin1_page(request: web.Request) -> web.Response:
    return web.Response(
        body=PAGE.encode("latin-1"),
        headers={"Content-Type": "text/html; charset=ISO-8859-1"},
    )


async def undeclared_utf8_page(request: web.Request) -> web.Response:
    return web.Response(body=PAGE.encode("utf-8"), headers={"Content-Type": "text/html"})


async def missing_page(request: web.Request) -> web.Response:
    return web.Response(status=404, text="<html><body>gone</body></html>", content_type="text/html")


async def tiny_page(request: web.Request) -> web.Response:
    return web.Response(text="<p>tiny</p>", content_type="text/html")


async def fetch_static(url_path: str, routes: dict, config: FetchConfig):
    async with serve(routes) as base:
        async with PageFetcher(config) as fetcher:
            return await fetcher.fetch_static(base + url_path)


class TestStrategies:
    """Tests for the ordered strategy list."""

    def _names(self, config: FetchConfig) -> list[str]:
        return [name for name, _ in PageFetcher(config).strategies]

    def test_static_then_dynamic_by_default(self):
        assert self._names(FetchConfig()) == ["static", "dynamic"]

    def test_static_only_without_dynamic_fallback(self):
        assert self._names(FetchConfig(dynamic_fallback=False)) == ["static"]


class TestStaticFetch:
    """Tests for PageFetcher.fetch_static() decoding and status handling."""

    def setup_method(self):
        self.config = FetchConfig(dynamic_fallback=False, max_retries=0)

    def test_declared_charset_decodes_latin1(self, monkeypatch):
        def no_sniffing(raw: bytes) -> str:
            raise AssertionError("charset sniffed despite a declared charset")

        monkeypatch.setattr(HtmlParser, "detect_encoding", staticmethod(no_sniffing))
        result = asyncio.run(fetch_static("/", {"/": latin1_page}, self.config))
        assert result.ok
        assert result.method == "static"
        assert result.status_code == 200
        assert ACCENTED in result.html
        assert result.response_time > 0

    def test_undeclared_charset_is_detected(self):
        result = asyncio.run(fetch_static("/", {"/": undeclared_utf8_page}, self.config))
        assert result.ok
        assert ACCENTED in result.html

    def test_http_error_status(self):
        result = asyncio.run(fetch_static("/missing", {"/missing": missing_page}, self.config))
        assert not result.ok
        assert result.describe_failure() == "static: HTTP 404"

    def test_short_body_fails_length_check(self):
        result = asyncio.run(fetch_static("/", {"/": tiny_page}, self.config))
        assert result.status_code == 200
        assert not result.ok
        assert "too short" in result.describe_failure()

    def test_user_agent_from_pool(self):
        seen: list[str] = []

        async def echo(request: web.Request) -> web.Response:
            seen.append(request.headers.get("User-Agent", ""))
            return web.Response(text=PAGE, content_type="text/html")

        result = asyncio.run(fetch_static("/", {"/": echo}, self.config))
        assert result.ok
        assert seen and seen[0] in DEFAULT_USER_AGENTS

    def test_requires_context_manager(self):
        with pytest.raises(AssertionError):
            asyncio.run(PageFetcher(self.config).fetch_static("http://127.0.0.1/"))


class TestStaticRetries:
    """Tests for retry and backoff on transport errors."""

    def setup_method(self):
        self.waits: list[float] = []

    def _patch_sleep(self, monkeypatch) -> None:
        real_sleep = asyncio.sleep

        async def recording_sleep(delay, *args, **kwargs):
            if delay:
                self.waits.append(delay)
            await real_sleep(0)

        monkeypatch.setattr(fetcher_module.asyncio, "sleep", recording_sleep)

    def _fetch_unreachable(self, config: FetchConfig):
        async def run():
            async with PageFetcher(config) as fetcher:
                return await fetcher.fetch_static(UNREACHABLE_URL)
        return asyncio.run(run())

    def test_connection_error_becomes_failed_attempt(self, monkeypatch):
        self._patch_sleep(monkeypatch)
        result = self._fetch_unreachable(FetchConfig(max_retries=2))
        assert result.ok is False
        assert result.status_code == 0
        assert result.html == ""
        assert result.describe_failure().startswith("static:")

    def test_exponential_backoff_between_attempts(self, monkeypatch):
        self._patch_sleep(monkeypatch)
        self._fetch_unreachable(FetchConfig(max_retries=2))
        assert self.waits == [1, 2]

    def test_no_retries_means_no_sleep(self, monkeypatch):
        self._patch_sleep(monkeypatch)
        result = self._fetch_unreachable(FetchConfig(max_retries=0))
        assert not result.ok
        assert self.waits == []
