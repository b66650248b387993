"""Tests for the pydantic configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from contentvault.config import ExtractionConfig, ExtractionInput, FetchConfig


class TestExtractionConfig:
    def test_defaults(self):
        cfg = ExtractionConfig()
        assert (cfg.selector_min_length, cfg.candidate_min_length, cfg.content_min_length) == (200, 100, 50)
        assert cfg.words_per_minute == 200
        assert cfg.max_tags == 8

    def test_threshold_funnel_enforced(self):
        with pytest.raises(ValidationError):
            ExtractionConfig(selector_min_length=80, candidate_min_length=100)

    def test_bounds(self):
        with pytest.raises(ValidationError):
            ExtractionConfig(words_per_minute=0)

    def test_frozen(self):
        cfg = ExtractionConfig()
        with pytest.raises(ValidationError):
            cfg.max_tags = 3


class TestExtractionInput:
    def test_strips_url(self):
        assert ExtractionInput(html="", source_url="  https://example.com/a ").source_url == "https://example.com/a"

    @pytest.mark.parametrize("url", ["ftp://example.com", "https://", "example.com/page"])
    def test_rejects_bad_urls(self, url: str):
        with pytest.raises(ValidationError):
            ExtractionInput(html="", source_url=url)


class TestFetchConfig:
    def test_defaults(self):
        cfg = FetchConfig()
        assert cfg.min_html_length == 200
        assert cfg.dynamic_fallback is True
        assert cfg.user_agents

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            FetchConfig(request_timeout=1)

    def test_rejects_empty_user_agent_pool(self):
        with pytest.raises(ValidationError):
            FetchConfig(user_agents=[])
