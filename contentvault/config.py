"""Pydantic configuration models for the extraction pipeline."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Default user-agent pool for rotation
DEFAULT_USER_AGENTS: list[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:120.0) Gecko/20100101 Firefox/120.0",
]


def validate_http_url(v: str) -> str:
    """Reject anything that is not an absolute http(s) URL with a host."""
    v = v.strip()
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"URL scheme must be http or https, got '{parsed.scheme}'")
    if not parsed.netloc:
        raise ValueError("URL must have a valid domain.")
    return v


class ExtractionConfig(BaseModel):
    """Thresholds and limits used by the extraction pipeline.

    The three length thresholds form a funnel: a selector match must clear
    ``selector_min_length``, the largest-block fallback must clear
    ``candidate_min_length``, and the formatted output must clear
    ``content_min_length``.
    """

    model_config = ConfigDict(frozen=True)

    selector_min_length: int = Field(default=200, ge=1, description="Min text length for a selector match to win.")
    candidate_min_length: int = Field(default=100, ge=1, description="Min text length of the chosen candidate.")
    content_min_length: int = Field(default=50, ge=1, description="Min length of the formatted content.")
    words_per_minute: int = Field(default=200, ge=1, description="Reading speed used for reading time.")
    max_tags: int = Field(default=8, ge=0, le=50, description="Max keyword tags to return.")
    summary_sentences: int = Field(default=3, ge=1, description="Sentences kept in the summary.")
    summary_min_length: int = Field(default=50, ge=0, description="Shorter sentence summaries are replaced.")
    summary_fallback_length: int = Field(default=300, ge=1, description="Chars of content used as fallback summary.")

    # ── validators ────────────────────────────────────────────────────

    @model_validator(mode="after")
    def check_threshold_funnel(self) -> "ExtractionConfig":
        if not (self.selector_min_length >= self.candidate_min_length >= self.content_min_length):
            raise ValueError(
                "thresholds must satisfy selector_min_length >= candidate_min_length "
                f">= content_min_length, got {self.selector_min_length}/"
                f"{self.candidate_min_length}/{self.content_min_length}"
            )
        return self


class FetchConfig(BaseModel):
    """Settings for the retrieval helper that feeds HTML into the pipeline."""

    user_agents: list[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS), min_length=1)
    request_timeout: int = Field(default=30, ge=5, le=120, description="HTTP request timeout in seconds.")
    max_retries: int = Field(default=2, ge=0, le=10, description="Retries for the static strategy.")
    min_html_length: int = Field(default=200, ge=0, description="Shorter responses count as failed attempts.")
    dynamic_fallback: bool = Field(default=True, description="Fall back to a headless browser.")


class ExtractionInput(BaseModel):
    """Raw HTML plus the URL it was fetched from."""

    model_config = ConfigDict(frozen=True)

    html: str
    source_url: str

    @field_validator("source_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return validate_http_url(v)
