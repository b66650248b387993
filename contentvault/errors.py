"""Typed failures raised by the extraction pipeline and the retrieval helper."""

from __future__ import annotations

from typing import Optional

# Shared by every extraction failure so callers can show the message as-is.
FAILURE_CAUSES = (
    "This may be due to:\n"
    "• Cross-origin restrictions (the site refuses requests from other origins)\n"
    "• Login requirements or paywalls\n"
    "• Dynamic content that loads via JavaScript\n"
    "• Anti-bot protection\n"
    "\n"
    "Only real, original content is extracted from web pages; "
    "nothing is generated to fill the gap."
)


class ExtractionError(Exception):
    """Base class for extraction failures."""

    reason = "Extraction failed."

    def __init__(self, message: Optional[str] = None, url: str = "") -> None:
        self.message = message or self.reason
        self.url = url
        super().__init__(self.message)

    @property
    def diagnostic(self) -> str:
        """Full message for the end user, including the likely causes."""
        return f"EXTRACTION FAILED - {self.message}\n\n{FAILURE_CAUSES}"


class NoContentFound(ExtractionError):
    """No element on the page holds enough text to be the article body."""

    reason = (
        "No substantial content found on this page. The page may require login, "
        "be behind a paywall, or contain mostly dynamic content."
    )


class InsufficientContent(ExtractionError):
    """A candidate was found but its formatted text is too short to keep."""

    reason = "No original content could be retrieved from this URL."


class RetrievalError(Exception):
    """Every fetch strategy failed to produce usable HTML."""

    def __init__(self, url: str, attempts: Optional[list[str]] = None) -> None:
        self.url = url
        self.attempts = attempts or []
        detail = "; ".join(self.attempts) or "no strategies configured"
        super().__init__(f"Could not retrieve {url}: {detail}")
