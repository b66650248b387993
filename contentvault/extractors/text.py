"""Text formatter — title plus markup-aware text, word count and summary."""

from __future__ import annotations

import re
from typing import Optional

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from contentvault.config import ExtractionConfig
from contentvault.models import StructuredContent

logger = structlog.get_logger(__name__)

DEFAULT_TITLE = "Extracted Article"
TITLE_SELECTORS = ("h1", "title", ".title", '[class*="title"]')

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
BOLD_TAGS = frozenset({"strong", "b"})
ITALIC_TAGS = frozenset({"em", "i"})

_MULTI_NEWLINE = re.compile(r"\n{3,}")
_MULTI_SPACE = re.compile(r"[ \t]{2,}")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")
_SENTENCE_END = re.compile(r"[.!?]+")

MIN_SENTENCE_LENGTH = 10


def squash(text: str) -> str:
    """Trim *text* and collapse every whitespace run to a single space."""
    return " ".join(text.split())


def extract_title(soup: BeautifulSoup) -> str:
    """Return the page title: first ``h1``, then ``<title>``, then title-ish classes."""
    for selector in TITLE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = squash(element.get_text())
        if text:
            return text
    return DEFAULT_TITLE


class TextFormatter:
    """Converts a content element into normalized, lightly marked-up text.

    Headings become ``## text``, list items ``• text``, block quotes
    ``> text``, bold ``**text**`` and italics ``*text*``. Paragraphs are
    separated by blank lines; every other tag is transparent.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()

    def format(self, element: Tag) -> StructuredContent:
        parts: list[str] = []
        self._walk(element, parts)
        formatted = self.clean("".join(parts))
        return StructuredContent(
            formatted=formatted,
            word_count=self.count_words(formatted),
            summary=self.summarize(formatted),
        )

    # ── traversal ─────────────────────────────────────────────────────

    def _walk(self, node: Tag, parts: list[str]) -> None:
        for child in node.children:
            if isinstance(child, Tag):
                self._emit_tag(child, parts)
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                text = squash(child)
                if text:
                    parts.append(text + " ")

    def _emit_tag(self, tag: Tag, parts: list[str]) -> None:
        name = tag.name.lower()
        if name == "br":
            parts.append("\n")
            return

        if name in HEADING_TAGS:
            parts.append(f"\n\n## {squash(tag.get_text())}\n\n")
        elif name == "p":
            parts.append(f"\n\n{squash(tag.get_text())}\n\n")
        elif name == "li":
            parts.append(f"\n• {squash(tag.get_text())}")
        elif name == "blockquote":
            parts.append(f"\n\n> {squash(tag.get_text())}\n\n")
        elif name in BOLD_TAGS:
            parts.append(f"**{squash(tag.get_text())}**")
        elif name in ITALIC_TAGS:
            parts.append(f"*{squash(tag.get_text())}*")
        else:
            self._walk(tag, parts)

    # ── post-processing ───────────────────────────────────────────────

    @staticmethod
    def clean(text: str) -> str:
        text = _MULTI_SPACE.sub(" ", text)
        text = _TRAILING_SPACE.sub("\n", text)
        text = _MULTI_NEWLINE.sub("\n\n", text)
        return text.strip()

    @staticmethod
    def count_words(text: str) -> int:
        return len(text.split())

    def summarize(self, formatted: str) -> str:
        """First few sentences of *formatted*, or its opening characters.

        Falls back to the first ``summary_fallback_length`` characters plus an
        ellipsis when the sentence summary is too short to be useful.
        """
        if not formatted:
            return ""

        sentences = [s.strip() for s in _SENTENCE_END.split(formatted)]
        sentences = [s for s in sentences if len(s) >= MIN_SENTENCE_LENGTH]
        limit = self.config.summary_sentences

        summary = ". ".join(sentences[:limit]).strip()
        if len(sentences) > limit:
            summary += "."

        if len(summary) < self.config.summary_min_length:
            return formatted[: self.config.summary_fallback_length] + "..."
        return summary
