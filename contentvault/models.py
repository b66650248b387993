"""Records produced by the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/800x400/6B7280/white?text=No+Images+Found"
PLACEHOLDER_IMAGE_ALT = "No images available in original content"
EXTRACTION_NOTE = "Original content only - no generated text"


class ContentType(str, Enum):
    ARTICLE = "article"
    REFERENCE = "reference"
    CODE = "code"
    VIDEO = "video"
    QA = "qa"
    BLOG = "blog"


@dataclass(frozen=True)
class ExtractedImage:
    """An image found in the article body, with an absolute ``src``."""
    src: str
    alt: str
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def placeholder(cls) -> "ExtractedImage":
        return cls(src=PLACEHOLDER_IMAGE_URL, alt=PLACEHOLDER_IMAGE_ALT)

    @property
    def is_placeholder(self) -> bool:
        return self.src == PLACEHOLDER_IMAGE_URL

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "alt": self.alt, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class StructuredContent:
    """Formatted text of the article body plus its derived metrics."""
    formatted: str
    word_count: int
    summary: str


@dataclass(frozen=True)
class ExtractionMetadata:
    source_url: str
    domain: str
    content_length: int
    extracted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    extraction_note: str = EXTRACTION_NOTE

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceUrl": self.source_url,
            "domain": self.domain,
            "extractedAt": self.extracted_at.isoformat(),
            "contentLength": self.content_length,
            "extractionNote": self.extraction_note,
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Successful outcome of one extraction call.

    Identifiers, creation timestamps and display flags belong to whoever
    stores the result, so they are not part of this record.
    """
    title: str
    content: str
    summary: str
    reading_time: int
    word_count: int
    tags: list[str]
    images: list[ExtractedImage]
    content_type: ContentType
    metadata: ExtractionMetadata

    @property
    def has_real_images(self) -> bool:
        return any(not img.is_placeholder for img in self.images)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view using the camelCase keys clients expect."""
        return {
            "title": self.title,
            "content": self.content,
            "summary": self.summary,
            "readingTime": self.reading_time,
            "wordCount": self.word_count,
            "tags": list(self.tags),
            "images": [img.to_dict() for img in self.images],
            "contentType": self.content_type.value,
            "metadata": self.metadata.to_dict(),
        }
