"""Extractors that turn a located content element into result fields."""

from __future__ import annotations

from contentvault.extractors.classifier import ContentClassifier
from contentvault.extractors.image import ImageCollector
from contentvault.extractors.tags import TagExtractor
from contentvault.extractors.text import TextFormatter, extract_title

__all__ = [
    "ContentClassifier",
    "ImageCollector",
    "TagExtractor",
    "TextFormatter",
    "extract_title",
]
