"""Content classifier — coarse content type from the source URL."""

from __future__ import annotations

from contentvault.models import ContentType

# Evaluated in order; first match wins
URL_RULES: tuple[tuple[tuple[str, ...], ContentType], ...] = (
    (("wikipedia",), ContentType.REFERENCE),
    (("github",), ContentType.CODE),
    (("youtube",), ContentType.VIDEO),
    (("stackoverflow",), ContentType.QA),
    (("blog", "medium"), ContentType.BLOG),
)


class ContentClassifier:
    def classify(self, url: str) -> ContentType:
        url_lower = url.lower()
        for needles, content_type in URL_RULES:
            if any(needle in url_lower for needle in needles):
                return content_type
        return ContentType.ARTICLE
