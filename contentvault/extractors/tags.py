"""Tag extractor — keyword tags by word frequency."""

from __future__ import annotations

import re
from collections import Counter

# ASCII only: accented and non-Latin words are not tokenized
_WORD = re.compile(r"\b[a-z]{4,15}\b", re.ASCII)

STOP_WORDS: frozenset[str] = frozenset({
    "this", "that", "with", "from", "they", "have", "will", "been", "were",
    "are", "the", "and", "for", "you", "all", "any", "can", "had", "her",
    "his", "how", "man", "new", "now", "old", "see", "way", "who", "boy",
    "did", "its", "let", "put", "say", "she", "too", "use", "may", "also",
    "make", "most", "over", "such", "take", "than", "them", "well",
})

MIN_WORD_LENGTH = 4


class TagExtractor:
    """Derive up to ``max_tags`` keywords from a title and its content.

    Ties keep the order in which words first appear, so the same input
    always yields the same tags.
    """

    def __init__(self, max_tags: int = 8) -> None:
        self.max_tags = max_tags

    def extract(self, title: str, content: str) -> list[str]:
        text = f"{title} {content}".lower()
        counts: Counter[str] = Counter(
            word for word in _WORD.findall(text)
            if word not in STOP_WORDS and len(word) >= MIN_WORD_LENGTH
        )
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [word for word, _ in ranked[: self.max_tags]]
