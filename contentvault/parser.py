"""HTML Parser — decode raw bytes and build the document tree."""

from __future__ import annotations

from typing import Optional, Union

import chardet
import structlog
from bs4 import BeautifulSoup

logger = structlog.get_logger(__name__)


class HtmlParser:
    """Builds a BeautifulSoup tree (lxml backend) from raw HTML.

    Bytes are decoded first, using the declared charset when there is one
    and *chardet* otherwise.
    """

    FEATURES = "lxml"

    def parse(self, html: Union[str, bytes], declared_encoding: Optional[str] = None) -> BeautifulSoup:
        if isinstance(html, bytes):
            html = self.decode(html, declared_encoding)
        return BeautifulSoup(html or "", self.FEATURES)

    @classmethod
    def decode(cls, raw: bytes, declared_encoding: Optional[str] = None) -> str:
        """Decode *raw* HTML bytes to text (best-effort, never raises)."""
        encoding = declared_encoding or cls.detect_encoding(raw)
        try:
            return raw.decode(encoding, errors="replace")
        except LookupError:
            logger.debug("unknown_encoding", encoding=encoding)
            return raw.decode("utf-8", errors="replace")

    @staticmethod
    def detect_encoding(raw: bytes) -> str:
        result = chardet.detect(raw)
        return result.get("encoding") or "utf-8"

    @staticmethod
    def charset_from_content_type(content_type: str) -> Optional[str]:
        """Pull ``charset=`` out of a Content-Type header value."""
        if "charset=" not in content_type:
            return None
        charset = content_type.split("charset=")[-1].split(";")[0].strip().strip('"')
        return charset or None
