"""UTF-8 extraction for source, config and markup files."""

from __future__ import annotations

from pathlib import Path

from ..classifier import ContentKind
from .base import Extractor


class PlainTextExtractor(Extractor):
    kind = ContentKind.TEXT
    label = "Text"

    def read_text(self, path: str) -> str:
        # Malformed sequences are replaced rather than retried.
        return Path(path).read_bytes().decode("utf-8", errors="replace")


_EXTRACTOR = PlainTextExtractor()


def extract_text_from_plain_file(path: str) -> str:
    return _EXTRACTOR.extract(path)
