"""PDF text extraction backed by PyMuPDF."""

from __future__ import annotations

import fitz  # PyMuPDF

from ..classifier import ContentKind
from .base import Extractor


class PdfExtractor(Extractor):
    """Concatenates the text layer of every page in document order."""

    kind = ContentKind.PDF
    label = "PDF"

    def read_text(self, path: str) -> str:
        with fitz.open(path) as document:
            if document.needs_pass:
                raise ValueError("document is password protected")
            return "\n".join(page.get_text() for page in document)


_EXTRACTOR = PdfExtractor()


def extract_text_from_pdf(path: str) -> str:
    """Return the text of a PDF, or an error placeholder when it cannot be parsed."""
    return _EXTRACTOR.extract(path)
