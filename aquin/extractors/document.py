"""Word document extraction backed by python-docx."""

from __future__ import annotations

from typing import List

import docx  # python-docx
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from ..classifier import ContentKind
from .base import Extractor

_PARAGRAPH_TAG = qn("w:p")
_TABLE_TAG = qn("w:tbl")


class DocxExtractor(Extractor):
    """Returns body text in document order, tables as tab-separated rows.

    Formatting is discarded. Legacy binary ``.doc`` files are not readable by
    python-docx and surface as error placeholders.
    """

    kind = ContentKind.DOCUMENT
    label = "DOCX"

    def read_text(self, path: str) -> str:
        document = docx.Document(path)
        parts: List[str] = []
        for child in document.element.body.iterchildren():
            if child.tag == _PARAGRAPH_TAG:
                parts.append(Paragraph(child, document).text)
            elif child.tag == _TABLE_TAG:
                for row in Table(child, document).rows:
                    parts.append("\t".join(cell.text for cell in row.cells))
        return "\n".join(parts)


_EXTRACTOR = DocxExtractor()


def extract_text_from_docx(path: str) -> str:
    return _EXTRACTOR.extract(path)
