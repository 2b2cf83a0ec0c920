"""Best-effort extraction for extensions without a dedicated strategy."""

from __future__ import annotations

import re
import zipfile
from pathlib import Path
from typing import List
from xml.etree import ElementTree

import fitz  # PyMuPDF

from ..classifier import ContentKind, file_extension
from ..errors import UnsupportedFormatError
from .base import BINARY_PLACEHOLDER, Extractor, logger, unsupported_placeholder

# Document formats PyMuPDF opens besides PDF.
_PYMUPDF_EXTENSIONS = frozenset({".epub", ".xps", ".oxps", ".mobi", ".fb2", ".cbz"})

# Zipped office containers whose text lives in XML parts.
_ODF_EXTENSIONS = frozenset({".odt", ".odp", ".ods"})
_SLIDE_PART = re.compile(r"ppt/slides/slide(\d+)\.xml")
_PARAGRAPH_TAGS = frozenset({"p", "h"})


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _xml_paragraphs(payload: bytes) -> List[str]:
    root = ElementTree.fromstring(payload)
    paragraphs: List[str] = []
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        if _local_name(element.tag) in _PARAGRAPH_TAGS:
            paragraphs.append("".join(element.itertext()))
    return paragraphs


def _office_parts(archive: zipfile.ZipFile, extension: str) -> List[str]:
    if extension == ".pptx":
        slides = []
        for name in archive.namelist():
            match = _SLIDE_PART.fullmatch(name)
            if match:
                slides.append((int(match.group(1)), name))
        return [name for _, name in sorted(slides)]
    return ["content.xml"]


class GenericExtractor(Extractor):
    """Rich-format attempt, then lossy UTF-8 decode, then a placeholder.

    Decoded text containing a NUL character is reported as binary. This is a
    coarse heuristic with no magic-byte sniffing, so binary files without NUL
    bytes come through as replacement-character noise.
    """

    kind = ContentKind.UNKNOWN
    label = "file"

    def __init__(self, *, rich: bool = True) -> None:
        self.rich = rich

    def extract(self, path: str) -> str:
        extension = file_extension(path)
        if self.rich:
            try:
                return self.read_rich_text(path, extension)
            except UnsupportedFormatError:
                pass
            except Exception as exc:
                logger.warning("Rich extraction failed (%s): %s", path, exc)

        try:
            text = self.read_text(path)
        except OSError as exc:
            logger.error("Unsupported file (%s): %s", path, exc)
            return unsupported_placeholder(extension)
        if "\0" in text:
            return BINARY_PLACEHOLDER
        return text

    def read_text(self, path: str) -> str:
        return Path(path).read_bytes().decode("utf-8", errors="replace")

    def read_rich_text(self, path: str, extension: str) -> str:
        if extension in _PYMUPDF_EXTENSIONS:
            with fitz.open(path) as document:
                return "\n".join(page.get_text() for page in document)
        if extension == ".pptx" or extension in _ODF_EXTENSIONS:
            with zipfile.ZipFile(path) as archive:
                paragraphs: List[str] = []
                for part in _office_parts(archive, extension):
                    paragraphs.extend(_xml_paragraphs(archive.read(part)))
            return "\n".join(paragraphs)
        raise UnsupportedFormatError(f"No rich extractor for {extension}")
