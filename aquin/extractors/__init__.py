"""Extraction strategies and the registry that dispatches between them."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Sequence, Set

from ..classifier import ContentKind
from .base import (
    BINARY_PLACEHOLDER,
    SKIPPED_PLACEHOLDER,
    Extractor,
    error_placeholder,
    unsupported_placeholder,
)
from .document import DocxExtractor, extract_text_from_docx
from .generic import GenericExtractor
from .pdf import PdfExtractor, extract_text_from_pdf
from .plain import PlainTextExtractor, extract_text_from_plain_file
from .spreadsheet import SpreadsheetExtractor, extract_text_from_spreadsheet

_BUILTIN_FACTORIES: dict[str, Callable[[], Extractor]] = {
    "text": PlainTextExtractor,
    "pdf": PdfExtractor,
    "document": DocxExtractor,
    "spreadsheet": SpreadsheetExtractor,
    "generic": GenericExtractor,
}

EXTRACTOR_NAMES = tuple(_BUILTIN_FACTORIES)


class ExtractorRegistry:
    """Maps content kinds to extraction strategies.

    Kinds without a registered strategy are handled by the fallback, which is
    the generic extractor unless one is registered for ``ContentKind.UNKNOWN``.
    """

    def __init__(
        self,
        extractors: Iterable[Extractor] = (),
        *,
        fallback: Extractor | None = None,
    ) -> None:
        self._extractors: Dict[ContentKind, Extractor] = {}
        self._fallback = fallback or GenericExtractor()
        for extractor in extractors:
            self.register(extractor)

    def register(self, extractor: Extractor) -> None:
        if not isinstance(extractor, Extractor):
            raise TypeError(f"{extractor!r} is not an Extractor instance")
        if extractor.kind is ContentKind.UNKNOWN:
            self._fallback = extractor
            return
        self._extractors[extractor.kind] = extractor

    def get(self, kind: ContentKind) -> Extractor:
        return self._extractors.get(kind, self._fallback)

    def kinds(self) -> Set[ContentKind]:
        return set(self._extractors)

    def extract(self, path: str, kind: ContentKind) -> str:
        return self.get(kind).extract(path)


def discover_extractors(enabled: Sequence[str] | None = None) -> ExtractorRegistry:
    """Return a registry holding the built-in strategies named in ``enabled``.

    Leaving out ``generic`` keeps the decode-and-sniff fallback but disables
    rich-format attempts for unknown extensions.
    """
    if enabled is None:
        enabled_set = set(_BUILTIN_FACTORIES)
    else:
        enabled_set = {name.lower() for name in enabled}
        unknown = enabled_set - set(_BUILTIN_FACTORIES)
        if unknown:
            raise ValueError(f"Unknown extractors requested: {', '.join(sorted(unknown))}")

    registry = ExtractorRegistry(fallback=GenericExtractor(rich="generic" in enabled_set))
    for name, factory in _BUILTIN_FACTORIES.items():
        if name == "generic" or name not in enabled_set:
            continue
        registry.register(factory())
    return registry


_DEFAULT_REGISTRY: ExtractorRegistry | None = None


def default_registry() -> ExtractorRegistry:
    """Return the shared registry with every built-in strategy enabled."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = discover_extractors()
    return _DEFAULT_REGISTRY


__all__ = [
    "BINARY_PLACEHOLDER",
    "EXTRACTOR_NAMES",
    "SKIPPED_PLACEHOLDER",
    "DocxExtractor",
    "Extractor",
    "ExtractorRegistry",
    "GenericExtractor",
    "PdfExtractor",
    "PlainTextExtractor",
    "SpreadsheetExtractor",
    "default_registry",
    "discover_extractors",
    "error_placeholder",
    "extract_text_from_docx",
    "extract_text_from_pdf",
    "extract_text_from_plain_file",
    "extract_text_from_spreadsheet",
    "unsupported_placeholder",
]
