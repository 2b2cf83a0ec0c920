"""Core data models shared across aquin components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from .classifier import NO_EXTENSION

DirPattern = Union[str, "re.Pattern[str]"]
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class ProcessedEntry:
    """Result of processing one file."""

    path: str
    extension: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"filePath": self.path, "text": self.text, "extension": self.extension}


def normalize_extension(value: str) -> str:
    """Lowercase an extension token and ensure it carries a leading dot."""
    token = value.strip().lower()
    if token and not token.startswith(".") and token != NO_EXTENSION:
        token = f".{token}"
    return token


def _normalize_extensions(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    normalized = (normalize_extension(value) for value in values)
    return tuple(dict.fromkeys(token for token in normalized if token))


@dataclass(frozen=True)
class ProcessOptions:
    """Immutable filtering configuration for one traversal run."""

    include_extensions: Tuple[str, ...] = ()
    exclude_extensions: Tuple[str, ...] = ()
    exclude_dirs: Tuple[DirPattern, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "include_extensions", _normalize_extensions(self.include_extensions)
        )
        object.__setattr__(
            self, "exclude_extensions", _normalize_extensions(self.exclude_extensions)
        )
        raw_patterns = self.exclude_dirs or ()
        if isinstance(raw_patterns, (str, re.Pattern)):
            raw_patterns = (raw_patterns,)
        patterns = tuple(pattern for pattern in raw_patterns if pattern != "")
        for pattern in patterns:
            if not isinstance(pattern, (str, re.Pattern)):
                raise TypeError(
                    f"exclude_dirs entries must be strings or compiled patterns, got {pattern!r}"
                )
        object.__setattr__(self, "exclude_dirs", patterns)


@dataclass
class BundleStats:
    """Summary statistics for a set of processed entries."""

    total_files: int
    by_extension: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"totalFiles": self.total_files, "byExtension": dict(self.by_extension)}


@dataclass(frozen=True)
class LanguageShare:
    """One bucket of a language distribution with its display color."""

    label: str
    percentage: float
    color: str


__all__ = [
    "BundleStats",
    "DirPattern",
    "LanguageShare",
    "ProcessOptions",
    "ProcessedEntry",
    "ProgressCallback",
    "normalize_extension",
]
