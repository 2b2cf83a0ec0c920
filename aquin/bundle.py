"""Bundle serialization, parsing and summary statistics.

The bundle layout is a compatibility contract for anything consuming exports::

    ================================================================================
    FILE: src/app.py
    EXTENSION: .py
    ================================================================================

    <text>


"""

from __future__ import annotations

import re
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .models import BundleStats, ProcessedEntry

SEPARATOR = "=" * 80

_HEADER = re.compile(
    rf"^{SEPARATOR}\nFILE: (?P<path>[^\n]*)\n(?:EXTENSION: (?P<extension>[^\n]*)\n)?{SEPARATOR}\n\n",
    re.MULTILINE,
)
_ENTRY_SPACER = "\n\n\n"


def serialize_bundle(entries: Iterable[ProcessedEntry]) -> str:
    """Render entries, in order, as one delimited plain-text document."""
    parts: List[str] = []
    for entry in entries:
        parts.append(f"{SEPARATOR}\n")
        parts.append(f"FILE: {entry.path}\n")
        if entry.extension:
            parts.append(f"EXTENSION: {entry.extension}\n")
        parts.append(f"{SEPARATOR}\n\n")
        parts.append(entry.text)
        parts.append(_ENTRY_SPACER)
    return "".join(parts)


def parse_bundle(text: str) -> List[ProcessedEntry]:
    """Recover entries from :func:`serialize_bundle` output.

    Entry texts that themselves contain a full header block cannot be told
    apart from a real boundary and will be split there. Paths or extensions
    containing a newline break the header line and do not round-trip either.
    """
    matches = list(_HEADER.finditer(text))
    entries: List[ProcessedEntry] = []
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        body = text[match.end():end]
        if body.endswith(_ENTRY_SPACER):
            body = body[: -len(_ENTRY_SPACER)]
        entries.append(
            ProcessedEntry(
                path=match.group("path"),
                extension=match.group("extension") or "",
                text=body,
            )
        )
    return entries


def compute_stats(entries: Sequence[ProcessedEntry]) -> BundleStats:
    """Count entries in total and per extension."""
    stats = BundleStats(total_files=len(entries))
    for entry in entries:
        extension = entry.extension or "unknown"
        stats.by_extension[extension] = stats.by_extension.get(extension, 0) + 1
    return stats


def bundle_filename(now: Optional[float] = None) -> str:
    """Return the timestamped download name, ``processed-files-<ms>.txt``."""
    seconds = time.time() if now is None else now
    return f"processed-files-{int(seconds * 1000)}.txt"


def write_bundle(
    entries: Iterable[ProcessedEntry], destination: Path, *, now: Optional[float] = None
) -> Path:
    """Write the bundle to ``destination``.

    A directory destination receives a file named by :func:`bundle_filename`.
    """
    destination = Path(destination)
    if destination.is_dir():
        destination = destination / bundle_filename(now)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(serialize_bundle(entries), encoding="utf-8", newline="")
    return destination


__all__ = [
    "SEPARATOR",
    "bundle_filename",
    "compute_stats",
    "parse_bundle",
    "serialize_bundle",
    "write_bundle",
]
