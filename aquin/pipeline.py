"""Entry point that routes a path to the matching processor."""

from __future__ import annotations

import os
from typing import List

from .archive import extract_from_archive, is_archive
from .extractors import ExtractorRegistry
from .models import ProcessedEntry, ProcessOptions, ProgressCallback
from .processor import PathLike, process_directory, process_file


def process_path(
    path: PathLike,
    options: ProcessOptions | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    registry: ExtractorRegistry | None = None,
) -> List[ProcessedEntry]:
    """Process a directory, an archive or a single file."""
    target = os.fspath(path)
    if os.path.isdir(target):
        return process_directory(target, options, on_progress, registry=registry)
    if not os.path.exists(target):
        raise FileNotFoundError(f"Path not found: {target}")
    if is_archive(target):
        return extract_from_archive(target, options, on_progress, registry=registry)
    return [process_file(target, options, registry=registry)]


__all__ = ["process_path"]
