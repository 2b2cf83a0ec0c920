"""File and directory processing: filtering, dispatch and traversal."""

from __future__ import annotations

import os
import stat
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple, Union

from .classifier import content_kind, file_extension
from .extractors import (
    SKIPPED_PLACEHOLDER,
    ExtractorRegistry,
    default_registry,
    error_placeholder,
)
from .filters import should_process_file, should_skip_directory
from .logging import get_logger
from .models import ProcessedEntry, ProcessOptions, ProgressCallback

PathLike = Union[str, "os.PathLike[str]"]

logger = get_logger("processor")


def process_file(
    path: PathLike,
    options: ProcessOptions | None = None,
    *,
    registry: ExtractorRegistry | None = None,
) -> ProcessedEntry:
    """Process exactly one file. Never raises.

    Files rejected by the extension filters still produce an entry carrying
    the skip placeholder so they remain visible in the bundle.
    """
    file_path = os.fspath(path)
    extension = file_extension(file_path)

    try:
        if not should_process_file(file_path, options):
            return ProcessedEntry(path=file_path, extension=extension, text=SKIPPED_PLACEHOLDER)

        kind = content_kind(extension)
        logger.debug("Extracting %s as %s", file_path, kind.value)
        text = (registry or default_registry()).extract(file_path, kind)
    except Exception as exc:
        logger.error("File error (%s): %s", file_path, exc)
        text = error_placeholder("file", exc)

    return ProcessedEntry(path=file_path, extension=extension, text=text)


@dataclass
class _Frame:
    """One directory level of the traversal work stack."""

    path: str
    names: List[str]
    index: int = 0


def _report(on_progress: ProgressCallback | None, frame: _Frame) -> None:
    if on_progress is not None:
        on_progress(frame.index, len(frame.names))


def process_directory(
    path: PathLike,
    options: ProcessOptions | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    registry: ExtractorRegistry | None = None,
    base: PathLike | None = None,
) -> List[ProcessedEntry]:
    """Recursively process a directory tree depth-first.

    Entries are emitted in enumeration order, with each subdirectory fully
    resolved before its next sibling. Excluded directories are pruned along
    with everything beneath them. ``on_progress`` receives ``(processed,
    total)`` for the level being walked after each entry completes, so it is a
    coarse hint rather than a global percentage.

    When ``base`` is given, directory exclusions are matched against paths
    relative to it instead of the full path, so a private parent such as a
    temporary expansion directory never triggers a prune.

    Errors listing or stat-ing entries propagate to the caller; per-file
    extraction failures are folded into the returned entries.
    """
    root = os.fspath(path)
    match_base = os.fspath(base) if base is not None else None
    root_info = os.stat(root)
    visited: Set[Tuple[int, int]] = {(root_info.st_dev, root_info.st_ino)}

    results: List[ProcessedEntry] = []
    stack = [_Frame(root, os.listdir(root))]
    logger.debug("Walking %s (%d entries)", root, len(stack[0].names))

    while stack:
        frame = stack[-1]
        if frame.index >= len(frame.names):
            stack.pop()
            if stack:
                _report(on_progress, stack[-1])
            continue

        name = frame.names[frame.index]
        frame.index += 1
        entry_path = os.path.join(frame.path, name)
        info = os.stat(entry_path)

        if stat.S_ISDIR(info.st_mode):
            identity = (info.st_dev, info.st_ino)
            match_path = (
                os.path.relpath(entry_path, match_base) if match_base is not None else entry_path
            )
            if should_skip_directory(match_path, options):
                logger.debug("Pruning excluded directory %s", entry_path)
            elif identity in visited:
                logger.warning("Skipping already visited directory %s", entry_path)
            else:
                visited.add(identity)
                stack.append(_Frame(entry_path, os.listdir(entry_path)))
                # Reported against the parent once the subtree is exhausted.
                continue
        else:
            results.append(process_file(entry_path, options, registry=registry))

        _report(on_progress, frame)

    return results


def process_selection(
    paths: Sequence[PathLike],
    options: ProcessOptions | None = None,
    *,
    workers: int | None = None,
    registry: ExtractorRegistry | None = None,
) -> List[ProcessedEntry]:
    """Process a flat selection of files concurrently, preserving input order."""
    if not paths:
        return []
    registry = registry or default_registry()

    def _run(item: PathLike) -> ProcessedEntry:
        return process_file(item, options, registry=registry)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_run, paths))


__all__ = ["process_directory", "process_file", "process_selection"]
