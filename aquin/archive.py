"""Archive expansion with guaranteed temporary-directory cleanup."""

from __future__ import annotations

import os
import shutil
import tarfile
import tempfile
import time
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from .errors import ArchiveError
from .extractors import ExtractorRegistry
from .logging import get_logger
from .models import ProcessedEntry, ProcessOptions, ProgressCallback
from .processor import PathLike, process_directory

logger = get_logger("archive")

_ZIP_SUFFIXES = (".zip",)
_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")


def is_archive(path: PathLike) -> bool:
    """Return True when ``path`` names a container this module can expand."""
    name = os.fspath(path).lower()
    return name.endswith(_ZIP_SUFFIXES + _TAR_SUFFIXES)


def _unpack(archive_path: str, destination: Path) -> None:
    name = archive_path.lower()
    if name.endswith(_ZIP_SUFFIXES):
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(destination)
    elif name.endswith(_TAR_SUFFIXES):
        with tarfile.open(archive_path) as archive:
            archive.extractall(destination, filter="data")
    else:
        raise ArchiveError(f"Unsupported archive format: {archive_path}")


def _remove(directory: str) -> None:
    if os.path.exists(directory):
        shutil.rmtree(directory)
        logger.debug("Removed temporary directory %s", directory)


def extract_archive(archive_path: PathLike, *, work_dir: PathLike | None = None) -> str:
    """Expand an archive into a new uniquely named temporary directory.

    The caller owns the returned directory; prefer :func:`extracted_archive`,
    which removes it on every exit path. If expansion fails the partial
    directory is removed before :class:`ArchiveError` is raised.
    """
    source = os.fspath(archive_path)
    if not os.path.isfile(source):
        raise FileNotFoundError(f"Archive not found: {source}")

    parent = os.fspath(work_dir) if work_dir is not None else None
    temp_dir = tempfile.mkdtemp(prefix=f"temp_{int(time.time() * 1000)}_", dir=parent)
    logger.debug("Expanding %s into %s", source, temp_dir)
    try:
        _unpack(source, Path(temp_dir).resolve())
    except BaseException as exc:
        _remove(temp_dir)
        if isinstance(exc, (OSError, zipfile.BadZipFile, tarfile.TarError)):
            raise ArchiveError(f"Failed to expand {source}: {exc}") from exc
        raise
    return temp_dir


@contextmanager
def extracted_archive(
    archive_path: PathLike, *, work_dir: PathLike | None = None
) -> Iterator[str]:
    """Yield the expanded archive directory and always remove it afterwards."""
    temp_dir = extract_archive(archive_path, work_dir=work_dir)
    try:
        yield temp_dir
    finally:
        _remove(temp_dir)


def extract_from_archive(
    archive_path: PathLike,
    options: ProcessOptions | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    registry: ExtractorRegistry | None = None,
    work_dir: PathLike | None = None,
) -> List[ProcessedEntry]:
    """Process every file inside an archive.

    Entry paths are reported relative to the archive root since the
    temporary directory no longer exists once this returns. Directory
    exclusions only ever see archive-internal paths.
    """
    with extracted_archive(archive_path, work_dir=work_dir) as temp_dir:
        entries = process_directory(
            temp_dir, options, on_progress, registry=registry, base=temp_dir
        )
        return [
            ProcessedEntry(
                path=os.path.relpath(entry.path, temp_dir),
                extension=entry.extension,
                text=entry.text,
            )
            for entry in entries
        ]


__all__ = ["extract_archive", "extract_from_archive", "extracted_archive", "is_archive"]
