"""Inclusion and exclusion rules consulted during traversal."""

from __future__ import annotations

import os

from .classifier import file_extension
from .models import ProcessOptions

_DEFAULT_OPTIONS = ProcessOptions()


def should_process_file(path: str, options: ProcessOptions | None = None) -> bool:
    """Return True when extraction should run for ``path``.

    A non-empty include list wins outright; the exclude list is consulted only
    when no include list is configured.
    """
    options = options or _DEFAULT_OPTIONS
    extension = file_extension(path)

    if options.include_extensions:
        return extension in options.include_extensions
    if options.exclude_extensions:
        return extension not in options.exclude_extensions
    return True


def should_skip_directory(path: str, options: ProcessOptions | None = None) -> bool:
    """Return True when the directory at ``path`` must be pruned.

    Literal entries match the directory basename exactly or appear anywhere
    in the full path. Compiled patterns are searched against the full path.
    """
    options = options or _DEFAULT_OPTIONS
    if not options.exclude_dirs:
        return False

    dir_name = os.path.basename(os.path.normpath(path))
    for pattern in options.exclude_dirs:
        if isinstance(pattern, str):
            if dir_name == pattern or pattern in path:
                return True
        elif pattern.search(path):
            return True
    return False


__all__ = ["should_process_file", "should_skip_directory"]
