"""Exception types raised by aquin components."""

from __future__ import annotations


class AquinError(RuntimeError):
    """Base class for structural failures surfaced to callers."""


class ConfigError(AquinError):
    """Raised when the configuration file cannot be parsed."""


class ArchiveError(AquinError):
    """Raised when a compressed container cannot be expanded."""


class UnsupportedFormatError(AquinError):
    """Raised by rich-format extractors for files they cannot open."""
