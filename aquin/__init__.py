"""Convert file collections into a single AI-ready plain-text bundle."""

from .analysis import analyze_languages, assign_colors, compute_language_distribution
from .archive import extract_archive, extract_from_archive, extracted_archive
from .bundle import compute_stats, parse_bundle, serialize_bundle, write_bundle
from .classifier import ContentKind, classify
from .filters import should_process_file, should_skip_directory
from .models import BundleStats, LanguageShare, ProcessedEntry, ProcessOptions
from .pipeline import process_path
from .processor import process_directory, process_file, process_selection

__version__ = "0.1.0"

__all__ = [
    "BundleStats",
    "ContentKind",
    "LanguageShare",
    "ProcessOptions",
    "ProcessedEntry",
    "analyze_languages",
    "assign_colors",
    "classify",
    "compute_language_distribution",
    "compute_stats",
    "extract_archive",
    "extract_from_archive",
    "extracted_archive",
    "parse_bundle",
    "process_directory",
    "process_file",
    "process_path",
    "process_selection",
    "serialize_bundle",
    "should_process_file",
    "should_skip_directory",
    "write_bundle",
]
