"""Language mix analysis and display color assignment."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .models import LanguageShare, ProcessedEntry

# GitHub-style canonical colors keyed by extension.
LANGUAGE_COLORS: Dict[str, str] = {
    ".js": "#f1e05a",
    ".jsx": "#f1e05a",
    ".ts": "#3178c6",
    ".tsx": "#3178c6",
    ".py": "#3572A5",
    ".java": "#b07219",
    ".cpp": "#f34b7d",
    ".c": "#555555",
    ".cs": "#178600",
    ".php": "#4F5D95",
    ".rb": "#701516",
    ".go": "#00ADD8",
    ".rs": "#dea584",
    ".swift": "#ffac45",
    ".kt": "#A97BFF",
    ".scala": "#c22d40",
    ".html": "#e34c26",
    ".css": "#563d7c",
    ".scss": "#c6538c",
    ".json": "#292929",
    ".md": "#083fa1",
    ".yaml": "#cb171e",
    ".yml": "#cb171e",
    ".xml": "#0060ac",
    ".sql": "#e38c00",
    ".sh": "#89e051",
    ".vue": "#41b883",
    ".dart": "#00B4AB",
    ".cjs": "#f1e05a",
    ".mjs": "#f1e05a",
    "(no-ext)": "#cccccc",
}

EXT_TO_LANGUAGE: Dict[str, str] = {
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".cpp": "C++",
    ".c": "C",
    ".cs": "C#",
    ".php": "PHP",
    ".rb": "Ruby",
    ".go": "Go",
    ".rs": "Rust",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".scala": "Scala",
    ".html": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".json": "JSON",
    ".md": "Markdown",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".xml": "XML",
    ".sql": "SQL",
    ".sh": "Shell",
    ".vue": "Vue",
    ".dart": "Dart",
    ".cjs": "JavaScript",
    ".mjs": "JavaScript",
    "(no-ext)": "No Extension",
}

# Same palette keyed by human-readable name, for distributions built with a label map.
LANGUAGE_NAME_COLORS: Dict[str, str] = {}
for _ext, _name in EXT_TO_LANGUAGE.items():
    LANGUAGE_NAME_COLORS.setdefault(_name, LANGUAGE_COLORS[_ext])
del _ext, _name

_HUE_STEP = 30
_MAX_HUE_ATTEMPTS = 12


def language_name(extension: str) -> str:
    return EXT_TO_LANGUAGE.get(extension, extension)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def string_hue(label: str) -> int:
    """Hash ``label`` onto a hue in ``[0, 360)``.

    Rolling ``code + (hash << 5) - hash`` with the shift wrapped to 32 bits.
    """
    hash_value = 0
    for char in label:
        hash_value = ord(char) + (_to_int32(_to_int32(hash_value) << 5) - hash_value)
    return hash_value % 360


def _hsl(hue: int) -> str:
    return f"hsl({hue}, 65%, 60%)"


def unique_color(label: str, used: Set[str]) -> str:
    """Return a hashed color for ``label`` avoiding colors already in ``used``.

    The hue is shifted by 30 degrees up to 12 times; if every candidate is
    taken the last one is accepted as a duplicate. ``used`` is updated.
    """
    hue = string_hue(label)
    color = _hsl(hue)
    attempt = 0
    while color in used and attempt < _MAX_HUE_ATTEMPTS:
        hue = (hue + _HUE_STEP) % 360
        color = _hsl(hue)
        attempt += 1
    used.add(color)
    return color


def assign_colors(
    labels: Iterable[str], palette: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Assign a display color to every label in one pass.

    Labels found in ``palette`` keep their canonical color; the rest receive
    hashed colors deduplicated against each other within this call only.
    """
    palette = LANGUAGE_COLORS if palette is None else palette
    used: Set[str] = set()
    colors: Dict[str, str] = {}
    for label in labels:
        if label in colors:
            continue
        canonical = palette.get(label)
        colors[label] = canonical if canonical else unique_color(label, used)
    return colors


def compute_language_distribution(
    entries: Iterable[ProcessedEntry], label_map: Optional[Mapping[str, str]] = None
) -> Dict[str, float]:
    """Return the percentage of entries per label, rounded to two decimals.

    Labels are extensions, or the mapped name when ``label_map`` is given.
    Extensions missing from the map keep their extension as label. Keys are
    ordered by first appearance.
    """
    counts: Dict[str, int] = {}
    total = 0
    for entry in entries:
        label = entry.extension
        if label_map is not None:
            label = label_map.get(label, label)
        counts[label] = counts.get(label, 0) + 1
        total += 1

    if not total:
        return {}
    return {label: round(count / total * 100, 2) for label, count in counts.items()}


def sort_distribution(distribution: Mapping[str, float]) -> List[Tuple[str, float]]:
    """Order buckets by descending percentage, ties kept in insertion order."""
    return sorted(distribution.items(), key=lambda item: item[1], reverse=True)


def analyze_languages(
    entries: Iterable[ProcessedEntry], label_map: Optional[Mapping[str, str]] = None
) -> List[LanguageShare]:
    """Compute, sort and color the language mix of ``entries``."""
    distribution = compute_language_distribution(entries, label_map)
    ordered = sort_distribution(distribution)
    palette = LANGUAGE_NAME_COLORS if label_map is not None else LANGUAGE_COLORS
    colors = assign_colors((label for label, _ in ordered), palette)
    return [
        LanguageShare(label=label, percentage=percentage, color=colors[label])
        for label, percentage in ordered
    ]


__all__ = [
    "EXT_TO_LANGUAGE",
    "LANGUAGE_COLORS",
    "LANGUAGE_NAME_COLORS",
    "analyze_languages",
    "assign_colors",
    "compute_language_distribution",
    "language_name",
    "sort_distribution",
    "string_hue",
    "unique_color",
]
