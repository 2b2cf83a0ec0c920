"""Tests for aquin.analysis."""

from __future__ import annotations

import pytest

from aquin.analysis import (
    EXT_TO_LANGUAGE,
    analyze_languages,
    assign_colors,
    compute_language_distribution,
    sort_distribution,
    string_hue,
    unique_color,
)
from aquin.models import ProcessedEntry


def _entries(*extensions: str) -> list[ProcessedEntry]:
    return [
        ProcessedEntry(path=f"file{index}{ext}", extension=ext, text="")
        for index, ext in enumerate(extensions)
    ]


def test_distribution_by_extension() -> None:
    distribution = compute_language_distribution(_entries(".py", ".py", ".js"))

    assert distribution == {".py": 66.67, ".js": 33.33}


def test_distribution_with_label_map() -> None:
    distribution = compute_language_distribution(
        _entries(".py", ".ts", ".tsx", ".weird"), EXT_TO_LANGUAGE
    )

    assert distribution == {"Python": 25.0, "TypeScript": 50.0, ".weird": 25.0}


def test_distribution_sums_to_one_hundred() -> None:
    distribution = compute_language_distribution(
        _entries(".a", ".b", ".c", ".c", ".d", ".e", ".f")
    )

    assert sum(distribution.values()) == pytest.approx(100, abs=0.1)


def test_distribution_of_nothing_is_empty() -> None:
    assert compute_language_distribution([]) == {}


def test_sort_is_descending_and_stable() -> None:
    ordered = sort_distribution({".b": 25.0, ".a": 50.0, ".c": 25.0})

    assert ordered == [(".a", 50.0), (".b", 25.0), (".c", 25.0)]


def test_string_hue_matches_rolling_hash() -> None:
    assert string_hue("a") == 97
    assert string_hue(".x") == 106
    assert 0 <= string_hue(".a-very-long-extension-name") < 360


def test_unique_color_shifts_hue_on_collision() -> None:
    used = {"hsl(97, 65%, 60%)"}

    assert unique_color("a", used) == "hsl(127, 65%, 60%)"
    assert "hsl(127, 65%, 60%)" in used


def test_unique_color_accepts_duplicate_when_wheel_is_full() -> None:
    used = {f"hsl({(97 + 30 * step) % 360}, 65%, 60%)" for step in range(12)}

    assert unique_color("a", used) == "hsl(97, 65%, 60%)"


def test_assign_colors_prefers_palette_and_resets_per_call() -> None:
    first = assign_colors([".py", "a"])
    second = assign_colors(["a"])

    assert first[".py"] == "#3572A5"
    assert first["a"] == second["a"] == "hsl(97, 65%, 60%)"


def test_analyze_languages_orders_and_colors() -> None:
    shares = analyze_languages(_entries(".js", ".py", ".py", ".zzz"), EXT_TO_LANGUAGE)

    assert [(share.label, share.percentage) for share in shares] == [
        ("Python", 50.0),
        ("JavaScript", 25.0),
        (".zzz", 25.0),
    ]
    assert shares[0].color == "#3572A5"
    assert shares[2].color.startswith("hsl(")
