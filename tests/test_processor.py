"""Tests for aquin.processor."""

from __future__ import annotations

import os
import re
from pathlib import Path

import pytest

from aquin import processor
from aquin.extractors import SKIPPED_PLACEHOLDER
from aquin.models import ProcessOptions
from aquin.processor import process_directory, process_file, process_selection
from tests._fixtures.tree_builder import TreeBuilder


def _rel(root: Path, entry_path: str) -> str:
    return Path(entry_path).relative_to(root).as_posix()


def test_excluded_directory_is_dropped_from_results(tree: TreeBuilder) -> None:
    tree.write(
        {
            "a.py": "x=1",
            "b.txt": "hello",
            "node_modules/dep.js": "module.exports = 1;",
        }
    )

    entries = process_directory(tree.path(), ProcessOptions(exclude_dirs=("node_modules",)))

    assert len(entries) == 2
    assert all("node_modules" not in entry.path for entry in entries)
    by_name = {_rel(tree.path(), entry.path): entry for entry in entries}
    assert by_name["a.py"].text == "x=1"
    assert by_name["a.py"].extension == ".py"
    assert by_name["b.txt"].text == "hello"


def test_pruning_covers_every_descendant(tree: TreeBuilder) -> None:
    tree.write(
        {
            "src/main.py": "print('ok')",
            "build/out/deep/x.py": "x",
            "build/out/y.txt": "y",
            "vendor/build/z.py": "z",
        }
    )
    options = ProcessOptions(exclude_dirs=(re.compile(r"(^|[\\/])build$"),))

    paths = sorted(_rel(tree.path(), entry.path) for entry in process_directory(tree.path(), options))

    assert paths == ["src/main.py"]


def test_include_filter_keeps_filtered_files_visible(tree: TreeBuilder) -> None:
    tree.write({"a.py": "x=1", "b.js": "let b;", "docs/c.md": "# c"})

    entries = process_directory(tree.path(), ProcessOptions(include_extensions=(".py",)))

    assert len(entries) == 3
    for entry in entries:
        if entry.extension == ".py":
            assert entry.text == "x=1"
        else:
            assert entry.text == SKIPPED_PLACEHOLDER


def test_subdirectories_are_emitted_contiguously(tree: TreeBuilder) -> None:
    tree.write(
        {
            "a.txt": "a",
            "sub/b.txt": "b",
            "sub/c.txt": "c",
            "sub/inner/d.txt": "d",
            "z.txt": "z",
        }
    )

    names = [_rel(tree.path(), entry.path) for entry in process_directory(tree.path())]

    assert sorted(names) == ["a.txt", "sub/b.txt", "sub/c.txt", "sub/inner/d.txt", "z.txt"]
    positions = [index for index, name in enumerate(names) if name.startswith("sub/")]
    assert positions == list(range(positions[0], positions[0] + 3))


def test_progress_reports_per_level_counts(tree: TreeBuilder) -> None:
    tree.write({"a.txt": "a", "sub/b.txt": "b", "sub/c.txt": "c", "d.txt": "d"})
    calls: list[tuple[int, int]] = []

    process_directory(tree.path(), on_progress=lambda done, total: calls.append((done, total)))

    assert len(calls) == 5
    assert calls[-1] == (3, 3)
    root_level = [call for call in calls if call[1] == 3]
    assert [done for done, _ in root_level] == [1, 2, 3]
    assert [done for done, total in calls if total == 2] == [1, 2]


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        process_directory(tmp_path / "missing")


def test_directory_read_errors_propagate(tree: TreeBuilder, monkeypatch) -> None:
    tree.write({"ok.txt": "fine", "locked/secret.txt": "s"})
    real_listdir = os.listdir
    locked = str(tree.path("locked"))

    def _listdir(path):  # type: ignore[no-untyped-def]
        if os.fspath(path) == locked:
            raise PermissionError(13, "Permission denied", locked)
        return real_listdir(path)

    monkeypatch.setattr(processor.os, "listdir", _listdir)

    with pytest.raises(PermissionError):
        process_directory(tree.path())


def test_symlinked_directory_cycle_is_visited_once(tree: TreeBuilder) -> None:
    tree.write({"sub/a.txt": "a"})
    os.symlink(tree.path(), tree.path("sub/loop"), target_is_directory=True)

    names = [_rel(tree.path(), entry.path) for entry in process_directory(tree.path())]

    assert names == ["sub/a.txt"]


def test_bad_file_does_not_sink_the_batch(tree: TreeBuilder) -> None:
    tree.write({"broken.pdf": b"this is definitely not a pdf document", "ok.py": "x=1"})

    entries = {_rel(tree.path(), entry.path): entry for entry in process_directory(tree.path())}

    assert entries["broken.pdf"].text.startswith("[Error processing PDF:")
    assert entries["ok.py"].text == "x=1"


def test_process_file_never_raises(tmp_path: Path, monkeypatch) -> None:
    def _explode(*_args, **_kwargs):  # type: ignore[no-untyped-def]
        raise RuntimeError("registry exploded")

    monkeypatch.setattr(processor, "content_kind", _explode)
    entry = process_file(tmp_path / "x.py")

    assert entry.path == str(tmp_path / "x.py")
    assert entry.extension == ".py"
    assert entry.text == "[Error processing file: registry exploded]"


def test_process_file_missing_path_returns_placeholder(tmp_path: Path) -> None:
    entry = process_file(str(tmp_path / "gone.py"))

    assert entry.text.startswith("[Error processing Text:")


def test_entries_are_json_ready(tmp_path: Path) -> None:
    target = tmp_path / "Makefile"
    target.write_text("all:\n\techo hi\n", encoding="utf-8")

    assert process_file(str(target)).to_dict() == {
        "filePath": str(target),
        "text": "all:\n\techo hi\n",
        "extension": "(no-ext)",
    }


def test_selection_preserves_input_order(tmp_path: Path) -> None:
    paths = []
    for index in range(12):
        target = tmp_path / f"f{index}.txt"
        target.write_text(str(index), encoding="utf-8")
        paths.append(str(target))

    entries = process_selection(list(reversed(paths)), workers=4)

    assert [entry.text for entry in entries] == [str(index) for index in reversed(range(12))]
