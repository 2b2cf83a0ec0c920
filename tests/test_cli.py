"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

from aquin.bundle import parse_bundle
from aquin.cli import _build_parser, main
from tests._fixtures.tree_builder import TreeBuilder


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()

    assert parser.parse_args(["--verbose", "bundle"]).verbose is True
    assert parser.parse_args(["bundle", "--verbose"]).verbose is True


def test_cli_collects_repeatable_filters() -> None:
    args = _build_parser().parse_args(
        ["stats", "proj", "--include", ".py", "--include", "js", "--exclude-dir", "dist"]
    )

    assert args.command == "stats"
    assert args.path == ["proj"]
    assert args.include == [".py", "js"]
    assert args.exclude_dir == ["dist"]
    assert args.exclude_ext is None


def test_bundle_command_writes_file(tree: TreeBuilder, tmp_path: Path, capsys) -> None:
    tree.write({"a.py": "x=1", "node_modules/dep.js": "dep"})
    output = tmp_path / "bundle.txt"

    main(["bundle", str(tree.path()), "--exclude-dir", "node_modules", "-o", str(output)])

    entries = parse_bundle(output.read_text(encoding="utf-8"))
    assert [(Path(entry.path).name, entry.text) for entry in entries] == [("a.py", "x=1")]
    assert "Bundle written to" in capsys.readouterr().out


def test_stats_command_reads_config(tree: TreeBuilder, capsys) -> None:
    tree.write(
        {
            ".aquin.yml": "exclude_dirs: [vendor]\n",
            "a.py": "x=1",
            "b.py": "y=2",
            "vendor/c.js": "c",
        }
    )

    main(["stats", str(tree.path())])

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"totalFiles": 3, "byExtension": {".py": 2, ".yml": 1}}


def test_languages_command_prints_shares(tree: TreeBuilder, capsys) -> None:
    tree.write({"a.py": "x", "b.py": "y", "c.js": "z"})

    main(["languages", str(tree.path()), "--names"])

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Python\t66.67%\t#3572A5", "JavaScript\t33.33%\t#f1e05a"]


def test_bundle_command_keeps_selection_order(tree: TreeBuilder, capsys) -> None:
    tree.write({"a.py": "first", "b.txt": "second", "c.md": "third"})
    selection = [str(tree.path(name)) for name in ("c.md", "a.py", "b.txt")]

    main(["bundle", *selection])

    entries = parse_bundle(capsys.readouterr().out)
    assert [entry.text for entry in entries] == ["third", "first", "second"]


def test_log_file_flag_captures_run_summary(tree: TreeBuilder, tmp_path: Path, capsys) -> None:
    tree.write({"a.py": "x=1"})
    log_file = tmp_path / "logs" / "run.log"

    main(["stats", str(tree.path()), "--log-file", str(log_file)])

    capsys.readouterr()
    assert "Processed 1 files" in log_file.read_text(encoding="utf-8")


def test_log_file_from_config_is_attached(tree: TreeBuilder, tmp_path: Path, capsys) -> None:
    tree.write({".aquin.yml": "logging:\n  file: ../aquin.log\n", "a.py": "x=1"})

    main(["stats", str(tree.path())])

    capsys.readouterr()
    assert "Processed 2 files" in (tmp_path / "aquin.log").read_text(encoding="utf-8")
