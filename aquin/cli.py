"""CLI entrypoints for aquin commands."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List

from .analysis import EXT_TO_LANGUAGE, analyze_languages
from .archive import is_archive
from .bundle import compute_stats, serialize_bundle, write_bundle
from .config import AquinConfig, compile_dir_patterns, load_config
from .errors import AquinError
from .extractors import EXTRACTOR_NAMES, discover_extractors
from .logging import configure_logging, get_logger
from .models import ProcessedEntry, ProcessOptions
from .pipeline import process_path
from .processor import process_selection

logger = get_logger("cli")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        metavar="FILE",
        help="Also write log records to FILE (overrides logging.file in .aquin.yml).",
    )


def _add_processing_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="*",
        default=["."],
        help="Directories, files or archives to process (defaults to current directory).",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=None,
        metavar="EXT",
        help="Only extract files with this extension (repeatable).",
    )
    parser.add_argument(
        "--exclude-ext",
        action="append",
        default=None,
        metavar="EXT",
        help="Skip extraction for this extension (repeatable, ignored with --include).",
    )
    parser.add_argument(
        "--exclude-dir",
        action="append",
        default=None,
        metavar="NAME",
        help="Prune directories by name, path substring or 're:' pattern (repeatable).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an .aquin.yml file (defaults to the one beside PATH).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aquin",
        description="Convert files and directory trees into one AI-ready text bundle.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    bundle_parser = subparsers.add_parser(
        "bundle",
        help="Write the concatenated text bundle.",
    )
    _add_logging_options(bundle_parser, suppress_default=True)
    _add_processing_options(bundle_parser)
    bundle_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file or directory; prints to stdout when omitted.",
    )

    stats_parser = subparsers.add_parser(
        "stats",
        help="Print file counts per extension as JSON.",
    )
    _add_logging_options(stats_parser, suppress_default=True)
    _add_processing_options(stats_parser)

    languages_parser = subparsers.add_parser(
        "languages",
        help="Print the language mix with display colors.",
    )
    _add_logging_options(languages_parser, suppress_default=True)
    _add_processing_options(languages_parser)
    languages_parser.add_argument(
        "--names",
        action="store_true",
        help="Group by language name instead of extension.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Bind address.")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port.")
    serve_parser.add_argument(
        "--config",
        default=None,
        help="Path to an .aquin.yml file (defaults to the current directory).",
    )

    return parser


def _load_config(args: argparse.Namespace) -> AquinConfig:
    if args.config:
        return load_config(Path(args.config))
    target = Path(getattr(args, "path", ["."])[0])
    return load_config(target if target.is_dir() else target.parent)


def _resolve_options(args: argparse.Namespace, config: AquinConfig) -> ProcessOptions:
    options = config.to_options()
    include = args.include if args.include is not None else options.include_extensions
    exclude = args.exclude_ext if args.exclude_ext is not None else options.exclude_extensions
    exclude_dirs = (
        compile_dir_patterns(args.exclude_dir)
        if args.exclude_dir is not None
        else options.exclude_dirs
    )
    return ProcessOptions(
        include_extensions=tuple(include),
        exclude_extensions=tuple(exclude),
        exclude_dirs=tuple(exclude_dirs),
    )


def _collect(args: argparse.Namespace, config: AquinConfig) -> List[ProcessedEntry]:
    options = _resolve_options(args, config)
    registry = discover_extractors(config.extractors)

    def _progress(processed: int, total: int) -> None:
        logger.debug("Progress %d/%d", processed, total)

    paths = list(args.path)
    if len(paths) > 1 and all(os.path.isfile(path) and not is_archive(path) for path in paths):
        entries = process_selection(paths, options, workers=config.workers, registry=registry)
    else:
        entries = []
        for path in paths:
            entries.extend(process_path(path, options, _progress, registry=registry))
    logger.info("Processed %d files from %s", len(entries), ", ".join(paths))
    return entries


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for aquin commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = _load_config(args)
    except AquinError as exc:
        parser.exit(1, f"{exc}\n")

    log_file = args.log_file or config.log_file
    if log_file is not None:
        try:
            configure_logging(verbose=bool(args.verbose), log_file=log_file)
        except OSError as exc:
            parser.exit(1, f"Cannot open log file {log_file}: {exc}\n")

    if args.command == "serve":
        from .service import run_service

        run_service(
            host=args.host or config.service.host,
            port=args.port or config.service.port,
        )
        return

    try:
        entries = _collect(args, config)
    except (OSError, AquinError) as exc:
        parser.exit(1, f"aquin {args.command} failed: {exc}\n")
    except ValueError as exc:
        parser.exit(1, f"aquin {args.command} failed: {exc}\nKnown extractors: {', '.join(EXTRACTOR_NAMES)}\n")

    if args.command == "bundle":
        output = Path(args.output) if args.output else None
        if output is None and config.output_dir is not None:
            config.output_dir.mkdir(parents=True, exist_ok=True)
            output = config.output_dir
        if output is None:
            sys.stdout.write(serialize_bundle(entries))
        else:
            written = write_bundle(entries, output)
            print(f"Bundle written to {_relativize(written)}")
    elif args.command == "stats":
        print(json.dumps(compute_stats(entries).to_dict(), indent=2))
    elif args.command == "languages":
        label_map = EXT_TO_LANGUAGE if args.names else None
        for share in analyze_languages(entries, label_map):
            print(f"{share.label}\t{share.percentage:.2f}%\t{share.color}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
