"""CLI entrypoint for docsplit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .models import LINK_STYLES
from .orchestrator import BatchReport, Orchestrator, discover_sources


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsplit",
        description=(
            "Split heading-structured documents into numbered, linked markdown files: "
            "one file per ### part, grouped into # book and ## chapter folders."
        ),
    )
    parser.add_argument(
        "sources",
        nargs="+",
        type=Path,
        help="Source documents, or directories whose .docx files should be split.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Directory that receives one folder per source (defaults to the current directory).",
    )
    parser.add_argument(
        "-p",
        "--padding",
        type=int,
        default=None,
        help="Digits used for sequence numbers (default: 3).",
    )
    parser.add_argument(
        "--link-style",
        choices=LINK_STYLES,
        default=None,
        help="Navigation links by bare file name (simple) or by path within the output tree (full).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .docsplit.yml or the directory containing it (defaults to current directory).",
    )
    parser.add_argument(
        "--pandoc",
        default=None,
        help="Path to the pandoc executable.",
    )
    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep files from earlier runs in each document's output folder.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the files that would be written without writing them.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors; summaries are still printed.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsplit."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)

    try:
        config = load_config(args.config)
        config = config.with_overrides(
            padding=args.padding,
            link_style=args.link_style,
            output_dir=args.output,
            clean=False if args.no_clean else None,
        )
        if args.pandoc:
            config.converter.executable = args.pandoc
        orchestrator = Orchestrator(config)
    except ConfigError as exc:
        parser.error(str(exc))

    sources = discover_sources(args.sources)
    if not sources:
        parser.exit(1, "No source documents found.\n")

    report = orchestrator.run(sources, dry_run=bool(args.dry_run))
    _print_report(report, dry_run=bool(args.dry_run))
    if not report.ok:
        sys.exit(1)


def _print_report(report: BatchReport, *, dry_run: bool) -> None:
    for outcome in report.outcomes:
        print(outcome.summary())
        if dry_run:
            for relative_path in outcome.planned:
                print(f"  {relative_path}")
        for failure in outcome.failures:
            print(f"  failed: {_relativize(failure.path)} ({failure.error})")
    total = len(report.outcomes)
    print(f"Done: {report.converted} of {total} document(s) converted.")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
