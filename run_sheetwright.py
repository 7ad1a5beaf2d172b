#!/usr/bin/env python3
"""Sheetwright - Exercise sheet editor core.

Single entry point for the command-line tools.

Usage:
    python run_sheetwright.py compile sheet.tex            # Whole sheet to PDF
    python run_sheetwright.py split sheet.tex --numbers 1 3  # One PDF per exercise
    python run_sheetwright.py starter review               # Print starter content
    python run_sheetwright.py catalog bgo                  # Rank palette commands
    python run_sheetwright.py --status                     # Show readiness
    python run_sheetwright.py --version                    # Show version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Make the package importable when run from a checkout
sys.path.insert(0, str(Path(__file__).parent))

from sheetwright import __version__
from sheetwright.core.config import DOCUMENT_MODES, Config, get_config, validate_config
from sheetwright.core.exceptions import SheetwrightError
from sheetwright.core.logging import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sheetwright - exercise sheet editor core"
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show configuration and compiler readiness and exit",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")

    compile_cmd = sub.add_parser("compile", help="Compile a whole sheet to PDF")
    compile_cmd.add_argument("file", type=Path, help="Editor content (.tex body)")
    compile_cmd.add_argument("-o", "--output", type=Path, help="Output PDF path")
    compile_cmd.add_argument("--number", default="1", help="Sheet number")
    compile_cmd.add_argument("--review", action="store_true", help="Compile in review mode")

    split_cmd = sub.add_parser("split", help="Compile one PDF per exercise")
    split_cmd.add_argument("file", type=Path, help="Editor content (.tex body)")
    split_cmd.add_argument("-o", "--output-dir", type=Path, default=Path.cwd())
    split_cmd.add_argument("--numbers", type=int, nargs="+", help="Exercises to keep")
    split_cmd.add_argument("--review", action="store_true", help="Compile in review mode")

    starter_cmd = sub.add_parser("starter", help="Print starter content for a mode")
    starter_cmd.add_argument("mode", choices=DOCUMENT_MODES)
    starter_cmd.add_argument("--number", type=int, default=1)
    starter_cmd.add_argument("--title", default="Your Title Here")

    catalog_cmd = sub.add_parser("catalog", help="List palette commands for a query")
    catalog_cmd.add_argument("query", nargs="?", default="")
    catalog_cmd.add_argument("--catalog", type=Path, help="JSON catalog to load instead")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for Sheetwright.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Sheetwright v{__version__}")
        return 0

    config = get_config()
    setup_logging(
        log_dir=config.log_path,
        console_level=logging.DEBUG if (args.debug or config.debug) else logging.WARNING,
    )
    logger = get_logger("main")

    issues = validate_config(config) + _check_carrier_template(config)
    for issue in issues:
        if issue.startswith("CRITICAL:"):
            logger.error(f"Configuration: {issue}")
        else:
            logger.warning(f"Configuration issue: {issue}")

    if args.status:
        from sheetwright.integrations.latex import LatexCompiler

        compiler = LatexCompiler(config.pdflatex_path, timeout=config.compile_timeout)
        print(f"\nSheetwright v{__version__} - Readiness\n")
        print(f"  Template:  {config.template_path}")
        status = "ok" if compiler.health_check() else "unavailable"
        print(f"  Compiler:  {config.pdflatex_path} ({status})")
        print(f"  Modes:     compile={config.compile_mode} document={config.document_mode}")
        if issues:
            print(f"\nConfiguration issues ({len(issues)}):")
            for issue in issues:
                print(f"  ! {issue}")
        print()
        return 0

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "compile":
            return _run_compile(args, config)
        if args.command == "split":
            return _run_split(args, config)
        if args.command == "starter":
            return _run_starter(args)
        if args.command == "catalog":
            return _run_catalog(args)
    except SheetwrightError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def _check_carrier_template(config: Config) -> list[str]:
    """Placeholder problems in the configured carrier template.

    A missing file is already reported by validate_config().
    """
    from sheetwright.engine.templates import load_carrier_template, validate_carrier_template

    if not config.template_path.is_file():
        return []
    try:
        carrier = load_carrier_template(config.template_path)
    except SheetwrightError as e:
        return [f"CRITICAL: {e}"]
    return [f"CRITICAL: Carrier template: {issue}" for issue in validate_carrier_template(carrier)]


def _run_compile(args: argparse.Namespace, config: Config) -> int:
    from sheetwright.engine.export import compile_document, sheet_filename
    from sheetwright.engine.templates import load_carrier_template
    from sheetwright.integrations.latex import LatexCompiler

    content = args.file.read_text(encoding="utf-8")
    carrier = load_carrier_template(config.template_path)
    compiler = LatexCompiler(config.pdflatex_path, timeout=config.compile_timeout)
    review = args.review or config.document_mode == "review"

    result = compile_document(content, carrier, compiler, number=args.number, review=review)
    if not result.success:
        print(f"Compilation failed: {result.message}", file=sys.stderr)
        return 1

    output = args.output or args.file.with_name(sheet_filename(args.number))
    output.write_bytes(result.pdf or b"")
    print(output)
    return 0


def _run_split(args: argparse.Namespace, config: Config) -> int:
    from sheetwright.engine.export import compile_segments
    from sheetwright.engine.templates import load_carrier_template
    from sheetwright.integrations.latex import LatexCompiler

    content = args.file.read_text(encoding="utf-8")
    carrier = load_carrier_template(config.template_path)
    compiler = LatexCompiler(config.pdflatex_path, timeout=config.compile_timeout)
    review = args.review or config.document_mode == "review"

    exports = compile_segments(content, carrier, compiler, numbers=args.numbers, review=review)

    args.output_dir.mkdir(parents=True, exist_ok=True)
    failed = 0
    for item in exports:
        if not item.result.success:
            failed += 1
            print(f"Exercise {item.segment.label}: {item.result.message}", file=sys.stderr)
            continue
        path = args.output_dir / item.filename
        path.write_bytes(item.result.pdf or b"")
        print(path)
    return 1 if failed else 0


def _run_starter(args: argparse.Namespace) -> int:
    from sheetwright.engine.templates import render_starter

    print(render_starter(args.mode, exercise_number=args.number, title=args.title), end="")
    return 0


def _run_catalog(args: argparse.Namespace) -> int:
    from sheetwright.engine.catalog import default_catalog, load_catalog
    from sheetwright.engine.matcher import rank

    catalog = load_catalog(args.catalog) if args.catalog else default_catalog()
    for result in rank(args.query, catalog):
        entry = result.entry
        print(f"{result.score:>3}  {entry.symbol:<3} {entry.label:<22} {entry.description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
