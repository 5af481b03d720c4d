"""
Command line entry point for satisfactory-docs.
Usage: python -m satisfactory_docs Docs.json -o catalog.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .errors import DocsParserError
from .service import DocsParser
from .settings import ParserSettings
from .utils.logging_config import setup_logging


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="satisfactory_docs",
        description="Normalize a Docs.json dump into a per-category JSON catalog",
    )
    parser.add_argument("input", help="Path to Docs.json (UTF-16 or UTF-8)")
    parser.add_argument("-o", "--output", default="", help="Output file (default: stdout)")
    parser.add_argument("--config", default="", help="JSON settings file")
    parser.add_argument(
        "--no-meta", action="store_true", help="Leave the meta block out of the output."
    )
    parser.add_argument("--indent", action="store_true", help="Pretty-print the output JSON.")
    parser.add_argument(
        "--log-level",
        default="",
        choices=["", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (overrides the config file)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    # __name__ is "__main__" under python -m
    logger = logging.getLogger("satisfactory_docs.cli")

    try:
        settings = ParserSettings.load(args.config) if args.config else ParserSettings()
        if args.log_level:
            settings.logging.console_log_level = args.log_level
        setup_logging(settings.logging)

        input_path = Path(args.input)
        logger.info(f"Reading {input_path}")
        try:
            raw = input_path.read_bytes()
        except OSError as e:
            logger.error(f"Could not read input file: {e}")
            return 1

        document = DocsParser(settings=settings).parse(raw)
        payload = document.to_json(include_meta=not args.no_meta, indent=args.indent)

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(payload)
            logger.info(f"Wrote {len(payload) / 1024:.1f} KB to {output_path}")
        else:
            sys.stdout.buffer.write(payload)
            sys.stdout.buffer.write(b"\n")

        if document.diagnostics.warnings:
            logger.warning(f"Finished with {len(document.diagnostics)} warnings")
        return 0

    except DocsParserError as e:
        logger.error(f"Processing failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
