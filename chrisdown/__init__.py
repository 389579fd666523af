"""Markdown to HTML converter."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from chrisdown.convert import convert, write_html
from chrisdown.core import RenderConfig, render

logger = logging.getLogger(__name__)

STDIO = "-"


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for chrisdown CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(description="Convert Markdown to HTML")
    parser.add_argument(
        "source",
        help="markdown file, directory of markdown files, or - for stdin",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        help="output file or directory (default: next to each input, "
        "stdout for stdin)",
    )
    parser.add_argument(
        "--image-base-url",
        default=None,
        help="base URL prepended to relative image paths",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="render files but don't write any output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress everything except errors",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show a progress bar",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    config = RenderConfig(image_base_url=args.image_base_url)
    destination = Path(args.destination) if args.destination else None

    if args.source == STDIO:
        return _convert_stdin(destination, config, args.dry_run)

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    try:
        return convert(
            source=source_path,
            destination=destination,
            config=config,
            dry_run=args.dry_run,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 2


def _convert_stdin(
    destination: Optional[Path], config: RenderConfig, dry_run: bool
) -> int:
    """renders markdown from stdin to stdout or the destination file."""
    try:
        html = render(sys.stdin.read(), config)
        if destination is None or str(destination) == STDIO:
            sys.stdout.write(html)
        elif not dry_run:
            write_html(destination, html)
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 2
    return 0
