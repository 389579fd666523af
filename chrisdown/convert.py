"""File and directory conversion around the renderer."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from chrisdown.core import RenderConfig, render
from chrisdown.report import ConversionReport

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
HTML_SUFFIX = ".html"


def discover_files(source: Path) -> list[Path]:
    """
    discovers markdown files from source path.

    Args:
        source: path to a markdown file or a directory of them

    Returns:
        list of paths to markdown files

    Raises:
        FileNotFoundError: if source doesn't exist
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        return [source]

    if source.is_dir():
        return sorted(
            path
            for path in source.iterdir()
            if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES
        )

    return []


def output_path_for(path: Path, source: Path, destination: Optional[Path]) -> Path:
    """
    works out where the HTML for one markdown file goes.

    Args:
        path: markdown file being converted
        source: the file or directory the run was started on
        destination: output file or directory, or None to write beside the input

    Returns:
        path of the HTML file to write
    """
    html_name = path.with_suffix(HTML_SUFFIX).name

    if destination is None:
        return path.with_name(html_name)

    if source.is_dir() or destination.is_dir():
        return destination / html_name

    return destination


def read_markdown(path: Path) -> str:
    """reads markdown source as UTF-8 text."""
    return path.read_text(encoding="utf-8")


def write_html(path: Path, html: str) -> None:
    """
    writes HTML as UTF-8, replacing any previous file in one step.

    Content goes to a temporary file in the target directory first so a
    failed write never leaves a truncated file behind.

    Args:
        path: destination file
        html: rendered HTML

    Raises:
        OSError: if the directory can't be created or the file can't be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(html)
        os.chmod(temp_name, 0o644)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


def convert_file(
    input_path: Path,
    output_path: Path,
    config: RenderConfig,
    dry_run: bool = False,
) -> str:
    """
    converts one markdown file to HTML.

    Args:
        input_path: markdown file to read
        output_path: HTML file to write
        config: renderer configuration
        dry_run: if True, render but don't write anything

    Returns:
        rendered HTML

    Raises:
        OSError: if reading or writing fails
    """
    html = render(read_markdown(input_path), config)

    if dry_run:
        logger.debug("Would write %s", output_path)
        return html

    write_html(output_path, html)
    logger.debug("Converted %s -> %s", input_path, output_path)
    return html


def convert(
    source: Path,
    destination: Optional[Path],
    config: RenderConfig,
    dry_run: bool = False,
    quiet: bool = False,
    progress: bool = False,
) -> int:
    """
    converts a markdown file or a directory of markdown files to HTML.

    Args:
        source: markdown file or directory
        destination: output file or directory (None writes beside each input)
        config: renderer configuration
        dry_run: if True, render but don't write anything
        quiet: if True, suppress non-error output
        progress: if True, show a progress bar for multi-file runs

    Returns:
        exit code (0 success, 1 partial failure)

    Raises:
        FileNotFoundError: if source doesn't exist
    """
    files = discover_files(source)

    with ConversionReport(
        quiet=quiet, show_progress=progress, dry_run=dry_run
    ) as report:
        if not files:
            report.note(f"No markdown files found in {source}")
            return 0

        report.begin(files)
        for path in files:
            output_path = output_path_for(path, source, destination)
            try:
                convert_file(path, output_path, config, dry_run=dry_run)
            except (OSError, UnicodeDecodeError) as e:
                report.record_failure(path, e)
            else:
                report.record_success(path, output_path)

        return report.finish()
