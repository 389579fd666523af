"""tests for conversion reporting."""

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

from rich.console import Console

from chrisdown.report import ConversionReport


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


def test_single_file_run_skips_progress_bar() -> None:
    """begin shows no bar for a one-file run, even with progress enabled."""
    with patch("chrisdown.report.Progress") as mock_progress_class:
        report = ConversionReport(show_progress=True)
        report.begin([Path("only.md")])

        mock_progress_class.assert_not_called()


def test_multi_file_run_starts_progress_bar() -> None:
    """begin starts a bar sized to the file count."""
    with patch("chrisdown.report.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0

        report = ConversionReport(show_progress=True)
        report.begin([Path("a.md"), Path("b.md")])

        mock_progress.start.assert_called_once()
        mock_progress.add_task.assert_called_once_with(
            "Converting", total=2, current=""
        )


def test_progress_disabled_skips_bar() -> None:
    """begin shows no bar unless progress is enabled."""
    with patch("chrisdown.report.Progress") as mock_progress_class:
        ConversionReport().begin([Path("a.md"), Path("b.md")])

        mock_progress_class.assert_not_called()


def test_each_outcome_advances_bar() -> None:
    """advances the bar once per file and shows the current name."""
    with patch("chrisdown.report.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0
        console, _ = _console()

        report = ConversionReport(show_progress=True, console=console)
        report.begin([Path("a.md"), Path("b.md")])
        report.record_success(Path("a.md"), Path("a.html"))
        report.record_failure(Path("b.md"), OSError("denied"))

        assert mock_progress.update.call_args_list[-1].kwargs == {
            "advance": 1,
            "current": "b.md",
        }
        assert mock_progress.update.call_count == 2


def test_context_manager_stops_bar() -> None:
    """stops a live bar when the run ends, even on error."""
    with patch("chrisdown.report.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress

        with ConversionReport(show_progress=True) as report:
            report.begin([Path("a.md"), Path("b.md")])

        mock_progress.stop.assert_called_once()


def test_success_prints_output_path() -> None:
    """prints the source and where its HTML was written."""
    console, buffer = _console()
    report = ConversionReport(console=console)

    report.record_success(Path("docs/a.md"), Path("site/a.html"))

    assert "docs/a.md -> site/a.html (wrote)" in buffer.getvalue()
    assert report.written == [(Path("docs/a.md"), Path("site/a.html"))]


def test_dry_run_success_says_would_write() -> None:
    """marks dry-run outcomes as not written."""
    console, buffer = _console()
    report = ConversionReport(dry_run=True, console=console)

    report.record_success(Path("a.md"), Path("a.html"))

    assert "a.md -> a.html (would write)" in buffer.getvalue()


def test_quiet_hides_successes_but_not_failures() -> None:
    """prints errors in quiet mode and nothing else."""
    console, buffer = _console()
    report = ConversionReport(quiet=True, console=console)

    report.record_success(Path("a.md"), Path("a.html"))
    report.record_failure(Path("[b].md"), OSError("permission denied"))
    exit_code = report.finish()

    output = buffer.getvalue()
    assert exit_code == 1
    assert "a.html" not in output
    assert "ERROR: [b].md: permission denied" in output
    assert "converted" not in output


def test_finish_summary_and_exit_code() -> None:
    """summarizes the run and returns 0 only when nothing failed."""
    console, buffer = _console()
    report = ConversionReport(console=console)
    report.record_success(Path("a.md"), Path("a.html"))
    report.record_success(Path("b.md"), Path("b.html"))

    assert report.finish() == 0
    assert "2 of 2 file(s) converted" in buffer.getvalue()

    report.record_failure(Path("c.md"), OSError("disk full"))
    assert report.finish() == 1
    assert "2 of 3 file(s) converted, 1 failed" in buffer.getvalue()


def test_dry_run_summary() -> None:
    """notes in the summary that nothing was written."""
    console, buffer = _console()
    report = ConversionReport(dry_run=True, console=console)
    report.record_success(Path("a.md"), Path("a.html"))

    report.finish()

    assert "1 of 1 file(s) converted (dry run, nothing written)" in buffer.getvalue()
