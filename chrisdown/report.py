"""console reporting for conversion runs."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class ConversionReport:
    """
    records the outcome of every file in a run and prints it to stderr.

    A progress bar is only shown for runs over more than one file; output
    lines are printed above it while it is live.
    """

    def __init__(
        self,
        quiet: bool = False,
        show_progress: bool = False,
        dry_run: bool = False,
        console: Optional[Console] = None,
    ) -> None:
        self.quiet = quiet
        self.show_progress = show_progress
        self.dry_run = dry_run
        self.written: list[tuple[Path, Path]] = []
        self.failures: list[tuple[Path, str]] = []
        self._console = console or Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "ConversionReport":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self._stop_bar()

    def begin(self, files: list[Path]) -> None:
        """starts the progress bar when enabled and there is more than one file."""
        if not self.show_progress or len(files) < 2:
            return

        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("{task.fields[current]}"),
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task(
            "Converting", total=len(files), current=""
        )

    def record_success(self, source: Path, output: Path) -> None:
        """records a converted file and prints where its HTML went."""
        self.written.append((source, output))
        verb = "would write" if self.dry_run else "wrote"
        self.note(f"{source} -> {output} ({verb})")
        self._advance(source)

    def record_failure(self, source: Path, error: BaseException) -> None:
        """records a failed file; printed even in quiet mode."""
        self.failures.append((source, str(error)))
        self._console.print(
            f"[red]ERROR:[/red] {escape(str(source))}: {escape(str(error))}",
            soft_wrap=True,
        )
        self._advance(source)

    def note(self, message: str) -> None:
        """prints an informational line unless quiet."""
        if self.quiet:
            return

        self._console.print(message, markup=False, highlight=False, soft_wrap=True)

    def finish(self) -> int:
        """
        stops the bar and prints a one-line summary unless quiet.

        Returns:
            exit code (0 if every file converted, 1 otherwise)
        """
        self._stop_bar()

        if not self.quiet:
            total = len(self.written) + len(self.failures)
            summary = f"{len(self.written)} of {total} file(s) converted"
            if self.failures:
                summary += f", {len(self.failures)} failed"
            if self.dry_run:
                summary += " (dry run, nothing written)"
            self.note(summary)

        return 1 if self.failures else 0

    def _advance(self, source: Path) -> None:
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, advance=1, current=source.name)

    def _stop_bar(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
