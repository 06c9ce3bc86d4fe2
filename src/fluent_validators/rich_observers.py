"""Rich console observers for validation runs.

Progress bars and a live dashboard of the most frequent error paths, fed by
the events a ValidationRunner emits.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from fluent_validators.events import (
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)

if TYPE_CHECKING:
    from rich.console import Console, Group
    from rich.live import Live
    from rich.panel import Panel
    from rich.progress import Progress, TaskID

__all__ = ["RichDashboardObserver", "SimpleProgressObserver"]

MAX_ERROR_WIDTH = 50


def _display_path(path: str) -> str:
    from rich.markup import escape

    return escape(path) if path else "(root)"


def _shorten(text: str, width: int = MAX_ERROR_WIDTH) -> str:
    return text if len(text) <= width else text[:width] + "..."


def _snapshot_count(snapshot: dict[str, Any], key: str) -> int:
    return snapshot.get(key) or 0


class SimpleProgressObserver(ValidationObserver):
    """Progress bar labelled with valid rows, failed rows and errors found.

    Must be used within a started Rich Progress.

    Example:
        from rich.progress import Progress

        with Progress() as progress:
            runner.add_observer(SimpleProgressObserver(progress))
            for result in runner.run():
                ...
    """

    def __init__(
        self,
        progress: Progress,
        task_description: str = "Validating",
    ) -> None:
        """Initialize the progress observer.

        Args:
            progress: A Rich Progress instance (must be started).
            task_description: Text shown before the counters.
        """
        self._progress = progress
        self._description = task_description
        self._task_id: TaskID | None = None
        self._valid = 0
        self._failed = 0
        self._errors = 0

    def _label(self) -> str:
        label = f"{self._description} [green]✓{self._valid}[/] [red]✗{self._failed}[/]"
        if self._errors:
            label += f" [dim]({self._errors} errors)[/]"
        return label

    def on_event(self, event: ValidationEvent) -> None:
        kind = event.event_type

        if kind == ValidationEventType.VALIDATION_STARTED:
            self._valid = self._failed = self._errors = 0
            self._task_id = self._progress.add_task(
                self._description,
                total=event.data.get("total_hint") or None,
            )
            return

        if kind == ValidationEventType.ERROR_ADDED:
            self._errors += 1
            return

        if self._task_id is None:
            return

        if kind == ValidationEventType.ROW_PROCESSED:
            snapshot = event.data.get("stats_snapshot", {})
            self._valid = _snapshot_count(snapshot, "valid")
            self._failed = _snapshot_count(snapshot, "failed")
            self._progress.update(self._task_id, advance=1, description=self._label())

        elif kind == ValidationEventType.VALIDATION_COMPLETED:
            processed = self._valid + self._failed
            if processed:
                self._progress.update(self._task_id, completed=processed)


class RichDashboardObserver(ValidationObserver):
    """Live dashboard: a progress bar, run totals and the top error paths.

    Errors are grouped by (path, message), so a rule failing on the same
    field across many subjects shows up as one row with its share of all
    errors.

    Example:
        observer = RichDashboardObserver()
        runner.add_observer(observer)

        with observer:
            for result in runner.run():
                ...
    """

    def __init__(
        self,
        console: Console | None = None,
        top_errors_count: int = 10,
        refresh_rate: int = 10,
    ) -> None:
        """Initialize the dashboard observer.

        Args:
            console: Rich Console to draw on. A new one is created if omitted.
            top_errors_count: Number of error rows shown.
            refresh_rate: Live display refreshes per second.
        """
        from rich.console import Console
        from rich.progress import (
            BarColumn,
            MofNCompleteColumn,
            Progress,
            SpinnerColumn,
            TextColumn,
            TimeElapsedColumn,
        )

        self._console = console or Console()
        self._top_errors_count = top_errors_count
        self._refresh_rate = refresh_rate
        self._live: Live | None = None

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("[green]✓ {task.fields[valid]}[/] [red]✗ {task.fields[failed]}[/]"),
            TimeElapsedColumn(),
            console=self._console,
        )
        self._task_id: TaskID | None = None

        self._validator_name = ""
        self._stats_snapshot: dict[str, Any] = {}
        self._error_counts: Counter[tuple[str, str]] = Counter()

    def __enter__(self) -> RichDashboardObserver:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    def start(self) -> None:
        """Start the live display."""
        from rich.live import Live

        self._live = Live(
            self._build_display(),
            console=self._console,
            refresh_per_second=self._refresh_rate,
        )
        self._live.start()

    def stop(self) -> None:
        """Stop the live display."""
        if self._live is not None:
            self._live.stop()
            self._live = None

    def on_event(self, event: ValidationEvent) -> None:
        kind = event.event_type
        data = event.data

        if kind == ValidationEventType.ERROR_ADDED:
            # redrawn with the ROW_PROCESSED that follows
            self._error_counts[(data.get("path", ""), data.get("error", ""))] += 1
            return

        if kind == ValidationEventType.VALIDATION_STARTED:
            self._validator_name = data.get("validator_name") or ""
            self._stats_snapshot = {}
            self._error_counts = Counter()
            self._task_id = self._progress.add_task(
                "Validating", total=data.get("total_hint"), valid=0, failed=0
            )

        elif kind == ValidationEventType.ROW_PROCESSED:
            self._stats_snapshot = data.get("stats_snapshot", {})
            if self._task_id is not None:
                self._progress.update(
                    self._task_id,
                    advance=1,
                    valid=_snapshot_count(self._stats_snapshot, "valid"),
                    failed=_snapshot_count(self._stats_snapshot, "failed"),
                )

        elif kind == ValidationEventType.VALIDATION_COMPLETED:
            total = _snapshot_count(self._stats_snapshot, "total")
            if self._task_id is not None and total:
                self._progress.update(self._task_id, completed=total)

        self._refresh()

    def _refresh(self) -> None:
        if self._live is not None:
            self._live.update(self._build_display())

    def _build_display(self) -> Group:
        from rich.console import Group

        return Group(self._progress, "", self._build_stats_panel(), self._build_errors_table())

    def _build_stats_panel(self) -> Panel:
        from rich.markup import escape
        from rich.panel import Panel
        from rich.table import Table

        total = _snapshot_count(self._stats_snapshot, "total")
        valid = _snapshot_count(self._stats_snapshot, "valid")
        failed = _snapshot_count(self._stats_snapshot, "failed")
        rate = valid / total * 100 if total else 0.0

        grid = Table.grid(padding=(0, 3))
        grid.add_row(
            f"[bold]Total: {total:,}[/]",
            f"[green]Valid: {valid:,}[/]",
            f"[red]Failed: {failed:,}[/]",
            f"[cyan]Errors: {sum(self._error_counts.values()):,}[/]",
            f"[bold cyan]Success Rate: {rate:.1f}%[/]",
        )

        if self._validator_name:
            title = f"[bold]{escape(_shorten(self._validator_name, 80))}[/]"
        else:
            title = "[bold]Statistics[/]"
        return Panel(grid, title=title, border_style="blue")

    def _build_errors_table(self) -> Panel:
        from rich.markup import escape
        from rich.panel import Panel
        from rich.table import Table

        table = Table(title="Top Errors", header_style="bold magenta", expand=True)
        table.add_column("Path", style="cyan", width=24)
        table.add_column("Error", style="yellow")
        table.add_column("Count", justify="right", style="red", width=10)
        table.add_column("%", justify="right", width=8)

        total_errors = sum(self._error_counts.values())
        for (path, error), count in self._error_counts.most_common(self._top_errors_count):
            table.add_row(
                _display_path(path),
                escape(_shorten(error)),
                f"{count:,}",
                f"{count / total_errors * 100:.1f}%",
            )

        if not total_errors:
            table.add_row("-", "No errors yet", "-", "-")

        return Panel(table, border_style="red")
