#!/usr/bin/env python3
"""
rich_ui.py: Rich-based terminal display for a standardization batch.

Shows a progress bar driven by the orchestrator's progress callback, a line
per finished image, and a summary table once the batch is done.
"""

from collections import Counter
from typing import List, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..core.models import Lifecycle, QueueItem
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

STATUS_STYLES = {
    Lifecycle.PENDING: "dim",
    Lifecycle.PROCESSING: "yellow",
    Lifecycle.COMPLETED: "green",
    Lifecycle.FAILED: "red",
}


class BatchProgressDisplay:
    """Progress bar and summary for one BatchOrchestrator run.

    Use as a context manager and pass `on_progress` / `on_item_update` to the
    orchestrator.
    """

    def __init__(self, total: int, console: Optional[Console] = None, enabled: bool = True):
        self.console = console or Console()
        self.total = total
        self.enabled = enabled
        self.progress = Progress(
            SpinnerColumn("dots8"),
            TextColumn("[bold yellow]Standardizing images..."),
            BarColumn(bar_width=None),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
            disable=not enabled,
        )
        self.task_id = None

    def __enter__(self) -> "BatchProgressDisplay":
        self.progress.start()
        self.task_id = self.progress.add_task("standardize", total=100)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.progress.stop()

    def on_progress(self, percent: int) -> None:
        if self.task_id is not None:
            self.progress.update(self.task_id, completed=percent)

    def on_item_update(self, item: QueueItem) -> None:
        if not self.enabled:
            return
        if item.lifecycle is Lifecycle.COMPLETED:
            self.progress.console.print(f"[green]✓[/green] {item.name}")
        elif item.lifecycle is Lifecycle.FAILED:
            self.progress.console.print(f"[red]✗[/red] {item.name} [dim]({item.failure_reason})[/dim]")

    def print_summary(self, items: List[QueueItem]) -> None:
        """Print a per-state count table."""
        counts = Counter(item.lifecycle for item in items)
        table = Table(title="Batch summary")
        table.add_column("Status")
        table.add_column("Images", justify="right")
        for state in Lifecycle:
            if counts.get(state):
                table.add_row(f"[{STATUS_STYLES[state]}]{state.value}", str(counts[state]))
        table.add_row("[bold]total", str(len(items)))
        self.console.print(table)
