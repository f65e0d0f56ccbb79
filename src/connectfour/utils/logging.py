"""
Logging utilities with rich formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Any

from rich.console import Console
from rich.table import Table
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    MofNCompleteColumn,
)
from rich.panel import Panel


console = Console()


@dataclass
class SearchMetrics:
    """Metrics for one move decision."""

    rows: int
    cols: int
    player: int
    iterations: int
    move: int
    elapsed: float
    visit_counts: dict[int, int] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    @property
    def iterations_per_second(self) -> float:
        return self.iterations / self.elapsed if self.elapsed > 0 else 0.0


class Logger:
    """
    Search logger with rich output and optional JSON logging.

    Args:
        log_dir: Directory for JSONL log files (no file is written if None)
        verbose: Whether to print to console
    """

    def __init__(self, log_dir: Optional[str] = None, verbose: bool = True):
        self.verbose = verbose
        self.log_file: Optional[Path] = None

        if log_dir is not None:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file = path / f"search_{timestamp}.jsonl"

        self.metrics_history: list[SearchMetrics] = []

    def log_search(self, metrics: SearchMetrics) -> None:
        """Log metrics for one search."""
        self.metrics_history.append(metrics)

        if self.log_file is not None:
            record = asdict(metrics)
            # JSON object keys must be strings
            record["visit_counts"] = {str(k): v for k, v in metrics.visit_counts.items()}
            with open(self.log_file, "a") as f:
                f.write(json.dumps(record) + "\n")

        if self.verbose:
            self._print_search(metrics)

    def _print_search(self, m: SearchMetrics) -> None:
        """Print search summary to console."""
        table = Table(title=f"Player {m.player} plays column {m.move}", show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Grid", f"{m.rows}x{m.cols}")
        table.add_row("Iterations", str(m.iterations))
        table.add_row("Time", f"{m.elapsed:.2f}s")
        table.add_row("Iter/sec", f"{m.iterations_per_second:.0f}")
        visits = " ".join(f"{col}:{n}" for col, n in sorted(m.visit_counts.items()))
        table.add_row("Visits", visits)

        console.print(table)

    def log_message(self, message: str, style: str = "white") -> None:
        """Log a message."""
        if self.verbose:
            console.print(f"[{style}]{message}[/]")

    def log_error(self, message: str) -> None:
        """Log error message."""
        self.log_message(message, "red")


def create_progress() -> Progress:
    """Create a rich progress bar with elapsed/remaining time."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        transient=False,
    )


def print_config(config: Any) -> None:
    """Print configuration in a nice format."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    def add_dict(d: dict, prefix: str = "") -> None:
        for k, v in d.items():
            key = f"{prefix}{k}" if prefix else k
            if isinstance(v, dict):
                add_dict(v, f"{key}.")
            else:
                table.add_row(key, str(v))

    add_dict(asdict(config))
    console.print(table)


def print_board(board_str: str, title: str = "Board") -> None:
    """Print a game board in a panel."""
    console.print(Panel(board_str, title=title, border_style="blue"))
