"""Run report for tiering results."""

import json
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from tierfix.stores.tiering.base import TieringConfig, TieringResult


@dataclass
class RunReport:
    """Summary of one tiering run."""

    config: TieringConfig
    result: TieringResult

    def __str__(self) -> str:
        """Return a formatted string representation using Rich."""
        console = Console(force_terminal=True, width=80)
        with console.capture() as capture:
            self.print(console)
        return capture.get()

    def print(self, console: Console) -> None:
        """Print the report to a Rich console."""
        title = "tierfix report"
        if self.result.dry_run:
            title += " (dry run)"

        console.print()
        console.print(f"[bold]{title}[/bold]")
        console.print("━" * 52)

        table = Table(show_header=True, header_style="bold")
        table.add_column("Container", style="cyan")
        table.add_column("Target")
        table.add_column("Scanned", justify="right")
        table.add_column("Transitioned", justify="right")
        table.add_column("Skipped", justify="right")
        table.add_column("Failed", justify="right")
        table.add_row(
            self.config.container,
            self.config.target_tier.label,
            f"{self.result.items_scanned:,}",
            f"{self.result.items_transitioned:,}",
            f"{self.result.items_skipped:,}",
            f"{len(self.result.errors):,}",
        )
        console.print(table)

        if self.result.errors:
            console.print(f"[red]First error: {self.result.first_error}[/red]")
        else:
            console.print("[green]✓ Completed without errors[/green]")
        console.print(f"Duration: {self.result.duration_seconds:.2f}s")
        console.print()

    def to_json(self) -> str:
        return json.dumps(
            {"config": self.config.to_dict(), "result": self.result.to_dict()},
            indent=2,
        )
