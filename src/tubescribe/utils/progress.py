"""Progress reporting utilities using Rich.

Messages often carry caption text or provider error bodies, so they are
escaped before printing; only the prefixes here use Rich markup.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tubescribe.models.summary import SummaryResult

console = Console(stderr=True)


def _stamp() -> str:
    return f"[dim]\\[{datetime.now().strftime('%H:%M:%S')}][/dim]"


def log(message: str, *, style: str = "bold", prefix: str = "") -> None:
    """Log a timestamped message."""
    console.print(f"{_stamp()} {prefix}{escape(message)}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log a processing step."""
    console.print(
        f"{_stamp()} [bold cyan]{escape(step):<10}[/bold cyan] {escape(message)}",
        highlight=False,
    )


def log_success(message: str) -> None:
    log(message, style="", prefix="[green]✓[/green] ")


def log_warning(message: str) -> None:
    log(message, style="", prefix="[yellow]⚠[/yellow] ")


def log_error(message: str) -> None:
    log(message, style="", prefix="[red]✗[/red] ")


def show_summary_results(results: Iterable[SummaryResult], elapsed_seconds: float) -> None:
    """Render one row per provider result."""
    table = Table(title="Summaries", title_style="bold", padding=(0, 2))
    table.add_column("Provider", style="bold")
    table.add_column("Model")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")

    for result in results:
        if result.success:
            status = "[green]ok[/green]"
            detail = f"{len(result.summary)} chars"
        else:
            status = "[red]failed[/red]"
            detail = escape(result.error or "")
        table.add_row(result.provider.value, escape(result.model_name), status, detail)

    console.print(table)
    console.print(f"[dim]Finished in {elapsed_seconds:.1f}s[/dim]", highlight=False)
