"""Shared Rich console for build-common CLI output."""

from rich.console import Console
from rich.table import Table

console = Console()


def success(message: str, console: Console = console) -> None:
    """Print a success message in green."""
    console.print(f"[green]{message}[/green]")


def task_table(title: str, rows: list[tuple[str, str]]) -> Table:
    """Build a two-column table of task names and descriptions."""
    table = Table(title=title, title_justify="left", show_header=False, box=None)
    table.add_column("task", style="bold")
    table.add_column("description")
    for name, description in rows:
        table.add_row(name, description)
    return table
