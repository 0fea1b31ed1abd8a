from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich import box


console = Console(highlight=False)


def print_warning(text: str) -> None:
    console.print(text, style="bold yellow", markup=False)


def print_error(text: str) -> None:
    console.print(text, style="bold red", markup=False)


def print_success(text: str) -> None:
    console.print(text, style="bold green", markup=False)


def print_table(title: str, columns: Sequence[str], rows: Iterable[Sequence]) -> None:
    """Render rows as a rounded table; every cell is shown as plain text."""
    table = Table(title=title, box=box.ROUNDED, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(Text(str(cell)) for cell in row))
    console.print(table)
