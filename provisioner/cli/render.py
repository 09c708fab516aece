"""
Table Rendering.

Commands hand headers and rows to a TableRenderer and never touch Rich
directly, so output formatting can be tested on its own.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol

from rich.console import Console
from rich.table import Table
from rich.text import Text


class TableRenderer(Protocol):
    def render(
        self,
        headers: Sequence[str],
        rows: Iterable[Sequence[str]],
        title: str | None = None,
    ) -> None: ...


class RichTableRenderer:
    """Render tables with Rich on stdout. Cell text is printed literally."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(
        self,
        headers: Sequence[str],
        rows: Iterable[Sequence[str]],
        title: str | None = None,
    ) -> None:
        table = Table(title=title, show_header=True)
        for i, header in enumerate(headers):
            table.add_column(header, style="cyan" if i == 0 else None)
        for row in rows:
            # Cells are API data, never markup
            table.add_row(*(Text(cell) for cell in row))
        self.console.print(table)


def format_value(value: object) -> str:
    """
    Format a scalar for a table cell.

    Integral floats lose their trailing .0 (2.0 -> "2"); everything else
    uses str().
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
