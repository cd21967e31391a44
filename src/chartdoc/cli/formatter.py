# src/chartdoc/cli/formatter.py
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from chartdoc.core.models import Row

# Diagnostics go to stderr so a README written to stdout stays clean
console = Console(stderr=True)


class RowFormatter:
    """
    RowFormatter: terminal rendering for the CLI.
    Shows the extracted rows and errors; never touches the README output.
    """

    def print_rows(self, rows: List[Row], title: str = "Values Parameters"):
        """Renders the extracted rows as a rich table."""
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Parameter", style="cyan")
        table.add_column("Description")
        table.add_column("Default", style="green")

        for row in rows:
            # Text cells: defaults like [a, b] are not rich markup
            table.add_row(Text(row.path), Text(row.description), Text(row.default))

        console.print(table)
        console.print(f"[dim]{len(rows)} parameters documented.[/dim]")

    def print_error(self, message: str):
        console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)

    def print_written(self, what: str, path: str):
        console.print(f"[green]✔[/green] {what} written to [bold]{escape(path)}[/bold]")
