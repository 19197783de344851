"""
Dashboard and catalogue commands — what data is loaded.
  elections dashboard   — files, row counts and loaded elections
  elections list        — countries and their election years
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from src.cli.common import console, load, load_store, print_json


def dashboard(
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d", help="Directory of election CSV files"),
) -> None:
    """Show a quick overview of the loaded election data."""
    store, reports = load(data_dir)
    summary = store.stats()

    console.print()
    console.print(
        Panel(
            "[bold white]🗳  Election Results Analysis[/bold white]\n"
            "[dim]Totals, party shares, rankings, comparisons and trends[/dim]",
            border_style="blue",
        )
    )

    store_lines = (
        f"[cyan]Records:[/cyan]    [bold]{summary['records']:,}[/bold]\n"
        f"[magenta]Elections:[/magenta]  [bold]{summary['elections']}[/bold]\n"
        f"[yellow]Countries:[/yellow]  [bold]{summary['countries']}[/bold]"
    )
    file_lines = "\n".join(
        f"[green]✓[/green] {r.path.name} [dim]({r.inserted} rows)[/dim]"
        if r.ok
        else f"[red]✗[/red] {r.path.name}"
        for r in reports
    ) or "[dim]No files loaded[/dim]"

    console.print(
        Columns([
            Panel(store_lines, title="📦 Store", border_style="cyan", width=35),
            Panel(file_lines, title="📄 Files", border_style="green", width=45),
        ])
    )

    problems = [r for r in reports if r.skipped or r.duplicates or not r.ok]
    if problems:
        table = Table(title="⚠ Load problems", show_header=True, header_style="bold")
        table.add_column("File")
        table.add_column("Skipped", justify="right", style="yellow")
        table.add_column("Duplicates", justify="right", style="yellow")
        table.add_column("Error", style="red")
        for r in problems:
            table.add_row(r.path.name, str(r.skipped), str(r.duplicates), r.error or "")
        console.print(table)

    console.print()
    console.print(
        "[dim]Commands: [bold]list[/bold] · [bold]election stats[/bold] · "
        "[bold]election top[/bold] · [bold]analysis compare[/bold] · "
        "[bold]analysis trend[/bold][/dim]\n"
    )


def list_elections(
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """List every country and the election years loaded for it."""
    store = load_store(data_dir)
    elections = store.available_elections()

    if as_json:
        print_json(elections)
        return

    table = Table(title="🌍 Available elections", show_header=True, header_style="bold blue")
    table.add_column("Country", style="bold cyan")
    table.add_column("Years")
    table.add_column("Records", justify="right", style="yellow")
    for summary in elections:
        table.add_row(
            summary.country,
            ", ".join(str(y) for y in summary.years),
            f"{summary.records:,}",
        )
    console.print(table)
