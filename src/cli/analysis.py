"""
Cross-election analysis commands.
  elections analysis compare   — compare two years of one country
  elections analysis trend     — follow one party across years
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.panel import Panel
from rich.table import Table

from src.cli.common import console, load_store, print_json
from src.elections import analyzer

app = typer.Typer(
    help="📈 Compare elections and follow party trends",
    no_args_is_help=True,
)


def _signed(value: int) -> str:
    if value > 0:
        return f"[green]+{value:,}[/green]"
    if value < 0:
        return f"[red]{value:,}[/red]"
    return "[dim]0[/dim]"


@app.command()
def compare(
    country: str = typer.Argument(..., help="Country name as it appears in the data"),
    year1: int = typer.Argument(..., help="Baseline year"),
    year2: int = typer.Argument(..., help="Year compared against the baseline"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d", help="Directory of election CSV files"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Compare two elections of the same country."""
    store = load_store(data_dir)
    result = analyzer.compare_elections(store, country, year1, year2)

    if as_json:
        print_json(result)
        return

    console.print(
        Panel(
            f"[cyan]Vote change:[/cyan] {_signed(result.vote_change)} "
            f"({result.vote_change_percent:+.2f}%)\n"
            f"[green]New parties:[/green] {', '.join(result.new_parties) or '—'}\n"
            f"[red]Disappeared parties:[/red] {', '.join(result.disappeared_parties) or '—'}",
            title=f"🔄 {country}: {year1} → {year2}",
            border_style="blue",
        )
    )

    if result.party_changes:
        table = Table(title="Party changes", box=box.ROUNDED, header_style="bold blue")
        table.add_column("Party", style="bold cyan")
        table.add_column("Vote change", justify="right")
        table.add_column("Seat change", justify="right")
        for change in result.party_changes:
            table.add_row(change.party, _signed(change.vote_change), _signed(change.seat_change))
        console.print(table)


@app.command()
def trend(
    country: str = typer.Argument(...),
    party: str = typer.Argument(..., help="Party name as it appears in the data"),
    years: Optional[list[int]] = typer.Option(
        None, "--year", "-y", help="Year to include (repeatable). Default: every loaded year"
    ),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show a party's votes, share and seats across elections."""
    store = load_store(data_dir)
    selected = years or store.years(country)
    result = analyzer.party_trend(store, country, party, selected)

    if as_json:
        print_json(result)
        return

    if not result:
        console.print(f"[yellow]No results for '{party}' in {country}[/yellow]")
        return

    table = Table(title=f"📈 {party} in {country}", box=box.ROUNDED, header_style="bold blue")
    table.add_column("Year", style="bold")
    table.add_column("Votes", justify="right", style="yellow")
    table.add_column("Share", justify="right")
    table.add_column("Seats", justify="right", style="green")
    table.add_column("Candidates", justify="right")
    for entry in result:
        table.add_row(
            str(entry.year),
            f"{entry.stats.total_votes:,}",
            f"{entry.stats.vote_share:.2f}%",
            str(entry.stats.seats_won),
            str(entry.stats.candidates_count),
        )
    console.print(table)
