"""
Single-election CLI commands.
  elections election stats     — totals and party breakdown
  elections election parties   — party ranking by votes or seats
  elections election seats     — seat distribution
  elections election top       — top-N candidates by votes
  elections election winners   — elected candidates
  elections election lookup    — one candidate's record
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.panel import Panel
from rich.table import Table

from config.settings import settings
from src.cli.common import console, load_store, print_json
from src.elections import analyzer
from src.elections.models import ElectionRecord, PartyStats

app = typer.Typer(
    help="🗳  Query a single election (country + year)",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _party_table(title: str, parties: list[PartyStats]) -> Table:
    table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Party", style="bold cyan")
    table.add_column("Votes", justify="right", style="yellow")
    table.add_column("Share", justify="right")
    table.add_column("Seats", justify="right", style="green")
    table.add_column("Candidates", justify="right")
    for rank, ps in enumerate(parties, start=1):
        table.add_row(
            str(rank),
            ps.party,
            f"{ps.total_votes:,}",
            f"{ps.vote_share:.2f}%",
            str(ps.seats_won),
            str(ps.candidates_count),
        )
    return table


def _candidate_table(title: str, records: list[ElectionRecord]) -> Table:
    table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Candidate", style="bold")
    table.add_column("Party", style="cyan")
    table.add_column("Constituency")
    table.add_column("Votes", justify="right", style="yellow")
    table.add_column("Elected", justify="center")
    for rank, r in enumerate(records, start=1):
        table.add_row(
            str(rank),
            r.candidate,
            r.party,
            r.constituency,
            f"{r.votes:,}",
            "[green]✓[/green]" if r.elected else "[dim]—[/dim]",
        )
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def stats(
    country: str = typer.Argument(..., help="Country name as it appears in the data"),
    year: int = typer.Argument(..., help="Election year"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d", help="Directory of election CSV files"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Show totals and the party breakdown for one election."""
    store = load_store(data_dir)
    result = analyzer.election_stats(store, country, year)

    if as_json:
        print_json(result)
        return

    console.print(
        Panel(
            f"[cyan]Total votes:[/cyan]     [bold]{result.total_votes:,}[/bold]\n"
            f"[green]Seats filled:[/green]    [bold]{result.total_seats}[/bold]\n"
            f"[magenta]Candidates:[/magenta]      [bold]{result.total_candidates}[/bold]\n"
            f"[yellow]Constituencies:[/yellow]  [bold]{result.constituencies}[/bold]\n"
            f"[blue]Parties:[/blue]         [bold]{len(result.parties)}[/bold]",
            title=f"📊 {country} {year}",
            border_style="blue",
        )
    )
    if result.parties:
        console.print(_party_table("Party results", result.parties))


@app.command()
def parties(
    country: str = typer.Argument(...),
    year: int = typer.Argument(...),
    by: str = typer.Option("votes", "--by", "-b", help="Ranking: votes | seats"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Rank parties by votes (default) or by seats won."""
    rankers = {
        "votes": analyzer.rank_parties_by_votes,
        "seats": analyzer.rank_parties_by_seats,
    }
    if by not in rankers:
        console.print(f"[red]Unknown ranking '{by}'. Choose from: {', '.join(rankers)}[/red]")
        raise typer.Exit(1)

    store = load_store(data_dir)
    result = rankers[by](store, country, year)

    if as_json:
        print_json(result)
        return
    console.print(_party_table(f"🏛  {country} {year} — parties by {by}", result))


@app.command()
def seats(
    country: str = typer.Argument(...),
    year: int = typer.Argument(...),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show how many seats each party won."""
    store = load_store(data_dir)
    distribution = analyzer.seat_distribution(store, country, year)

    if as_json:
        print_json(distribution)
        return

    table = Table(title=f"🪑 {country} {year} — seat distribution", box=box.ROUNDED)
    table.add_column("Party", style="bold cyan")
    table.add_column("Seats", justify="right", style="green")
    for party, count in distribution.items():
        table.add_row(party, str(count))
    table.add_section()
    table.add_row("[bold]TOTAL[/bold]", f"[bold]{sum(distribution.values())}[/bold]")
    console.print(table)


@app.command()
def top(
    country: str = typer.Argument(...),
    year: int = typer.Argument(...),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of candidates"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """List the candidates with the most votes."""
    n = settings.default_top_n if limit is None else limit
    store = load_store(data_dir)
    result = analyzer.top_candidates(store, country, year, n)

    if as_json:
        print_json(result)
        return
    console.print(_candidate_table(f"🏆 {country} {year} — top {n} candidates", result))


@app.command()
def winners(
    country: str = typer.Argument(...),
    year: int = typer.Argument(...),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """List every elected candidate, highest vote first."""
    store = load_store(data_dir)
    result = analyzer.winning_candidates(store, country, year)

    if as_json:
        print_json(result)
        return
    console.print(_candidate_table(f"✅ {country} {year} — elected candidates", result))


@app.command()
def lookup(
    country: str = typer.Argument(...),
    year: int = typer.Argument(...),
    constituency: str = typer.Argument(...),
    candidate: str = typer.Argument(...),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show a single candidate's result."""
    store = load_store(data_dir)
    record = store.lookup(country, year, constituency, candidate)

    if record is None:
        console.print(
            f"[yellow]No record for '{candidate}' in {constituency} ({country} {year})[/yellow]"
        )
        raise typer.Exit(1)

    if as_json:
        print_json(record)
        return
    console.print(_candidate_table(f"{country} {year} — {constituency}", [record]))
