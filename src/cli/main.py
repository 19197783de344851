"""
Main CLI entry point.
Usage: uv run elections [COMMAND]
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from config.settings import settings
from src.cli.analysis import app as analysis_app
from src.cli.dashboard import dashboard, list_elections
from src.cli.elections import app as election_app

app = typer.Typer(
    name="elections",
    help="🗳  Election results analysis — totals, shares, rankings and trends",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", "-l", help="DEBUG | INFO | WARNING | ERROR"
    ),
) -> None:
    """Every command rebuilds the store from the CSV files in the data directory."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level '{log_level}'", param_hint="--log-level")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register sub-apps
app.add_typer(election_app, name="election", help="🗳  Query a single election")
app.add_typer(analysis_app, name="analysis", help="📈 Compare elections and follow trends")

# Register top-level commands
app.command(name="dashboard")(dashboard)
app.command(name="list")(list_elections)


if __name__ == "__main__":
    app()
