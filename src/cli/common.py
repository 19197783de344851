"""
Helpers shared by the CLI commands: building the store and JSON output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel
from rich.console import Console

from config.settings import settings
from src.elections.store import ElectionStore
from src.sources.csv_loader import LoadReport, build_store, discover_files

console = Console()
err_console = Console(stderr=True)


def load(data_dir: Optional[Path]) -> tuple[ElectionStore, list[LoadReport]]:
    """Build a fresh store from every CSV file in the data directory."""
    dir_path = data_dir or settings.data_dir
    files = discover_files(dir_path, settings.file_pattern)
    if not files:
        err_console.print(f"[yellow]No election files found in {dir_path}[/yellow]")
    return build_store(files)


def load_store(data_dir: Optional[Path]) -> ElectionStore:
    store, _ = load(data_dir)
    return store


def print_json(data: Any) -> None:
    """Print a model, a list of models, or plain data as JSON."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [d.model_dump(mode="json") if isinstance(d, BaseModel) else d for d in data]
    console.print_json(data=data)
