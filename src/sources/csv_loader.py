"""
Election results CSV loader.

Expected layout: one header line, comma-delimited, UTF-8:

    Country,Year,Constituency,Candidate,Party,Votes,Elected
    Jordan,2016,Amman 1,Candidate A,Party X,12000,Yes

Columns are read by position, header names are not checked. The Elected
column is true for yes / true / 1 in any case; anything else is false.
Malformed rows are logged and skipped, they never reach the store.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from pydantic import ValidationError

from src.elections.models import ElectionRecord
from src.elections.store import ElectionStore, WriteStatus

logger = logging.getLogger(__name__)

COLUMNS = ("country", "year", "constituency", "candidate", "party", "votes", "elected")

_ELECTED_TOKENS = {"yes", "true", "1"}


class ElectionDataError(Exception):
    """Raised when an election data file cannot be read."""


class MalformedRowError(ElectionDataError):
    """Raised when a CSV row cannot be turned into an ElectionRecord."""


@dataclass
class LoadReport:
    """Outcome of loading one file."""

    path: Path
    rows: int = 0
    inserted: int = 0
    skipped: int = 0
    duplicates: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def parse_elected(token: str) -> bool:
    return token.strip().lower() in _ELECTED_TOKENS


def parse_row(tokens: Sequence[str]) -> ElectionRecord:
    """Map one CSV row to an ElectionRecord, or raise MalformedRowError."""
    if len(tokens) != len(COLUMNS):
        raise MalformedRowError(f"expected {len(COLUMNS)} fields, got {len(tokens)}")

    country, year, constituency, candidate, party, votes, elected = (t.strip() for t in tokens)
    try:
        year_num, votes_num = int(year), int(votes)
    except ValueError as exc:
        raise MalformedRowError(f"not a number: {exc}") from exc

    try:
        return ElectionRecord(
            country=country,
            year=year_num,
            constituency=constituency,
            candidate=candidate,
            party=party,
            votes=votes_num,
            elected=parse_elected(elected),
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise MalformedRowError(f"invalid field(s): {fields}") from exc


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def _read_rows(path: Path) -> list[tuple[int, list[str]]]:
    """Non-blank rows after the header, with their line numbers."""
    try:
        f = open(path, encoding="utf-8-sig", newline="")
    except OSError as exc:
        raise ElectionDataError(f"Cannot read {path}: {exc}") from exc

    rows: list[tuple[int, list[str]]] = []
    with f:
        reader = csv.reader(f)
        try:
            next(reader, None)  # header
            for tokens in reader:
                if tokens and any(t.strip() for t in tokens):
                    rows.append((reader.line_num, tokens))
        except (UnicodeDecodeError, csv.Error) as exc:
            raise ElectionDataError(f"Cannot read {path}: {exc}") from exc
    return rows


def load_csv(path: Path, store: ElectionStore) -> LoadReport:
    """
    Read one CSV file into the store.

    Raises ElectionDataError if the file cannot be opened or decoded; the
    whole file is read before anything is inserted, so a failed file adds
    no records. Bad rows and duplicate keys are counted in the report and
    skipped.
    """
    report = LoadReport(path=path)
    for line_num, tokens in _read_rows(path):
        report.rows += 1
        try:
            record = parse_row(tokens)
        except MalformedRowError as exc:
            report.skipped += 1
            logger.warning("%s:%d skipped: %s", path.name, line_num, exc)
            continue

        if store.insert(record) is WriteStatus.DUPLICATE_KEY:
            report.duplicates += 1
            logger.warning("%s:%d duplicate record %s", path.name, line_num, record.key)
        else:
            report.inserted += 1

    logger.info(
        "Loaded %s: %d inserted, %d skipped, %d duplicates",
        path.name, report.inserted, report.skipped, report.duplicates,
    )
    return report


def discover_files(data_dir: Path, pattern: str = "*.csv") -> list[Path]:
    """Sorted list of data files in a directory. Empty if it does not exist."""
    if not data_dir.is_dir():
        return []
    return sorted(p for p in data_dir.glob(pattern) if p.is_file())


def build_store(paths: Iterable[Path]) -> tuple[ElectionStore, list[LoadReport]]:
    """
    Bulk-load phase: build a fresh store from a set of files.
    Unreadable files are logged and reported; they do not stop the load.
    """
    store = ElectionStore()
    reports: list[LoadReport] = []
    for path in paths:
        try:
            reports.append(load_csv(path, store))
        except ElectionDataError as exc:
            logger.error("%s", exc)
            reports.append(LoadReport(path=path, error=str(exc)))
    logger.info("Election store ready: %d records", store.total_count())
    return store, reports
