"""
In-memory multi-index store for election records.

Structures:
  _records          — primary sequence, insertion order
  _by_key           — (country, year, constituency, candidate) → position
  _by_election      — (country, year)                          → positions
  _by_party         — (country, year, party)                   → positions
  _by_constituency  — (country, year, constituency)            → positions

Position lists are kept ascending, so every lookup returns records in the
order they were inserted. The store is rebuilt from source files on every
start; nothing is persisted.
"""

from __future__ import annotations

import bisect
import logging
import threading
from enum import Enum
from typing import Iterable, Optional

from pydantic import ValidationError

from src.elections.models import ElectionRecord, ElectionSummary, RecordKey

logger = logging.getLogger(__name__)


class WriteStatus(str, Enum):
    """Outcome of a store mutation. Failures leave the store unchanged."""

    OK = "ok"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    INVALID = "invalid"

    @property
    def ok(self) -> bool:
        return self is WriteStatus.OK


def _revalidate(record: ElectionRecord) -> Optional[ElectionRecord]:
    """
    Re-check a record before it is stored. model_copy(update=...) and
    model_construct() skip validation, so a frozen instance can still hold
    bad values.
    """
    try:
        return ElectionRecord.model_validate(record.model_dump())
    except ValidationError as exc:
        logger.warning("Invalid election record rejected: %s", exc.errors()[0]["msg"])
        return None


# ---------------------------------------------------------------------------
# ElectionStore
# ---------------------------------------------------------------------------


class ElectionStore:
    """
    Owns every loaded ElectionRecord plus the secondary indices over them.

    Records are frozen pydantic models, so the objects handed out by queries
    cannot be used to change stored state. All mutators and readers take the
    same lock; an insert touches the primary sequence and all four indices
    and readers never see a half-applied insert.

    Usage::

        store = ElectionStore()
        store.insert(ElectionRecord(country="C", year=2020, constituency="K1",
                                    candidate="A", party="P1", votes=1000,
                                    elected=True))
        store.records_for_election("C", 2020)
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: list[ElectionRecord] = []
        self._by_key: dict[RecordKey, int] = {}
        self._by_election: dict[tuple[str, int], list[int]] = {}
        self._by_party: dict[tuple[str, int, str], list[int]] = {}
        self._by_constituency: dict[tuple[str, int, str], list[int]] = {}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, record: ElectionRecord) -> WriteStatus:
        """
        Add a record. Returns DUPLICATE_KEY if its identity key is taken and
        INVALID if the record fails validation.
        """
        record = _revalidate(record)
        if record is None:
            return WriteStatus.INVALID
        key = record.key
        with self._lock:
            if key in self._by_key:
                return WriteStatus.DUPLICATE_KEY

            pos = len(self._records)
            self._records.append(record)
            self._by_key[key] = pos
            self._by_election.setdefault((record.country, record.year), []).append(pos)
            self._by_party.setdefault(
                (record.country, record.year, record.party), []
            ).append(pos)
            self._by_constituency.setdefault(
                (record.country, record.year, record.constituency), []
            ).append(pos)
        return WriteStatus.OK

    def insert_many(self, records: Iterable[ElectionRecord]) -> int:
        """Insert a batch of records. Returns the number actually stored."""
        saved = 0
        for record in records:
            status = self.insert(record)
            if status.ok:
                saved += 1
            else:
                logger.warning("Election record %s skipped: %s", record.key, status.value)
        return saved

    def update(self, record: ElectionRecord) -> WriteStatus:
        """
        Replace the stored record that has the same identity key.

        Only party, votes and elected can differ; the other fields are the
        key itself. A party change moves the record between party buckets.
        Returns INVALID without touching the store if the record fails
        validation.
        """
        record = _revalidate(record)
        if record is None:
            return WriteStatus.INVALID
        key = record.key
        with self._lock:
            pos = self._by_key.get(key)
            if pos is None:
                return WriteStatus.NOT_FOUND

            old = self._records[pos]
            if old.party != record.party:
                old_bucket_key = (old.country, old.year, old.party)
                old_bucket = self._by_party[old_bucket_key]
                old_bucket.remove(pos)
                if not old_bucket:
                    del self._by_party[old_bucket_key]
                new_bucket = self._by_party.setdefault(
                    (record.country, record.year, record.party), []
                )
                bisect.insort(new_bucket, pos)
            self._records[pos] = record
        return WriteStatus.OK

    def clear(self) -> None:
        """Drop every record and every index."""
        with self._lock:
            self._records.clear()
            self._by_key.clear()
            self._by_election.clear()
            self._by_party.clear()
            self._by_constituency.clear()
        logger.debug("Election store cleared")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def lookup(
        self,
        country: str,
        year: int,
        constituency: str,
        candidate: str,
    ) -> Optional[ElectionRecord]:
        with self._lock:
            pos = self._by_key.get(RecordKey(country, year, constituency, candidate))
            return self._records[pos] if pos is not None else None

    def records_for_election(self, country: str, year: int) -> list[ElectionRecord]:
        return self._collect(self._by_election, (country, year))

    def records_for_party(self, country: str, year: int, party: str) -> list[ElectionRecord]:
        return self._collect(self._by_party, (country, year, party))

    def records_for_constituency(
        self, country: str, year: int, constituency: str
    ) -> list[ElectionRecord]:
        return self._collect(self._by_constituency, (country, year, constituency))

    def total_count(self) -> int:
        return len(self._records)

    def all_records(self) -> tuple[ElectionRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        return self.total_count()

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    def countries(self) -> list[str]:
        with self._lock:
            return sorted({country for country, _ in self._by_election})

    def years(self, country: str) -> list[int]:
        with self._lock:
            return sorted(year for c, year in self._by_election if c == country)

    def available_elections(self) -> list[ElectionSummary]:
        """One summary per country, countries and years ascending."""
        with self._lock:
            summaries: dict[str, ElectionSummary] = {}
            for (country, year), positions in sorted(self._by_election.items()):
                summary = summaries.setdefault(country, ElectionSummary(country=country))
                summary.years.append(year)
                summary.records += len(positions)
            return list(summaries.values())

    def stats(self) -> dict[str, int]:
        """Return record / election / country counts."""
        with self._lock:
            return {
                "records": len(self._records),
                "elections": len(self._by_election),
                "countries": len({country for country, _ in self._by_election}),
            }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _collect(self, index: dict, key: tuple) -> list[ElectionRecord]:
        with self._lock:
            return [self._records[pos] for pos in index.get(key, ())]
