"""
Pydantic models for election results and the statistics derived from them.

Record types:
  ElectionRecord      — one candidate's result in one constituency of one election
  RecordKey           — identity key (country, year, constituency, candidate)

Derived aggregates (recomputed on every query, never stored):
  PartyStats          — votes, seats and vote share for one party in one election
  ElectionStats       — totals for one election plus its party breakdown
  PartyChange         — vote / seat delta for one party between two elections
  ComparativeAnalysis — comparison of two elections in the same country
  PartyTrendEntry     — a party's stats for one year of a trend
  ElectionSummary     — which years are loaded for a country
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class RecordKey(NamedTuple):
    """Identity key of an ElectionRecord. Unique across a store."""

    country: str
    year: int
    constituency: str
    candidate: str


class ElectionRecord(BaseModel):
    """A candidate's result in one constituency of one election."""

    model_config = ConfigDict(frozen=True)

    country: str = Field(min_length=1)
    year: int = Field(gt=0)
    constituency: str = Field(min_length=1)
    candidate: str = Field(min_length=1)
    party: str = Field(min_length=1)
    votes: int = Field(default=0, ge=0)
    elected: bool = False

    @property
    def key(self) -> RecordKey:
        return RecordKey(self.country, self.year, self.constituency, self.candidate)

    @property
    def election_key(self) -> tuple[str, int]:
        return (self.country, self.year)


# ---------------------------------------------------------------------------
# Derived aggregates
# ---------------------------------------------------------------------------


class PartyStats(BaseModel):
    """Aggregated result of one party in one election."""

    party: str
    total_votes: int = 0
    seats_won: int = 0
    vote_share: float = 0.0          # percent of all votes cast, 0–100
    candidates_count: int = 0


class ElectionStats(BaseModel):
    """Totals for a (country, year) election. All zero when nothing is loaded."""

    country: str
    year: int
    total_votes: int = 0
    total_seats: int = 0
    total_candidates: int = 0
    constituencies: int = 0
    parties: list[PartyStats] = Field(default_factory=list)


class PartyChange(BaseModel):
    party: str
    vote_change: int = 0
    seat_change: int = 0


class ComparativeAnalysis(BaseModel):
    """Change between two elections of the same country (year2 minus year1)."""

    country: str
    year1: int
    year2: int
    vote_change: int = 0
    vote_change_percent: float = 0.0
    party_changes: list[PartyChange] = Field(default_factory=list)
    new_parties: list[str] = Field(default_factory=list)
    disappeared_parties: list[str] = Field(default_factory=list)


class PartyTrendEntry(BaseModel):
    year: int
    stats: PartyStats


class ElectionSummary(BaseModel):
    """Loaded elections for a single country."""

    country: str
    years: list[int] = Field(default_factory=list)
    records: int = 0
