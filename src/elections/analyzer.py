"""
Aggregation queries over an ElectionStore.

Every function reads the store and builds its result from scratch; nothing
is cached and nothing in the store is modified. Orderings always carry a
name-based tie-break so identical data gives identical output.
"""

from __future__ import annotations

from typing import Iterable

from src.elections.models import (
    ComparativeAnalysis,
    ElectionRecord,
    ElectionStats,
    PartyChange,
    PartyStats,
    PartyTrendEntry,
)
from src.elections.store import ElectionStore


# ── Totals ────────────────────────────────────────────────────────────────────

def _sum_votes(records: Iterable[ElectionRecord]) -> int:
    return sum(r.votes for r in records)


def _count_seats(records: Iterable[ElectionRecord]) -> int:
    return sum(1 for r in records if r.elected)


def total_votes(store: ElectionStore, country: str, year: int) -> int:
    return _sum_votes(store.records_for_election(country, year))


def total_seats(store: ElectionStore, country: str, year: int) -> int:
    return _count_seats(store.records_for_election(country, year))


def _vote_rank(ps: PartyStats) -> tuple[int, str]:
    return (-ps.total_votes, ps.party)


def _share(part: int, whole: int) -> float:
    return part * 100.0 / whole if whole > 0 else 0.0


# ── Party statistics ──────────────────────────────────────────────────────────

def _group_by_party(records: list[ElectionRecord]) -> list[PartyStats]:
    total = _sum_votes(records)
    grouped: dict[str, PartyStats] = {}
    for r in records:
        ps = grouped.get(r.party)
        if ps is None:
            ps = grouped[r.party] = PartyStats(party=r.party)
        ps.total_votes += r.votes
        ps.candidates_count += 1
        if r.elected:
            ps.seats_won += 1
    for ps in grouped.values():
        ps.vote_share = _share(ps.total_votes, total)
    return list(grouped.values())


def party_vote_shares(store: ElectionStore, country: str, year: int) -> list[PartyStats]:
    """
    Per-party votes, seats, candidate count and vote share.
    Sorted by votes (desc), then party name.
    """
    parties = _group_by_party(store.records_for_election(country, year))
    parties.sort(key=_vote_rank)
    return parties


def rank_parties_by_votes(store: ElectionStore, country: str, year: int) -> list[PartyStats]:
    return party_vote_shares(store, country, year)


def rank_parties_by_seats(store: ElectionStore, country: str, year: int) -> list[PartyStats]:
    """Sorted by seats (desc), then votes (desc), then party name."""
    parties = _group_by_party(store.records_for_election(country, year))
    parties.sort(key=lambda ps: (-ps.seats_won, -ps.total_votes, ps.party))
    return parties


def seat_distribution(store: ElectionStore, country: str, year: int) -> dict[str, int]:
    """
    Seats per party, counting elected records only.
    Parties without a seat are left out. Ordered by seats (desc), then name.
    """
    seats: dict[str, int] = {}
    for r in store.records_for_election(country, year):
        if r.elected:
            seats[r.party] = seats.get(r.party, 0) + 1
    return dict(sorted(seats.items(), key=lambda item: (-item[1], item[0])))


def election_stats(store: ElectionStore, country: str, year: int) -> ElectionStats:
    """Totals plus party breakdown. Zero-valued for an election with no records."""
    records = store.records_for_election(country, year)
    return ElectionStats(
        country=country,
        year=year,
        total_votes=_sum_votes(records),
        total_seats=_count_seats(records),
        total_candidates=len(records),
        constituencies=len({r.constituency for r in records}),
        parties=sorted(_group_by_party(records), key=_vote_rank),
    )


# ── Candidates ────────────────────────────────────────────────────────────────

def _by_votes(records: Iterable[ElectionRecord]) -> list[ElectionRecord]:
    return sorted(records, key=lambda r: (-r.votes, r.candidate))


def top_candidates(
    store: ElectionStore,
    country: str,
    year: int,
    n: int,
) -> list[ElectionRecord]:
    """The n highest-polling candidates, ties broken by candidate name."""
    if n <= 0:
        return []
    return _by_votes(store.records_for_election(country, year))[:n]


def winning_candidates(store: ElectionStore, country: str, year: int) -> list[ElectionRecord]:
    return _by_votes(r for r in store.records_for_election(country, year) if r.elected)


# ── Comparisons & trends ──────────────────────────────────────────────────────

def compare_elections(
    store: ElectionStore,
    country: str,
    year1: int,
    year2: int,
) -> ComparativeAnalysis:
    """
    Compare year2 against year1.

    party_changes covers every party seen in either year (a party missing
    from one year counts as zero votes and seats there), ordered by name.
    new_parties / disappeared_parties keep the vote ranking of their year.
    """
    stats1 = election_stats(store, country, year1)
    stats2 = election_stats(store, country, year2)

    vote_change = stats2.total_votes - stats1.total_votes

    before = {ps.party: ps for ps in stats1.parties}
    after = {ps.party: ps for ps in stats2.parties}

    changes = []
    for party in sorted(before.keys() | after.keys()):
        old = before.get(party) or PartyStats(party=party)
        new = after.get(party) or PartyStats(party=party)
        changes.append(
            PartyChange(
                party=party,
                vote_change=new.total_votes - old.total_votes,
                seat_change=new.seats_won - old.seats_won,
            )
        )

    return ComparativeAnalysis(
        country=country,
        year1=year1,
        year2=year2,
        vote_change=vote_change,
        vote_change_percent=_share(vote_change, stats1.total_votes),
        party_changes=changes,
        new_parties=[ps.party for ps in stats2.parties if ps.party not in before],
        disappeared_parties=[ps.party for ps in stats1.parties if ps.party not in after],
    )


def party_trend(
    store: ElectionStore,
    country: str,
    party: str,
    years: Iterable[int],
) -> list[PartyTrendEntry]:
    """
    A party's stats for each requested year, in the order given.
    Years in which the party fielded no candidates are omitted.
    """
    trend: list[PartyTrendEntry] = []
    for year in years:
        for ps in party_vote_shares(store, country, year):
            if ps.party == party:
                trend.append(PartyTrendEntry(year=year, stats=ps))
                break
    return trend
