"""
Election results module — models, in-memory store and aggregation queries.
"""

from src.elections.models import (
    ComparativeAnalysis,
    ElectionRecord,
    ElectionStats,
    ElectionSummary,
    PartyChange,
    PartyStats,
    PartyTrendEntry,
    RecordKey,
)
from src.elections.store import ElectionStore, WriteStatus

__all__ = [
    "ComparativeAnalysis",
    "ElectionRecord",
    "ElectionStats",
    "ElectionStore",
    "ElectionSummary",
    "PartyChange",
    "PartyStats",
    "PartyTrendEntry",
    "RecordKey",
    "WriteStatus",
]
