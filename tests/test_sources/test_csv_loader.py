"""
Tests for src/sources/csv_loader.py — row parsing and file loading.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.elections.store import ElectionStore
from src.sources.csv_loader import (
    ElectionDataError,
    MalformedRowError,
    build_store,
    discover_files,
    load_csv,
    parse_elected,
    parse_row,
)

_HEADER = "Country,Year,Constituency,Candidate,Party,Votes,Elected\n"


def _write_csv(path: Path, *lines: str) -> Path:
    path.write_text(_HEADER + "".join(line + "\n" for line in lines), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# parse_elected / parse_row
# ---------------------------------------------------------------------------


class TestParseElected:
    @pytest.mark.parametrize("token", ["yes", "Yes", "YES", "true", "True", "1", " yes "])
    def test_truthy(self, token: str) -> None:
        assert parse_elected(token) is True

    @pytest.mark.parametrize("token", ["no", "No", "false", "0", "", "elected", "y"])
    def test_falsy(self, token: str) -> None:
        assert parse_elected(token) is False


class TestParseRow:
    def test_valid_row(self) -> None:
        r = parse_row([" C ", "2020", "K1", "A", "P1", " 1000 ", "Yes"])
        assert r.country == "C"
        assert r.year == 2020
        assert r.votes == 1000
        assert r.elected is True

    def test_too_few_fields(self) -> None:
        with pytest.raises(MalformedRowError):
            parse_row(["C", "2020", "K1"])

    def test_too_many_fields(self) -> None:
        with pytest.raises(MalformedRowError):
            parse_row(["C", "2020", "K1", "A", "P1", "10", "Yes", "extra"])

    def test_non_numeric_votes(self) -> None:
        with pytest.raises(MalformedRowError, match="not a number"):
            parse_row(["C", "2020", "K1", "A", "P1", "lots", "Yes"])

    def test_negative_votes(self) -> None:
        with pytest.raises(MalformedRowError, match="votes"):
            parse_row(["C", "2020", "K1", "A", "P1", "-5", "Yes"])

    def test_blank_candidate(self) -> None:
        with pytest.raises(MalformedRowError, match="candidate"):
            parse_row(["C", "2020", "K1", "  ", "P1", "5", "Yes"])

    def test_malformed_is_data_error(self) -> None:
        with pytest.raises(ElectionDataError):
            parse_row([])


# ---------------------------------------------------------------------------
# load_csv
# ---------------------------------------------------------------------------


class TestLoadCsv:
    def test_loads_rows(self, tmp_path: Path) -> None:
        path = _write_csv(
            tmp_path / "c_2020.csv",
            "C,2020,K1,A,P1,1000,Yes",
            "C,2020,K2,B,P1,2000,yes",
            "C,2020,K3,D,P2,1500,No",
        )
        store = ElectionStore()
        report = load_csv(path, store)
        assert report.ok
        assert report.rows == 3
        assert report.inserted == 3
        assert store.total_count() == 3
        assert store.lookup("C", 2020, "K2", "B").elected is True

    def test_header_is_skipped(self, tmp_path: Path) -> None:
        path = _write_csv(tmp_path / "only_header.csv")
        store = ElectionStore()
        report = load_csv(path, store)
        assert report.rows == 0
        assert store.total_count() == 0

    def test_malformed_rows_skipped(self, tmp_path: Path) -> None:
        path = _write_csv(
            tmp_path / "bad.csv",
            "C,2020,K1,A,P1,1000,Yes",
            "C,twenty,K2,B,P1,2000,Yes",
            "C,2020,K3",
            "",
            "C,2020,K4,E,P2,300,No",
        )
        store = ElectionStore()
        report = load_csv(path, store)
        assert report.rows == 4
        assert report.inserted == 2
        assert report.skipped == 2
        assert store.total_count() == 2

    def test_duplicates_counted(self, tmp_path: Path) -> None:
        path = _write_csv(
            tmp_path / "dup.csv",
            "C,2020,K1,A,P1,1000,Yes",
            "C,2020,K1,A,P2,5,No",
        )
        store = ElectionStore()
        report = load_csv(path, store)
        assert report.inserted == 1
        assert report.duplicates == 1
        assert store.lookup("C", 2020, "K1", "A").party == "P1"

    def test_quoted_fields(self, tmp_path: Path) -> None:
        path = _write_csv(tmp_path / "quoted.csv", 'C,2020,"North, Upper",A,"Party, Inc",10,Yes')
        store = ElectionStore()
        load_csv(path, store)
        assert store.lookup("C", 2020, "North, Upper", "A").party == "Party, Inc"

    def test_bom_is_tolerated(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.csv"
        path.write_text("\ufeff" + _HEADER + "C,2020,K1,A,P1,10,Yes\n", encoding="utf-8")
        store = ElectionStore()
        load_csv(path, store)
        assert store.lookup("C", 2020, "K1", "A") is not None

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ElectionDataError):
            load_csv(tmp_path / "missing.csv", ElectionStore())

    def test_undecodable_file_raises_and_inserts_nothing(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.csv"
        path.write_bytes(_HEADER.encode() + b"C,2020,K1,A,P1,10,Yes\nC,2020,K2,\xff\xfe,P1,5,No\n")
        store = ElectionStore()
        with pytest.raises(ElectionDataError, match="Cannot read"):
            load_csv(path, store)
        assert store.total_count() == 0


# ---------------------------------------------------------------------------
# discover_files / build_store
# ---------------------------------------------------------------------------


class TestBuildStore:
    def test_discover_sorted(self, tmp_path: Path) -> None:
        _write_csv(tmp_path / "b.csv")
        _write_csv(tmp_path / "a.csv")
        (tmp_path / "notes.txt").write_text("x")
        assert [p.name for p in discover_files(tmp_path)] == ["a.csv", "b.csv"]

    def test_discover_missing_directory(self, tmp_path: Path) -> None:
        assert discover_files(tmp_path / "nope") == []

    def test_build_from_several_files(self, tmp_path: Path) -> None:
        a = _write_csv(tmp_path / "a.csv", "C,2020,K1,A,P1,10,Yes")
        b = _write_csv(tmp_path / "b.csv", "C,2021,K1,A,P1,20,Yes")
        store, reports = build_store([a, b])
        assert store.years("C") == [2020, 2021]
        assert all(r.ok for r in reports)

    def test_missing_file_reported_not_fatal(self, tmp_path: Path) -> None:
        a = _write_csv(tmp_path / "a.csv", "C,2020,K1,A,P1,10,Yes")
        store, reports = build_store([tmp_path / "missing.csv", a])
        assert store.total_count() == 1
        assert not reports[0].ok
        assert reports[1].ok

    def test_undecodable_file_reported_not_fatal(self, tmp_path: Path) -> None:
        good = _write_csv(tmp_path / "a.csv", "C,2020,K1,A,P1,10,Yes")
        bad = tmp_path / "b.csv"
        bad.write_bytes(_HEADER.encode() + b"C,2021,K1,A,P1,10,Yes\nC,2021,K2,\xff,P1,5,No\n")
        store, reports = build_store([good, bad])
        assert reports[0].ok
        assert not reports[1].ok
        assert "b.csv" in reports[1].error
        assert store.total_count() == 1
        assert store.years("C") == [2020]

    def test_bundled_data(self, data_dir: Path) -> None:
        store, reports = build_store(discover_files(data_dir))
        assert len(reports) >= 2
        assert all(r.ok and r.skipped == 0 for r in reports)
        assert store.years("Examplia") == [2016, 2020]
