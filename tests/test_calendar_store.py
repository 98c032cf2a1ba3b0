"""Tests for loading and caching country datasets."""

import threading
from datetime import date

import pytest
from pydantic import ValidationError

from holiday_calendar.services import CalendarDataError, CalendarStore


class TestSupports:
    def test_supported_code_any_case(self, store):
        assert store.supports("tl")
        assert store.supports("TL")

    def test_unsupported_and_empty(self, store):
        assert not store.supports("xx")
        assert not store.supports("")


class TestLoad:
    def test_load_parses_calendar(self, store):
        calendar = store.load("tl")
        assert calendar.name == "Testland"
        assert calendar.region_codes == ("AA", "BB", "CC")
        assert sorted(calendar.years) == [2025, 2026]
        assert calendar.years[2025][0].date == date(2025, 1, 1)
        assert calendar.years[2025][0].regions == ("all",)

    def test_load_is_case_insensitive(self, store):
        assert store.load("TL") == store.load("tl")

    def test_unsupported_code_never_reads_disk(self, store, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("dataset access attempted")

        monkeypatch.setattr(store, "_read", fail)
        assert store.load("xx") is None

    def test_supported_code_without_dataset(self, store):
        assert store.load("zz") is None

    def test_malformed_json_raises(self, data_dir):
        (data_dir / "holidays-bad.json").write_text("{not json", encoding="utf-8")
        store = CalendarStore(data_dir, ["bad"])
        with pytest.raises(CalendarDataError, match="Malformed"):
            store.load("bad")

    def test_invalid_structure_raises(self, data_dir):
        (data_dir / "holidays-bad.json").write_text('{"name": "Bad", "years": {"2025": [{"name": "x"}]}}', encoding="utf-8")
        store = CalendarStore(data_dir, ["bad"])
        with pytest.raises(CalendarDataError, match="Invalid"):
            store.load("bad")

    def test_empty_years_raises(self, data_dir):
        (data_dir / "holidays-bad.json").write_text('{"name": "Bad", "years": {}}', encoding="utf-8")
        store = CalendarStore(data_dir, ["bad"])
        with pytest.raises(CalendarDataError):
            store.load("bad")


class TestCaching:
    def test_repeated_loads_return_cached_calendar(self, store):
        assert store.load("tl") is store.load("tl")

    def test_fresh_store_loads_equal_data(self, store, data_dir):
        first = store.load("tl")
        second = CalendarStore(data_dir, ["tl"]).load("tl")
        assert first is not second
        assert first == second

    def test_concurrent_first_loads_agree(self, store):
        results = []

        def worker():
            results.append(store.load("tl"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r == results[0] for r in results)

    def test_calendar_is_immutable(self, store):
        calendar = store.load("tl")
        with pytest.raises(ValidationError):
            calendar.name = "Changed"
