"""Tests for the file-backed result store."""

import asyncio
import json

import pytest

from analyzer.storage import INDEX_FILE, ResultStore


def report(result_id: str, url: str = "https://example.com/", score: int = 70) -> dict:
    return {
        "id": result_id,
        "url": url,
        "analyzed_at": "2025-06-01T12:00:00+00:00",
        "overall_score": {"score": score, "grade": "B"},
        "seo": {"score": 80},
        "geo": {"score": 480},
    }


class TestResultStore:
    """Tests for ResultStore."""

    def test_save_and_get(self, store: ResultStore) -> None:
        result_id = store.save(report("abc123"))

        assert result_id == "abc123"
        stored = store.get_by_id("abc123")
        assert stored["url"] == "https://example.com/"
        assert (store.base_path / "abc123.json").exists()

    def test_generates_missing_id(self, store: ResultStore) -> None:
        data = report("x")
        del data["id"]
        result_id = store.save(data)
        assert store.get_by_id(result_id)["id"] == result_id

    def test_index_summary(self, store: ResultStore) -> None:
        store.save(report("abc123", score=64))
        entry = store.list()[0]
        assert entry == {
            "id": "abc123",
            "url": "https://example.com/",
            "analyzed_at": "2025-06-01T12:00:00+00:00",
            "overall_score": 64,
            "seo_score": 80,
            "geo_score": 480,
        }

    def test_list_newest_first(self, store: ResultStore) -> None:
        for result_id in ("one", "two", "three"):
            store.save(report(result_id))
        assert [entry["id"] for entry in store.list()] == ["three", "two", "one"]

    def test_resave_moves_to_front(self, store: ResultStore) -> None:
        store.save(report("one"))
        store.save(report("two"))
        store.save(report("one", score=90))

        entries = store.list()
        assert [entry["id"] for entry in entries] == ["one", "two"]
        assert entries[0]["overall_score"] == 90

    def test_evicts_beyond_limit(self, store: ResultStore) -> None:
        """The fixture store keeps five entries; older reports are deleted."""
        for i in range(7):
            store.save(report(f"r{i}"))

        ids = [entry["id"] for entry in store.list()]
        assert ids == ["r6", "r5", "r4", "r3", "r2"]
        assert store.get_by_id("r0") is None
        assert not (store.base_path / "r1.json").exists()

    def test_delete(self, store: ResultStore) -> None:
        store.save(report("gone"))
        assert store.delete("gone") is True
        assert store.get_by_id("gone") is None
        assert store.list() == []
        assert store.delete("gone") is False

    def test_clear(self, store: ResultStore) -> None:
        store.save(report("a"))
        store.save(report("b"))
        assert store.clear() == 2
        assert store.list() == []
        assert (store.base_path / INDEX_FILE).exists()

    @pytest.mark.parametrize("bad_id", ["../escape", "a/b", "", "index", "x" * 65])
    def test_invalid_ids(self, store: ResultStore, bad_id: str) -> None:
        assert store.get_by_id(bad_id) is None
        assert store.delete(bad_id) is False

    def test_save_rejects_invalid_id(self, store: ResultStore) -> None:
        with pytest.raises(ValueError):
            store.save(report("../../etc/passwd"))

    def test_corrupt_index_is_empty(self, store: ResultStore) -> None:
        (store.base_path / INDEX_FILE).write_text("{not json", encoding="utf-8")
        assert store.list() == []

    def test_datetimes_serialized(self, store: ResultStore, now) -> None:
        data = report("dated")
        data["analyzed_at"] = now
        store.save(data)

        raw = json.loads((store.base_path / "dated.json").read_text(encoding="utf-8"))
        assert raw["analyzed_at"] == now.isoformat()

    def test_failed_write_leaves_no_partial_files(self, store: ResultStore) -> None:
        store.save(report("kept"))
        data = report("broken")
        data["extra"] = object()

        with pytest.raises(TypeError):
            store.save(data)

        assert not (store.base_path / "broken.json").exists()
        assert list(store.base_path.glob("*.tmp")) == []
        assert [entry["id"] for entry in store.list()] == ["kept"]

    @pytest.mark.asyncio
    async def test_concurrent_saves_from_threads(self, tmp_path) -> None:
        store = ResultStore(tmp_path / "many", index_limit=50)

        await asyncio.gather(
            *(asyncio.to_thread(store.save, report(f"r{i}")) for i in range(30))
        )

        ids = {entry["id"] for entry in store.list()}
        assert ids == {f"r{i}" for i in range(30)}
        assert list(store.base_path.glob("*.tmp")) == []
