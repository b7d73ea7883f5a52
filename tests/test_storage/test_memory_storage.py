"""Tests for the in-memory result store."""

from datetime import UTC, datetime, timedelta

import pytest

from docclassify.classification.result import create_result
from docclassify.storage import MemoryResultStorage, ResultStorage
from docclassify.types import AmbiguityLevel


@pytest.fixture
def make_result(make_candidate):
    base = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

    def _make(document_id="doc-1", minutes=0):
        started = base + timedelta(minutes=minutes)
        return create_result(
            document_id=document_id,
            candidates=[make_candidate("a", 0.8)],
            confidence=0.8,
            ambiguity=AmbiguityLevel.NONE,
            reasons=[],
            started=started,
            completed=started + timedelta(seconds=1),
        )

    return _make


class TestMemoryResultStorage:
    def test_satisfies_protocol(self):
        assert isinstance(MemoryResultStorage(), ResultStorage)

    def test_save_and_get(self, make_result):
        store = MemoryResultStorage()
        result = make_result()
        store.save(result)
        assert store.get(result.id) == result
        assert result.id in store
        assert store.get("missing") is None

    def test_invalid_max_entries(self):
        with pytest.raises(ValueError):
            MemoryResultStorage(max_entries=0)

    def test_lru_eviction(self, make_result):
        store = MemoryResultStorage(max_entries=2)
        first, second, third = make_result(), make_result(), make_result()
        store.save(first)
        store.save(second)
        store.get(first.id)  # first is now most recently used
        store.save(third)
        assert len(store) == 2
        assert first.id in store
        assert second.id not in store

    def test_resave_does_not_evict(self, make_result):
        store = MemoryResultStorage(max_entries=2)
        first, second = make_result(), make_result()
        store.save(first)
        store.save(second)
        store.save(first)
        assert len(store) == 2

    def test_find_by_document_newest_first(self, make_result):
        store = MemoryResultStorage()
        old = make_result(minutes=0)
        new = make_result(minutes=5)
        other = make_result(document_id="doc-2")
        for r in (new, other, old):
            store.save(r)
        assert [r.id for r in store.find_by_document_id("doc-1")] == [new.id, old.id]
        assert store.find_by_document_id("nobody") == []

    def test_delete_and_clear(self, make_result):
        store = MemoryResultStorage()
        result = make_result()
        store.save(result)
        assert store.delete(result.id) is True
        assert store.delete(result.id) is False
        store.save(make_result())
        store.clear()
        assert len(store) == 0
