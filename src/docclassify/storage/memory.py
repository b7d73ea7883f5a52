"""In-memory LRU result store."""

from __future__ import annotations

from collections import OrderedDict

from docclassify.types import ClassificationResult

_DEFAULT_MAX_ENTRIES = 1000


class MemoryResultStorage:
    """In-memory LRU store keyed by result id, with count-based eviction."""

    def __init__(self, max_entries: int = _DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._store: OrderedDict[str, ClassificationResult] = OrderedDict()
        self._max_entries = max_entries

    def save(self, result: ClassificationResult) -> None:
        if result.id in self._store:
            self._store.pop(result.id)
        while len(self._store) >= self._max_entries:
            self._store.popitem(last=False)
        self._store[result.id] = result

    def get(self, result_id: str) -> ClassificationResult | None:
        result = self._store.get(result_id)
        if result is None:
            return None
        # Move to end (most recently used)
        self._store.move_to_end(result_id)
        return result

    def find_by_document_id(self, document_id: str) -> list[ClassificationResult]:
        """Results for a document, newest first."""
        matches = [r for r in self._store.values() if r.document_id == document_id]
        return sorted(matches, key=lambda r: r.timestamps.completed, reverse=True)

    def delete(self, result_id: str) -> bool:
        return self._store.pop(result_id, None) is not None

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, result_id: object) -> bool:
        return result_id in self._store
