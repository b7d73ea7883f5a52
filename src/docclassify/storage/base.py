"""Result storage contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from docclassify.types import ClassificationResult


@runtime_checkable
class ResultStorage(Protocol):
    """Anything that can persist and look up classification results."""

    def save(self, result: ClassificationResult) -> None: ...

    def get(self, result_id: str) -> ClassificationResult | None: ...

    def find_by_document_id(self, document_id: str) -> list[ClassificationResult]: ...
