"""Storage statistics model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StorageStats(BaseModel):
    """Aggregate statistics over stored results."""

    total_results: int = 0
    documents: int = 0
    average_confidence: float = 0.0
    by_ambiguity: dict[str, int] = Field(default_factory=dict)
    by_detected_type: dict[str, int] = Field(default_factory=dict)

    @property
    def clear_rate(self) -> float:
        """Share of results with ambiguity ``none`` or ``low``."""
        if self.total_results == 0:
            return 0.0
        clear = self.by_ambiguity.get("none", 0) + self.by_ambiguity.get("low", 0)
        return clear / self.total_results
