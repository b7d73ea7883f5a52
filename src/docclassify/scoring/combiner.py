"""Per-signal results and their weighted combination."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from docclassify.types import clamp_score


class SignalScore(BaseModel):
    """Result from a single similarity signal."""

    name: str
    score: float = 0.0
    factors: dict[str, float] = Field(default_factory=dict)
    reasons: list[str] = Field(default_factory=list)
    degraded: bool = False

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_score(value)


def weighted_sum(factors: dict[str, float], weights: dict[str, float]) -> float:
    """Weighted sum of named factors, clamped to [0, 1]."""
    return clamp_score(sum(factors.get(name, 0.0) * weight for name, weight in weights.items()))


def combine_signals(signals: list[SignalScore], weights: dict[str, float]) -> float:
    """Combine signal scores with a plain weighted sum.

    Degraded signals still contribute their fallback score. Signals without a
    weight contribute nothing. Weights need not sum to 1; the result is
    clamped to [0, 1].
    """
    if not signals:
        return 0.0
    return clamp_score(sum(s.score * weights.get(s.name, 0.0) for s in signals))
