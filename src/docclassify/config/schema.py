"""Pydantic models for classifier configuration.

Everything here is fixed at engine construction time.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from docclassify.config.defaults import (
    DEFAULT_AMBIGUITY_THRESHOLD,
    DEFAULT_APPLY_RANKING,
    DEFAULT_AUTO_SAVE_RESULTS,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MAX_LISTENER_FAILURES,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SCORING_WEIGHTS,
    DEFAULT_STRONG_MATCH_THRESHOLD,
)


class ScoringWeights(BaseModel):
    """Per-signal weights for the composite score."""

    structure: float = Field(default=DEFAULT_SCORING_WEIGHTS["structure"], ge=0.0)
    terminology: float = Field(default=DEFAULT_SCORING_WEIGHTS["terminology"], ge=0.0)
    compliance: float = Field(default=DEFAULT_SCORING_WEIGHTS["compliance"], ge=0.0)
    metadata: float = Field(default=DEFAULT_SCORING_WEIGHTS["metadata"], ge=0.0)
    ordering: float = Field(default=DEFAULT_SCORING_WEIGHTS["ordering"], ge=0.0)

    def as_dict(self) -> dict[str, float]:
        return self.model_dump()


class SeverityBands(BaseModel):
    """Scores for the compliance scorer's severity-profile comparison."""

    both_critical: float = 0.9
    neither_critical: float = 0.8
    missing_critical: float = 0.2
    unexpected_critical: float = 0.5
    none_expected_or_found: float = 0.5
    none_found: float = 0.3
    insufficient: float = 0.5


class ScorerConfig(BaseModel):
    """Tunable constants shared by the signal scorers."""

    strong_match_threshold: float = DEFAULT_STRONG_MATCH_THRESHOLD
    neutral_score: float = 0.5
    base_score: float = 0.3
    missing_data_score: float = 0.2
    structure_floor: float = Field(default=0.2, ge=0.0, lt=1.0)
    hierarchy_match: float = 0.9
    hierarchy_mismatch: float = 0.3
    severity: SeverityBands = Field(default_factory=SeverityBands)


class RankingConfig(BaseModel):
    """Weights for the breakdown-consistency re-ranking pass."""

    score_weight: float = 0.6
    confidence_weight: float = 0.2
    breakdown_weight: float = 0.15
    ambiguity_penalty_weight: float = 0.05
    consistency_threshold: float = 0.5
    max_std_dev: float = Field(default=0.5, gt=0.0)


class ClassificationConfig(BaseModel):
    """Top-level engine configuration."""

    confidence_threshold: float = Field(default=DEFAULT_CONFIDENCE_THRESHOLD, ge=0.0, le=1.0)
    ambiguity_threshold: float = Field(default=DEFAULT_AMBIGUITY_THRESHOLD, ge=0.0, le=1.0)
    scoring_weights: ScoringWeights = Field(default_factory=ScoringWeights)
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    apply_ranking: bool = DEFAULT_APPLY_RANKING
    auto_save_results: bool = DEFAULT_AUTO_SAVE_RESULTS
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)
    cache_max_entries: int = Field(default=DEFAULT_CACHE_MAX_ENTRIES, ge=1)
    max_listener_failures: int = Field(default=DEFAULT_MAX_LISTENER_FAILURES, ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0.0)
