"""Candidate ranker: re-orders scored candidates by breakdown consistency.

Candidates whose composite score looks good but whose five sub-scores
disagree (one saturated, the rest near zero) are pushed down. The scorers
are not re-run.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from docclassify.config.schema import RankingConfig
from docclassify.types import (
    ClassificationCandidate,
    RankingLevel,
    RankingSummary,
    ScoreRange,
    clamp_score,
)

# Sub-score range bands -> penalty, checked in order
_PENALTY_BANDS: tuple[tuple[float, float], ...] = ((0.2, 0.0), (0.4, 0.05), (0.6, 0.15))
_MAX_BAND_PENALTY = 0.3
_UNCERTAIN_MIDDLE = (0.5, 0.7)
_UNCERTAIN_RANGE = 0.5
_UNCERTAIN_EXTRA = 0.1
_PENALTY_CAP = 0.5


class RankingFactors(BaseModel):
    composite_score: float
    score_confidence: float
    breakdown_consistency: float
    ambiguity_penalty: float


class RankingResult(BaseModel):
    """Ranking outcome for one candidate."""

    candidate: ClassificationCandidate
    ranking_score: float
    rank: int
    factors: RankingFactors
    reasons: list[str] = Field(default_factory=list)


class RankingAnalysis(BaseModel):
    ranked_candidates: list[ClassificationCandidate] = Field(default_factory=list)
    results: list[RankingResult] = Field(default_factory=list)
    summary: RankingSummary = Field(default_factory=RankingSummary)


def score_confidence(candidate: ClassificationCandidate, config: RankingConfig) -> float:
    """1 - min(stddev / max_std_dev, 1) over the five sub-scores (population stddev)."""
    values = candidate.breakdown.values()
    mean = sum(values) / len(values)
    std_dev = math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
    return 1.0 - min(std_dev / config.max_std_dev, 1.0)


def breakdown_consistency(candidate: ClassificationCandidate, config: RankingConfig) -> float:
    """Share of sub-scores on the majority side of the consistency threshold."""
    values = candidate.breakdown.values()
    above = sum(1 for v in values if v >= config.consistency_threshold)
    return max(above, len(values) - above) / len(values)


def ambiguity_penalty(candidate: ClassificationCandidate) -> float:
    values = candidate.breakdown.values()
    spread = max(values) - min(values)

    penalty = _MAX_BAND_PENALTY
    for upper, band_penalty in _PENALTY_BANDS:
        if spread <= upper:
            penalty = band_penalty
            break

    low, high = _UNCERTAIN_MIDDLE
    if low < candidate.composite_score < high and spread > _UNCERTAIN_RANGE:
        penalty += _UNCERTAIN_EXTRA
    return min(penalty, _PENALTY_CAP)


def evaluate_candidate(
    candidate: ClassificationCandidate,
    position: int,
    config: RankingConfig,
) -> RankingResult:
    """Compute the ranking score and explanation for one candidate."""
    composite = candidate.composite_score
    confidence = score_confidence(candidate, config)
    consistency = breakdown_consistency(candidate, config)
    penalty = ambiguity_penalty(candidate)

    reasons = [
        f"{_band(composite, 'High', 'Moderate', 'Low')} composite score",
        _band(
            confidence,
            "High score confidence (consistent breakdown)",
            "Moderate score confidence",
            "Low score confidence (inconsistent breakdown)",
        ),
        f"{_band(consistency, 'High', 'Moderate', 'Low')} breakdown consistency",
    ]
    if penalty > 0.1:
        reasons.append(f"Ambiguity penalty applied: {penalty:.2f}")

    ranking_score = clamp_score(
        composite * config.score_weight
        + confidence * config.confidence_weight
        + consistency * config.breakdown_weight
        - penalty * config.ambiguity_penalty_weight
    )
    return RankingResult(
        candidate=candidate,
        ranking_score=ranking_score,
        rank=position + 1,
        factors=RankingFactors(
            composite_score=composite,
            score_confidence=confidence,
            breakdown_consistency=consistency,
            ambiguity_penalty=penalty,
        ),
        reasons=reasons,
    )


def _rank(
    candidates: list[ClassificationCandidate],
    config: RankingConfig,
) -> list[RankingResult]:
    evaluated = [evaluate_candidate(c, i, config) for i, c in enumerate(candidates)]
    # sorted() is stable: equal ranking scores keep their incoming order
    ordered = sorted(evaluated, key=lambda r: r.ranking_score, reverse=True)
    ranked: list[RankingResult] = []
    for index, result in enumerate(ordered, start=1):
        stamped = result.candidate.model_copy(
            update={"ranking_score": result.ranking_score, "rank": index}
        )
        ranked.append(result.model_copy(update={"candidate": stamped, "rank": index}))
    return ranked


def rank_candidates(
    candidates: list[ClassificationCandidate],
    config: RankingConfig | None = None,
) -> list[ClassificationCandidate]:
    """Return copies of the candidates re-ordered by ranking score, ranks 1..N."""
    if not candidates:
        return []
    return [r.candidate for r in _rank(candidates, config or RankingConfig())]


def get_ranking_analysis(
    candidates: list[ClassificationCandidate],
    config: RankingConfig | None = None,
) -> RankingAnalysis:
    """Rank the candidates and summarise the outcome. Inputs are not mutated."""
    if not candidates:
        return RankingAnalysis()

    results = _rank(candidates, config or RankingConfig())
    scores = [c.composite_score for c in candidates]
    top = results[0]

    confidence = top.factors.score_confidence
    if confidence >= 0.8:
        confidence_level = RankingLevel.HIGH
    elif confidence >= 0.6:
        confidence_level = RankingLevel.MEDIUM
    else:
        confidence_level = RankingLevel.LOW

    penalty = top.factors.ambiguity_penalty
    if penalty >= 0.2:
        ambiguity_level = RankingLevel.HIGH
    elif penalty >= 0.1:
        ambiguity_level = RankingLevel.MEDIUM
    else:
        ambiguity_level = RankingLevel.LOW

    return RankingAnalysis(
        ranked_candidates=[r.candidate for r in results],
        results=results,
        summary=RankingSummary(
            top_candidate=top.candidate,
            score_range=ScoreRange(
                min=min(scores),
                max=max(scores),
                average=sum(scores) / len(scores),
            ),
            confidence_level=confidence_level,
            ambiguity_level=ambiguity_level,
        ),
    )


def _band(value: float, high: str, moderate: str, low: str) -> str:
    if value >= 0.8:
        return high
    if value >= 0.6:
        return moderate
    return low
