"""Composite scorer: five signals folded into one candidate per type."""

from __future__ import annotations

import logging
from collections.abc import Callable

from docclassify.config.schema import ScorerConfig, ScoringWeights
from docclassify.errors.exceptions import ScorerDegraded
from docclassify.scoring.combiner import SignalScore, combine_signals
from docclassify.scoring.signals import (
    score_compliance,
    score_metadata,
    score_ordering,
    score_structure,
    score_terminology,
)
from docclassify.types import ClassificationCandidate, Document, ScoreBreakdown, TypeDefinition

logger = logging.getLogger(__name__)

Scorer = Callable[[Document, TypeDefinition, ScorerConfig], SignalScore]

SCORERS: dict[str, Scorer] = {
    "structure": score_structure,
    "terminology": score_terminology,
    "compliance": score_compliance,
    "metadata": score_metadata,
    "ordering": score_ordering,
}

STRONG_MATCH_LABELS: dict[str, str] = {
    "structure": "Strong structural match",
    "terminology": "Strong terminology match",
    "compliance": "Strong compliance marker match",
    "metadata": "Strong metadata match",
    "ordering": "Strong section ordering match",
}


def run_signal(
    name: str,
    document: Document,
    type_def: TypeDefinition,
    config: ScorerConfig,
) -> SignalScore:
    """Run one scorer, turning ScorerDegraded into a fallback SignalScore."""
    try:
        return SCORERS[name](document, type_def, config)
    except ScorerDegraded as e:
        logger.debug("Signal %s degraded for type %s: %s", name, type_def.id, e.message)
        return SignalScore(name=name, score=e.default, reasons=[e.message], degraded=True)


def score_candidate(
    document: Document,
    type_def: TypeDefinition,
    weights: ScoringWeights | None = None,
    config: ScorerConfig | None = None,
) -> ClassificationCandidate:
    """Score one (document, type) pair."""
    weights = weights or ScoringWeights()
    config = config or ScorerConfig()

    signals = [run_signal(name, document, type_def, config) for name in SCORERS]
    composite = combine_signals(signals, weights.as_dict())

    breakdown = ScoreBreakdown(
        **{s.name: s.score for s in signals},
        factors={s.name: dict(s.factors) for s in signals},
        reasons=[f"{s.name}: {reason}" for s in signals for reason in s.reasons],
    )

    reasons = [
        STRONG_MATCH_LABELS[s.name]
        for s in signals
        if not s.degraded and s.score > config.strong_match_threshold
    ]
    reasons.extend(f"{s.name} signal degraded: {s.reasons[0]}" for s in signals if s.degraded)

    logger.debug("Scored type %s: %.3f", type_def.id, composite)
    return ClassificationCandidate(
        type_id=type_def.id,
        composite_score=composite,
        breakdown=breakdown,
        reasons=reasons,
    )
