"""Confidence and ambiguity policy over a primary-sorted candidate list."""

from __future__ import annotations

from docclassify.config.schema import ClassificationConfig
from docclassify.types import AmbiguityLevel, ClassificationCandidate

# Confidence = top * (_BASE + _MARGIN_SHARE * min(2 * margin, 1))
_BASE = 0.7
_MARGIN_SHARE = 0.3

# Margin band cutoffs as fractions of the ambiguity threshold
_LOW_CUTOFF = 0.7
_MEDIUM_CUTOFF = 0.4
_HIGH_CUTOFF = 0.1

AMBIGUITY_REASONS: dict[AmbiguityLevel, str] = {
    AmbiguityLevel.NONE: "Clear classification with significant score difference",
    AmbiguityLevel.LOW: "Minor ambiguity between top candidates",
    AmbiguityLevel.MEDIUM: "Moderate ambiguity - review recommended",
    AmbiguityLevel.HIGH: "High ambiguity - manual review required",
    AmbiguityLevel.VERY_HIGH: "Very high ambiguity - consider adding a new document type",
}

NO_CANDIDATES_REASON = "No document types matched the content"


def margin(candidates: list[ClassificationCandidate]) -> float:
    """Gap between the top two composite scores; 0 with fewer than two."""
    if len(candidates) < 2:
        return 0.0
    return candidates[0].composite_score - candidates[1].composite_score


def compute_confidence(candidates: list[ClassificationCandidate]) -> float:
    """Confidence rewards both the top score and its margin over the runner-up.

    The margin term saturates once the margin reaches 0.5.
    """
    if not candidates:
        return 0.0
    top = candidates[0].composite_score
    if len(candidates) == 1:
        return top
    return top * (_BASE + _MARGIN_SHARE * min(2.0 * margin(candidates), 1.0))


def ambiguity_for_margin(
    gap: float,
    confidence: float,
    ambiguity_threshold: float = 0.2,
    confidence_threshold: float = 0.7,
) -> AmbiguityLevel:
    """Tiered ambiguity policy. Pure in (gap, confidence, thresholds).

    Confidence below the confidence threshold is always very-high; otherwise
    the margin axis is split into five contiguous bands at T, 0.7T, 0.4T and
    0.1T, each band closed at its upper bound.
    """
    t = ambiguity_threshold
    if confidence < confidence_threshold:
        return AmbiguityLevel.VERY_HIGH
    if gap > t:
        return AmbiguityLevel.NONE
    if gap > t * _LOW_CUTOFF:
        return AmbiguityLevel.LOW
    if gap > t * _MEDIUM_CUTOFF:
        return AmbiguityLevel.MEDIUM
    if gap > t * _HIGH_CUTOFF:
        return AmbiguityLevel.HIGH
    return AmbiguityLevel.VERY_HIGH


def detect_ambiguity(
    candidates: list[ClassificationCandidate],
    confidence: float,
    config: ClassificationConfig | None = None,
) -> AmbiguityLevel:
    config = config or ClassificationConfig()
    if not candidates:
        return AmbiguityLevel.VERY_HIGH
    if len(candidates) == 1:
        return AmbiguityLevel.NONE
    return ambiguity_for_margin(
        margin(candidates),
        confidence,
        config.ambiguity_threshold,
        config.confidence_threshold,
    )


def build_reasons(
    candidates: list[ClassificationCandidate],
    level: AmbiguityLevel,
) -> list[str]:
    """Top candidate's first three reasons, an ambiguity sentence, a score band sentence."""
    if not candidates:
        return [NO_CANDIDATES_REASON]

    top = candidates[0]
    reasons = list(top.reasons[:3])
    reasons.append(AMBIGUITY_REASONS[level])

    score = top.composite_score
    if score >= 0.8:
        reasons.append("High overall match score")
    elif score >= 0.6:
        reasons.append("Moderate overall match score")
    else:
        reasons.append("Low overall match score")
    return reasons
