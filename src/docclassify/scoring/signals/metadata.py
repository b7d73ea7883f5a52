"""Metadata signal: category indicators, audience, complexity."""

from __future__ import annotations

from docclassify.config.schema import ScorerConfig
from docclassify.errors.exceptions import ScorerDegraded
from docclassify.scoring.combiner import SignalScore, weighted_sum
from docclassify.scoring.text import estimate_complexity, normalize
from docclassify.scoring.vocabulary import (
    AUDIENCE_SYNONYMS,
    CATEGORY_COMPLEXITY,
    CATEGORY_INDICATORS,
)
from docclassify.types import Document, TypeDefinition

SIGNAL = "metadata"

_WEIGHTS = {"category": 0.5, "audience": 0.3, "complexity": 0.2}

_COMPLEXITY_EXACT = 0.9
_COMPLEXITY_TYPICAL = 0.7
_COMPLEXITY_MISMATCH = 0.3


def score_metadata(
    document: Document,
    type_def: TypeDefinition,
    config: ScorerConfig,
) -> SignalScore:
    """Compare category cues, audience mentions and text complexity.

    Raises ScorerDegraded when the document carries no text at all.
    """
    text = document.full_text
    if not text.strip():
        raise ScorerDegraded(
            "Document has no text for metadata comparison",
            default=config.missing_data_score,
            signal=SIGNAL,
        )

    reasons: list[str] = []
    text_lower = text.lower()
    category = type_def.category

    # 1. Category indicators
    indicators = CATEGORY_INDICATORS.get(category, [])
    if indicators:
        hits = sum(1 for phrase in indicators if phrase in text_lower)
        category_score = hits / len(indicators)
        strength = (
            "Strong" if category_score > 0.7 else "Moderate" if category_score > 0.4 else "Weak"
        )
        reasons.append(f"{strength} category match: {hits}/{len(indicators)} indicators found")
    else:
        category_score = config.base_score
        reasons.append("No specific category indicators defined")

    # 2. Audience
    audience = [normalize(a) for a in type_def.typical_audience]
    if audience:
        hits = sum(1 for a in audience if _audience_mentioned(a, text_lower))
        audience_score = hits / len(audience)
        if hits:
            reasons.append(f"Audience alignment: {hits}/{len(audience)} audience references found")
        else:
            reasons.append("No specific audience references found")
    else:
        audience_score = config.neutral_score
        reasons.append("No target audience defined for this type")

    # 3. Complexity
    estimated = estimate_complexity(text)
    declared = type_def.complexity
    if estimated == declared:
        complexity_score = _COMPLEXITY_EXACT
        reasons.append(f"Complexity alignment: {declared} matches estimate")
    elif estimated in CATEGORY_COMPLEXITY.get(category, ()):
        complexity_score = _COMPLEXITY_TYPICAL
        reasons.append(f"Complexity partially aligned: {estimated} is typical for {category}")
    else:
        complexity_score = _COMPLEXITY_MISMATCH
        reasons.append(f"Complexity mismatch: {declared} expected but {estimated} estimated")

    factors = {"category": category_score, "audience": audience_score, "complexity": complexity_score}
    return SignalScore(
        name=SIGNAL,
        score=weighted_sum(factors, _WEIGHTS),
        factors=factors,
        reasons=reasons,
    )


def _audience_mentioned(audience: str, text_lower: str) -> bool:
    if audience in text_lower:
        return True
    return any(s in text_lower for s in AUDIENCE_SYNONYMS.get(audience, []))
