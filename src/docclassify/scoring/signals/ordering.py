"""Section-ordering signal: logical flow, required order, template alignment."""

from __future__ import annotations

from docclassify.config.schema import ScorerConfig
from docclassify.errors.exceptions import ScorerDegraded
from docclassify.scoring.combiner import SignalScore, weighted_sum
from docclassify.scoring.text import find_title, titles_match
from docclassify.scoring.vocabulary import (
    ANALYSIS_KEYWORDS,
    CONCLUSION_KEYWORDS,
    INTRO_KEYWORDS,
    ORDERING_TEMPLATES,
    SECTION_POSITIONS,
)
from docclassify.types import Document, TypeDefinition

SIGNAL = "ordering"

_WEIGHTS = {"logical_flow": 0.4, "required_order": 0.4, "template_alignment": 0.2}

_MIN_SECTIONS = 3
_TEMPLATE_BOOST = 1.2

# Required-order outcomes
_IN_ORDER = 0.8
_OUT_OF_ORDER = 0.4
_SINGLE_FOUND = 0.6
_NONE_FOUND = 0.2


def score_ordering(
    document: Document,
    type_def: TypeDefinition,
    config: ScorerConfig,
) -> SignalScore:
    """Judge whether the document's sections come in the expected order.

    Raises ScorerDegraded when the document has no sections.
    """
    titles = document.section_titles
    if not titles:
        raise ScorerDegraded(
            "Document has no sections to order",
            default=config.missing_data_score,
            signal=SIGNAL,
        )

    reasons: list[str] = []

    logical_flow = _logical_flow(titles, config, reasons)
    required_order = _required_order(titles, type_def, config, reasons)
    template_alignment = _template_alignment(titles, type_def.category, config, reasons)

    factors = {
        "logical_flow": logical_flow,
        "required_order": required_order,
        "template_alignment": template_alignment,
    }
    return SignalScore(
        name=SIGNAL,
        score=weighted_sum(factors, _WEIGHTS),
        factors=factors,
        reasons=reasons,
    )


def _logical_flow(titles: list[str], config: ScorerConfig, reasons: list[str]) -> float:
    """Introduction (0.3) + interior analytical section (0.4) + conclusion (0.3)."""
    if len(titles) < _MIN_SECTIONS:
        reasons.append("Insufficient sections for flow analysis")
        return config.base_score

    has_intro = any(_has_keyword(t, INTRO_KEYWORDS) for t in titles)
    has_middle = any(_has_keyword(t, ANALYSIS_KEYWORDS) for t in titles[1:-1])
    has_conclusion = any(_has_keyword(t, CONCLUSION_KEYWORDS) for t in titles)
    flow = (0.3 if has_intro else 0.0) + (0.4 if has_middle else 0.0) + (0.3 if has_conclusion else 0.0)

    if flow > 0.8:
        reasons.append("Strong logical flow: introduction, analysis, conclusion")
    elif flow > 0.5:
        reasons.append("Moderate logical flow detected")
    else:
        reasons.append("Weak or atypical logical flow")
    return min(flow, 1.0)


def _required_order(
    titles: list[str],
    type_def: TypeDefinition,
    config: ScorerConfig,
    reasons: list[str],
) -> float:
    if not type_def.required_sections:
        reasons.append("No required sections defined")
        return config.neutral_score

    positions = [
        pos
        for pos in (find_title(titles, s.name) for s in type_def.required_sections)
        if pos is not None
    ]
    if len(positions) >= 2:
        if all(a <= b for a, b in zip(positions, positions[1:])):
            reasons.append("Required sections appear in logical order")
            return _IN_ORDER
        reasons.append("Required sections appear out of expected order")
        return _OUT_OF_ORDER
    if len(positions) == 1:
        reasons.append("Single required section found")
        return _SINGLE_FOUND
    reasons.append("No required sections found in document")
    return _NONE_FOUND


def _template_alignment(
    titles: list[str],
    category: str,
    config: ScorerConfig,
    reasons: list[str],
) -> float:
    templates = ORDERING_TEMPLATES.get(category, [])
    if templates and len(titles) >= _MIN_SECTIONS:
        best = max(_template_overlap(titles, t) for t in templates)
        alignment = min(best * _TEMPLATE_BOOST, 1.0)
        if alignment > 0.7:
            reasons.append("Strong alignment with typical section ordering pattern")
        elif alignment > 0.4:
            reasons.append("Moderate alignment with typical section ordering")
        else:
            reasons.append("Weak alignment with typical section ordering patterns")
        return alignment

    buckets = SECTION_POSITIONS.get(category)
    if buckets:
        alignment = _bucket_alignment(titles, buckets)
        if alignment > 0.7:
            reasons.append("Good section position alignment with category expectations")
        elif alignment > 0.4:
            reasons.append("Moderate section position alignment")
        else:
            reasons.append("Poor section position alignment")
        return alignment

    reasons.append("No ordering patterns defined for this category")
    return config.base_score


def _template_overlap(titles: list[str], template: list[str]) -> float:
    """Position-weighted overlap between the document and one template.

    Each leading title earns 1 - |i - j| / len(template) for its closest
    matching template entry j, averaged over the compared length.
    """
    span = min(len(titles), len(template))
    total = 0.0
    for i, title in enumerate(titles[:span]):
        offsets = [abs(i - j) for j, entry in enumerate(template) if titles_match(title, entry)]
        if offsets:
            total += 1.0 - min(offsets) / len(template)
    return total / span if span else 0.0


def _bucket_alignment(titles: list[str], buckets: dict[str, list[str]]) -> float:
    last = max(len(titles) - 1, 1)
    hits = 0
    for i, title in enumerate(titles):
        position = i / last
        bucket = "early" if position < 0.33 else "late" if position > 0.66 else "middle"
        if any(titles_match(title, expected) for expected in buckets[bucket]):
            hits += 1
    return hits / len(titles)


def _has_keyword(title: str, keywords: tuple[str, ...]) -> bool:
    return any(k in title for k in keywords)
