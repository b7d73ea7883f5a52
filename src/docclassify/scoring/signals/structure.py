"""Structure signal: section count, required-section coverage, nesting."""

from __future__ import annotations

from docclassify.config.schema import ScorerConfig
from docclassify.errors.exceptions import ScorerDegraded
from docclassify.scoring.combiner import SignalScore, weighted_sum
from docclassify.scoring.text import find_title
from docclassify.types import Document, TypeDefinition

SIGNAL = "structure"

_WEIGHTS = {"count_ratio": 0.5, "coverage": 0.3, "hierarchy": 0.2}


def score_structure(
    document: Document,
    type_def: TypeDefinition,
    config: ScorerConfig,
) -> SignalScore:
    """Compare the document's section layout against the type's.

    The count ratio is lifted into [structure_floor, 1] so that a sparse but
    plausible document never scores zero on count alone.

    Raises ScorerDegraded when either side has no sections.
    """
    type_count = type_def.section_count
    if type_count == 0:
        raise ScorerDegraded(
            "Type defines no sections; structure not compared",
            default=config.neutral_score,
            signal=SIGNAL,
        )
    doc_count = len(document.sections)
    if doc_count == 0:
        raise ScorerDegraded(
            "Document has no sections",
            default=config.missing_data_score,
            signal=SIGNAL,
        )

    reasons: list[str] = []
    floor = config.structure_floor

    ratio = min(doc_count, type_count) / max(doc_count, type_count)
    count_ratio = ratio * (1.0 - floor) + floor
    reasons.append(f"{doc_count} sections against {type_count} expected")

    titles = document.section_titles
    required = type_def.required_sections
    if required:
        found = sum(1 for s in required if find_title(titles, s.name) is not None)
        coverage = found / len(required)
        reasons.append(f"{found}/{len(required)} required sections present")
    else:
        coverage = config.neutral_score
        reasons.append("No required sections defined")

    nested = document.has_hierarchy
    if nested == type_def.hierarchy_expected:
        hierarchy = config.hierarchy_match
        reasons.append("Section nesting matches expectation" if nested else "Flat layout as expected")
    else:
        hierarchy = config.hierarchy_mismatch
        reasons.append("Nested sections not expected" if nested else "Expected nested sections")

    factors = {"count_ratio": count_ratio, "coverage": coverage, "hierarchy": hierarchy}
    return SignalScore(
        name=SIGNAL,
        score=weighted_sum(factors, _WEIGHTS),
        factors=factors,
        reasons=reasons,
    )
