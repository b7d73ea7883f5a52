"""Terminology signal: standards, domain vocabulary, technical density."""

from __future__ import annotations

import re

from docclassify.config.schema import ScorerConfig
from docclassify.scoring.combiner import SignalScore, weighted_sum
from docclassify.scoring.text import normalize, words
from docclassify.scoring.vocabulary import CATEGORY_TERMINOLOGY
from docclassify.types import Document, TypeDefinition

SIGNAL = "terminology"

_WEIGHTS = {"standards": 0.4, "domain": 0.4, "technical_density": 0.2}

_TECHNICAL_PATTERNS = (
    re.compile(r"[A-Z]{3,}"),  # acronyms
    re.compile(r"[a-z]{8,}"),  # long words
    re.compile(r"\d+\.\d+"),  # decimals
    re.compile(r"%|§|¶|©|®|™"),
)
_MIN_WORDS_FOR_DENSITY = 100


def score_terminology(
    document: Document,
    type_def: TypeDefinition,
    config: ScorerConfig,
) -> SignalScore:
    """Look for the type's standards and domain vocabulary in the document."""
    reasons: list[str] = []
    text = document.full_text
    text_lower = text.lower()
    entries = [t.term.lower() for t in document.terminology]
    marker_refs = [
        (m.standard or "").lower() + " " + (m.reference or "").lower()
        for m in document.compliance_markers
    ]

    # 1. Declared standards
    if type_def.standards:
        matched = [
            s
            for s in type_def.standards
            if _mentioned(s.lower(), text_lower, entries) or any(s.lower() in r for r in marker_refs)
        ]
        standards = len(matched) / len(type_def.standards)
        if matched:
            reasons.append(f"Found {len(matched)} standard references: {', '.join(matched[:3])}")
        else:
            reasons.append("No standard terminology matches found")
    else:
        standards = config.neutral_score
        reasons.append("No standards defined for terminology comparison")

    # 2. Category vocabulary plus tags
    expected = CATEGORY_TERMINOLOGY.get(type_def.category, []) + [
        normalize(tag) for tag in type_def.tags
    ]
    if expected and (text_lower.strip() or entries):
        hits = sum(1 for term in expected if _mentioned(term, text_lower, entries))
        domain = hits / len(expected)
        strength = "Strong" if domain > 0.7 else "Moderate" if domain > 0.4 else "Weak"
        reasons.append(f"{strength} domain terminology match: {hits}/{len(expected)} terms")
    else:
        domain = config.base_score
        reasons.append("Insufficient terminology data for comparison")

    # 3. Technical term density per 100 words
    word_count = len(words(text))
    if word_count > _MIN_WORDS_FOR_DENSITY:
        technical = sum(len(p.findall(text)) for p in _TECHNICAL_PATTERNS)
        density = technical / (word_count / 100)
        technical_density = min(density / 10, 1.0)
        if technical_density > 0.7:
            reasons.append("High technical term density suggests specialised content")
        elif technical_density > 0.4:
            reasons.append("Moderate technical term density")
        else:
            reasons.append("Low technical term density suggests general content")
    else:
        technical_density = config.base_score
        reasons.append("Insufficient text for technical term analysis")

    factors = {"standards": standards, "domain": domain, "technical_density": technical_density}
    return SignalScore(
        name=SIGNAL,
        score=weighted_sum(factors, _WEIGHTS),
        factors=factors,
        reasons=reasons,
    )


def _mentioned(term: str, text_lower: str, entries: list[str]) -> bool:
    return term in text_lower or any(term in entry for entry in entries)
