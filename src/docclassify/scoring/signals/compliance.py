"""Compliance-marker signal: rule mentions, standard references, severity profile."""

from __future__ import annotations

from docclassify.config.schema import ScorerConfig, SeverityBands
from docclassify.scoring.combiner import SignalScore, weighted_sum
from docclassify.scoring.text import contains_word
from docclassify.scoring.vocabulary import COMPLIANCE_STANDARDS
from docclassify.types import ComplianceMarker, Document, Severity, TypeDefinition

SIGNAL = "compliance"

_WEIGHTS = {"rule_mentions": 0.3, "standard_references": 0.4, "severity_alignment": 0.3}


def score_compliance(
    document: Document,
    type_def: TypeDefinition,
    config: ScorerConfig,
) -> SignalScore:
    """Check the document's markers and text against the type's rules and standards."""
    reasons: list[str] = []
    text_lower = document.full_text.lower()
    markers = document.compliance_markers
    marker_standards = [(m.standard or "").lower() for m in markers]

    # 1. Rule mentions
    rules = type_def.compliance_rules
    if rules:
        found = 0
        for rule in rules:
            name = rule.name.lower()
            standard = rule.standard.lower()
            if (name and name in text_lower) or (
                standard
                and (standard in text_lower or any(standard in ms for ms in marker_standards))
            ):
                found += 1
        rule_mentions = found / len(rules)
        if found:
            reasons.append(f"Found {found} compliance rule mentions")
        else:
            reasons.append("No specific compliance rule mentions found")
    else:
        rule_mentions = config.neutral_score
        reasons.append("No compliance rules defined for this type")

    # 2. Standard references
    standards = type_def.standards
    if standards:
        found = sum(1 for s in standards if _standard_referenced(s, text_lower, markers))
        standard_references = found / len(standards)
        if found:
            reasons.append(f"Found {found} standard references: {', '.join(standards[:3])}")
        else:
            reasons.append("No standard references found")
    else:
        standard_references = config.neutral_score
        reasons.append("No standards defined for compliance comparison")

    # 3. Severity profile
    severity_alignment, reason = _severity_alignment(
        [m.severity for m in markers if m.severity is not None],
        [r.severity for r in rules],
        config.severity,
    )
    reasons.append(reason)

    factors = {
        "rule_mentions": rule_mentions,
        "standard_references": standard_references,
        "severity_alignment": severity_alignment,
    }
    return SignalScore(
        name=SIGNAL,
        score=weighted_sum(factors, _WEIGHTS),
        factors=factors,
        reasons=reasons,
    )


def _standard_referenced(standard: str, text_lower: str, markers: list[ComplianceMarker]) -> bool:
    """Direct mention, marker field match, or a known-standard phrase."""
    standard_lower = standard.lower()
    if standard_lower in text_lower:
        return True
    for m in markers:
        if standard_lower in (m.standard or "").lower() or standard_lower in (m.reference or "").lower():
            return True
    compact = standard_lower.replace(" ", "")
    for key, patterns in COMPLIANCE_STANDARDS.items():
        if (key in standard_lower or key in compact) and any(
            contains_word(text_lower, p) for p in patterns
        ):
            return True
    return False


def _severity_alignment(
    found: list[Severity],
    expected: list[Severity],
    bands: SeverityBands,
) -> tuple[float, str]:
    if found and expected:
        type_critical = Severity.CRITICAL in expected
        doc_critical = Severity.CRITICAL in found
        if type_critical and doc_critical:
            return bands.both_critical, "Critical severity markers align with type expectations"
        if not type_critical and not doc_critical:
            return bands.neither_critical, "Non-critical severity profile matches type"
        if type_critical:
            return bands.missing_critical, "Missing critical severity markers expected for this type"
        return bands.unexpected_critical, "Unexpected critical severity markers found"
    if not found and not expected:
        return bands.none_expected_or_found, "No severity markers expected or found"
    if not found:
        return bands.none_found, "No severity markers found in document"
    return bands.insufficient, "Insufficient data for severity alignment analysis"
