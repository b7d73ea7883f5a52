"""Result assembly, structural validation, and summaries."""

from __future__ import annotations

import uuid
from datetime import datetime

from docclassify.types import (
    AmbiguityLevel,
    ClassificationCandidate,
    ClassificationResult,
    ClassificationSummary,
    RankingSummary,
    ResultMetadata,
    SummaryStatus,
    Timestamps,
)

SCORING_METHOD = "weighted-composite"
RESULT_VERSION = "1.0.0"

# Summary cutoffs
_CLEAR_CONFIDENCE = 0.8
_AMBIGUOUS_CONFIDENCE = 0.6


def new_result_id() -> str:
    return f"cls_{uuid.uuid4().hex}"


def create_result(
    document_id: str,
    candidates: list[ClassificationCandidate],
    confidence: float,
    ambiguity: AmbiguityLevel,
    reasons: list[str],
    started: datetime,
    completed: datetime,
    detected_type_id: str | None = None,
    types_considered: int | None = None,
    ranking_summary: RankingSummary | None = None,
) -> ClassificationResult:
    return ClassificationResult(
        id=new_result_id(),
        document_id=document_id,
        detected_type_id=detected_type_id,
        ranked_candidates=list(candidates),
        confidence_score=confidence,
        ambiguity_level=ambiguity,
        reasons=list(reasons),
        timestamps=Timestamps(started=started, completed=completed),
        metadata=ResultMetadata(
            types_considered=len(candidates) if types_considered is None else types_considered,
            scoring_method=SCORING_METHOD,
            version=RESULT_VERSION,
            ranking_applied=ranking_summary is not None,
            ranking_summary=ranking_summary,
        ),
    )


def validate_result(result: ClassificationResult) -> list[str]:
    """Check structural invariants. Returns a list of violations (empty if valid)."""
    errors: list[str] = []
    if not result.id:
        errors.append("Result id is required")
    if not result.document_id:
        errors.append("Document id is required")
    if not 0.0 <= result.confidence_score <= 1.0:
        errors.append(f"Confidence score out of range: {result.confidence_score}")

    previous: float | None = None
    for i, candidate in enumerate(result.ranked_candidates):
        if not candidate.type_id:
            errors.append(f"Candidate {i} has no type id")
        if not 0.0 <= candidate.composite_score <= 1.0:
            errors.append(f"Candidate {i} composite score out of range: {candidate.composite_score}")
        score = candidate.final_score
        if previous is not None and score > previous:
            errors.append(f"Candidates not sorted by score at position {i}")
        previous = score

    if result.timestamps.completed < result.timestamps.started:
        errors.append("Completion timestamp precedes start timestamp")
    return errors


def summarize_result(result: ClassificationResult) -> ClassificationSummary:
    """One-line status and recommendation for a result."""
    top = result.top_candidate
    if top is None:
        return ClassificationSummary(
            status=SummaryStatus.FAILED,
            confidence="none",
            recommendation="No document types matched. Consider adding a new document type.",
        )
    confidence = result.confidence_score
    if confidence >= _CLEAR_CONFIDENCE and result.ambiguity_level == AmbiguityLevel.NONE:
        return ClassificationSummary(
            status=SummaryStatus.CLEAR,
            top_candidate=top,
            confidence="high",
            recommendation=f"Use document type: {top.type_id}",
        )
    if confidence >= _AMBIGUOUS_CONFIDENCE:
        return ClassificationSummary(
            status=SummaryStatus.AMBIGUOUS,
            top_candidate=top,
            confidence="medium",
            recommendation=f"Consider {top.type_id} but review alternatives",
        )
    return ClassificationSummary(
        status=SummaryStatus.UNCERTAIN,
        top_candidate=top,
        confidence="low",
        recommendation="Manual review required. Consider multiple document types.",
    )
