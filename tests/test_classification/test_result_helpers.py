"""Tests for result assembly, validation, and summaries."""

from datetime import UTC, datetime, timedelta

import pytest

from docclassify.classification.result import create_result, summarize_result, validate_result
from docclassify.types import AmbiguityLevel, ClassificationResult, SummaryStatus


@pytest.fixture
def started():
    return datetime(2024, 5, 1, 9, 30, tzinfo=UTC)


def _result(candidates, started, confidence=0.85, ambiguity=AmbiguityLevel.NONE, **kwargs):
    return create_result(
        document_id="doc-1",
        candidates=candidates,
        confidence=confidence,
        ambiguity=ambiguity,
        reasons=["reason"],
        started=started,
        completed=kwargs.pop("completed", started + timedelta(milliseconds=40)),
        **kwargs,
    )


class TestCreateResult:
    def test_metadata(self, make_candidate, started):
        result = _result([make_candidate("a", 0.9), make_candidate("b", 0.4)], started)
        assert result.id.startswith("cls_")
        assert result.metadata.types_considered == 2
        assert result.metadata.scoring_method == "weighted-composite"
        assert result.metadata.version == "1.0.0"
        assert result.metadata.ranking_applied is False
        assert result.top_candidate.type_id == "a"

    def test_ids_are_unique(self, make_candidate, started):
        first = _result([make_candidate("a", 0.9)], started)
        second = _result([make_candidate("a", 0.9)], started)
        assert first.id != second.id

    def test_explicit_types_considered(self, started):
        result = _result([], started, types_considered=4)
        assert result.metadata.types_considered == 4
        assert result.top_candidate is None


class TestValidateResult:
    def test_valid(self, make_candidate, started):
        result = _result([make_candidate("a", 0.9), make_candidate("b", 0.4)], started)
        assert validate_result(result) == []

    def test_unsorted_candidates(self, make_candidate, started):
        result = _result([make_candidate("a", 0.4), make_candidate("b", 0.9)], started)
        errors = validate_result(result)
        assert errors == ["Candidates not sorted by score at position 1"]

    def test_confidence_out_of_range(self, make_candidate, started):
        result = _result([make_candidate("a", 0.9)], started, confidence=1.5)
        assert any("Confidence score out of range" in e for e in validate_result(result))

    def test_timestamps_reversed(self, started):
        result = _result([], started, completed=started - timedelta(seconds=1))
        assert "Completion timestamp precedes start timestamp" in validate_result(result)

    def test_ranked_order_uses_ranking_score(self, make_candidate, started):
        low = make_candidate("a", 0.4).model_copy(update={"ranking_score": 0.8, "rank": 1})
        high = make_candidate("b", 0.9).model_copy(update={"ranking_score": 0.7, "rank": 2})
        assert validate_result(_result([low, high], started)) == []


class TestSummarizeResult:
    def test_failed(self, started):
        summary = summarize_result(_result([], started, confidence=0.0, ambiguity=AmbiguityLevel.VERY_HIGH))
        assert summary.status == SummaryStatus.FAILED
        assert summary.confidence == "none"
        assert summary.recommendation == "No document types matched. Consider adding a new document type."

    def test_clear(self, make_candidate, started):
        summary = summarize_result(_result([make_candidate("a", 0.9)], started))
        assert summary.status == SummaryStatus.CLEAR
        assert summary.recommendation == "Use document type: a"

    def test_ambiguous(self, make_candidate, started):
        result = _result([make_candidate("a", 0.9)], started, confidence=0.7, ambiguity=AmbiguityLevel.MEDIUM)
        summary = summarize_result(result)
        assert summary.status == SummaryStatus.AMBIGUOUS
        assert summary.recommendation == "Consider a but review alternatives"

    def test_high_confidence_but_ambiguous(self, make_candidate, started):
        result = _result([make_candidate("a", 0.9)], started, confidence=0.9, ambiguity=AmbiguityLevel.LOW)
        assert summarize_result(result).status == SummaryStatus.AMBIGUOUS

    def test_uncertain(self, make_candidate, started):
        result = _result([make_candidate("a", 0.5)], started, confidence=0.4, ambiguity=AmbiguityLevel.VERY_HIGH)
        summary = summarize_result(result)
        assert summary.status == SummaryStatus.UNCERTAIN
        assert summary.confidence == "low"


class TestSerialization:
    def test_json_round_trip(self, make_candidate, started):
        original = _result(
            [make_candidate("a", 0.9, reasons=["Strong structural match"]), make_candidate("b", 0.4)],
            started,
            detected_type_id="a",
        )
        restored = ClassificationResult.from_json(original.to_json())
        assert restored == original
        assert restored.timestamps.started == started
        assert restored.ambiguity_level is AmbiguityLevel.NONE
