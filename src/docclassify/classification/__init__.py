"""Classification engine, confidence policy, results, and lifecycle events."""

from docclassify.classification.confidence import (
    ambiguity_for_margin,
    build_reasons,
    compute_confidence,
    detect_ambiguity,
)
from docclassify.classification.engine import ClassificationEngine
from docclassify.classification.events import (
    AmbiguousEvent,
    CandidateScoredEvent,
    ClassificationEvent,
    CompletedEvent,
    ErrorEvent,
    EventBus,
    EventLog,
    RankedEvent,
    StartedEvent,
)
from docclassify.classification.result import create_result, summarize_result, validate_result

__all__ = [
    "ClassificationEngine",
    "compute_confidence",
    "detect_ambiguity",
    "ambiguity_for_margin",
    "build_reasons",
    "create_result",
    "validate_result",
    "summarize_result",
    "EventBus",
    "EventLog",
    "ClassificationEvent",
    "StartedEvent",
    "CandidateScoredEvent",
    "RankedEvent",
    "CompletedEvent",
    "AmbiguousEvent",
    "ErrorEvent",
]
