"""Shared Pydantic models for docclassify."""

from __future__ import annotations

import math
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

SIGNAL_NAMES: tuple[str, ...] = ("structure", "terminology", "compliance", "metadata", "ordering")


def clamp_score(value: float | None) -> float:
    """Clamp a score into [0, 1]. None and NaN collapse to 0."""
    if value is None:
        return 0.0
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


# ── Enums ──


class Severity(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Complexity(StrEnum):
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class TermCategory(StrEnum):
    TECHNICAL = "technical"
    LEGAL = "legal"
    COMPLIANCE = "compliance"
    SPECIES = "species"
    MEASUREMENT = "measurement"
    GENERAL = "general"


class MarkerType(StrEnum):
    STANDARD = "standard"
    REGULATION = "regulation"
    REQUIREMENT = "requirement"
    GUIDELINE = "guideline"
    BEST_PRACTICE = "best_practice"


class AmbiguityLevel(StrEnum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


class RankingLevel(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SummaryStatus(StrEnum):
    CLEAR = "clear"
    AMBIGUOUS = "ambiguous"
    UNCERTAIN = "uncertain"
    FAILED = "failed"


# ── Document (produced upstream by the parser) ──


class DetectedSection(BaseModel):
    model_config = {"frozen": True}

    id: str = ""
    title: str = ""
    content: str = ""
    level: int = 1
    type: str = "section"
    parent_id: str | None = None
    children_ids: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class TerminologyEntry(BaseModel):
    model_config = {"frozen": True}

    term: str
    context: str = ""
    frequency: int = 1
    category: TermCategory = TermCategory.GENERAL
    confidence: float = 1.0


class ComplianceMarker(BaseModel):
    model_config = {"frozen": True}

    type: MarkerType = MarkerType.STANDARD
    text: str = ""
    standard: str | None = None
    reference: str | None = None
    severity: Severity | None = None
    section_id: str | None = None
    confidence: float = 1.0


class DocumentMetadata(BaseModel):
    model_config = {"frozen": True, "extra": "allow"}

    title: str | None = None
    author: str | None = None
    date: str | None = None
    client: str | None = None
    report_type: str | None = None
    word_count: int | None = None
    language: str | None = None
    references: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    @field_validator("references", "keywords", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Document(BaseModel):
    """Structured parser output. Read-only to the classifier."""

    model_config = {"frozen": True}

    id: str
    sections: list[DetectedSection] = Field(default_factory=list)
    terminology: list[TerminologyEntry] = Field(default_factory=list)
    compliance_markers: list[ComplianceMarker] = Field(default_factory=list)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    raw_text: str = ""

    @field_validator("sections", "terminology", "compliance_markers", mode="before")
    @classmethod
    def _missing_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("metadata", mode="before")
    @classmethod
    def _missing_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def full_text(self) -> str:
        """Section titles and contents joined; falls back to raw text."""
        parts = [
            f"{s.title}\n{s.content}" if s.title else s.content
            for s in self.sections
        ]
        text = "\n".join(p for p in parts if p)
        return text or self.raw_text

    @property
    def section_titles(self) -> list[str]:
        return [s.title.strip().lower() for s in self.sections]

    @property
    def has_hierarchy(self) -> bool:
        return any(s.level > 1 or s.parent_id for s in self.sections)


# ── Type definitions (supplied by the registry) ──


class SectionDefinition(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    description: str = ""
    required: bool = True


class ComplianceRule(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    description: str = ""
    standard: str = ""
    rule: str = ""
    severity: Severity = Severity.MEDIUM


class TypeDefinition(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    description: str = ""
    category: str = "custom"
    version: str = "1.0.0"
    required_sections: list[SectionDefinition] = Field(default_factory=list)
    optional_sections: list[SectionDefinition] = Field(default_factory=list)
    compliance_rules: list[ComplianceRule] = Field(default_factory=list)
    standards: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    complexity: Complexity = Complexity.MEDIUM
    typical_audience: list[str] = Field(default_factory=list)
    expects_hierarchy: bool | None = None

    @field_validator(
        "required_sections",
        "optional_sections",
        "compliance_rules",
        "standards",
        "tags",
        "typical_audience",
        mode="before",
    )
    @classmethod
    def _missing_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def section_count(self) -> int:
        return len(self.required_sections) + len(self.optional_sections)

    @property
    def hierarchy_expected(self) -> bool:
        if self.expects_hierarchy is not None:
            return self.expects_hierarchy
        return self.complexity == Complexity.COMPLEX


# ── Scoring results ──


class ScoreBreakdown(BaseModel):
    """Five clamped sub-scores plus the scorer-reported reasons."""

    model_config = {"frozen": True}

    structure: float = 0.0
    terminology: float = 0.0
    compliance: float = 0.0
    metadata: float = 0.0
    ordering: float = 0.0
    factors: dict[str, dict[str, float]] = Field(default_factory=dict)
    reasons: list[str] = Field(default_factory=list)

    @field_validator(*SIGNAL_NAMES, mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return clamp_score(value)

    def values(self) -> list[float]:
        return [getattr(self, name) for name in SIGNAL_NAMES]

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in SIGNAL_NAMES}


class ClassificationCandidate(BaseModel):
    model_config = {"frozen": True}

    type_id: str
    composite_score: float
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    reasons: list[str] = Field(default_factory=list)
    # Populated only by the candidate ranker
    ranking_score: float | None = None
    rank: int | None = None

    @property
    def final_score(self) -> float:
        return self.ranking_score if self.ranking_score is not None else self.composite_score


class ScoreRange(BaseModel):
    min: float = 0.0
    max: float = 0.0
    average: float = 0.0


class RankingSummary(BaseModel):
    top_candidate: ClassificationCandidate | None = None
    score_range: ScoreRange = Field(default_factory=ScoreRange)
    confidence_level: RankingLevel = RankingLevel.LOW
    ambiguity_level: RankingLevel = RankingLevel.HIGH


class Timestamps(BaseModel):
    model_config = {"frozen": True}

    started: datetime
    completed: datetime


class ResultMetadata(BaseModel):
    model_config = {"frozen": True}

    types_considered: int = 0
    scoring_method: str = "weighted-composite"
    version: str = "1.0.0"
    ranking_applied: bool = False
    ranking_summary: RankingSummary | None = None


class ClassificationResult(BaseModel):
    """Outcome of one classify() call. Never mutated after validation."""

    model_config = {"frozen": True}

    id: str
    document_id: str
    detected_type_id: str | None = None
    ranked_candidates: list[ClassificationCandidate] = Field(default_factory=list)
    confidence_score: float = 0.0
    ambiguity_level: AmbiguityLevel = AmbiguityLevel.VERY_HIGH
    reasons: list[str] = Field(default_factory=list)
    timestamps: Timestamps
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)

    @property
    def top_candidate(self) -> ClassificationCandidate | None:
        return self.ranked_candidates[0] if self.ranked_candidates else None

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str | bytes) -> ClassificationResult:
        return cls.model_validate_json(data)


class ClassificationSummary(BaseModel):
    status: SummaryStatus
    top_candidate: ClassificationCandidate | None = None
    confidence: str = "none"
    recommendation: str = ""


class EngineStatistics(BaseModel):
    total_classifications: int = 0
    total_clear_classifications: int = 0
    total_ambiguous_classifications: int = 0
    active_results: int = 0

    @property
    def clear_classification_rate(self) -> float:
        total = self.total_classifications
        return self.total_clear_classifications / total if total > 0 else 0.0
