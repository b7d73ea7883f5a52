import json

import pytest

from docclassify.types import (
    ClassificationCandidate,
    ComplianceMarker,
    DetectedSection,
    Document,
    ScoreBreakdown,
    SectionDefinition,
    Severity,
    TypeDefinition,
)


def _section(title, content="", level=1, parent_id=None):
    return DetectedSection(
        id=title.lower().replace(" ", "-"),
        title=title,
        content=content,
        level=level,
        parent_id=parent_id,
    )


@pytest.fixture
def site_note_type():
    """Medium-complexity flat type: three required sections, one optional."""
    return TypeDefinition(
        id="site-note",
        name="Site Note",
        category="unlisted",
        complexity="medium",
        required_sections=[
            SectionDefinition(id="introduction", name="Introduction"),
            SectionDefinition(id="findings", name="Findings"),
            SectionDefinition(id="conclusion", name="Conclusion"),
        ],
        optional_sections=[
            SectionDefinition(id="appendices", name="Appendices", required=False),
        ],
    )


@pytest.fixture
def site_note_document():
    """Flat four-section document matching site_note_type."""
    return Document(
        id="doc-site-note",
        sections=[
            _section("Introduction", "Visit to the rear garden to record the trees present."),
            _section("Findings", "Two mature oaks and a sycamore were recorded."),
            _section("Conclusion", "No works are needed at this time."),
            _section("Appendices", "Photographs attached."),
        ],
    )


@pytest.fixture
def survey_document():
    """A nested BS5837 tree survey with critical compliance markers."""
    return Document(
        id="doc-survey-001",
        sections=[
            _section("Title Page", "Tree Survey for Oak Lane. Prepared for the client."),
            _section(
                "Executive Summary",
                "This BS5837:2012 tree survey records 14 trees. Recommendations follow "
                "Arboricultural Association Guidelines.",
            ),
            _section(
                "Introduction",
                "The survey supports a planning application for development of the site.",
            ),
            _section(
                "Methodology",
                "A site visit was carried out. Measurement of stem diameter used a girth tape. "
                "Data collection followed BS5837:2012.",
            ),
            _section("Site Description", "A level plot with a boundary hedge.", level=2,
                     parent_id="methodology"),
            _section("Tree Data", "T1 Oak, DBH 0.65m, height 18m, category A."),
            _section("Category Assessment", "Trees were graded A, B, C or U using the BS5837 Category System."),
            _section(
                "Root Protection Area Calculations",
                "RPA Calculation: radius is 12 x DBH. T1 RPA radius 7.8m.",
            ),
            _section("Recommendations", "Retain T1 and install protective fencing."),
            _section("Conclusions", "The development can proceed with the trees protected."),
        ],
        compliance_markers=[
            ComplianceMarker(
                type="standard",
                text="BS5837:2012 category system applied",
                standard="BS5837:2012",
                severity=Severity.CRITICAL,
            ),
            ComplianceMarker(
                type="requirement",
                text="RPA calculated as 12 x DBH",
                standard="BS5837:2012",
                reference="Section 4.6",
                severity=Severity.CRITICAL,
            ),
        ],
    )


@pytest.fixture
def make_candidate():
    """Factory for candidates with a uniform or explicit breakdown."""

    def _make(type_id, score, breakdown=None, reasons=None):
        if breakdown is None:
            breakdown = dict.fromkeys(
                ("structure", "terminology", "compliance", "metadata", "ordering"), score
            )
        return ClassificationCandidate(
            type_id=type_id,
            composite_score=score,
            breakdown=ScoreBreakdown(**breakdown),
            reasons=reasons or [],
        )

    return _make


@pytest.fixture
def sample_type_yaml(tmp_path):
    """Write a minimal document type YAML and return its path."""
    content = """
document_type:
  id: hedge-survey
  name: Hedgerow Survey
  category: survey
  version: "2.1.0"
  complexity: simple
  required_sections:
    - {id: introduction, name: Introduction}
    - {id: findings, name: Findings}
  optional_sections:
    - {id: appendices, name: Appendices, required: false}
  standards: ["Hedgerows Regulations 1997"]
  tags: [hedgerow, survey]
"""
    path = tmp_path / "hedge_survey.yaml"
    path.write_text(content)
    return path


@pytest.fixture
def sample_document_json(tmp_path):
    """Write a parsed document as JSON and return its path."""
    payload = {
        "document": {
            "id": "doc-json-1",
            "sections": [
                {"id": "intro", "title": "Introduction", "content": "Hedgerow survey of the field."},
                {"id": "findings", "title": "Findings", "content": "Hawthorn and blackthorn."},
            ],
            "terminology": [{"term": "hedgerow", "category": "species"}],
            "compliance_markers": None,
        }
    }
    path = tmp_path / "document.json"
    path.write_text(json.dumps(payload))
    return path
