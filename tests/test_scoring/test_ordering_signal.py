"""Tests for the section-ordering signal."""

import pytest

from docclassify.config.schema import ScorerConfig
from docclassify.errors.exceptions import ScorerDegraded
from docclassify.scoring.signals import score_ordering
from docclassify.scoring.text import titles_match
from docclassify.types import DetectedSection, Document, TypeDefinition


@pytest.fixture
def config():
    return ScorerConfig()


def _doc(*titles):
    return Document(id="d", sections=[DetectedSection(title=t) for t in titles])


def _type(*required, category="unlisted"):
    return TypeDefinition(
        id="t",
        name="T",
        category=category,
        required_sections=[{"id": r.lower(), "name": r} for r in required],
    )


class TestLogicalFlow:
    def test_no_sections_degrades(self, config):
        with pytest.raises(ScorerDegraded):
            score_ordering(Document(id="d"), _type("Introduction"), config)

    def test_too_few_sections(self, config):
        result = score_ordering(_doc("Introduction", "Conclusion"), _type(), config)
        assert result.factors["logical_flow"] == pytest.approx(0.3)
        assert "Insufficient sections for flow analysis" in result.reasons

    def test_full_flow(self, config):
        result = score_ordering(_doc("Introduction", "Methodology", "Conclusions"), _type(), config)
        assert result.factors["logical_flow"] == pytest.approx(1.0)

    def test_analysis_must_be_interior(self, config):
        result = score_ordering(_doc("Introduction", "Conclusions", "Data"), _type(), config)
        assert result.factors["logical_flow"] == pytest.approx(0.6)


class TestRequiredOrder:
    def test_no_required_sections(self, config):
        result = score_ordering(_doc("A", "B", "C"), _type(), config)
        assert result.factors["required_order"] == pytest.approx(0.5)

    def test_in_order(self, config):
        result = score_ordering(
            _doc("Introduction", "Findings", "Conclusion"),
            _type("Introduction", "Conclusion"),
            config,
        )
        assert result.factors["required_order"] == pytest.approx(0.8)

    def test_out_of_order(self, config):
        result = score_ordering(
            _doc("Conclusion", "Findings", "Introduction"),
            _type("Introduction", "Conclusion"),
            config,
        )
        assert result.factors["required_order"] == pytest.approx(0.4)

    def test_single_found(self, config):
        result = score_ordering(_doc("Introduction", "Notes", "Other"), _type("Introduction", "Scope"), config)
        assert result.factors["required_order"] == pytest.approx(0.6)

    def test_none_found(self, config):
        result = score_ordering(_doc("Notes", "Other", "Misc"), _type("Introduction", "Scope"), config)
        assert result.factors["required_order"] == pytest.approx(0.2)


class TestTemplateAlignment:
    def test_exact_template(self, config):
        doc = _doc("Introduction", "Methodology", "Results", "Conclusion", "Recommendations")
        result = score_ordering(doc, _type(category="survey"), config)
        assert result.factors["template_alignment"] == pytest.approx(1.0)

    def test_shifted_titles_score_lower(self, config):
        exact = score_ordering(
            _doc("Introduction", "Methodology", "Results", "Conclusion", "Recommendations"),
            _type(category="survey"),
            config,
        )
        shifted = score_ordering(
            _doc("Cover", "Introduction", "Methodology", "Results", "Conclusion"),
            _type(category="survey"),
            config,
        )
        assert shifted.factors["template_alignment"] < exact.factors["template_alignment"]

    def test_unknown_category(self, config):
        result = score_ordering(_doc("A", "B", "C"), _type(category="unlisted"), config)
        assert result.factors["template_alignment"] == pytest.approx(0.3)
        assert "No ordering patterns defined for this category" in result.reasons

    def test_bucket_fallback_for_short_documents(self, config):
        result = score_ordering(_doc("Introduction", "Recommendations"), _type(category="method"), config)
        # Two sections sit at positions 0.0 (early) and 1.0 (late)
        assert result.factors["template_alignment"] == pytest.approx(0.5)


class TestTitleMatching:
    def test_substring_either_way(self):
        assert titles_match("site description and context", "Site Description")
        assert titles_match("tree data", "Tree Data Schedule")

    def test_empty_never_matches(self):
        assert not titles_match("", "Introduction")
        assert not titles_match("introduction", "  ")
