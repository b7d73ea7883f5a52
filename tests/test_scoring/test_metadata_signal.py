"""Tests for the metadata signal."""

import pytest

from docclassify.config.schema import ScorerConfig
from docclassify.errors.exceptions import ScorerDegraded
from docclassify.scoring.signals import score_metadata
from docclassify.scoring.text import estimate_complexity
from docclassify.types import Complexity, DetectedSection, Document, TypeDefinition


@pytest.fixture
def config():
    return ScorerConfig()


def _doc(text):
    return Document(id="d", sections=[DetectedSection(title="Body", content=text)])


class TestMetadataScore:
    def test_empty_document_degrades(self, config):
        with pytest.raises(ScorerDegraded) as exc_info:
            score_metadata(Document(id="d"), TypeDefinition(id="t", name="T"), config)
        assert exc_info.value.default == pytest.approx(0.2)

    def test_raw_text_is_used(self, config):
        doc = Document(id="d", raw_text="A site visit and survey.")
        result = score_metadata(doc, TypeDefinition(id="t", name="T", category="survey"), config)
        assert result.factors["category"] == pytest.approx(2 / 5)

    def test_category_indicators(self, config):
        type_def = TypeDefinition(id="t", name="T", category="survey")
        result = score_metadata(_doc("Survey data from the site visit."), type_def, config)
        assert result.factors["category"] == pytest.approx(2 / 5)
        assert result.reasons[0] == "Weak category match: 2/5 indicators found"

    def test_unknown_category_uses_base(self, config):
        type_def = TypeDefinition(id="t", name="T", category="unlisted")
        result = score_metadata(_doc("Anything."), type_def, config)
        assert result.factors["category"] == pytest.approx(0.3)

    def test_audience_by_name_and_synonym(self, config):
        type_def = TypeDefinition(
            id="t",
            name="T",
            typical_audience=["local-authorities", "clients", "insurers"],
        )
        text = "Issued to local authorities and to the client."
        result = score_metadata(_doc(text), type_def, config)
        assert result.factors["audience"] == pytest.approx(2 / 3)

    def test_no_audience_is_neutral(self, config):
        result = score_metadata(_doc("Text."), TypeDefinition(id="t", name="T"), config)
        assert result.factors["audience"] == pytest.approx(0.5)


class TestComplexity:
    def test_short_text_is_simple(self):
        assert estimate_complexity("A short note.") == Complexity.SIMPLE

    def test_long_text_is_complex(self):
        assert estimate_complexity("word " * 2500) == Complexity.COMPLEX

    def test_mid_length_uses_sentence_length(self):
        sentence = " ".join(["word"] * 20) + ". "
        assert estimate_complexity(sentence * 50) == Complexity.MEDIUM
        long_sentence = " ".join(["word"] * 40) + ". "
        assert estimate_complexity(long_sentence * 30) == Complexity.COMPLEX
        short_sentence = " ".join(["word"] * 10) + ". "
        assert estimate_complexity(short_sentence * 100) == Complexity.SIMPLE

    def test_exact_match(self, config):
        type_def = TypeDefinition(id="t", name="T", complexity="simple")
        result = score_metadata(_doc("Short."), type_def, config)
        assert result.factors["complexity"] == pytest.approx(0.9)

    def test_typical_for_category(self, config):
        type_def = TypeDefinition(id="t", name="T", category="condition", complexity="medium")
        result = score_metadata(_doc("Short."), type_def, config)
        assert result.factors["complexity"] == pytest.approx(0.7)

    def test_mismatch(self, config):
        type_def = TypeDefinition(id="t", name="T", category="assessment", complexity="complex")
        result = score_metadata(_doc("Short."), type_def, config)
        assert result.factors["complexity"] == pytest.approx(0.3)
