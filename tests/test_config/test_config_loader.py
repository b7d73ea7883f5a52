"""Tests for YAML/JSON loading."""

import pytest

from docclassify.config.loader import load_document, load_type_yaml, load_yaml
from docclassify.types import Complexity


class TestLoadYaml:
    def test_loads_mapping(self, tmp_path):
        path = tmp_path / "x.yaml"
        path.write_text("a: 1\n")
        assert load_yaml(path) == {"a": 1}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "nope.yaml")

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n")
        with pytest.raises(ValueError, match="Expected YAML mapping"):
            load_yaml(path)


class TestLoadTypeYaml:
    def test_valid(self, sample_type_yaml):
        type_def = load_type_yaml(sample_type_yaml)
        assert type_def.id == "hedge-survey"
        assert type_def.version == "2.1.0"
        assert type_def.complexity == Complexity.SIMPLE
        assert [s.name for s in type_def.required_sections] == ["Introduction", "Findings"]
        assert type_def.optional_sections[0].required is False
        assert type_def.section_count == 3

    def test_missing_top_level_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("pipeline:\n  name: x\n")
        with pytest.raises(ValueError, match="document_type"):
            load_type_yaml(path)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("document_type:\n  id: nameless\n")
        with pytest.raises(ValueError):
            load_type_yaml(path)

    def test_null_lists_become_empty(self, tmp_path):
        path = tmp_path / "sparse.yaml"
        path.write_text("document_type:\n  id: sparse\n  name: Sparse\n  standards:\n  tags:\n")
        type_def = load_type_yaml(path)
        assert type_def.standards == []
        assert type_def.tags == []


class TestLoadDocument:
    def test_json_with_wrapper(self, sample_document_json):
        document = load_document(sample_document_json)
        assert document.id == "doc-json-1"
        assert document.section_titles == ["introduction", "findings"]
        assert document.compliance_markers == []
        assert document.terminology[0].term == "hedgerow"

    def test_yaml_without_wrapper(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text(
            "id: doc-yaml\n"
            "raw_text: Plain text only.\n"
            "metadata:\n"
            "  title: Notes\n"
            "  keywords: null\n"
        )
        document = load_document(path)
        assert document.id == "doc-yaml"
        assert document.full_text == "Plain text only."
        assert document.metadata.keywords == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.json")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ValueError, match="Expected a document mapping"):
            load_document(path)
