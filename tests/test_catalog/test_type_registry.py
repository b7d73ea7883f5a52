"""Tests for the document type registry."""

import pytest

from docclassify.catalog.registry import TypeRegistry
from docclassify.types import TypeDefinition

BUILTIN_IDS = {
    "bs5837-2012",
    "arb-impact-assessment",
    "arb-method-statement",
    "tree-condition-report",
    "mortgage-insurance-report",
    "tree-safety-report",
}


class TestBuiltinCatalog:
    def test_all_builtins_load(self):
        registry = TypeRegistry()
        assert {t.id for t in registry.get_all_types()} == BUILTIN_IDS
        assert len(registry) == 6

    def test_builtins_are_well_formed(self):
        for type_def in TypeRegistry().get_all_types():
            assert type_def.required_sections, type_def.id
            assert type_def.compliance_rules, type_def.id
            assert type_def.standards, type_def.id

    def test_survey_type(self):
        survey = TypeRegistry().get("bs5837-2012")
        assert survey.category == "survey"
        assert survey.hierarchy_expected is True
        assert len(survey.required_sections) == 10
        assert survey.section_count == 14

    def test_list_types(self):
        infos = {info.id: info for info in TypeRegistry().list_types()}
        assert infos["bs5837-2012"].builtin is True
        assert infos["bs5837-2012"].section_count == 14


class TestUserTypes:
    def test_user_dir(self, sample_type_yaml):
        registry = TypeRegistry(user_dirs=[sample_type_yaml.parent])
        assert registry.has("hedge-survey")
        assert len(registry) == 7

    def test_user_type_overrides_builtin(self, tmp_path):
        (tmp_path / "override.yaml").write_text(
            "document_type:\n  id: bs5837-2012\n  name: Local Survey\n  category: survey\n"
        )
        registry = TypeRegistry(user_dirs=[tmp_path])
        assert registry.get("bs5837-2012").name == "Local Survey"
        info = next(i for i in registry.list_types() if i.id == "bs5837-2012")
        assert info.builtin is False
        assert len(registry) == 6

    def test_skips_unrelated_and_broken_files(self, tmp_path):
        (tmp_path / "config.yaml").write_text("confidence_threshold: 0.6\n")
        (tmp_path / "broken.yaml").write_text("document_type:\n  id: only-id\n")
        registry = TypeRegistry(user_dirs=[tmp_path], include_builtin=False)
        assert len(registry) == 0

    def test_missing_dir_ignored(self, tmp_path):
        registry = TypeRegistry(user_dirs=[tmp_path / "absent"], include_builtin=False)
        assert registry.get_all_types() == []


class TestRegister:
    def test_register_and_get(self):
        registry = TypeRegistry(include_builtin=False)
        registry.register(TypeDefinition(id="x", name="X"))
        assert registry.get("x").name == "X"
        assert registry.list_types()[0].builtin is False

    def test_unknown_type(self):
        with pytest.raises(KeyError, match="not found"):
            TypeRegistry(include_builtin=False).get("missing")
