"""YAML and JSON loading for type definitions and documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from docclassify.types import Document, TypeDefinition


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load any YAML file safely."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return raw


def load_type_yaml(path: str | Path) -> TypeDefinition:
    """Load a type definition YAML file and return a validated TypeDefinition."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Type YAML not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict) or "document_type" not in raw:
        raise ValueError(f"Invalid type YAML: missing top-level 'document_type' key in {path}")

    return TypeDefinition(**raw["document_type"])


def load_document(path: str | Path) -> Document:
    """Load a parsed document from JSON (``.json``) or YAML (anything else).

    A top-level ``document`` key is unwrapped when present.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")

    with open(path) as f:
        raw = json.load(f) if path.suffix.lower() == ".json" else yaml.safe_load(f)

    if isinstance(raw, dict) and isinstance(raw.get("document"), dict):
        raw = raw["document"]
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a document mapping, got {type(raw).__name__} in {path}")

    return Document(**raw)
