"""Document type registry: discover, register, and look up type definitions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

import yaml

from docclassify.config.loader import load_type_yaml
from docclassify.types import TypeDefinition

logger = logging.getLogger(__name__)

_BUILTIN_TYPES_DIR = Path(__file__).parent / "builtin"


class TypeInfo(NamedTuple):
    id: str
    name: str
    category: str
    version: str
    builtin: bool
    section_count: int


class TypeRegistry:
    """Discovers and stores type definitions from builtin + user directories.

    Iteration order is discovery order; user definitions replace builtins
    with the same id in place.
    """

    def __init__(
        self,
        user_dirs: list[Path] | None = None,
        include_builtin: bool = True,
    ) -> None:
        self._types: dict[str, TypeDefinition] = {}
        self._sources: dict[str, bool] = {}  # id → is_builtin
        if include_builtin:
            self._scan(_BUILTIN_TYPES_DIR, builtin=True)
        for d in user_dirs or []:
            self._scan(Path(d), builtin=False)

    def get(self, type_id: str) -> TypeDefinition:
        if type_id not in self._types:
            raise KeyError(f"Document type '{type_id}' not found in registry")
        return self._types[type_id]

    def has(self, type_id: str) -> bool:
        return type_id in self._types

    def get_all_types(self) -> list[TypeDefinition]:
        return list(self._types.values())

    def list_types(self) -> list[TypeInfo]:
        return [
            TypeInfo(
                id=t.id,
                name=t.name,
                category=t.category,
                version=t.version,
                builtin=self._sources[t.id],
                section_count=t.section_count,
            )
            for t in self._types.values()
        ]

    def register(self, type_def: TypeDefinition, builtin: bool = False) -> None:
        self._types[type_def.id] = type_def
        self._sources[type_def.id] = builtin

    def __len__(self) -> int:
        return len(self._types)

    def _scan(self, directory: Path, builtin: bool) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.yaml")):
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if not isinstance(raw, dict) or "document_type" not in raw:
                    continue  # Not a type YAML, skip silently
                type_def = load_type_yaml(path)
                # User types override builtins
                if type_def.id not in self._types or not builtin:
                    self._types[type_def.id] = type_def
                    self._sources[type_def.id] = builtin
            except Exception as e:
                logger.warning("Failed to load document type %s: %s", path, e)
