"""Binding of documents to schemas by path glob."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase

from mythic_analyzer.schema.base import Schema
from mythic_analyzer.schema.files import MYTHIC_ITEM_SCHEMA, MYTHIC_MOB_SCHEMA, MYTHIC_SKILL_SCHEMA

_EXTENSIONS = ("yml", "yaml")


def _patterns(folder: str) -> tuple[str, ...]:
    return tuple(
        pattern
        for ext in _EXTENSIONS
        for pattern in (f"*/MythicMobs/{folder}/*.{ext}", f"*/MythicMobs/Packs/*/{folder}/*.{ext}")
    )


@dataclass(frozen=True)
class PathMapping:
    """Globs selecting the documents validated by ``schema``."""

    schema_id: str
    patterns: tuple[str, ...]
    schema: Schema

    def matches(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        return any(fnmatchcase(normalized, pattern) for pattern in self.patterns)


PATH_MAP_DEFAULT: tuple[PathMapping, ...] = (
    PathMapping("mythic_skill", _patterns("Skills"), MYTHIC_SKILL_SCHEMA),
    PathMapping("mythic_mob", _patterns("Mobs"), MYTHIC_MOB_SCHEMA),
    PathMapping("mythic_item", _patterns("Items"), MYTHIC_ITEM_SCHEMA),
)

SCHEMA_IDS: tuple[str, ...] = tuple(mapping.schema_id for mapping in PATH_MAP_DEFAULT)


def find_schema(path: str, path_map: tuple[PathMapping, ...] = PATH_MAP_DEFAULT) -> Schema | None:
    """First schema whose globs match ``path``."""
    for mapping in path_map:
        if mapping.matches(path):
            return mapping.schema
    return None


def match_schema_id(schema_id: str, path_map: tuple[PathMapping, ...] = PATH_MAP_DEFAULT) -> Schema:
    """Schema registered under ``schema_id``, compared case-insensitively."""
    for mapping in path_map:
        if mapping.schema_id.lower() == schema_id.lower():
            return mapping.schema
    raise KeyError(f"Unknown schema id '{schema_id}'. Known ids: {', '.join(SCHEMA_IDS)}")
