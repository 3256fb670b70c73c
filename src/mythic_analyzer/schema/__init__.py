"""Composable schemas validating Mythic documents."""

from mythic_analyzer.schema.base import ProcessCallback, Schema, SchemaContext, SchemaKind, ValueOrFn, resolve
from mythic_analyzer.schema.bool import SchemaBool
from mythic_analyzer.schema.component import component
from mythic_analyzer.schema.list import SchemaList
from mythic_analyzer.schema.number import SchemaNumber
from mythic_analyzer.schema.object import Properties, SchemaMap, SchemaObject, SchemaObjectProperty, find_pairs
from mythic_analyzer.schema.pathmap import (
    PATH_MAP_DEFAULT,
    SCHEMA_IDS,
    PathMapping,
    find_schema,
    match_schema_id,
)
from mythic_analyzer.schema.references import (
    SCHEMA_MYTHIC_ITEM_ID,
    SCHEMA_MYTHIC_MOB_ID,
    SCHEMA_MYTHIC_SKILL_ID,
    component_reference,
)
from mythic_analyzer.schema.skill_list import MythicSkillList
from mythic_analyzer.schema.string import SchemaString, StringMatcher

__all__ = [
    "PATH_MAP_DEFAULT",
    "SCHEMA_IDS",
    "SCHEMA_MYTHIC_ITEM_ID",
    "SCHEMA_MYTHIC_MOB_ID",
    "SCHEMA_MYTHIC_SKILL_ID",
    "MythicSkillList",
    "PathMapping",
    "ProcessCallback",
    "Properties",
    "Schema",
    "SchemaBool",
    "SchemaContext",
    "SchemaKind",
    "SchemaList",
    "SchemaMap",
    "SchemaNumber",
    "SchemaObject",
    "SchemaObjectProperty",
    "SchemaString",
    "StringMatcher",
    "ValueOrFn",
    "component",
    "component_reference",
    "find_pairs",
    "find_schema",
    "match_schema_id",
    "resolve",
]
