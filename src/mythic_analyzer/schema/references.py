"""Schemas for values that reference a mob, skill or item declared elsewhere."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mythic_analyzer.models.components import ComponentKind
from mythic_analyzer.models.results import (
    CompletionItem,
    CompletionItemKind,
    Hover,
    RangeLink,
    SemanticTokenType,
    ValidationResult,
)
from mythic_analyzer.parser.nodes import Node, ScalarNode
from mythic_analyzer.schema.base import Schema
from mythic_analyzer.schema.string import SchemaString, StringMatcher, scalar_text

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace


def component_reference(
    kind: ComponentKind,
    name: str,
    highlight: SemanticTokenType,
    completion_kind: CompletionItemKind,
) -> Schema:
    """A string naming a component of ``kind``.

    Resolution happens in the full pass, against the components registered
    by every loaded document: unknown ids fail like any enumerated string,
    known ids get a hover and one link per declaration.
    """

    def resolve_reference(ws: Workspace, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
        if not isinstance(value, ScalarNode):
            return
        components = ws.merged_validation_result().components_of(kind)
        known = SchemaString(
            [
                StringMatcher(
                    c.id,
                    CompletionItem(label=c.id, kind=completion_kind, documentation=c.generated_description),
                )
                for c in components
            ],
            case_sensitive=True,
            name=name,
            highlight=highlight,
        )
        result.merge(known.partial_process(ws, doc, value))
        result.merge(known.full_process(ws, doc, value))

        value_id = scalar_text(value)
        target = next((c for c in components if c.id == value_id), None)
        if target is None:
            return
        value_range = doc.node_range(value)
        for declaration in target.declarations:
            result.range_links.append(
                RangeLink(
                    from_uri=doc.uri,
                    from_range=value_range,
                    to_uri=declaration.uri,
                    to_selection_range=declaration.key_range,
                    to_range=declaration.pair_range,
                )
            )
        result.hovers.append(Hover(range=value_range, contents=target.generated_description))

    return SchemaString(name=name).on_full_process(resolve_reference)


SCHEMA_MYTHIC_SKILL_ID = component_reference(
    ComponentKind.SKILLS, "mythic_skill_id", SemanticTokenType.FUNCTION, CompletionItemKind.FUNCTION
)
SCHEMA_MYTHIC_MOB_ID = component_reference(
    ComponentKind.MOBS, "mythic_mob_id", SemanticTokenType.CLASS, CompletionItemKind.CLASS
)
SCHEMA_MYTHIC_ITEM_ID = component_reference(
    ComponentKind.ITEMS, "mythic_item_id", SemanticTokenType.CLASS, CompletionItemKind.CLASS
)


def _enum(name: str, attribute: str) -> Schema:
    """Case-insensitive choice among one of the ``MythicData`` id lists."""
    return SchemaString(
        lambda ctx: [
            StringMatcher(option, CompletionItem(label=option, kind=CompletionItemKind.ENUM_MEMBER))
            for option in getattr(ctx.ws.mythic_data, attribute)
        ],
        name=name,
        highlight=SemanticTokenType.ENUM_MEMBER,
    )


SCHEMA_ENTITY_TYPE = _enum("entity_type", "entity_ids")
SCHEMA_MATERIAL_TYPE = _enum("material_type", "material_ids")
SCHEMA_ENCHANTMENT = _enum("enchantment", "enchantments")
SCHEMA_HIDE_FLAG = _enum("hide_flag", "hide_flags")
SCHEMA_BOSSBAR_COLOR = _enum("bossbar_color", "bossbar_colors")
SCHEMA_BOSSBAR_STYLE = _enum("bossbar_style", "bossbar_styles")
