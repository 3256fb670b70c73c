"""Schema of a metaskill file: ``<skill id>: { Skills: [...], Cooldown: ..., ... }``."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from mythic_analyzer.models.components import ComponentKind, MythicSkill
from mythic_analyzer.models.results import Diagnostic, ValidationResult
from mythic_analyzer.parser.documentation import md_see_also, parse_documentation
from mythic_analyzer.parser.nodes import Node, ScalarNode
from mythic_analyzer.schema.base import SchemaContext
from mythic_analyzer.schema.bool import SchemaBool
from mythic_analyzer.schema.component import component
from mythic_analyzer.schema.list import SchemaList
from mythic_analyzer.schema.number import SchemaNumber
from mythic_analyzer.schema.object import SchemaMap, SchemaObject, SchemaObjectProperty
from mythic_analyzer.schema.references import SCHEMA_MYTHIC_SKILL_ID
from mythic_analyzer.schema.skill_list import MythicSkillList
from mythic_analyzer.schema.string import SchemaString

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace


def check_tick_aligned(ws: Workspace, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
    """Cooldowns are counted in server ticks."""
    if not isinstance(value, ScalarNode) or isinstance(value.value, bool):
        return
    if not isinstance(value.value, int | float):
        return
    tick = Decimal(str(ws.mythic_data.tick_duration))
    if Decimal(str(value.value)) % tick != 0:
        result.diagnostics.append(
            Diagnostic(
                range=doc.node_range(value),
                message=f"Cooldown should be divisible by {ws.mythic_data.tick_duration} (1 tick).",
                code="mythic-cooldown-not-tick-aligned",
            )
        )


def skill_documentation(ctx: SchemaContext) -> str | None:
    if ctx.pair is None or not ctx.pair.comment_before:
        return None
    return parse_documentation(ctx.pair.comment_before) + md_see_also("Skills/Metaskills")


def _conditions(description: str, anchor: str) -> SchemaObjectProperty:
    return SchemaObjectProperty(
        schema=SchemaList(SchemaString()),
        description=description + md_see_also(f"Skills/Metaskills#{anchor}"),
    )


MYTHIC_SKILL_SCHEMA = SchemaMap(
    SchemaObject(
        {
            "CancelIfNoTargets": SchemaObjectProperty(
                schema=SchemaBool(),
                description="Whether to cancel the skill if there are no targets."
                + md_see_also("Skills/Metaskills#cancelifnotargets"),
            ),
            "OnCooldownSkill": SchemaObjectProperty(
                schema=SCHEMA_MYTHIC_SKILL_ID,
                description="A skill to run instead if the skill is on cooldown."
                + md_see_also("Skills/Metaskills#oncooldownskill"),
            ),
            "Cooldown": SchemaObjectProperty(
                schema=SchemaNumber(0).on_partial_process(check_tick_aligned),
                description="The cooldown of this skill in seconds." + md_see_also("Skills/Metaskills#cooldown"),
            ),
            "Skills": SchemaObjectProperty(
                schema=MythicSkillList(supports_triggers=False),
                required=True,
                description="The skills that this skill will use." + md_see_also("Skills/Metaskills#skills"),
            ),
            "Conditions": _conditions("The conditions that this skill will check on the **caster**.", "conditions"),
            "TargetConditions": _conditions(
                "The conditions that this skill will check on the **target**.", "targetconditions"
            ),
            "TriggerConditions": _conditions(
                "The conditions that this skill will check on the **trigger**.", "triggerconditions"
            ),
        }
    ).with_name("mythic_skill_config"),
    skill_documentation,
).on_partial_process(component(MythicSkill, ComponentKind.SKILLS))
