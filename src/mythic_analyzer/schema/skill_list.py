"""List of skill lines, tokenized in the full pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mythic_analyzer.models.results import ValidationResult
from mythic_analyzer.parser.nodes import Node, ScalarNode, SeqNode
from mythic_analyzer.schema.base import Schema, SchemaContext, ValueOrFn
from mythic_analyzer.schema.list import SchemaList
from mythic_analyzer.schema.references import SCHEMA_MYTHIC_SKILL_ID
from mythic_analyzer.schema.string import SchemaString
from mythic_analyzer.skills.mechanic import SkillMechanic

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MythicSkillList(SchemaList):
    """Skill lines such as ``- damage{amount=5} @target ~onAttack 0.5``.

    ``supports_triggers`` is off where triggers are meaningless, like the
    body of a metaskill.
    """

    items: ValueOrFn[Schema | list[Schema] | None] = field(default_factory=SchemaString)
    supports_triggers: bool = field(default=True, kw_only=True)

    def internal_name(self, ctx: SchemaContext) -> str:
        return "list(skill)"

    def _full_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = super()._full_process(ws, doc, value)
        if not isinstance(value, SeqNode):
            return result
        for item in value.items:
            if isinstance(item, ScalarNode):
                result.merge(self.parse_skill(ws, doc, item))
        return result

    def parse_skill(self, ws: Workspace, doc: MythicDoc, item: ScalarNode) -> ValidationResult:
        if item.style in ("|", ">"):
            logger.debug("Skipping block scalar skill line at %d in %s", item.start, doc.uri)
            return ValidationResult()
        start, end = item.start, item.end
        if item.is_quoted:
            start, end = start + 1, end - 1
        mechanic = SkillMechanic.parse(doc, doc.source[start:end], start, self.supports_triggers)
        result = mechanic.result

        reference = mechanic.skill_reference()
        if reference is not None:
            node = ScalarNode(value=reference.value, text=reference.value, start=reference.start, end=reference.end)
            result.merge(SCHEMA_MYTHIC_SKILL_ID.partial_process(ws, doc, node))
            result.merge(SCHEMA_MYTHIC_SKILL_ID.full_process(ws, doc, node))
        return result
