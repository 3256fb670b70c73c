"""Boolean leaf schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from mythic_analyzer.models.results import Diagnostic, ValidationResult
from mythic_analyzer.parser.nodes import Node, ScalarNode
from mythic_analyzer.schema.base import Schema, SchemaContext, SchemaKind, expected_type_message

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace


@dataclass(frozen=True, eq=False)
class SchemaBool(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOL

    def internal_name(self, ctx: SchemaContext) -> str:
        return "bool"

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        if not isinstance(value, ScalarNode):
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=expected_type_message(self, SchemaContext(ws, doc, value)),
                    code="yaml-invalid-type",
                )
            )
            return result
        if not isinstance(value.value, bool):
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=f"Expected a boolean, but got {doc.node_source(value)}.",
                    code="yaml-invalid-type",
                )
            )
            return result
        self._add_highlight(doc, value, result)
        return result
