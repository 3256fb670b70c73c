"""List schema: homogeneous or positional-tuple sequences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from mythic_analyzer.models.results import Diagnostic, ValidationResult
from mythic_analyzer.parser.nodes import Node, SeqNode
from mythic_analyzer.schema.base import (
    Schema,
    SchemaContext,
    SchemaKind,
    ValueOrFn,
    expected_type_message,
    resolve,
)

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace


@dataclass(frozen=True, eq=False)
class SchemaList(Schema):
    """A sequence.

    ``items`` is either one schema applied to every element, or a list of
    schemas matched by index. With ``allow_duplicates`` off, an element equal
    to an earlier one (compared on decoded values, nulls ignored) is flagged.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.LIST

    items: ValueOrFn[Schema | list[Schema] | None] = None
    allow_duplicates: ValueOrFn[bool] = field(default=True, kw_only=True)

    def internal_name(self, ctx: SchemaContext) -> str:
        items = resolve(self.items, ctx)
        if items is None:
            return "list"
        if isinstance(items, list):
            return f"[{', '.join(item.type_name(ctx) for item in items)}]"
        return f"list({items.type_name(ctx)})"

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        ctx = SchemaContext(ws, doc, value)
        if not isinstance(value, SeqNode):
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=expected_type_message(self, ctx),
                    code="yaml-invalid-type",
                )
            )
            return result

        items = resolve(self.items, ctx)
        if isinstance(items, list):
            if len(value.items) != len(items):
                adjective = "many" if len(value.items) > len(items) else "few"
                result.diagnostics.append(
                    Diagnostic(
                        range=doc.node_range(value),
                        message=(
                            f"Too {adjective} items in list. "
                            f"Expected {len(items)}, but got {len(value.items)}."
                        ),
                        code="yaml-invalid-list-length",
                    )
                )
            for schema, item in zip(items, value.items):
                result.merge(schema.partial_process(ws, doc, item))
        elif items is not None:
            for item in value.items:
                result.merge(items.partial_process(ws, doc, item))

        if not resolve(self.allow_duplicates, ctx):
            self._check_duplicates(doc, value, result)
        return result

    def _full_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        if not isinstance(value, SeqNode):
            return result
        items = resolve(self.items, SchemaContext(ws, doc, value))
        if isinstance(items, list):
            for schema, item in zip(items, value.items):
                result.merge(schema.full_process(ws, doc, item))
        elif items is not None:
            for item in value.items:
                result.merge(items.full_process(ws, doc, item))
        return result

    def _check_duplicates(self, doc: MythicDoc, value: SeqNode, result: ValidationResult) -> None:
        decoded = [item.to_python() for item in value.items]
        for i, current in enumerate(decoded):
            if current is None:
                continue
            if any(current == earlier for earlier in decoded[:i]):
                result.diagnostics.append(
                    Diagnostic(
                        range=doc.node_range(value.items[i]),
                        message=f"Duplicate item `{doc.node_source(value.items[i])}`.",
                        code="yaml-duplicate-list-item",
                    )
                )
