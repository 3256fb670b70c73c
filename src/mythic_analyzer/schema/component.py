"""Registration of named components (mobs, skills, items) declared by a document."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from mythic_analyzer.models.components import ComponentDeclaration, ComponentKind, MythicComponent
from mythic_analyzer.models.results import Diagnostic, Highlight, SemanticTokenType, ValidationResult
from mythic_analyzer.parser.documentation import parse_documentation
from mythic_analyzer.parser.nodes import MapNode, Node
from mythic_analyzer.schema.base import ProcessCallback, SchemaContext

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace

logger = logging.getLogger(__name__)


def component(
    factory: Callable[..., MythicComponent],
    kind: ComponentKind,
    highlight: SemanticTokenType = SemanticTokenType.FUNCTION,
) -> ProcessCallback:
    """Build a partial-process callback that registers each top-level key as a component.

    The id is the key up to its first ``.``. Ids already declared by another
    document are reported as duplicates and not registered again; the first
    document to be partially processed keeps the id. Repeated declarations
    within one document accumulate on a single component.
    """

    def register(ws: Workspace, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
        if not isinstance(value, MapNode):
            return
        elsewhere = {c.id for c in ws.merged_validation_result(exclude=doc.uri).components_of(kind)}
        walked: dict[str, MythicComponent] = {}

        for pair in value.pairs:
            key = pair.key
            full_id = pair.key_text
            if " " in full_id:
                result.diagnostics.append(
                    Diagnostic(
                        range=doc.node_range(key),
                        message="Whitespace is not allowed in component ids.",
                        code="mythic-invalid-component-id",
                    )
                )

            component_id, _, _ = full_id.partition(".")
            # quoted keys keep their full range
            key_end = key.end
            if component_id != full_id and doc.source[key.start : key.end] == full_id:
                key_end = key.start + len(component_id)
            key_range = doc.to_range(key.start, key_end)

            if component_id in elsewhere:
                result.diagnostics.append(
                    Diagnostic(
                        range=key_range,
                        message=f"Duplicate {kind.singular} id `{component_id}`.",
                        code="mythic-duplicate-component-id",
                    )
                )
                continue

            if pair.value is None:
                continue
            result.add_highlight(Highlight(range=key_range, color=highlight))

            declaration = ComponentDeclaration(
                uri=doc.uri,
                key_range=key_range,
                pair_range=doc.to_range(pair.start, pair.end),
            )
            existing = walked.get(component_id)
            if existing is not None:
                existing.declarations.append(declaration)
                continue

            documentation = parse_documentation(pair.comment_before) if pair.comment_before else None
            created = factory(id=component_id, declarations=[declaration], documentation=documentation or None)
            walked[component_id] = created
            result.components_of(kind).append(created)
            logger.debug("Registered %s `%s` from %s", kind.value, component_id, doc.uri)

    return register


def enclosing_entry(ctx: SchemaContext) -> MapNode | None:
    """The top-level component map containing ``ctx.node``, found by source position."""
    root = ctx.doc.tree
    node = ctx.node
    if not isinstance(root, MapNode) or node is None:
        return None
    for pair in root.pairs:
        if isinstance(pair.value, MapNode) and pair.value.start <= node.start and node.end <= pair.value.end:
            return pair.value
    return None
