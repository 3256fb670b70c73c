"""Baseline highlighting of a YAML tree, before any schema applies its own."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mythic_analyzer.models.results import Highlight, SemanticTokenType, ValidationResult
from mythic_analyzer.parser.nodes import Node, iter_scalars

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc


def highlight_yaml(doc: MythicDoc, tree: Node) -> ValidationResult:
    """Highlight every scalar key as a property and every scalar value as a string."""
    result = ValidationResult()
    for scalar, is_key in iter_scalars(tree):
        color = SemanticTokenType.PROPERTY if is_key else SemanticTokenType.STRING
        result.add_highlight(Highlight(range=doc.node_range(scalar), color=color))
    return result
