"""Value types produced by document analysis."""

from mythic_analyzer.models.components import (
    ComponentDeclaration,
    ComponentKind,
    MythicComponent,
    MythicItem,
    MythicMob,
    MythicSkill,
)
from mythic_analyzer.models.data import MythicData
from mythic_analyzer.models.positions import Position, Range, pos_cmp, pos_is_in
from mythic_analyzer.models.results import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    DiagnosticSeverity,
    Highlight,
    Hover,
    RangedCompletionItems,
    RangeLink,
    SemanticTokenModifier,
    SemanticTokenType,
    ValidationResult,
)

__all__ = [
    "CompletionItem",
    "CompletionItemKind",
    "ComponentDeclaration",
    "ComponentKind",
    "Diagnostic",
    "DiagnosticSeverity",
    "Highlight",
    "Hover",
    "MythicComponent",
    "MythicData",
    "MythicItem",
    "MythicMob",
    "MythicSkill",
    "Position",
    "Range",
    "RangeLink",
    "RangedCompletionItems",
    "SemanticTokenModifier",
    "SemanticTokenType",
    "ValidationResult",
    "pos_cmp",
    "pos_is_in",
]
