"""Validation results: diagnostics and the editor artifacts collected alongside them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from mythic_analyzer.models.positions import Position, Range, pos_is_in

if TYPE_CHECKING:
    from mythic_analyzer.models.components import ComponentKind, MythicComponent

DIAGNOSTIC_SOURCE = "mythic-analyzer"


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class SemanticTokenType(StrEnum):
    CLASS = "class"
    ENUM_MEMBER = "enumMember"
    EVENT = "event"
    FUNCTION = "function"
    KEYWORD = "keyword"
    NUMBER = "number"
    OPERATOR = "operator"
    PROPERTY = "property"
    STRING = "string"


class SemanticTokenModifier(StrEnum):
    DECLARATION = "declaration"
    DEPRECATED = "deprecated"
    READONLY = "readonly"
    STATIC = "static"


class CompletionItemKind(IntEnum):
    TEXT = 1
    FUNCTION = 3
    FIELD = 5
    CLASS = 7
    PROPERTY = 10
    VALUE = 12
    ENUM_MEMBER = 20
    EVENT = 23


class Diagnostic(BaseModel):
    """A problem found in a document, keyed by a stable ``code``."""

    model_config = ConfigDict(frozen=True)

    range: Range
    message: str
    code: str
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    source: str = DIAGNOSTIC_SOURCE


class Hover(BaseModel):
    """Markdown shown when the cursor rests on ``range``."""

    model_config = ConfigDict(frozen=True)

    range: Range
    contents: str


class Highlight(BaseModel):
    """A semantic highlight over a range."""

    model_config = ConfigDict(frozen=True)

    range: Range
    color: SemanticTokenType
    modifiers: tuple[SemanticTokenModifier, ...] = ()

    def color_index(self, colors: list[SemanticTokenType]) -> int:
        return colors.index(self.color) if self.color in colors else -1

    def modifier_bit_flag(self, modifiers: list[SemanticTokenModifier]) -> int:
        flag = 0
        for modifier in self.modifiers:
            if modifier in modifiers:
                flag |= 1 << modifiers.index(modifier)
        return flag


class RangeLink(BaseModel):
    """A go-to-definition link from a range in one document into another."""

    model_config = ConfigDict(frozen=True)

    from_uri: str
    from_range: Range
    to_uri: str
    to_selection_range: Range
    to_range: Range | None = None


class CompletionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    kind: CompletionItemKind = CompletionItemKind.TEXT
    detail: str | None = None
    documentation: str | None = None


@dataclass(frozen=True)
class RangedCompletionItems:
    """Completion proposals valid inside ``range``.

    ``conditions`` optionally narrows applicability to specific cursor positions.
    """

    range: Range
    items: list[CompletionItem]
    conditions: Callable[[Position], bool] | None = None

    def applies_at(self, position: Position) -> bool:
        if not pos_is_in(position, self.range):
            return False
        return self.conditions is None or self.conditions(position)


@dataclass
class ValidationResult:
    """Accumulator for everything a schema pass produces.

    Merging concatenates every field, except highlights: the merged-in
    highlights are placed in front so the most recently registered one wins
    where ranges overlap.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)
    hovers: list[Hover] = field(default_factory=list)
    range_links: list[RangeLink] = field(default_factory=list)
    highlights: list[Highlight] = field(default_factory=list)
    completion_items: list[RangedCompletionItems] = field(default_factory=list)
    components: dict[ComponentKind, list[MythicComponent]] = field(default_factory=dict)

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Merge ``other`` into this result in place and return ``self``."""
        self.diagnostics.extend(other.diagnostics)
        self.hovers.extend(other.hovers)
        self.range_links.extend(other.range_links)
        self.highlights[:0] = other.highlights
        self.completion_items.extend(other.completion_items)
        for kind, components in other.components.items():
            self.components.setdefault(kind, []).extend(components)
        return self

    def merged(self, other: ValidationResult) -> ValidationResult:
        """Return a new result combining ``self`` and ``other``; neither is modified."""
        return ValidationResult().merge(self).merge(other)

    def add_highlight(self, highlight: Highlight) -> None:
        self.highlights.insert(0, highlight)

    def components_of(self, kind: ComponentKind) -> list[MythicComponent]:
        return self.components.setdefault(kind, [])

    @property
    def valid(self) -> bool:
        return not any(d.severity == DiagnosticSeverity.ERROR for d in self.diagnostics)
