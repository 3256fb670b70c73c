"""String leaf schema: regex, enumerated and literal matchers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from mythic_analyzer.models.results import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    RangedCompletionItems,
    ValidationResult,
)
from mythic_analyzer.parser.nodes import Node, ScalarNode
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

DEFAULT_MAX_DISTANCE = 3
_MAX_RENDERED_OPTIONS = 5


@dataclass(frozen=True)
class StringMatcher:
    """One accepted literal, with the completion item offered for it."""

    matcher: str
    completion_item: CompletionItem | None = None

    def to_completion_item(self) -> CompletionItem:
        return self.completion_item or CompletionItem(label=self.matcher, kind=CompletionItemKind.VALUE)


Matcher = re.Pattern[str] | str | Iterable[str | StringMatcher]


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def closest(text: str, candidates: Iterable[str], max_distance: int = DEFAULT_MAX_DISTANCE) -> str | None:
    """Return the candidate nearest to ``text``, if within ``max_distance`` edits."""
    best: str | None = None
    best_distance = max_distance + 1
    for candidate in candidates:
        distance = levenshtein(text, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best


def scalar_text(value: ScalarNode) -> str:
    """The string form of a scalar: its decoded value if a string, else its source text."""
    return value.value if isinstance(value.value, str) else value.text


def _normalize(matcher: Iterable[str | StringMatcher]) -> list[StringMatcher]:
    return [m if isinstance(m, StringMatcher) else StringMatcher(m) for m in matcher]


@dataclass(frozen=True, eq=False)
class SchemaString(Schema):
    """A scalar string.

    ``matcher`` may be a compiled regex (searched), an iterable of literals
    (membership, with a "Did you mean" suggestion on failure), or a single
    literal. Without a matcher any scalar is accepted.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.STRING

    matcher: ValueOrFn[Matcher | None] = None
    case_sensitive: ValueOrFn[bool] = field(default=False, kw_only=True)

    def __post_init__(self) -> None:
        # literal iterables are read on every pass
        matcher = self.matcher
        if not callable(matcher) and not isinstance(matcher, str | re.Pattern | tuple | None):
            object.__setattr__(self, "matcher", tuple(matcher))

    def internal_name(self, ctx: SchemaContext) -> str:
        matcher = resolve(self.matcher, ctx)
        if matcher is None:
            return "string"
        if isinstance(matcher, re.Pattern):
            return f"string(/{matcher.pattern}/)"
        if isinstance(matcher, str):
            return f'string("{matcher}")'
        options = [m.matcher for m in _normalize(matcher)]
        rendered = " | ".join(options[:_MAX_RENDERED_OPTIONS])
        if len(options) > _MAX_RENDERED_OPTIONS:
            rendered += " | ..."
        return f"string({rendered})"

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        ctx = SchemaContext(ws, doc, value)
        if not isinstance(value, ScalarNode):
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=expected_type_message(self, ctx),
                    code="yaml-invalid-type",
                )
            )
            return result

        text = scalar_text(value)
        message = self._mismatch(ctx, text)
        if message is not None:
            result.diagnostics.append(
                Diagnostic(range=doc.node_range(value), message=message, code="yaml-invalid-value")
            )
            return result

        self._add_highlight(doc, value, result)
        return result

    def _full_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        if not isinstance(value, ScalarNode):
            return result
        matcher = resolve(self.matcher, SchemaContext(ws, doc, value))
        if matcher is None or isinstance(matcher, str | re.Pattern):
            return result
        result.completion_items.append(
            RangedCompletionItems(
                range=doc.node_range(value),
                items=[m.to_completion_item() for m in _normalize(matcher)],
            )
        )
        return result

    def matches(self, ctx: SchemaContext, text: str) -> bool:
        return self._mismatch(ctx, text) is None

    def _mismatch(self, ctx: SchemaContext, text: str) -> str | None:
        """Return an error message if ``text`` is rejected, otherwise None."""
        matcher = resolve(self.matcher, ctx)
        if matcher is None:
            return None
        case_sensitive = resolve(self.case_sensitive, ctx)

        if isinstance(matcher, re.Pattern):
            if matcher.search(text):
                return None
            return f"Expected a string matching /{matcher.pattern}/, but got `{text}`."

        if isinstance(matcher, str):
            if _equals(matcher, text, case_sensitive):
                return None
            return f"Expected `{matcher}`, but got `{text}`."

        options = [m.matcher for m in _normalize(matcher)]
        if any(_equals(option, text, case_sensitive) for option in options):
            return None
        message = f"Expected `{self.type_name(ctx)}`, but got `{text}`."
        max_distance = ctx.ws.settings.suggestion_max_distance
        if case_sensitive:
            suggestion = closest(text, options, max_distance)
        else:
            by_lower = {option.lower(): option for option in reversed(options)}
            suggestion = closest(text.lower(), by_lower, max_distance)
            suggestion = by_lower.get(suggestion) if suggestion is not None else None
        if suggestion is not None:
            message += f" Did you mean `{suggestion}`?"
        return message


def _equals(a: str, b: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return a == b
    return a.lower() == b.lower()
