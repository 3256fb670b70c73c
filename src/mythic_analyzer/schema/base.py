"""Schema base contract: two-phase processing and value-or-function configuration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, TypeVar, Union

from mythic_analyzer.models.results import Highlight, SemanticTokenType, ValidationResult
from mythic_analyzer.parser.nodes import Node, Pair

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace

T = TypeVar("T")


class SchemaKind(StrEnum):
    """Closed set of schema variants."""

    ANY = "any"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    OBJECT = "object"
    MAP = "map"


@dataclass(frozen=True)
class SchemaContext:
    """What a value-or-function field is resolved against.

    ``node`` is the node being validated. Object property fields also get the
    ``pair`` that holds it, giving access to the key and its comment.
    """

    ws: Workspace
    doc: MythicDoc
    node: Node | None
    pair: Pair | None = None

    @property
    def key(self) -> Node | None:
        return self.pair.key if self.pair is not None else None


ValueOrFn = Union[T, Callable[[SchemaContext], T]]

ProcessCallback = Callable[["Workspace", "MythicDoc", Node, ValidationResult], None]


def resolve(value_or_fn: ValueOrFn[T], ctx: SchemaContext) -> T:
    """Return ``value_or_fn`` itself, or its result when called with ``ctx``."""
    if callable(value_or_fn):
        return value_or_fn(ctx)
    return value_or_fn


@dataclass(frozen=True, eq=False)
class Schema:
    """Accepts any value. Base of every other schema variant.

    Subclasses implement ``_partial_process``/``_full_process`` with their
    structural checks; user callbacks registered through the builders run
    afterwards against the same result.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.ANY

    name: ValueOrFn[str | None] = field(default=None, kw_only=True)
    highlight: SemanticTokenType | None = field(default=None, kw_only=True)
    partial_callbacks: ValueOrFn[tuple[ProcessCallback, ...]] = field(default=(), kw_only=True)
    full_callbacks: ValueOrFn[tuple[ProcessCallback, ...]] = field(default=(), kw_only=True)

    # -- naming ----------------------------------------------------------------

    def internal_name(self, ctx: SchemaContext) -> str:
        return "any"

    def type_name(self, ctx: SchemaContext) -> str:
        """Display name if one is set, otherwise the rendered type signature."""
        return resolve(self.name, ctx) or self.internal_name(ctx)

    # -- immutable builders ----------------------------------------------------

    def with_name(self, name: ValueOrFn[str | None]) -> Schema:
        return replace(self, name=name)

    def with_highlight(self, highlight: SemanticTokenType | None) -> Schema:
        return replace(self, highlight=highlight)

    def on_partial_process(self, *callbacks: ProcessCallback) -> Schema:
        return replace(self, partial_callbacks=_extend(self.partial_callbacks, callbacks))

    def on_full_process(self, *callbacks: ProcessCallback) -> Schema:
        return replace(self, full_callbacks=_extend(self.full_callbacks, callbacks))

    # -- processing --------------------------------------------------------------

    def partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        """Local, syntax-only validation. Never consults other documents."""
        result = self._partial_process(ws, doc, value)
        self._run_callbacks(self.partial_callbacks, ws, doc, value, result)
        return result

    def full_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        """Semantic validation. Assumes every loaded document has been partially processed."""
        result = self._full_process(ws, doc, value)
        self._run_callbacks(self.full_callbacks, ws, doc, value, result)
        return result

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        return ValidationResult()

    def _full_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        return ValidationResult()

    def _run_callbacks(
        self,
        callbacks: ValueOrFn[tuple[ProcessCallback, ...]],
        ws: Workspace,
        doc: MythicDoc,
        value: Node,
        result: ValidationResult,
    ) -> None:
        for callback in resolve(callbacks, SchemaContext(ws, doc, value)):
            callback(ws, doc, value, result)

    def _add_highlight(self, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
        if self.highlight is not None:
            result.add_highlight(Highlight(range=doc.node_range(value), color=self.highlight))


def _extend(
    current: ValueOrFn[tuple[ProcessCallback, ...]],
    callbacks: tuple[ProcessCallback, ...],
) -> ValueOrFn[tuple[ProcessCallback, ...]]:
    if callable(current):
        return lambda ctx: (*current(ctx), *callbacks)
    return (*current, *callbacks)


def expected_type_message(schema: Schema, ctx: SchemaContext) -> str:
    return f"Expected `{schema.type_name(ctx)}`."
