"""Object and Map schemas, with Mythic's dotted-key submapping.

Mythic treats a dotted key as shorthand for nesting::

    A.B: C
    # is equivalent to
    A:
      B: C

An Object property whose schema is itself an Object is therefore flattened
into ``A.B`` properties, and each flattened property matches both the literal
dotted key and the nested form.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, ClassVar

from mythic_analyzer.models.positions import Position, pos_is_in
from mythic_analyzer.models.results import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    Hover,
    RangedCompletionItems,
    ValidationResult,
)
from mythic_analyzer.parser.nodes import MapNode, Node, Pair, ScalarNode
from mythic_analyzer.schema.base import (
    Schema,
    SchemaContext,
    SchemaKind,
    ValueOrFn,
    expected_type_message,
    resolve,
)
from mythic_analyzer.schema.string import closest

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace


@dataclass(frozen=True)
class SchemaObjectProperty:
    """One property of an Object.

    Every field may be a function of the context holding the matched pair.
    """

    schema: ValueOrFn[Schema]
    required: ValueOrFn[bool] = False
    description: ValueOrFn[str | None] = None
    aliases: ValueOrFn[list[str] | None] = None


Properties = dict[str, SchemaObjectProperty]


def find_pairs(node: MapNode, key: str) -> list[Pair]:
    """Find the pairs holding ``key``, following submapping.

    Literal matches come first, then every dotted prefix of ``key`` whose
    value is a map is searched for the remainder. ``A.B`` therefore finds both
    ``A.B: x`` and ``A: {B: y}``.
    """
    result = [pair for pair in node.pairs if isinstance(pair.key, ScalarNode) and pair.key_text == key]
    parts = key.split(".")
    for i in range(1, len(parts)):
        prefix = ".".join(parts[:i])
        rest = ".".join(parts[i:])
        for pair in node.pairs:
            if pair.key_text == prefix and isinstance(pair.value, MapNode):
                result.extend(find_pairs(pair.value, rest))
    return list(dict.fromkeys(result))


@dataclass(frozen=True, eq=False)
class SchemaObject(Schema):
    """A map with a fixed set of properties."""

    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    properties: ValueOrFn[Properties] = field(default_factory=dict)

    def resolve_properties(self, ctx: SchemaContext) -> Properties:
        return resolve(self.properties, ctx)

    def internal_name(self, ctx: SchemaContext) -> str:
        rendered = ", ".join(
            f"{key}: {resolve(prop.schema, ctx).type_name(ctx)}"
            for key, prop in self.resolve_properties(ctx).items()
        )
        return f"{{ {rendered} }}"

    # -- submapping -------------------------------------------------------------

    def submapped(self, ctx: SchemaContext) -> Properties:
        """Properties with every nested Object flattened into dotted keys."""
        flat: Properties = {}
        nested: Properties = {}
        for key, prop in self.resolve_properties(ctx).items():
            schema = resolve(prop.schema, ctx)
            match schema.kind:
                case SchemaKind.OBJECT:
                    children = schema.submapped(ctx)
                    if not children:
                        flat[key] = prop
                        continue
                    prefixes = [key, *(resolve(prop.aliases, ctx) or [])]
                    for subkey, subprop in children.items():
                        subaliases = [*(resolve(subprop.aliases, ctx) or []), subkey]
                        aliases = [f"{prefix}.{alias}" for prefix in prefixes for alias in subaliases]
                        nested[f"{key}.{subkey}"] = replace(subprop, aliases=list(dict.fromkeys(aliases)))
                case _:
                    flat[key] = prop
        return {**flat, **nested}

    def _names(self, key: str, prop: SchemaObjectProperty, ctx: SchemaContext) -> list[str]:
        return list(dict.fromkeys([key, *(resolve(prop.aliases, ctx) or [])]))

    def _find_property_pairs(
        self, node: MapNode, key: str, prop: SchemaObjectProperty, ctx: SchemaContext
    ) -> list[Pair]:
        pairs = [pair for name in self._names(key, prop, ctx) for pair in find_pairs(node, name)]
        return list(dict.fromkeys(pairs))

    # -- partial ----------------------------------------------------------------

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        ctx = SchemaContext(ws, doc, value)
        if not isinstance(value, MapNode):
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=expected_type_message(self, ctx),
                    code="yaml-invalid-type",
                )
            )
            return result

        properties = self.submapped(ctx)
        claimed: set[Pair] = set()
        for key, prop in properties.items():
            pairs = self._find_property_pairs(value, key, prop, ctx)
            claimed.update(pairs)
            if not pairs:
                # dotted properties come from submapping and are never required
                if "." not in key and resolve(prop.required, ctx):
                    result.diagnostics.append(
                        Diagnostic(
                            range=doc.node_range(value),
                            message=f"Missing required property `{key}`.",
                            code="yaml-missing-property",
                        )
                    )
                continue
            if len(pairs) > 1:
                for pair in pairs:
                    result.diagnostics.append(
                        Diagnostic(
                            range=doc.node_range(pair.key),
                            message=f"Duplicate property `{key}`.",
                            code="yaml-duplicate-property",
                        )
                    )
            for pair in pairs:
                if pair.value is None:
                    result.diagnostics.append(
                        Diagnostic(
                            range=doc.node_range(pair.key),
                            message=f"Expected a value for `{key}`.",
                            code="yaml-missing-value",
                        )
                    )
                    continue
                pair_ctx = SchemaContext(ws, doc, pair.value, pair)
                schema = resolve(prop.schema, pair_ctx)
                result.hovers.append(
                    Hover(range=doc.node_range(pair.key), contents=self._hover(key, prop, schema, pair_ctx))
                )
                result.merge(schema.partial_process(ws, doc, pair.value))

        names = [name for key, prop in properties.items() for name in self._names(key, prop, ctx)]
        self._check_unexpected(ws, doc, value, names, claimed, "", result)
        return result

    def _hover(self, key: str, prop: SchemaObjectProperty, schema: Schema, ctx: SchemaContext) -> str:
        contents = f"`{key}`: `{schema.type_name(ctx)}`"
        description = resolve(prop.description, ctx)
        if description:
            contents += f"\n\n{description}"
        aliases = [alias for alias in resolve(prop.aliases, ctx) or [] if alias != key]
        if aliases:
            contents += "\n\nAliases: " + ", ".join(f"`{alias}`" for alias in aliases)
        return contents

    def _check_unexpected(
        self,
        ws: Workspace,
        doc: MythicDoc,
        node: MapNode,
        names: list[str],
        claimed: set[Pair],
        prefix: str,
        result: ValidationResult,
    ) -> None:
        """Flag every unclaimed key, descending only into partially submapped keys."""
        for pair in node.pairs:
            if pair in claimed:
                continue
            full_key = prefix + pair.key_text
            if any(name.startswith(full_key + ".") for name in names):
                if isinstance(pair.value, MapNode):
                    self._check_unexpected(ws, doc, pair.value, names, claimed, full_key + ".", result)
                elif pair.value is None:
                    result.diagnostics.append(
                        Diagnostic(
                            range=doc.node_range(pair.key),
                            message=f"Expected a value for `{full_key}`.",
                            code="yaml-missing-value",
                        )
                    )
                else:
                    result.diagnostics.append(
                        Diagnostic(
                            range=doc.node_range(pair.value),
                            message=f"Expected a map of properties for `{full_key}`.",
                            code="yaml-invalid-type",
                        )
                    )
                continue

            candidates = [name[len(prefix) :] for name in names if name.startswith(prefix)]
            message = f"Unexpected property `{pair.key_text}`."
            suggestion = closest(pair.key_text, candidates, ws.settings.suggestion_max_distance)
            if suggestion is not None:
                message += f" Did you mean `{suggestion}`?"
            result.diagnostics.append(
                Diagnostic(range=doc.node_range(pair.key), message=message, code="yaml-unexpected-property")
            )

    # -- full -------------------------------------------------------------------

    def _full_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        ctx = SchemaContext(ws, doc, value)
        if not isinstance(value, MapNode):
            end = max(value.end, doc.next_non_whitespace(value.end))
            result.completion_items.append(
                RangedCompletionItems(
                    range=doc.to_range(value.start, end),
                    items=[
                        self._completion_item(key, prop, ctx)
                        for key, prop in self.resolve_properties(ctx).items()
                    ],
                )
            )
            return result

        properties = self.submapped(ctx)
        present: set[str] = set()
        for key, prop in properties.items():
            pairs = self._find_property_pairs(value, key, prop, ctx)
            if pairs:
                present.add(key)
            for pair in pairs:
                if pair.value is None:
                    continue
                schema = resolve(prop.schema, SchemaContext(ws, doc, pair.value, pair))
                result.merge(schema.full_process(ws, doc, pair.value))

        missing = {key: prop for key, prop in properties.items() if key not in present}
        result.completion_items.extend(self._completions(ctx, value, properties, missing, ""))
        return result

    def _completion_item(self, label: str, prop: SchemaObjectProperty, ctx: SchemaContext) -> CompletionItem:
        return CompletionItem(
            label=label,
            kind=CompletionItemKind.PROPERTY,
            detail=resolve(prop.description, ctx),
        )

    def _completions(
        self,
        ctx: SchemaContext,
        node: MapNode,
        properties: Properties,
        missing: Properties,
        prefix: str,
    ) -> list[RangedCompletionItems]:
        """Completion ranges for missing properties at the nesting level ``prefix``."""
        doc = ctx.doc
        items: list[CompletionItem] = []
        labels: set[str] = set()
        for key, prop in missing.items():
            for name in self._names(key, prop, ctx):
                if not name.startswith(prefix):
                    continue
                label = name[len(prefix) :]
                if "." in label or label in labels:
                    continue
                labels.add(label)
                items.append(self._completion_item(label, prop, ctx))

        if not node.pairs:
            return [RangedCompletionItems(range=doc.node_range(node), items=items)]

        completions: list[RangedCompletionItems] = []
        names = [name for key, prop in properties.items() for name in self._names(key, prop, ctx)]
        for pair in node.pairs:
            end = max(pair.end, doc.next_non_whitespace(pair.end))
            completions.append(
                RangedCompletionItems(
                    range=doc.to_range(pair.start, end),
                    items=items,
                    conditions=_at_blank_line_start(doc, pair.value),
                )
            )
            full_key = prefix + pair.key_text
            if isinstance(pair.value, MapNode) and any(name.startswith(full_key + ".") for name in names):
                completions.extend(self._completions(ctx, pair.value, properties, missing, full_key + "."))
        return completions


def _at_blank_line_start(doc: MythicDoc, value: Node | None) -> Callable[[Position], bool]:
    """Completion condition: cursor outside ``value`` with only whitespace before it on its line."""

    def condition(position: Position) -> bool:
        if value is not None and pos_is_in(position, doc.node_range(value)):
            return False
        return doc.line_text(position.line)[: position.character].strip() == ""

    return condition


@dataclass(frozen=True, eq=False)
class SchemaMap(SchemaObject):
    """An open map: every key in the document is a property validated by ``value``.

    When ``value`` is an Object, keys are cut at the first ``.`` so that
    ``id.Property: x`` and ``id: {Property: x}`` address the same entry.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.MAP

    properties: ValueOrFn[Properties] = field(default_factory=dict, init=False, repr=False)
    value: ValueOrFn[Schema] = field(default_factory=Schema)
    description: Callable[[SchemaContext], str | None] | None = None

    def internal_name(self, ctx: SchemaContext) -> str:
        return f"map({resolve(self.value, ctx).type_name(ctx)})"

    def resolve_properties(self, ctx: SchemaContext) -> Properties:
        node = ctx.node
        if not isinstance(node, MapNode):
            return {}
        schema = resolve(self.value, ctx)
        properties: Properties = {}
        for pair in node.pairs:
            key = pair.key_text
            if schema.kind is SchemaKind.OBJECT:
                key = key.split(".", 1)[0]
            if key in properties:
                continue
            properties[key] = SchemaObjectProperty(
                schema=schema,
                description=self._describe(SchemaContext(ctx.ws, ctx.doc, pair.value, pair)),
            )
        return properties

    def _describe(self, ctx: SchemaContext) -> str | None:
        return self.description(ctx) if self.description is not None else None

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = super()._partial_process(ws, doc, value)
        if not isinstance(value, MapNode):
            return result
        schema = resolve(self.value, SchemaContext(ws, doc, value))
        if schema.kind is not SchemaKind.OBJECT:
            return result
        # flattened entries have no hover of their own
        for pair in value.pairs:
            if "." in pair.key_text:
                continue
            pair_ctx = SchemaContext(ws, doc, pair.value, pair)
            contents = f"`{pair.key_text}`: `{schema.type_name(pair_ctx)}`"
            description = self._describe(pair_ctx)
            if description:
                contents += f"\n\n{description}"
            result.hovers.append(Hover(range=doc.node_range(pair.key), contents=contents))
        return result
