"""Tests for the Bool, Number and String leaf schemas."""

from __future__ import annotations

import re

import pytest

from mythic_analyzer.models.results import SemanticTokenType
from mythic_analyzer.schema.base import Schema, SchemaContext
from mythic_analyzer.schema.bool import SchemaBool
from mythic_analyzer.schema.number import SchemaNumber
from mythic_analyzer.schema.string import SchemaString, StringMatcher, closest, levenshtein
from mythic_analyzer.workspace import Workspace
from tests.conftest import codes, full, load_doc, partial


def _messages(ws: Workspace, schema: Schema, source: str) -> list[str]:
    return [d.message for d in partial(ws, schema, source).diagnostics]


class TestSchemaAny:
    def test_accepts_everything(self, workspace: Workspace) -> None:
        for source in ("1", "text", "[a, b]", "a: 1"):
            assert partial(workspace, Schema(), source).diagnostics == []

    def test_display_name_overrides_internal_name(self, workspace: Workspace) -> None:
        doc = load_doc(workspace, "x")
        ctx = SchemaContext(workspace, doc, None)
        assert Schema().type_name(ctx) == "any"
        assert Schema().with_name("thing").type_name(ctx) == "thing"
        assert SchemaNumber().with_name(lambda c: "computed").type_name(ctx) == "computed"


class TestSchemaBool:
    def test_accepts_booleans(self, workspace: Workspace) -> None:
        assert partial(workspace, SchemaBool(), "true").diagnostics == []
        assert partial(workspace, SchemaBool(), "false").diagnostics == []

    def test_rejects_yaml11_words(self, workspace: Workspace) -> None:
        assert _messages(workspace, SchemaBool(), "yes") == ["Expected a boolean, but got yes."]

    def test_rejects_collections(self, workspace: Workspace) -> None:
        result = partial(workspace, SchemaBool(), "[true]")
        assert codes(result) == ["yaml-invalid-type"]
        assert result.diagnostics[0].message == "Expected `bool`."


class TestSchemaNumber:
    @pytest.mark.parametrize(
        ("schema", "name"),
        [
            (SchemaNumber(), "number"),
            (SchemaNumber(0), "number(0=..)"),
            (SchemaNumber(0, 10), "number(0=..=10)"),
            (SchemaNumber(0, 10, min_inclusive=False, max_inclusive=False), "number(0..10)"),
            (SchemaNumber(None, 2.5), "number(..=2.5)"),
            (SchemaNumber(1, integer=True), "integer(1=..)"),
        ],
    )
    def test_internal_name(self, workspace: Workspace, schema: SchemaNumber, name: str) -> None:
        ctx = SchemaContext(workspace, load_doc(workspace, "1"), None)
        assert schema.internal_name(ctx) == name

    def test_within_bounds(self, workspace: Workspace) -> None:
        assert partial(workspace, SchemaNumber(0, 10), "5").diagnostics == []
        assert partial(workspace, SchemaNumber(0, 10), "10").diagnostics == []
        assert partial(workspace, SchemaNumber(0, 10), "0.5").diagnostics == []

    def test_below_minimum(self, workspace: Workspace) -> None:
        result = partial(workspace, SchemaNumber(0, 10), "-1")
        assert codes(result) == ["yaml-number-out-of-range"]
        assert result.diagnostics[0].message == "Expected value to be at least 0, but got -1."

    def test_above_maximum(self, workspace: Workspace) -> None:
        assert _messages(workspace, SchemaNumber(0, 10), "15") == [
            "Expected value to be at most 10, but got 15."
        ]

    def test_exclusive_bounds(self, workspace: Workspace) -> None:
        schema = SchemaNumber(0, 10, min_inclusive=False, max_inclusive=False)
        assert codes(partial(workspace, schema, "0")) == ["yaml-number-out-of-range"]
        assert codes(partial(workspace, schema, "10")) == ["yaml-number-out-of-range"]
        assert codes(partial(workspace, schema, "9.99")) == []
        assert _messages(workspace, schema, "0") == [
            "Expected value to be greater than 0, but got 0."
        ]
        assert _messages(workspace, schema, "10") == [
            "Expected value to be less than 10, but got 10."
        ]

    def test_integer_constraint(self, workspace: Workspace) -> None:
        result = partial(workspace, SchemaNumber(integer=True), "1.5")
        assert codes(result) == ["yaml-number-not-integer"]
        assert result.diagnostics[0].message == "Expected value to be an integer, but got 1.5."
        assert partial(workspace, SchemaNumber(integer=True), "2.0").diagnostics == []

    def test_first_violation_wins(self, workspace: Workspace) -> None:
        result = partial(workspace, SchemaNumber(0, 10, integer=True), "-1.5")
        assert codes(result) == ["yaml-number-out-of-range"]

    def test_booleans_are_not_numbers(self, workspace: Workspace) -> None:
        assert _messages(workspace, SchemaNumber(), "true") == ["Expected `number`."]

    def test_strings_are_not_numbers(self, workspace: Workspace) -> None:
        assert codes(partial(workspace, SchemaNumber(), "'5'")) == ["yaml-invalid-type"]

    def test_bounds_may_depend_on_context(self, workspace: Workspace) -> None:
        schema = SchemaNumber(0, lambda ctx: ctx.ws.mythic_data.attribute_max_armor)
        limit = workspace.mythic_data.attribute_max_armor
        assert partial(workspace, schema, str(limit)).diagnostics == []
        assert codes(partial(workspace, schema, str(limit + 1))) == ["yaml-number-out-of-range"]

    def test_highlight_only_when_valid(self, workspace: Workspace) -> None:
        schema = SchemaNumber(0, 10).with_highlight(SemanticTokenType.NUMBER)
        valid = partial(workspace, schema, "5")
        assert valid.highlights[0].color == SemanticTokenType.NUMBER
        invalid = partial(workspace, schema, "15")
        assert all(h.color != SemanticTokenType.NUMBER for h in invalid.highlights)


class TestSchemaString:
    def test_any_scalar(self, workspace: Workspace) -> None:
        assert partial(workspace, SchemaString(), "hello").diagnostics == []
        assert partial(workspace, SchemaString(), "5").diagnostics == []

    def test_collections_rejected(self, workspace: Workspace) -> None:
        result = partial(workspace, SchemaString(), "[a]")
        assert codes(result) == ["yaml-invalid-type"]
        assert result.diagnostics[0].message == "Expected `string`."

    def test_regex(self, workspace: Workspace) -> None:
        schema = SchemaString(re.compile(r"^\d+$"))
        assert partial(workspace, schema, "'123'").diagnostics == []
        assert _messages(workspace, schema, "abc") == [r"Expected a string matching /^\d+$/, but got `abc`."]

    def test_literal(self, workspace: Workspace) -> None:
        assert partial(workspace, SchemaString("exact"), "EXACT").diagnostics == []
        assert _messages(workspace, SchemaString("exact"), "other") == ["Expected `exact`, but got `other`."]

    def test_enumeration_is_case_insensitive_by_default(self, workspace: Workspace) -> None:
        assert partial(workspace, SchemaString(["Red", "Blue"]), "blue").diagnostics == []

    def test_case_sensitive_enumeration_suggests(self, workspace: Workspace) -> None:
        schema = SchemaString(["Red", "Blue"], case_sensitive=True)
        assert _messages(workspace, schema, "blue") == [
            "Expected `string(Red | Blue)`, but got `blue`. Did you mean `Blue`?"
        ]

    def test_no_suggestion_when_too_far(self, workspace: Workspace) -> None:
        schema = SchemaString(["SLIME", "ZOMBIE"]).with_name("entity_type")
        assert _messages(workspace, schema, "DRAGONFLY") == ["Expected `entity_type`, but got `DRAGONFLY`."]

    def test_long_enumerations_are_truncated_in_name(self, workspace: Workspace) -> None:
        ctx = SchemaContext(workspace, load_doc(workspace, "x"), None)
        schema = SchemaString([f"opt{i}" for i in range(8)])
        assert schema.internal_name(ctx) == "string(opt0 | opt1 | opt2 | opt3 | opt4 | ...)"

    def test_completions_for_enumeration(self, workspace: Workspace) -> None:
        schema = SchemaString(["Red", StringMatcher("Blue")])
        result = full(workspace, schema, "Red")
        assert len(result.completion_items) == 1
        assert [item.label for item in result.completion_items[0].items] == ["Red", "Blue"]

    def test_generator_matcher_is_reusable(self, workspace: Workspace) -> None:
        schema = SchemaString(color for color in ("Red", "Blue"))
        ctx = SchemaContext(workspace, load_doc(workspace, "x"), None)
        assert schema.internal_name(ctx) == "string(Red | Blue)"
        assert partial(workspace, schema, "red").diagnostics == []
        assert partial(workspace, schema, "blue").diagnostics == []

    def test_no_completions_for_regex(self, workspace: Workspace) -> None:
        assert full(workspace, SchemaString(re.compile("x")), "x").completion_items == []

    def test_schema_highlight_wins_over_baseline(self, workspace: Workspace) -> None:
        schema = SchemaString(["Red"], highlight=SemanticTokenType.ENUM_MEMBER)
        result = partial(workspace, schema, "Red")
        assert [h.color for h in result.highlights] == [SemanticTokenType.ENUM_MEMBER, SemanticTokenType.STRING]


class TestSuggestions:
    def test_levenshtein(self) -> None:
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("", "abc") == 3
        assert levenshtein("same", "same") == 0

    def test_closest(self) -> None:
        assert closest("Helth", ["Health", "Damage"]) == "Health"
        assert closest("zzzzzz", ["Health", "Damage"]) is None

    def test_first_candidate_wins_ties(self) -> None:
        assert closest("ab", ["ac", "ad"]) == "ac"
