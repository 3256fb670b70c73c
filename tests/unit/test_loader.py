"""Tests for the positioned YAML loader and its safety limits."""

from __future__ import annotations

import pytest
from ruamel.yaml.error import YAMLError

from mythic_analyzer.parser.loader import _MAX_DOCUMENT_SIZE, TrackedLoader, YAMLSafetyError
from mythic_analyzer.parser.nodes import MapNode, ScalarNode, SeqNode, iter_scalars


class TestPositions:
    def test_scalar_offsets(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("key: value\n")
        assert isinstance(tree, MapNode)
        pair = tree.pairs[0]
        assert (pair.key.start, pair.key.end) == (0, 3)
        assert (pair.value.start, pair.value.end) == (5, 10)

    def test_block_collections_end_at_last_content(self, loader: TrackedLoader) -> None:
        source = "outer:\n  - a\n  - b\n\nnext: 1\n"
        tree = loader.load_string(source)
        seq = tree.get("outer")
        assert isinstance(seq, SeqNode)
        assert source[seq.start : seq.end] == "- a\n  - b"

    def test_quoted_scalar_keeps_quotes_in_range(self, loader: TrackedLoader) -> None:
        source = "name: 'hello world'\n"
        tree = loader.load_string(source)
        value = tree.get("name")
        assert isinstance(value, ScalarNode)
        assert value.is_quoted
        assert value.value == "hello world"
        assert source[value.start : value.end] == "'hello world'"


class TestDecoding:
    def test_scalars_are_typed(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("a: 1\nb: 1.5\nc: true\nd: text\ne: yes\n")
        assert tree.to_python() == {"a": 1, "b": 1.5, "c": True, "d": "text", "e": "yes"}

    def test_empty_value_is_absent(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("key:\nother: ~\n")
        assert tree.pairs[0].value is None
        assert isinstance(tree.pairs[1].value, ScalarNode)
        assert tree.pairs[1].value.value is None

    def test_duplicate_keys_are_kept(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("A: 1\nA: 2\n")
        assert [pair.key_text for pair in tree.pairs] == ["A", "A"]

    def test_empty_document(self, loader: TrackedLoader) -> None:
        assert loader.load_string("") is None
        assert loader.load_string("# only a comment\n") is None

    def test_ampersand_color_codes_are_plain_text(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("Display: '&aKing &lSlime'\n")
        assert tree.get("Display").value == "&aKing &lSlime"

    def test_iter_scalars_marks_keys(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("a:\n  b: [1, 2]\n")
        found = [(scalar.text, is_key) for scalar, is_key in iter_scalars(tree)]
        assert found == [("a", True), ("b", True), ("1", False), ("2", False)]


class TestCommentBefore:
    def test_comment_block_above_key(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("# first\n# second\nkey: 1\n")
        assert tree.pairs[0].comment_before == "# first\n# second"

    def test_blank_line_breaks_block(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("# detached\n\nkey: 1\n")
        assert tree.pairs[0].comment_before is None

    def test_nested_key(self, loader: TrackedLoader) -> None:
        tree = loader.load_string("outer:\n  # inner docs\n  inner: 1\n")
        assert tree.get("outer").pairs[0].comment_before == "# inner docs"


class TestSafetyLimits:
    def test_oversized_document_rejected(self, loader: TrackedLoader) -> None:
        yaml = "key: " + "x" * (_MAX_DOCUMENT_SIZE + 1) + "\n"
        with pytest.raises(YAMLSafetyError, match="maximum size"):
            loader.load_string(yaml)

    def test_excessive_node_count_rejected(self) -> None:
        loader = TrackedLoader(max_node_count=10)
        yaml = "\n".join(f"k{i}: v{i}" for i in range(20))
        with pytest.raises(YAMLSafetyError, match="node count"):
            loader.load_string(yaml)

    def test_deep_nesting_rejected(self) -> None:
        loader = TrackedLoader(max_depth=5)
        yaml = "".join("  " * i + f"level{i}:\n" for i in range(10)) + "  " * 10 + "value: deep\n"
        with pytest.raises(YAMLSafetyError, match="maximum depth"):
            loader.load_string(yaml)

    def test_alias_expansion_counts_nodes(self) -> None:
        loader = TrackedLoader(max_node_count=50)
        yaml = (
            "a: &a ['lol','lol','lol','lol','lol']\n"
            "b: &b [*a,*a,*a,*a,*a]\n"
            "c: &c [*b,*b,*b,*b,*b]\n"
        )
        with pytest.raises(YAMLSafetyError, match="node count"):
            loader.load_string(yaml)

    def test_syntax_error_is_raised(self, loader: TrackedLoader) -> None:
        with pytest.raises(YAMLError):
            loader.load_string("key: [unclosed\n")

    def test_load_from_file(self, loader: TrackedLoader, tmp_path) -> None:
        path = tmp_path / "skills.yml"
        path.write_text("heal:\n  Skills: []\n", encoding="utf-8")
        tree = loader.load(path)
        assert tree.to_python() == {"heal": {"Skills": []}}
