"""YAML loader producing a positioned tree for schema validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.nodes import MappingNode, ScalarNode as YAMLScalarNode, SequenceNode

from mythic_analyzer.parser.nodes import MapNode, Node, Pair, ScalarNode, SeqNode

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters
_MAX_NODE_COUNT = 50_000
_MAX_DEPTH = 64

_NULL_TAG = "tag:yaml.org,2002:null"


class YAMLSafetyError(Exception):
    """Raised when YAML input violates safety constraints.

    Distinct from parse errors: these indicate oversized input or input
    nested too deeply to validate.
    """


class TrackedLoader:
    """YAML loader that keeps the source offsets of every node.

    Uses ruamel.yaml's composer, which exposes start/end marks for each node
    and keeps duplicate mapping keys (constructing a dict would reject them).
    Scalars are decoded with the safe constructor so numbers and booleans
    arrive as plain Python values.
    """

    def __init__(
        self,
        max_document_size: int = _MAX_DOCUMENT_SIZE,
        max_node_count: int = _MAX_NODE_COUNT,
        max_depth: int = _MAX_DEPTH,
    ) -> None:
        self._max_document_size = max_document_size
        self._max_node_count = max_node_count
        self._max_depth = max_depth

    # -- safety checks -------------------------------------------------------

    def _check_yaml_safety(self, content: str) -> None:
        """Pre-parse safety checks on raw YAML text."""
        if len(content) > self._max_document_size:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {self._max_document_size:,} limit)"
            )

    # -- public loading API --------------------------------------------------

    def load(self, path: Path) -> Node | None:
        """Load a YAML file into a positioned tree."""
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        return self.load_string(content)

    def load_string(self, content: str) -> Node | None:
        """Parse ``content`` into a positioned tree. Returns None for an empty document.

        Raises ``YAMLSafetyError`` for oversized input and ruamel.yaml's
        ``YAMLError`` for syntax errors.
        """
        self._check_yaml_safety(content)
        yaml = YAML(typ="safe", pure=True)
        composed = yaml.compose(content)
        if composed is None:
            return None
        counter = [0]
        return self._convert(yaml, content, composed, 0, counter)

    # -- conversion ----------------------------------------------------------

    def _convert(
        self,
        yaml: YAML,
        content: str,
        node: Any,
        depth: int,
        counter: list[int],
    ) -> Node:
        counter[0] += 1
        if counter[0] > self._max_node_count:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum node count ({self._max_node_count:,})"
            )
        if depth > self._max_depth:
            raise YAMLSafetyError(f"YAML document exceeds maximum depth ({self._max_depth})")

        start, end = node.start_mark.index, node.end_mark.index
        if isinstance(node, MappingNode):
            pairs = [
                Pair(
                    key=self._convert(yaml, content, key, depth + 1, counter),
                    value=self._convert_value(yaml, content, value, depth + 1, counter),
                    comment_before=_comment_before(content, key.start_mark.index),
                )
                for key, value in node.value
            ]
            return MapNode(pairs=pairs, start=start, end=_trim_end(content, start, end))
        if isinstance(node, SequenceNode):
            items = [self._convert(yaml, content, item, depth + 1, counter) for item in node.value]
            return SeqNode(items=items, start=start, end=_trim_end(content, start, end))
        return ScalarNode(
            value=yaml.constructor.construct_object(node, deep=True),
            text=str(node.value),
            start=start,
            end=end,
            style=node.style,
        )

    def _convert_value(
        self,
        yaml: YAML,
        content: str,
        node: Any,
        depth: int,
        counter: list[int],
    ) -> Node | None:
        # ``key:`` with nothing after it composes to an empty null scalar
        if isinstance(node, YAMLScalarNode) and node.tag == _NULL_TAG and node.value == "":
            return None
        return self._convert(yaml, content, node, depth, counter)


def _trim_end(content: str, start: int, end: int) -> int:
    """Block collections end where the next token starts; pull the end back over whitespace."""
    while end > start and content[end - 1].isspace():
        end -= 1
    return end


def _comment_before(content: str, offset: int) -> str | None:
    """Return the block of ``#`` comment lines directly above the line holding ``offset``."""
    line_start = content.rfind("\n", 0, offset) + 1
    if content[line_start:offset].strip():
        # key is not the first thing on its line (flow mapping, sequence entry)
        return None
    lines: list[str] = []
    end = line_start - 1
    while end > 0:
        start = content.rfind("\n", 0, end) + 1
        line = content[start:end].strip()
        if not line.startswith("#"):
            break
        lines.append(line)
        end = start - 1
    if not lines:
        return None
    return "\n".join(reversed(lines))
