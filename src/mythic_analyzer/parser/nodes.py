"""Positioned YAML tree consumed by the schema engine.

Every node carries ``start``/``end`` character offsets into the document
source. Mapping pairs keep their document order, including duplicate keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class ScalarNode:
    value: Any
    text: str
    start: int
    end: int
    style: str | None = None

    @property
    def is_quoted(self) -> bool:
        return self.style in ("'", '"')

    def to_python(self) -> Any:
        return self.value


@dataclass(eq=False)
class SeqNode:
    items: list[Node]
    start: int
    end: int

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(eq=False)
class Pair:
    key: Node
    value: Node | None
    comment_before: str | None = None

    @property
    def key_text(self) -> str:
        if isinstance(self.key, ScalarNode):
            return self.key.text
        return str(self.key.to_python())

    @property
    def start(self) -> int:
        return self.key.start

    @property
    def end(self) -> int:
        return self.value.end if self.value is not None else self.key.end


@dataclass(eq=False)
class MapNode:
    pairs: list[Pair] = field(default_factory=list)
    start: int = 0
    end: int = 0

    def get(self, key: str) -> Node | None:
        """Return the value of the first pair whose key is ``key``."""
        for pair in self.pairs:
            if pair.key_text == key:
                return pair.value
        return None

    def to_python(self) -> dict[str, Any]:
        return {
            pair.key_text: pair.value.to_python() if pair.value is not None else None
            for pair in self.pairs
        }


Node = ScalarNode | SeqNode | MapNode


def iter_scalars(node: Node | None):
    """Yield ``(scalar, is_key)`` for every scalar in the tree, depth first."""
    if node is None:
        return
    if isinstance(node, ScalarNode):
        yield node, False
    elif isinstance(node, SeqNode):
        for item in node.items:
            yield from iter_scalars(item)
    else:
        for pair in node.pairs:
            if isinstance(pair.key, ScalarNode):
                yield pair.key, True
            else:
                yield from iter_scalars(pair.key)
            yield from iter_scalars(pair.value)
