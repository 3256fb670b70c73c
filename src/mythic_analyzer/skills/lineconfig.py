"""Tokenizer for Mythic's inline config syntax: ``name{key=value;key2=value2}``.

Before splitting, the contents of every top-level ``{...}`` block are escaped:
characters inside quoted strings are replaced by ``<&xx>`` sentinels, and
unquoted spaces and dashes inside the block are replaced too, so a block
never splits on the spaces between mechanic components. All structural
parsing runs on the escaped text. Reported offsets are translated back to
source offsets by counting each sentinel as one character (``create_pos``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mythic_analyzer.models.results import (
    Diagnostic,
    Highlight,
    SemanticTokenType,
    ValidationResult,
)

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc

SPECIAL_CHARACTERS: dict[str, str] = {
    "-": "<&da>",
    "\\": "<&bs>",
    "/": "<&fs>",
    " ": "<&sp>",
    ",": "<&cm>",
    ";": "<&sc>",
    "=": "<&eq>",
    "{": "<&lc>",
    "}": "<&rc>",
    "[": "<&lb>",
    "]": "<&rb>",
    "'": "<&sq>",
}
BLOCK_SPACE = "<&csp>"

_SENTINELS: dict[str, str] = {
    **{sentinel: char for char, sentinel in SPECIAL_CHARACTERS.items()},
    BLOCK_SPACE: " ",
}
_QUOTES = "\"'"


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def unparse_block(text: str) -> str:
    """Escape the contents of every top-level ``{...}`` block in ``text``.

    A block that is never closed is left as is.
    """
    out: list[str] = []
    i = 0
    while i < len(text):
        if text[i] != "{":
            out.append(text[i])
            i += 1
            continue
        end = _block_end(text, i)
        if end is None:
            out.append(text[i:])
            break
        out.append(_escape_block(text[i : end + 1]))
        i = end + 1
    return "".join(out)


def _block_end(text: str, start: int) -> int | None:
    depth = 0
    quote: str | None = None
    for i in range(start, len(text)):
        char = text[i]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def _escape_block(block: str) -> str:
    out: list[str] = []
    quote: str | None = None
    for char in block:
        if quote is not None:
            if char == quote:
                quote = None
                out.append(char)
            else:
                out.append(SPECIAL_CHARACTERS.get(char, char))
        elif char in _QUOTES:
            quote = char
            out.append(char)
        elif char == " ":
            out.append(BLOCK_SPACE)
        elif char == "-":
            out.append(SPECIAL_CHARACTERS["-"])
        else:
            out.append(char)
    return "".join(out)


def parse_string(text: str) -> str:
    """Reverse ``unparse_block``: replace every sentinel by its character."""
    out: list[str] = []
    i = 0
    while i < len(text):
        sentinel = _sentinel_at(text, i)
        if sentinel is None:
            out.append(text[i])
            i += 1
        else:
            out.append(_SENTINELS[sentinel])
            i += len(sentinel)
    return "".join(out)


def create_pos(escaped: str, idx: int, offset: int = 0) -> int:
    """Translate index ``idx`` of ``escaped`` into a source offset.

    Each sentinel before ``idx`` counts as a single character.
    """
    count = 0
    i = 0
    while i < idx:
        sentinel = _sentinel_at(escaped, i)
        i += len(sentinel) if sentinel is not None else 1
        count += 1
    return count + offset


def _sentinel_at(text: str, i: int) -> str | None:
    if not text.startswith("<&", i):
        return None
    for sentinel in _SENTINELS:
        if text.startswith(sentinel, i):
            return sentinel
    return None


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineToken:
    """A piece of a line with its source offsets (``end`` exclusive)."""

    value: str
    start: int
    end: int

    def highlight(self, doc: MythicDoc, result: ValidationResult, color: SemanticTokenType) -> None:
        if self.end > self.start:
            result.add_highlight(Highlight(range=doc.to_range(self.start, self.end), color=color))


@dataclass(frozen=True)
class ConfigValue:
    key: LineToken
    equals: LineToken
    value: LineToken
    semicolon: LineToken | None = None


@dataclass
class LineConfig:
    """One ``name{key=value;...}`` expression.

    ``source`` is the escaped text and ``offset`` the source offset of its
    first character.
    """

    source: str
    offset: int = 0
    main: LineToken | None = None
    open_brace: LineToken | None = None
    close_brace: LineToken | None = None
    config: list[ConfigValue] = field(default_factory=list)
    result: ValidationResult = field(default_factory=ValidationResult)

    @classmethod
    def parse(cls, doc: MythicDoc, source: str, offset: int = 0) -> LineConfig:
        line = cls(source=source, offset=offset)
        line._parse(doc)
        return line

    # -- offsets ----------------------------------------------------------------

    def pos(self, idx: int) -> int:
        return create_pos(self.source, idx, self.offset)

    def token(self, start: int, end: int, value: str | None = None) -> LineToken:
        """Token over ``source[start:end]``, unescaped unless ``value`` is given."""
        if value is None:
            value = parse_string(self.source[start:end])
        return LineToken(value=value, start=self.pos(start), end=self.pos(end))

    def _diagnostic(self, doc: MythicDoc, start: int, end: int, message: str, code: str) -> None:
        self.result.diagnostics.append(
            Diagnostic(range=doc.to_range(self.pos(start), self.pos(end)), message=message, code=code)
        )

    # -- parsing ----------------------------------------------------------------

    def _parse(self, doc: MythicDoc) -> None:
        text = self.source
        if "{" in text or "}" in text:
            self._parse_block(doc)
        elif "[" in text or "]" in text:
            self._parse_bracket(doc)
        else:
            self.main = self.token(0, len(text))

    def _parse_block(self, doc: MythicDoc) -> None:
        text = self.source
        open_idx = text.find("{")
        close_idx = text.rfind("}")
        if text.count("{") != text.count("}"):
            end = close_idx + 1 if close_idx > open_idx else len(text)
            self._diagnostic(doc, max(open_idx, 0), end, "Mismatched braces!", "lineconfig-mismatched-braces")
        if open_idx == -1:
            self.main = self.token(0, len(text))
            return

        self.main = self.token(0, open_idx)
        self.open_brace = self.token(open_idx, open_idx + 1, "{")
        if close_idx > open_idx:
            self.close_brace = self.token(close_idx, close_idx + 1, "}")
            body_end = close_idx
        else:
            body_end = len(text)
        self._parse_entries(doc, open_idx + 1, body_end)

    def _parse_bracket(self, doc: MythicDoc) -> None:
        text = self.source
        open_idx = text.find("[")
        close_idx = text.find("]")
        if text.count("[") != 1 or text.count("]") != 1 or close_idx < open_idx:
            self._diagnostic(doc, 0, len(text), "Invalid block syntax!", "lineconfig-invalid-block-syntax")
            return
        self.main = self.token(0, open_idx)
        self.open_brace = self.token(open_idx, open_idx + 1, "[")
        self.close_brace = self.token(close_idx, close_idx + 1, "]")

    def _parse_entries(self, doc: MythicDoc, body_start: int, body_end: int) -> None:
        """Split ``key=value`` entries on ``;`` at brace/bracket depth zero."""
        text = self.source
        seen: set[str] = set()
        depth = 0
        start = body_start
        for i in range(body_start, body_end + 1):
            char = text[i] if i < body_end else ";"
            if char in "{[":
                depth += 1
            elif char in "}]":
                depth -= 1
            if char != ";" or (depth != 0 and i < body_end):
                continue
            terminated = i < body_end
            self._parse_entry(doc, start, i, terminated, seen)
            start = i + 1

    def _parse_entry(self, doc: MythicDoc, start: int, end: int, terminated: bool, seen: set[str]) -> None:
        text = self.source
        semicolon = self.token(end, end + 1, ";") if terminated else None
        start, end = _strip_span(text, start, end)
        if start == end:
            return
        equals_idx = text.find("=", start, end)
        if equals_idx == -1:
            self._diagnostic(
                doc,
                start,
                end,
                f"Expected `key=value`, but got `{parse_string(text[start:end])}`.",
                "lineconfig-missing-equals",
            )
            return
        key_start, key_end = _strip_span(text, start, equals_idx)
        value_start, value_end = _strip_span(text, equals_idx + 1, end)
        key = self.token(key_start, key_end)
        key = LineToken(value=key.value.lower(), start=key.start, end=key.end)
        self.config.append(
            ConfigValue(
                key=key,
                equals=self.token(equals_idx, equals_idx + 1, "="),
                value=self.token(value_start, value_end),
                semicolon=semicolon,
            )
        )
        if key.value in seen:
            self._diagnostic(doc, start, end, f"Duplicate key: {key.value}", "lineconfig-duplicate-key")
        seen.add(key.value)

    # -- queries ----------------------------------------------------------------

    def get(self, *keys: str) -> ConfigValue | None:
        """First entry whose key is one of ``keys`` (lowercase)."""
        for entry in self.config:
            if entry.key.value in keys:
                return entry
        return None

    def add_highlights(self, doc: MythicDoc) -> LineConfig:
        for brace in (self.open_brace, self.close_brace):
            if brace is not None:
                brace.highlight(doc, self.result, SemanticTokenType.OPERATOR)
        for entry in self.config:
            entry.key.highlight(doc, self.result, SemanticTokenType.PROPERTY)
            entry.equals.highlight(doc, self.result, SemanticTokenType.OPERATOR)
            color = SemanticTokenType.NUMBER if _is_number(entry.value.value) else SemanticTokenType.STRING
            entry.value.highlight(doc, self.result, color)
            if entry.semicolon is not None:
                entry.semicolon.highlight(doc, self.result, SemanticTokenType.OPERATOR)
        return self


def _strip_span(text: str, start: int, end: int) -> tuple[int, int]:
    """Trim whitespace, escaped block spaces included, from both ends of a span."""
    while start < end:
        if text[start].isspace():
            start += 1
        elif text.startswith(BLOCK_SPACE, start, end):
            start += len(BLOCK_SPACE)
        else:
            break
    while end > start:
        if text[end - 1].isspace():
            end -= 1
        elif text.endswith(BLOCK_SPACE, start, end):
            end -= len(BLOCK_SPACE)
        else:
            break
    return start, end


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True
