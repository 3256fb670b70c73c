"""A Mythic document: source text, position conversion and processing entry points."""

from __future__ import annotations

import logging
from bisect import bisect_right
from pathlib import Path
from typing import TYPE_CHECKING

from ruamel.yaml.error import YAMLError

from mythic_analyzer.highlighter import highlight_yaml
from mythic_analyzer.metadata import DocMetadata
from mythic_analyzer.models.positions import Position, Range
from mythic_analyzer.models.results import Diagnostic, ValidationResult
from mythic_analyzer.parser.loader import TrackedLoader, YAMLSafetyError
from mythic_analyzer.parser.nodes import Node
from mythic_analyzer.schema.pathmap import find_schema, match_schema_id

if TYPE_CHECKING:
    from mythic_analyzer.schema.base import Schema
    from mythic_analyzer.workspace import Workspace

logger = logging.getLogger(__name__)


class MythicDoc:
    """One YAML document bound to an optional schema.

    Offsets are character indices into ``source``; positions are 0-based
    (line, character) pairs. ``cached_validation_result`` holds the result of
    the last processing pass and is what the workspace merges across
    documents.
    """

    def __init__(self, source: str, uri: str, schema: Schema | None = None) -> None:
        self.source = source
        self.uri = uri
        self.schema = schema
        self.metadata = DocMetadata()
        self.tree: Node | None = None
        self.cached_validation_result: ValidationResult | None = None
        self._line_starts = [0]
        for i, char in enumerate(source):
            if char == "\n":
                self._line_starts.append(i + 1)

    def __repr__(self) -> str:
        return f"MythicDoc({self.uri!r})"

    @classmethod
    def from_file_path(cls, path: str | Path) -> MythicDoc:
        """Read a document from disk, binding its schema by path."""
        path = Path(path)
        source = path.read_text(encoding="utf-8")
        path = path.resolve()
        return cls(source, path.as_uri(), find_schema(path.as_posix()))

    @classmethod
    def from_text(cls, source: str, uri: str) -> MythicDoc:
        """Build a document from editor text, binding its schema by URI."""
        return cls(source, uri, find_schema(uri))

    # -- positions -------------------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_to_position(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self.source)))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line=line, character=offset - self._line_starts[line])

    def position_to_offset(self, position: Position) -> int:
        """Inverse of ``offset_to_position``. Out-of-range positions are clamped."""
        if position.line < 0:
            return 0
        if position.line >= len(self._line_starts):
            return len(self.source)
        start = self._line_starts[position.line]
        end = self._line_end(position.line)
        return min(start + max(position.character, 0), end)

    def to_range(self, start: int, end: int) -> Range:
        return Range(start=self.offset_to_position(start), end=self.offset_to_position(end))

    def node_range(self, node: Node) -> Range:
        return self.to_range(node.start, node.end)

    def node_source(self, node: Node) -> str:
        return self.source[node.start : node.end]

    def line_text(self, line: int) -> str:
        if not 0 <= line < len(self._line_starts):
            return ""
        return self.source[self._line_starts[line] : self._line_end(line)]

    def next_non_whitespace(self, offset: int) -> int:
        """Offset of the first non-whitespace character at or after ``offset``."""
        while offset < len(self.source) and self.source[offset].isspace():
            offset += 1
        return offset

    def _line_end(self, line: int) -> int:
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1
        return len(self.source)

    # -- processing ------------------------------------------------------------

    def parse(self, ws: Workspace) -> tuple[Node | None, ValidationResult]:
        """Parse the source into a positioned tree.

        Loader failures are returned as a single diagnostic, never raised.
        """
        result = ValidationResult()
        settings = ws.settings
        loader = TrackedLoader(settings.max_document_size, settings.max_node_count, settings.max_depth)
        try:
            tree = loader.load_string(self.source)
        except YAMLSafetyError as exc:
            logger.warning("Rejected %s: %s", self.uri, exc)
            result.diagnostics.append(
                Diagnostic(range=self.to_range(0, 0), message=str(exc), code="yaml-safety-error")
            )
            return None, result
        except YAMLError as exc:
            logger.warning("Failed to parse %s: %s", self.uri, exc)
            result.diagnostics.append(
                Diagnostic(range=self._error_range(exc), message=str(exc), code="yaml-syntax-error")
            )
            return None, result
        return tree, result

    def _error_range(self, exc: YAMLError) -> Range:
        mark = getattr(exc, "problem_mark", None)
        if mark is None:
            return self.to_range(0, 0)
        start = self.position_to_offset(Position(line=mark.line, character=mark.column))
        return self.to_range(start, start + 1)

    def update_metadata(self, ws: Workspace) -> ValidationResult:
        """Re-read the ``##`` metadata block; a declared ``FileType`` rebinds the schema."""
        self.metadata, result = DocMetadata.parse(ws, self)
        if self.metadata.file_type is not None:
            self.schema = match_schema_id(self.metadata.file_type)
        return result

    def partial_process(self, ws: Workspace) -> ValidationResult:
        """Local validation pass. Registers the components this document declares."""
        logger.debug("[PROCESS] Partial, %s", self.uri)
        result = self._begin(ws)
        if self.tree is not None and self.schema is not None:
            result.merge(self.schema.partial_process(ws, self, self.tree))
        self.cached_validation_result = result
        return result

    def full_process(self, ws: Workspace) -> ValidationResult:
        """Partial pass followed by reference resolution against the workspace."""
        logger.debug("[PROCESS] Full, %s", self.uri)
        result = self._begin(ws)
        if self.tree is not None and self.schema is not None:
            result.merge(self.schema.partial_process(ws, self, self.tree))
            result.merge(self.schema.full_process(ws, self, self.tree))
        self.cached_validation_result = result
        return result

    def _begin(self, ws: Workspace) -> ValidationResult:
        result = self.update_metadata(ws)
        self.tree, parse_result = self.parse(ws)
        result.merge(parse_result)
        if self.tree is not None:
            result.merge(highlight_yaml(self, self.tree))
        return result
