"""Per-document metadata declared in leading ``##`` comment lines.

A document may start with lines such as::

    ## FileType: mythic_skill

which are read as YAML with the ``##`` marker blanked out, so offsets in the
metadata block line up with the document itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ruamel.yaml.error import YAMLError

from mythic_analyzer.models.results import Diagnostic, SemanticTokenType, ValidationResult
from mythic_analyzer.parser.loader import TrackedLoader, YAMLSafetyError
from mythic_analyzer.parser.nodes import MapNode, ScalarNode
from mythic_analyzer.schema.object import SchemaObject, SchemaObjectProperty
from mythic_analyzer.schema.pathmap import SCHEMA_IDS
from mythic_analyzer.schema.string import SchemaString

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace

logger = logging.getLogger(__name__)

METADATA_PREFIX = "##"

METADATA_SCHEMA = SchemaObject(
    {
        "FileType": SchemaObjectProperty(
            schema=SchemaString(list(SCHEMA_IDS), highlight=SemanticTokenType.ENUM_MEMBER),
            description="The type of file this document represents. "
            "Useful when the file type can't be determined from its path.",
        ),
    }
)


def metadata_source(source: str) -> str:
    """The leading ``##`` lines of ``source`` with the marker replaced by spaces."""
    lines: list[str] = []
    for line in source.split("\n"):
        if not line.startswith(METADATA_PREFIX):
            break
        lines.append(" " * len(METADATA_PREFIX) + line[len(METADATA_PREFIX) :])
    return "".join(f"{line}\n" for line in lines)


@dataclass
class DocMetadata:
    file_type: str | None = None

    @classmethod
    def parse(cls, ws: Workspace, doc: MythicDoc) -> tuple[DocMetadata, ValidationResult]:
        metadata = cls()
        result = ValidationResult()
        text = metadata_source(doc.source)
        if not text.strip():
            return metadata, result

        settings = ws.settings
        loader = TrackedLoader(settings.max_document_size, settings.max_node_count, settings.max_depth)
        try:
            tree = loader.load_string(text)
        except YAMLSafetyError as exc:
            logger.warning("Rejected metadata block in %s: %s", doc.uri, exc)
            result.diagnostics.append(
                Diagnostic(range=doc.to_range(0, 0), message=str(exc), code="yaml-safety-error")
            )
            return metadata, result
        except YAMLError as exc:
            logger.warning("Invalid metadata block in %s: %s", doc.uri, exc)
            result.diagnostics.append(
                Diagnostic(range=doc.to_range(0, len(text.rstrip())), message=str(exc), code="yaml-syntax-error")
            )
            return metadata, result
        if tree is None:
            return metadata, result

        result.merge(METADATA_SCHEMA.partial_process(ws, doc, tree))
        if not isinstance(tree, MapNode):
            return metadata, result

        file_type = tree.get("FileType")
        if isinstance(file_type, ScalarNode) and isinstance(file_type.value, str):
            known = {schema_id.lower(): schema_id for schema_id in SCHEMA_IDS}
            metadata.file_type = known.get(file_type.value.lower())
        logger.debug("[METADATA] %s: %s", doc.uri, metadata)
        return metadata, result
