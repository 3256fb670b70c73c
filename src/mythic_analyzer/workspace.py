"""Workspace: the set of loaded documents and the two-pass processing order."""

from __future__ import annotations

import logging

from mythic_analyzer.document import MythicDoc
from mythic_analyzer.models.data import MythicData
from mythic_analyzer.models.results import ValidationResult
from mythic_analyzer.settings import Settings

logger = logging.getLogger(__name__)


class Workspace:
    """Documents of one project, keyed by URI in load order.

    Components are never stored separately: the registry is the merge of the
    cached results of every loaded document, so reloading or unloading a
    document drops its declarations with it.

    References only resolve once every document has been partially
    processed, so ``full_process_all`` always runs the partial pass first.
    """

    def __init__(self, settings: Settings | None = None, mythic_data: MythicData | None = None) -> None:
        self.settings = settings or Settings()
        self.mythic_data = mythic_data or MythicData()
        self.docs: dict[str, MythicDoc] = {}

    # -- documents -------------------------------------------------------------

    def load(self, doc: MythicDoc) -> MythicDoc:
        """Add ``doc``, replacing any document with the same URI."""
        self.docs[doc.uri] = doc
        logger.debug("Loaded %s", doc.uri)
        return doc

    def unload(self, uri: str) -> MythicDoc:
        """Remove a document and re-register the components of the others."""
        try:
            doc = self.docs.pop(uri)
        except KeyError:
            raise KeyError(f"No document loaded with uri '{uri}'") from None
        logger.debug("Unloaded %s", uri)
        self.partial_process_all()
        return doc

    def get(self, uri: str) -> MythicDoc:
        """Look up a loaded document. Raises ``KeyError`` if not found."""
        try:
            return self.docs[uri]
        except KeyError:
            raise KeyError(f"No document loaded with uri '{uri}'") from None

    # -- results ---------------------------------------------------------------

    def merged_validation_result(self, exclude: str | None = None) -> ValidationResult:
        """Merge the cached results of every document, except the one at ``exclude``."""
        merged = ValidationResult()
        for uri, doc in self.docs.items():
            if uri == exclude or doc.cached_validation_result is None:
                continue
            merged.merge(doc.cached_validation_result)
        return merged

    # -- processing ------------------------------------------------------------

    def partial_process_all(self) -> None:
        # reset first so components registered by a previous pass cannot shadow earlier documents
        for doc in self.docs.values():
            doc.cached_validation_result = None
        for doc in self.docs.values():
            doc.partial_process(self)

    def full_process_all(self) -> None:
        self.partial_process_all()
        for doc in self.docs.values():
            doc.full_process(self)

    def process(self, uri: str) -> ValidationResult:
        """Bring the registry up to date, then fully process one document."""
        doc = self.get(uri)
        self.partial_process_all()
        return doc.full_process(self)
