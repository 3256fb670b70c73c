"""``@Targeter{options}`` clauses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mythic_analyzer.models.results import SemanticTokenType
from mythic_analyzer.skills.lineconfig import LineConfig, LineToken, create_pos

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc


@dataclass
class SkillTargeter(LineConfig):
    at: LineToken | None = None

    @classmethod
    def parse(cls, doc: MythicDoc, source: str, offset: int = 0) -> SkillTargeter:
        """Parse ``source``, which starts with ``@``; ``offset`` points at the ``@``."""
        targeter = cls(source=source[1:], offset=create_pos(source, 1, offset))
        targeter.at = LineToken("@", offset, targeter.offset)
        targeter._parse(doc)
        return targeter

    def add_highlights(self, doc: MythicDoc) -> SkillTargeter:
        super().add_highlights(doc)
        if self.at is not None:
            self.at.highlight(doc, self.result, SemanticTokenType.OPERATOR)
        if self.main is not None:
            self.main.highlight(doc, self.result, SemanticTokenType.CLASS)
        return self
