"""``~onTrigger`` and ``~onTrigger:argument`` clauses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mythic_analyzer.models.results import SemanticTokenType, ValidationResult
from mythic_analyzer.skills.lineconfig import LineToken, create_pos, parse_string

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc


@dataclass
class SkillTrigger:
    tilde: LineToken
    name: LineToken
    colon: LineToken | None = None
    argument: LineToken | None = None
    result: ValidationResult = field(default_factory=ValidationResult)

    @classmethod
    def parse(cls, source: str, offset: int = 0) -> SkillTrigger:
        """Parse ``source``, which starts with ``~``; ``offset`` points at the ``~``."""

        def token(start: int, end: int) -> LineToken:
            return LineToken(
                parse_string(source[start:end]),
                create_pos(source, start, offset),
                create_pos(source, end, offset),
            )

        colon_idx = source.find(":")
        if colon_idx == -1:
            return cls(tilde=token(0, 1), name=token(1, len(source)))
        return cls(
            tilde=token(0, 1),
            name=token(1, colon_idx),
            colon=token(colon_idx, colon_idx + 1),
            argument=token(colon_idx + 1, len(source)),
        )

    def add_highlights(self, doc: MythicDoc) -> SkillTrigger:
        self.tilde.highlight(doc, self.result, SemanticTokenType.OPERATOR)
        self.name.highlight(doc, self.result, SemanticTokenType.EVENT)
        if self.colon is not None:
            self.colon.highlight(doc, self.result, SemanticTokenType.OPERATOR)
        if self.argument is not None:
            self.argument.highlight(doc, self.result, SemanticTokenType.STRING)
        return self
