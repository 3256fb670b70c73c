"""Inline ``?condition``, ``?!condition`` and ``?~condition`` clauses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mythic_analyzer.models.results import SemanticTokenType
from mythic_analyzer.skills.lineconfig import LineConfig, LineToken, create_pos

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc


@dataclass
class SkillCondition(LineConfig):
    """A condition gating a mechanic.

    ``?~`` checks the trigger instead of the caster, ``!`` negates.
    """

    question: LineToken | None = None
    trigger: LineToken | None = None
    negation: LineToken | None = None

    @property
    def on_trigger(self) -> bool:
        return self.trigger is not None

    @property
    def negated(self) -> bool:
        return self.negation is not None

    @classmethod
    def parse(cls, doc: MythicDoc, source: str, offset: int = 0) -> SkillCondition:
        """Parse ``source``, which starts with ``?``; ``offset`` points at the ``?``."""
        idx = 1
        trigger = negation = None
        if source.startswith("~", idx):
            trigger = LineToken("~", create_pos(source, idx, offset), create_pos(source, idx + 1, offset))
            idx += 1
        if source.startswith("!", idx):
            negation = LineToken("!", create_pos(source, idx, offset), create_pos(source, idx + 1, offset))
            idx += 1
        condition = cls(source=source[idx:], offset=create_pos(source, idx, offset))
        condition.question = LineToken("?", offset, create_pos(source, 1, offset))
        condition.trigger = trigger
        condition.negation = negation
        condition._parse(doc)
        return condition

    def add_highlights(self, doc: MythicDoc) -> SkillCondition:
        super().add_highlights(doc)
        for token in (self.question, self.trigger, self.negation):
            if token is not None:
                token.highlight(doc, self.result, SemanticTokenType.OPERATOR)
        if self.main is not None:
            self.main.highlight(doc, self.result, SemanticTokenType.KEYWORD)
        return self
