"""A full skill line: ``mechanic{...} @targeter ~trigger ?condition chance``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mythic_analyzer.models.results import (
    Diagnostic,
    DiagnosticSeverity,
    SemanticTokenType,
    ValidationResult,
)
from mythic_analyzer.skills.condition import SkillCondition
from mythic_analyzer.skills.lineconfig import LineConfig, LineToken, create_pos, parse_string, unparse_block
from mythic_analyzer.skills.targeter import SkillTargeter
from mythic_analyzer.skills.trigger import SkillTrigger

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc

NUMERIC_PATTERN = re.compile(r"-?\d*\.?\d+")


@dataclass(frozen=True)
class MechanicCapabilities:
    """Per-mechanic parsing exceptions.

    ``leading_numeric_argument``: the first bare number is an argument of the
    mechanic (e.g. ``delay 20``) rather than a chance.
    """

    leading_numeric_argument: bool = False


MECHANIC_CAPABILITIES: dict[str, MechanicCapabilities] = {
    "delay": MechanicCapabilities(leading_numeric_argument=True),
}

SKILL_REFERENCE_MECHANICS = frozenset({"skill", "metaskill", "meta"})
SKILL_REFERENCE_KEYS = ("s", "skill")

_DEFAULT_CAPABILITIES = MechanicCapabilities()


@dataclass
class SkillMechanic:
    """One parsed skill line. Cardinality rules are reported, not enforced."""

    source: str
    config: LineConfig
    targeter: SkillTargeter | None = None
    trigger: SkillTrigger | None = None
    conditions: list[SkillCondition] = field(default_factory=list)
    chance: LineToken | None = None
    argument: LineToken | None = None
    result: ValidationResult = field(default_factory=ValidationResult)

    @property
    def name(self) -> str | None:
        return self.config.main.value.lower() if self.config.main is not None else None

    @property
    def capabilities(self) -> MechanicCapabilities:
        return MECHANIC_CAPABILITIES.get(self.name or "", _DEFAULT_CAPABILITIES)

    def skill_reference(self) -> LineToken | None:
        """The ``s=``/``skill=`` value of a skill-calling mechanic."""
        if self.name not in SKILL_REFERENCE_MECHANICS:
            return None
        entry = self.config.get(*SKILL_REFERENCE_KEYS)
        return entry.value if entry is not None else None

    @classmethod
    def parse(cls, doc: MythicDoc, source: str, offset: int = 0, supports_triggers: bool = True) -> SkillMechanic:
        """Tokenize ``source``, whose first character sits at source offset ``offset``."""
        escaped = unparse_block(source)
        components = _split_components(escaped)
        if not components:
            return cls(source=source, config=LineConfig(source=escaped, offset=offset))

        first_idx, first = components[0]
        config = LineConfig.parse(doc, first, create_pos(escaped, first_idx, offset)).add_highlights(doc)
        mechanic = cls(source=source, config=config)
        mechanic.result.merge(config.result)
        if config.main is not None:
            config.main.highlight(doc, mechanic.result, SemanticTokenType.FUNCTION)

        for idx, component in components[1:]:
            start = create_pos(escaped, idx, offset)
            end = create_pos(escaped, idx + len(component), offset)
            mechanic._parse_component(doc, component, start, end, supports_triggers)
        return mechanic

    def _parse_component(
        self, doc: MythicDoc, component: str, start: int, end: int, supports_triggers: bool
    ) -> None:
        result = self.result
        if component.startswith("@"):
            targeter = SkillTargeter.parse(doc, component, start).add_highlights(doc)
            result.merge(targeter.result)
            if self.targeter is not None:
                self._diagnostic(
                    doc, start, end, "Only one targeter allowed per skill!", "mythic-skill-too-many-targeters"
                )
                return
            self.targeter = targeter
        elif component.startswith("~"):
            trigger = SkillTrigger.parse(component, start).add_highlights(doc)
            result.merge(trigger.result)
            if not supports_triggers:
                self._diagnostic(
                    doc,
                    start,
                    end,
                    "Triggers are not supported in this environment! (e.g. metaskills)",
                    "mythic-skill-triggers-not-allowed",
                )
            if self.trigger is not None:
                self._diagnostic(
                    doc, start, end, "Only one trigger allowed per skill!", "mythic-skill-too-many-triggers"
                )
                return
            self.trigger = trigger
        elif component.startswith("?"):
            condition = SkillCondition.parse(doc, component, start).add_highlights(doc)
            result.merge(condition.result)
            self.conditions.append(condition)
        elif NUMERIC_PATTERN.fullmatch(component):
            self._parse_number(doc, LineToken(parse_string(component), start, end))
        else:
            self._diagnostic(
                doc,
                start,
                end,
                f"Unknown skill component `{parse_string(component)}`.",
                "mythic-skill-unknown-component",
                DiagnosticSeverity.WARNING,
            )

    def _parse_number(self, doc: MythicDoc, token: LineToken) -> None:
        token.highlight(doc, self.result, SemanticTokenType.NUMBER)
        if self.capabilities.leading_numeric_argument and self.argument is None and self.chance is None:
            self.argument = token
            return
        if self.chance is not None or self.argument is not None:
            self._diagnostic(
                doc, token.start, token.end, "Only one chance allowed per skill!", "mythic-skill-too-many-chances"
            )
            return
        self.chance = token
        if not 0 <= float(token.value) <= 1:
            self._diagnostic(
                doc,
                token.start,
                token.end,
                f"Chance must be between 0 and 1, but got {token.value}.",
                "mythic-skill-invalid-chance",
            )

    def _diagnostic(
        self,
        doc: MythicDoc,
        start: int,
        end: int,
        message: str,
        code: str,
        severity: DiagnosticSeverity = DiagnosticSeverity.ERROR,
    ) -> None:
        self.result.diagnostics.append(
            Diagnostic(range=doc.to_range(start, end), message=message, code=code, severity=severity)
        )


def _split_components(escaped: str) -> list[tuple[int, str]]:
    """Split on literal spaces, keeping each component's index into ``escaped``."""
    components: list[tuple[int, str]] = []
    idx = 0
    for part in escaped.split(" "):
        if part:
            components.append((idx, part))
        idx += len(part) + 1
    return components
