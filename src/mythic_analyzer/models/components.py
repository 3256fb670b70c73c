"""Named, cross-document components: mobs, skills and items."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from mythic_analyzer.models.positions import Range


class ComponentKind(StrEnum):
    MOBS = "mobs"
    SKILLS = "skills"
    ITEMS = "items"

    @property
    def singular(self) -> str:
        return self.value.removesuffix("s")


@dataclass(frozen=True)
class ComponentDeclaration:
    """Where a component is declared.

    Holds the document URI and the ranges of the declaring key and pair rather
    than live tree nodes, so a declaration stays valid after its document is
    reparsed or unloaded.
    """

    uri: str
    key_range: Range
    pair_range: Range | None = None


@dataclass
class MythicComponent:
    id: str
    declarations: list[ComponentDeclaration] = field(default_factory=list)
    documentation: str | None = None

    kind_label = "Component"

    @property
    def generated_description(self) -> str:
        description = f"# {self.kind_label}: `{self.id}`"
        if self.documentation:
            description += f"\n\n{self.documentation}"
        return description

    def declared_in(self, uri: str) -> bool:
        return any(d.uri == uri for d in self.declarations)


@dataclass
class MythicMob(MythicComponent):
    kind_label = "Mythic Mob"


@dataclass
class MythicSkill(MythicComponent):
    kind_label = "Mythic Skill"


@dataclass
class MythicItem(MythicComponent):
    kind_label = "Mythic Item"
