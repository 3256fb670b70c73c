"""Tokenizers for skill lines embedded in Mythic documents."""

from mythic_analyzer.skills.condition import SkillCondition
from mythic_analyzer.skills.lineconfig import (
    ConfigValue,
    LineConfig,
    LineToken,
    create_pos,
    parse_string,
    unparse_block,
)
from mythic_analyzer.skills.mechanic import MECHANIC_CAPABILITIES, MechanicCapabilities, SkillMechanic
from mythic_analyzer.skills.targeter import SkillTargeter
from mythic_analyzer.skills.trigger import SkillTrigger

__all__ = [
    "MECHANIC_CAPABILITIES",
    "ConfigValue",
    "LineConfig",
    "LineToken",
    "MechanicCapabilities",
    "SkillCondition",
    "SkillMechanic",
    "SkillTargeter",
    "SkillTrigger",
    "create_pos",
    "parse_string",
    "unparse_block",
]
