"""Built-in schemas of the Mythic file kinds."""

from mythic_analyzer.schema.files.item import MYTHIC_ITEM_SCHEMA
from mythic_analyzer.schema.files.mob import MYTHIC_MOB_SCHEMA
from mythic_analyzer.schema.files.skill import MYTHIC_SKILL_SCHEMA

__all__ = ["MYTHIC_ITEM_SCHEMA", "MYTHIC_MOB_SCHEMA", "MYTHIC_SKILL_SCHEMA"]
