"""Schema of a mob file: ``<mob id>: { Type: ..., Health: ..., Skills: [...], ... }``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mythic_analyzer.models.components import ComponentKind, MythicMob
from mythic_analyzer.models.results import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    SemanticTokenType,
    ValidationResult,
)
from mythic_analyzer.parser.documentation import md_link_wiki, md_see_also
from mythic_analyzer.parser.nodes import MapNode, Node, ScalarNode
from mythic_analyzer.schema.base import SchemaContext
from mythic_analyzer.schema.bool import SchemaBool
from mythic_analyzer.schema.component import component, enclosing_entry
from mythic_analyzer.schema.list import SchemaList
from mythic_analyzer.schema.number import SchemaNumber
from mythic_analyzer.schema.object import Properties, SchemaMap, SchemaObject, SchemaObjectProperty
from mythic_analyzer.schema.references import (
    SCHEMA_BOSSBAR_COLOR,
    SCHEMA_BOSSBAR_STYLE,
    SCHEMA_ENTITY_TYPE,
    SCHEMA_MYTHIC_MOB_ID,
)
from mythic_analyzer.schema.skill_list import MythicSkillList
from mythic_analyzer.schema.string import SchemaString, StringMatcher

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace

DISPLAY_ENTITY_TYPES = ("block_display", "item_display", "text_display")

_LEVEL_MODIFIERS = ("Health", "Damage", "KnockbackResistance", "Power", "Armor", "MovementSpeed")


def _strings(description: str, see_also: str) -> SchemaObjectProperty:
    return SchemaObjectProperty(schema=SchemaList(SchemaString()), description=description + md_see_also(see_also))


def _display_options(ctx: SchemaContext) -> Properties:
    """Options of a display entity, depending on the sibling ``Type``."""
    mob = enclosing_entry(ctx)
    entity_type = mob.get("Type") if mob is not None else None
    if not isinstance(entity_type, ScalarNode):
        return {}
    match str(entity_type.value).lower():
        case "block_display":
            return {"Block": SchemaObjectProperty(schema=SchemaString(), description="Sets the block displayed.")}
        case "item_display":
            return {"Item": SchemaObjectProperty(schema=SchemaString(), description="Sets the item displayed.")}
        case "text_display":
            return {"Text": SchemaObjectProperty(schema=SchemaString(), description="Sets the text displayed.")}
        case _:
            return {}


def _excludable(ctx: SchemaContext) -> list[StringMatcher]:
    return [
        StringMatcher(key, CompletionItem(label=key, kind=CompletionItemKind.PROPERTY))
        for key in mob_properties(ctx)
    ]


def mob_properties(ctx: SchemaContext) -> Properties:
    return {
        "Template": SchemaObjectProperty(
            schema=SCHEMA_MYTHIC_MOB_ID,
            description="The base mythic mob to use as a template, inheriting all of its settings."
            + md_see_also("Mobs/Templates"),
        ),
        "Exclude": SchemaObjectProperty(
            schema=SchemaList(SchemaString(_excludable)),
            description="Excludes unwanted inherited properties from the template." + md_see_also("Mobs/Templates"),
        ),
        "Type": SchemaObjectProperty(
            schema=SCHEMA_ENTITY_TYPE,
            description="The base entity type of the mythic mob." + md_see_also("Mobs/Mobs#type"),
        ),
        "Display": SchemaObjectProperty(
            schema=SchemaString(),
            description="The display name of the mythic mob." + md_see_also("Mobs/Mobs#display"),
        ),
        "Health": SchemaObjectProperty(
            schema=SchemaNumber(0),
            description="Sets the base value of the mob's max health attribute." + md_see_also("Mobs/Mobs#health"),
        ),
        "Damage": SchemaObjectProperty(
            schema=SchemaNumber(0),
            description="Sets the base value of the mob's melee attack damage attribute."
            + md_see_also("Mobs/Mobs#damage"),
        ),
        "Armor": SchemaObjectProperty(
            schema=SchemaNumber(0, lambda ctx: ctx.ws.mythic_data.attribute_max_armor),
            description="Sets the base value of the mob's armor attribute." + md_see_also("Mobs/Mobs#armor"),
        ),
        "HealthBar": SchemaObjectProperty(
            schema=SchemaObject(
                {
                    "Enabled": SchemaObjectProperty(
                        schema=SchemaBool(),
                        required=True,
                        description="Enables or disables the health bar hologram.",
                    ),
                    "Offset": SchemaObjectProperty(
                        schema=SchemaNumber(),
                        description="Sets the vertical offset of the health bar hologram.",
                    ),
                }
            ),
            description="Creates a basic health bar hologram." + md_see_also("Mobs/Mobs#healthbar"),
        ),
        "BossBar": SchemaObjectProperty(
            schema=SchemaObject(
                {
                    "Enabled": SchemaObjectProperty(
                        schema=SchemaBool(), required=True, description="Enables or disables the boss bar."
                    ),
                    "Title": SchemaObjectProperty(schema=SchemaString(), description="Sets the title of the boss bar."),
                    "Range": SchemaObjectProperty(
                        schema=SchemaNumber(0), description="Sets the range of the boss bar. Defaults to 64."
                    ),
                    "Color": SchemaObjectProperty(
                        schema=SCHEMA_BOSSBAR_COLOR, description="Sets the color of the boss bar."
                    ),
                    "Style": SchemaObjectProperty(
                        schema=SCHEMA_BOSSBAR_STYLE, description="Sets the style of the boss bar."
                    ),
                    "CreateFog": SchemaObjectProperty(
                        schema=SchemaBool(), description="Adds a fog effect while in range of the boss bar."
                    ),
                    "DarkenSky": SchemaObjectProperty(
                        schema=SchemaBool(), description="Darkens the sky while in range of the boss bar."
                    ),
                    "PlayMusic": SchemaObjectProperty(
                        schema=SchemaBool(), description="Whether to play boss music while in range of the boss bar."
                    ),
                }
            ),
            description="Defines and controls the boss bar of the mob." + md_see_also("Mobs/Mobs#bossbar"),
        ),
        "Faction": SchemaObjectProperty(
            schema=SchemaString(),
            description="Sets the mob's faction, used by custom AI and targeter filtering. Case-sensitive."
            + md_see_also("Mobs/Mobs#faction"),
        ),
        "Mount": SchemaObjectProperty(
            schema=SCHEMA_MYTHIC_MOB_ID,
            description="Another mythic mob this mob rides when it spawns." + md_see_also("Mobs/Mobs#mount"),
        ),
        "DisplayOptions": SchemaObjectProperty(
            schema=SchemaObject(_display_options),
            description=f"Sets the display entity options of the mob. Requires type `{'`, `'.join(DISPLAY_ENTITY_TYPES)}`."
            + md_see_also("Mobs/Mobs#displayoptions"),
        ),
        "Options": SchemaObjectProperty(
            schema=SchemaMap(),
            description=f"Numerous sub-options, see {md_link_wiki('Mobs/Options')}." + md_see_also("Mobs/Mobs#options"),
        ),
        "Modules": SchemaObjectProperty(
            schema=SchemaObject(
                {
                    "ThreatTables": SchemaObjectProperty(
                        schema=SchemaBool(),
                        description=f"Enables or disables {md_link_wiki('Mobs/ThreatTables')} for the mob.",
                        aliases=["ThreatTable"],
                    ),
                    "ImmunityTables": SchemaObjectProperty(
                        schema=SchemaBool(),
                        description=f"Enables or disables {md_link_wiki('Mobs/ImmunityTables')} for the mob.",
                    ),
                }
            ),
            description="Enables or disables mob modules." + md_see_also("Mobs/Mobs#modules"),
        ),
        "AIGoalSelectors": _strings("Customizes the AI goals of the mob.", "Mobs/Mobs#aigoalselectors"),
        "AITargetSelectors": _strings("Customizes the AI targets of the mob.", "Mobs/Mobs#aitargetselectors"),
        "Drops": _strings("Adds or modifies the loot drops of the mob.", "Mobs/Mobs#drops"),
        "DamageModifiers": _strings(
            "Modifies how much damage the mob takes from different damage causes.", "Mobs/Mobs#damagemodifiers"
        ),
        "Equipment": _strings("Equips the mob with items when it first spawns.", "Mobs/Mobs#equipment"),
        "KillMessages": _strings(
            "Messages shown when the mob kills a player.", "Mobs/Mobs#killmessages"
        ),
        "LevelModifiers": SchemaObjectProperty(
            schema=SchemaObject(
                {
                    key: SchemaObjectProperty(
                        schema=SchemaNumber(0), description=f"Sets the `{key}` the mob gains per level."
                    )
                    for key in _LEVEL_MODIFIERS
                }
            ),
            description="Statistics the mob gains when its level changes." + md_see_also("Mobs/Mobs#levelmodifiers"),
        ),
        "Disguise": SchemaObjectProperty(
            schema=SchemaString(),
            description="Changes the appearance of the mob. Requires LibsDisguises."
            + md_see_also("Mobs/Mobs#disguise"),
        ),
        "Skills": SchemaObjectProperty(
            schema=MythicSkillList(),
            description=f"The skills of the mob, see {md_link_wiki('Skills/Skills')}." + md_see_also("Mobs/Mobs#skills"),
        ),
        "Nameplate": SchemaObjectProperty(
            schema=SchemaObject(
                {
                    "Enabled": SchemaObjectProperty(
                        schema=SchemaBool(), required=True, description="Enables or disables the nameplate."
                    ),
                    "Mounted": SchemaObjectProperty(
                        schema=SchemaBool(), description="Forces the nameplate to work with modeled entities."
                    ),
                }
            ),
            description="Forces the usage of Mythic nameplates on the mob." + md_see_also("Mobs/Mobs#nameplate"),
        ),
        "Hearing": SchemaObjectProperty(
            schema=SchemaObject(
                {"Enabled": SchemaObjectProperty(schema=SchemaBool(), description="Enables or disables hearing.")}
            ),
            description="Allows the mob to hear sounds like a warden would." + md_see_also("Mobs/Mobs#hearing"),
        ),
        "Variables": SchemaObjectProperty(
            schema=SchemaMap(),
            description="Variables the mob spawns with." + md_see_also("Mobs/Mobs#variables"),
        ),
        "Trades": SchemaObjectProperty(
            schema=SchemaMap(),
            description="Customizes the villager trades." + md_see_also("Mobs/Mobs#trades"),
        ),
    }


def check_mob_types(ws: Workspace, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
    """Vanilla overrides take no ``Type``; only display entities take ``DisplayOptions``."""
    if not isinstance(value, MapNode):
        return
    vanilla = {entity.lower() for entity in ws.mythic_data.entity_ids}
    for pair in value.pairs:
        if not isinstance(pair.value, MapNode):
            continue
        type_pair = next((p for p in pair.value.pairs if p.key_text == "Type"), None)
        if type_pair is not None and pair.key_text.lower() in vanilla:
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(type_pair.key),
                    message=f"Type is not required for vanilla override of {pair.key_text}.",
                    code="mythic-mob-vanilla-override-type",
                )
            )
        entity_type = type_pair.value if type_pair is not None else None
        type_name = str(entity_type.value) if isinstance(entity_type, ScalarNode) else "unknown"
        if type_name.lower() in DISPLAY_ENTITY_TYPES:
            continue
        options = next((p for p in pair.value.pairs if p.key_text == "DisplayOptions"), None)
        if options is not None:
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(options.key),
                    message=(
                        f"DisplayOptions is only available for {', '.join(DISPLAY_ENTITY_TYPES)}. Got {type_name}."
                    ),
                    code="mythic-mob-invalid-display-options",
                )
            )


MYTHIC_MOB_SCHEMA = (
    SchemaMap(SchemaObject(mob_properties).with_name("mythic_mob_config"))
    .on_partial_process(component(MythicMob, ComponentKind.MOBS, SemanticTokenType.CLASS))
    .on_partial_process(check_mob_types)
)
