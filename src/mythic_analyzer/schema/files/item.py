"""Schema of an item file: ``<item id>: { Id: ..., Display: ..., Lore: [...], ... }``."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mythic_analyzer.models.components import ComponentKind, MythicItem
from mythic_analyzer.models.results import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    SemanticTokenType,
    ValidationResult,
)
from mythic_analyzer.parser.documentation import md_link_wiki, md_see_also
from mythic_analyzer.parser.nodes import Node, ScalarNode
from mythic_analyzer.schema.base import SchemaContext
from mythic_analyzer.schema.component import component, enclosing_entry
from mythic_analyzer.schema.list import SchemaList
from mythic_analyzer.schema.number import SchemaNumber
from mythic_analyzer.schema.object import Properties, SchemaMap, SchemaObject, SchemaObjectProperty
from mythic_analyzer.schema.references import (
    SCHEMA_ENCHANTMENT,
    SCHEMA_HIDE_FLAG,
    SCHEMA_MATERIAL_TYPE,
    SCHEMA_MYTHIC_ITEM_ID,
)
from mythic_analyzer.schema.string import SchemaString, StringMatcher

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace

POTION_MATERIALS = ("potion", "splash_potion", "lingering_potion", "tipped_arrow")


def _strings(description: str, see_also: str) -> SchemaObjectProperty:
    return SchemaObjectProperty(schema=SchemaList(SchemaString()), description=description + md_see_also(see_also))


def check_potion_material(ws: Workspace, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
    """Potion effects only apply to potion-like materials."""
    item = enclosing_entry(SchemaContext(ws, doc, value))
    material = item.get("Id") if item is not None else None
    if not isinstance(material, ScalarNode):
        return
    if str(material.value).lower() in POTION_MATERIALS:
        return
    result.diagnostics.append(
        Diagnostic(
            range=doc.node_range(value),
            message=(
                "Potion effects can only be applied to items of type "
                + ", ".join(f"`{m}`" for m in POTION_MATERIALS)
                + "."
            ),
            code="mythic-item-invalid-potion-effects",
        )
    )


def check_enchantment(ws: Workspace, doc: MythicDoc, value: Node, result: ValidationResult) -> None:
    """Validate the name part of an `ENCHANTMENT:level` entry."""
    if not isinstance(value, ScalarNode) or not isinstance(value.value, str):
        return
    name = re.split(r"[: ]", value.value, maxsplit=1)[0]
    start = value.start + 1 if value.is_quoted else value.start
    node = ScalarNode(value=name, text=name, start=start, end=start + len(name))
    result.merge(SCHEMA_ENCHANTMENT.partial_process(ws, doc, node))


def _excludable(ctx: SchemaContext) -> list[StringMatcher]:
    return [
        StringMatcher(key, CompletionItem(label=key, kind=CompletionItemKind.PROPERTY))
        for key in item_properties(ctx)
    ]


def item_properties(ctx: SchemaContext) -> Properties:
    return {
        "Template": SchemaObjectProperty(
            schema=SCHEMA_MYTHIC_ITEM_ID,
            description="The base mythic item to use as a template, inheriting all of its settings."
            + md_see_also("Items/Items#template"),
        ),
        "Exclude": SchemaObjectProperty(
            schema=SchemaList(SchemaString(_excludable)),
            description="Excludes unwanted inherited properties from the template."
            + md_see_also("Items/Items#template"),
        ),
        "Id": SchemaObjectProperty(
            schema=SCHEMA_MATERIAL_TYPE,
            description="The base material to use for your item." + md_see_also("Items/Items#id"),
        ),
        "Display": SchemaObjectProperty(
            schema=SchemaString(),
            description="Sets the display name of the item." + md_see_also("Items/Items#display"),
        ),
        "Lore": _strings(
            "Sets the lore of the item. `{min-max}` and `<random.#to#>` generate random numbers.",
            "Items/Items#lore",
        ),
        "CustomModelData": SchemaObjectProperty(
            schema=SchemaNumber(integer=True),
            description="Sets the CustomModelData tag on the item." + md_see_also("Items/Items#custommodeldata"),
            aliases=["Model"],
        ),
        "Durability": SchemaObjectProperty(
            schema=SchemaNumber(0),
            description="Sets the amount of durability to take off the item." + md_see_also("Items/Items#durability"),
        ),
        "Attributes": SchemaObjectProperty(
            schema=SchemaMap(),
            description="Item attributes per armor slot." + md_see_also("Items/Items#attributes"),
        ),
        "Amount": SchemaObjectProperty(
            schema=SchemaNumber(1, integer=True),
            description="Sets the default amount of items to give." + md_see_also("Items/Items#amount"),
        ),
        "Options": SchemaObjectProperty(
            schema=SchemaMap(),
            description="A special field that comes with numerous sub-options." + md_see_also("Items/Items#options"),
        ),
        "Enchantments": SchemaObjectProperty(
            schema=SchemaList(
                SchemaString().with_name("enchantment").on_partial_process(check_enchantment),
                allow_duplicates=False,
            ),
            description="Sets the enchantments on the item, as `ENCHANTMENT:level`."
            + md_see_also("Items/Items#enchantments"),
        ),
        "Hide": SchemaObjectProperty(
            schema=SchemaList(SCHEMA_HIDE_FLAG, allow_duplicates=False),
            description="Hides specific things from the item tooltip." + md_see_also("Items/Items#hide"),
        ),
        "PotionEffects": SchemaObjectProperty(
            schema=SchemaList(SchemaString()).on_partial_process(check_potion_material),
            description=f"Sets the potion effects of the item, see {md_link_wiki('Items/Potions')}."
            + md_see_also("Items/Items#potioneffects"),
        ),
        "BannerLayers": _strings("Sets the banner layers of a banner or a shield.", "Items/Items#bannerlayers"),
        "CanPlaceOn": _strings("Blocks this item can be placed on in adventure mode.", "Items/Items#canplaceon"),
        "CanBreak": _strings("Blocks this item can break in adventure mode.", "Items/Items#canbreak"),
        "Group": SchemaObjectProperty(
            schema=SchemaString(),
            description="Sets the group the item is in for `/mm items browse`." + md_see_also("Items/Items#group"),
        ),
        "NBT": SchemaObjectProperty(
            schema=SchemaMap(),
            description="Sets the NBT data for the item." + md_see_also("Items/Items#nbt"),
        ),
    }


MYTHIC_ITEM_SCHEMA = SchemaMap(SchemaObject(item_properties).with_name("mythic_item_config")).on_partial_process(
    component(MythicItem, ComponentKind.ITEMS, SemanticTokenType.CLASS)
)
