"""Game constants consulted by the built-in schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

DEFAULT_TICK_DURATION = 0.05
DEFAULT_ATTRIBUTE_ARMOR_MAX = 30

DEFAULT_ENTITIES: tuple[str, ...] = (
    "ALLAY",
    "ARMOR_STAND",
    "AXOLOTL",
    "BAT",
    "BEE",
    "BLAZE",
    "BLOCK_DISPLAY",
    "CAT",
    "CAVE_SPIDER",
    "CHICKEN",
    "COW",
    "CREEPER",
    "DROWNED",
    "ELDER_GUARDIAN",
    "ENDER_DRAGON",
    "ENDERMAN",
    "EVOKER",
    "FOX",
    "GHAST",
    "GIANT",
    "GUARDIAN",
    "HOGLIN",
    "HORSE",
    "HUSK",
    "IRON_GOLEM",
    "ITEM_DISPLAY",
    "MAGMA_CUBE",
    "PHANTOM",
    "PIG",
    "PIGLIN",
    "PIGLIN_BRUTE",
    "PILLAGER",
    "RAVAGER",
    "SHEEP",
    "SHULKER",
    "SILVERFISH",
    "SKELETON",
    "SLIME",
    "SPIDER",
    "STRAY",
    "TEXT_DISPLAY",
    "VEX",
    "VILLAGER",
    "VINDICATOR",
    "WARDEN",
    "WITCH",
    "WITHER",
    "WITHER_SKELETON",
    "WOLF",
    "ZOGLIN",
    "ZOMBIE",
    "ZOMBIE_VILLAGER",
    "ZOMBIFIED_PIGLIN",
)

DEFAULT_BOSSBAR_COLORS: tuple[str, ...] = (
    "PINK",
    "BLUE",
    "RED",
    "GREEN",
    "YELLOW",
    "PURPLE",
    "WHITE",
)

DEFAULT_BOSSBAR_STYLES: tuple[str, ...] = (
    "SOLID",
    "SEGMENTED_6",
    "SEGMENTED_10",
    "SEGMENTED_12",
    "SEGMENTED_20",
)

DEFAULT_MATERIALS: tuple[str, ...] = (
    "ARROW",
    "BOW",
    "DIAMOND",
    "DIAMOND_SWORD",
    "EMERALD",
    "GOLDEN_APPLE",
    "IRON_INGOT",
    "IRON_SWORD",
    "LINGERING_POTION",
    "NETHERITE_SWORD",
    "PAPER",
    "PLAYER_HEAD",
    "POTION",
    "SHIELD",
    "SPLASH_POTION",
    "STICK",
    "STONE",
    "TIPPED_ARROW",
    "WHITE_BANNER",
    "WOODEN_SWORD",
)

DEFAULT_ENCHANTMENTS: tuple[str, ...] = (
    "FIRE_ASPECT",
    "KNOCKBACK",
    "LOOTING",
    "MENDING",
    "POWER",
    "PROTECTION",
    "SHARPNESS",
    "SMITE",
    "UNBREAKING",
)

DEFAULT_HIDE_FLAGS: tuple[str, ...] = (
    "ARMOR_TRIM",
    "ATTRIBUTES",
    "DESTROYS",
    "DYE",
    "ENCHANTS",
    "PLACED_ON",
    "POTION_EFFECTS",
    "UNBREAKABLE",
)


class MythicData(BaseModel):
    """Immutable game data. Derive variants with ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)

    tick_duration: float = DEFAULT_TICK_DURATION
    attribute_max_armor: float = DEFAULT_ATTRIBUTE_ARMOR_MAX
    entity_ids: tuple[str, ...] = DEFAULT_ENTITIES
    bossbar_colors: tuple[str, ...] = DEFAULT_BOSSBAR_COLORS
    bossbar_styles: tuple[str, ...] = DEFAULT_BOSSBAR_STYLES
    material_ids: tuple[str, ...] = DEFAULT_MATERIALS
    enchantments: tuple[str, ...] = DEFAULT_ENCHANTMENTS
    hide_flags: tuple[str, ...] = DEFAULT_HIDE_FLAGS

    def with_entity_ids(self, *ids: str) -> MythicData:
        return self.model_copy(update={"entity_ids": (*self.entity_ids, *ids)})
