"""Shared test fixtures for the Mythic analyzer."""

from __future__ import annotations

import pytest

from mythic_analyzer.document import MythicDoc
from mythic_analyzer.models.results import ValidationResult
from mythic_analyzer.parser.loader import TrackedLoader
from mythic_analyzer.schema.base import Schema
from mythic_analyzer.settings import Settings
from mythic_analyzer.workspace import Workspace

TEST_URI = "file:///workspace/test.yml"
SKILLS_URI = "file:///srv/plugins/MythicMobs/Skills/healing.yml"
OTHER_SKILLS_URI = "file:///srv/plugins/MythicMobs/Skills/combat.yml"
MOBS_URI = "file:///srv/plugins/MythicMobs/Mobs/bosses.yml"
ITEMS_URI = "file:///srv/plugins/MythicMobs/Items/weapons.yml"


@pytest.fixture
def loader() -> TrackedLoader:
    return TrackedLoader()


@pytest.fixture
def settings() -> Settings:
    """Defaults only, ignoring any .env file and environment overrides."""
    return Settings(_env_file=None)


@pytest.fixture
def workspace(settings: Settings) -> Workspace:
    return Workspace(settings=settings)


def load_doc(ws: Workspace, source: str, schema: Schema | None = None, uri: str = TEST_URI) -> MythicDoc:
    return ws.load(MythicDoc(source, uri, schema))


def partial(ws: Workspace, schema: Schema, source: str) -> ValidationResult:
    """Partially process ``source`` as a standalone document bound to ``schema``."""
    return load_doc(ws, source, schema).partial_process(ws)


def full(ws: Workspace, schema: Schema, source: str) -> ValidationResult:
    """Fully process ``source`` as a standalone document bound to ``schema``."""
    return load_doc(ws, source, schema).full_process(ws)


def codes(result: ValidationResult) -> list[str]:
    return [d.code for d in result.diagnostics]


HEALING_SKILLS_YAML = """\
# Restores a little health.
heal1:
  Cooldown: 1.5
  Skills:
  - heal{amount=5} @self
  - particles{p=heart;a=10} @self 0.5

heal2:
  Skills:
  - heal{amount=10} @self
"""

COMBAT_SKILLS_YAML = """\
combo:
  Conditions:
  - incombat true
  Skills:
  - skill{s=heal1}
  - damage{amount=4} @target
"""

BOSS_MOBS_YAML = """\
KingSlime:
  Type: SLIME
  Display: '&aKing Slime'
  Health: 200
  Armor: 10
  BossBar:
    Enabled: true
    Color: GREEN
    Style: SOLID
  Options:
    Despawn: false
  Skills:
  - skill{s=heal1} @self ~onDamaged 0.2
  - damage{amount=4} @target ~onAttack
"""

WEAPON_ITEMS_YAML = """\
KingsSword:
  Id: DIAMOND_SWORD
  Display: '&6King''s Sword'
  Lore:
  - 'Forged for a king'
  Enchantments:
  - SHARPNESS:5
  Hide:
  - ENCHANTS
"""
