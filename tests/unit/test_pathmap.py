"""Tests for path-based schema binding and settings."""

from __future__ import annotations

import logging

import pytest

from mythic_analyzer import logging as analyzer_logging
from mythic_analyzer.schema.files import MYTHIC_ITEM_SCHEMA, MYTHIC_MOB_SCHEMA, MYTHIC_SKILL_SCHEMA
from mythic_analyzer.schema.pathmap import SCHEMA_IDS, PathMapping, find_schema, match_schema_id
from mythic_analyzer.settings import Settings


class TestFindSchema:
    @pytest.mark.parametrize(
        ("path", "schema"),
        [
            ("/srv/plugins/MythicMobs/Skills/healing.yml", MYTHIC_SKILL_SCHEMA),
            ("/srv/plugins/MythicMobs/Mobs/bosses.yaml", MYTHIC_MOB_SCHEMA),
            ("/srv/plugins/MythicMobs/Items/weapons.yml", MYTHIC_ITEM_SCHEMA),
            ("/srv/plugins/MythicMobs/Packs/dungeon/Skills/boss.yml", MYTHIC_SKILL_SCHEMA),
            ("file:///srv/plugins/MythicMobs/Mobs/a.yml", MYTHIC_MOB_SCHEMA),
            ("C:\\Server\\plugins\\MythicMobs\\Items\\a.yml", MYTHIC_ITEM_SCHEMA),
        ],
    )
    def test_matching_paths(self, path: str, schema) -> None:
        assert find_schema(path) is schema

    @pytest.mark.parametrize(
        "path",
        [
            "/srv/plugins/MythicMobs/config.yml",
            "/srv/plugins/MythicMobs/Skills/readme.txt",
            "/srv/plugins/mythicmobs/Skills/healing.yml",
            "/srv/plugins/Other/Skills/healing.yml",
        ],
    )
    def test_unmatched_paths(self, path: str) -> None:
        assert find_schema(path) is None

    def test_custom_path_map(self) -> None:
        path_map = (PathMapping("mythic_skill", ("*/skills/*.yml",), MYTHIC_SKILL_SCHEMA),)
        assert find_schema("/data/skills/a.yml", path_map) is MYTHIC_SKILL_SCHEMA
        assert find_schema("/srv/plugins/MythicMobs/Skills/a.yml", path_map) is None


class TestMatchSchemaId:
    def test_known_ids(self) -> None:
        assert SCHEMA_IDS == ("mythic_skill", "mythic_mob", "mythic_item")
        assert match_schema_id("mythic_mob") is MYTHIC_MOB_SCHEMA

    def test_case_insensitive(self) -> None:
        assert match_schema_id("MYTHIC_SKILL") is MYTHIC_SKILL_SCHEMA

    def test_unknown_id(self) -> None:
        with pytest.raises(KeyError, match="Unknown schema id"):
            match_schema_id("mythic_droptable")


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.suggestion_max_distance == 3
        assert settings.max_depth == 64

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYTHIC_ANALYZER_SUGGESTION_MAX_DISTANCE", "1")
        monkeypatch.setenv("MYTHIC_ANALYZER_MAX_NODE_COUNT", "100")
        settings = Settings(_env_file=None)
        assert settings.suggestion_max_distance == 1
        assert settings.max_node_count == 100

    def test_env_file(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("MYTHIC_ANALYZER_LOG_LEVEL=debug\n", encoding="utf-8")
        assert Settings(_env_file=env_file).log_level == "debug"

    def test_configure_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict] = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        analyzer_logging.configure_logging(Settings(_env_file=None, log_level="debug"))
        assert calls == [{"level": "DEBUG"}]
