"""Tests for full skill lines: mechanic, targeter, trigger, conditions and chance."""

from __future__ import annotations

from mythic_analyzer.document import MythicDoc
from mythic_analyzer.models.results import DiagnosticSeverity
from mythic_analyzer.skills.mechanic import SkillMechanic
from tests.conftest import TEST_URI


def _parse(line: str, supports_triggers: bool = True) -> SkillMechanic:
    return SkillMechanic.parse(MythicDoc(line, TEST_URI), line, 0, supports_triggers)


def _codes(mechanic: SkillMechanic) -> list[str]:
    return [d.code for d in mechanic.result.diagnostics]


class TestComponents:
    def test_full_line(self) -> None:
        mechanic = _parse("damage{amount=5} @target ~onAttack ?isburning 0.5")
        assert _codes(mechanic) == []
        assert mechanic.name == "damage"
        assert mechanic.targeter.main.value == "target"
        assert mechanic.trigger.name.value == "onAttack"
        assert [c.main.value for c in mechanic.conditions] == ["isburning"]
        assert mechanic.chance.value == "0.5"

    def test_name_is_lowercased(self) -> None:
        assert _parse("Damage{amount=1}").name == "damage"

    def test_empty_line(self) -> None:
        mechanic = _parse("   ")
        assert mechanic.name is None
        assert _codes(mechanic) == []

    def test_targeter_offsets(self) -> None:
        mechanic = _parse("damage @EntitiesInRadius{r=5}")
        targeter = mechanic.targeter
        assert (targeter.at.start, targeter.at.end) == (7, 8)
        assert (targeter.main.start, targeter.main.end) == (8, 24)
        assert targeter.get("r").value.value == "5"

    def test_escaped_block_keeps_source_offsets(self) -> None:
        mechanic = _parse('message{m="a b"} @self')
        assert mechanic.targeter.at.start == 17
        assert mechanic.config.get("m").value.value == '"a b"'

    def test_spaces_inside_block(self) -> None:
        mechanic = _parse("message{m=a b c} @self")
        assert _codes(mechanic) == []
        assert mechanic.config.get("m").value.value == "a b c"
        assert mechanic.targeter.main.value == "self"

    def test_trigger_argument(self) -> None:
        trigger = _parse("damage ~onTimer:20").trigger
        assert (trigger.name.value, trigger.argument.value) == ("onTimer", "20")
        assert (trigger.colon.start, trigger.argument.start) == (15, 16)

    def test_condition_flags(self) -> None:
        condition = _parse("damage ?~!isburning").conditions[0]
        assert condition.on_trigger
        assert condition.negated
        assert condition.main.value == "isburning"
        assert condition.main.start == 10

    def test_plain_condition(self) -> None:
        condition = _parse("damage ?isburning").conditions[0]
        assert not condition.on_trigger
        assert not condition.negated
        assert condition.main.start == 8

    def test_multiple_conditions(self) -> None:
        assert len(_parse("damage ?a ?!b").conditions) == 2

    def test_leading_numeric_argument(self) -> None:
        mechanic = _parse("delay 20")
        assert _codes(mechanic) == []
        assert mechanic.argument.value == "20"
        assert mechanic.chance is None


class TestDiagnostics:
    def test_mismatched_braces(self) -> None:
        assert _codes(_parse("damage{amount=5")) == ["lineconfig-mismatched-braces"]

    def test_duplicate_key_after_spaced_separator(self) -> None:
        assert _codes(_parse("damage{amount=5; amount=6}")) == ["lineconfig-duplicate-key"]

    def test_invalid_chance(self) -> None:
        mechanic = _parse("heal 1.5")
        assert _codes(mechanic) == ["mythic-skill-invalid-chance"]
        assert mechanic.result.diagnostics[0].message == "Chance must be between 0 and 1, but got 1.5."

    def test_delay_is_not_a_chance(self) -> None:
        assert _codes(_parse("delay 1.5")) == []

    def test_too_many_chances(self) -> None:
        assert _codes(_parse("delay 20 0.5")) == ["mythic-skill-too-many-chances"]
        assert _codes(_parse("damage 0.5 0.5")) == ["mythic-skill-too-many-chances"]

    def test_too_many_targeters(self) -> None:
        mechanic = _parse("damage @Self @World")
        assert _codes(mechanic) == ["mythic-skill-too-many-targeters"]
        diagnostic_range = mechanic.result.diagnostics[0].range
        assert (diagnostic_range.start.character, diagnostic_range.end.character) == (13, 19)
        assert mechanic.targeter.main.value == "Self"

    def test_triggers_not_allowed(self) -> None:
        mechanic = _parse("damage ~onAttack", supports_triggers=False)
        assert _codes(mechanic) == ["mythic-skill-triggers-not-allowed"]

    def test_too_many_triggers(self) -> None:
        assert _codes(_parse("damage ~onAttack ~onDamaged")) == ["mythic-skill-too-many-triggers"]

    def test_unknown_component_is_a_warning(self) -> None:
        mechanic = _parse("damage oops")
        assert _codes(mechanic) == ["mythic-skill-unknown-component"]
        assert mechanic.result.diagnostics[0].severity == DiagnosticSeverity.WARNING
        assert mechanic.result.diagnostics[0].message == "Unknown skill component `oops`."
        assert mechanic.result.valid


class TestSkillReference:
    def test_skill_mechanic(self) -> None:
        reference = _parse("skill{s=heal1}").skill_reference()
        assert (reference.value, reference.start, reference.end) == ("heal1", 8, 13)

    def test_metaskill_long_key(self) -> None:
        assert _parse("metaskill{skill=combo} @self").skill_reference().value == "combo"

    def test_other_mechanics(self) -> None:
        assert _parse("damage{amount=1}").skill_reference() is None

    def test_key_after_spaced_separator(self) -> None:
        reference = _parse("skill{sync=true; s=heal1}").skill_reference()
        assert (reference.value, reference.start, reference.end) == ("heal1", 19, 24)

    def test_missing_key(self) -> None:
        assert _parse("skill{sync=true}").skill_reference() is None
