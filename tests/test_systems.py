"""
Tests for game-system adapters.

Variants are layered on the generic adapter: they call it and patch names,
levels, effect classification and turn ordering.
"""

import logging

import pytest
from mmo_hud.state.schema import (
    Actor,
    ActiveEffect,
    BarAttribute,
    Combat,
    Combatant,
    PrototypeToken,
    Token,
)
from mmo_hud.systems import (
    SYSTEM_ADAPTERS,
    ArchmageSystem,
    DnD5eSystem,
    FabulaSystem,
    GenericSystem,
    PF2eSystem,
    SWADESystem,
    create_system_adapter,
    get_property,
    to_number,
)

from conftest import make_actor


class TestCreateSystemAdapter:
    """Adapter selection by system id."""

    @pytest.mark.parametrize("system_id,cls", [
        ("archmage", ArchmageSystem),
        ("dnd5e", DnD5eSystem),
        ("pf2e", PF2eSystem),
        ("swade", SWADESystem),
        ("fabulaultima", FabulaSystem),
    ])
    def test_known_systems(self, system_id, cls):
        assert type(create_system_adapter(system_id)) is cls

    def test_unknown_system_falls_back_to_generic(self, caplog):
        with caplog.at_level(logging.INFO):
            adapter = create_system_adapter("starfinder")

        assert type(adapter) is GenericSystem
        assert "No specific system converter found for starfinder" in caplog.text

    def test_registry_keys_match_system_ids(self):
        for system_id, cls in SYSTEM_ADAPTERS.items():
            assert cls.system_id == system_id


class TestHelpers:
    def test_get_property_walks_dotted_path(self):
        assert get_property({"a": {"b": {"c": 3}}}, "a.b.c") == 3

    def test_get_property_missing_segment(self):
        assert get_property({"a": {"b": 1}}, "a.b.c") is None
        assert get_property({}, "a") is None

    def test_to_number(self):
        assert to_number(4) == 4
        assert to_number("7") == 7
        assert to_number("2.5") == 2.5
        assert to_number(None) == 0
        assert to_number("n/a", default=None) is None


class TestGenericResourceBar:
    """Test GenericSystem.translate_resource_bar."""

    def test_reads_value_max_temp(self):
        actor = make_actor("a", hp=(10, 18), temp=4)

        bar = GenericSystem().translate_resource_bar(actor, "attributes.hp")

        assert (bar.value, bar.max, bar.temp) == (10, 18, 4)
        assert bar.name == "Hp"
        assert bar.theme == "rpg-t-hp"

    def test_missing_path_gives_zero_bar(self):
        actor = make_actor("a")

        bar = GenericSystem().translate_resource_bar(actor, "resources.power")

        assert (bar.value, bar.max, bar.temp) == (0, 0, None)
        assert bar.name == "Power"
        assert bar.theme == "rpg-t-mp"

    def test_missing_actor_gives_zero_bar(self):
        bar = GenericSystem().translate_resource_bar(None, "attributes.hp")

        assert (bar.value, bar.max) == (0, 0)

    def test_value_only_attribute_is_full(self):
        actor = Actor(id="a", name="A", system={"attributes": {"luck": 3}})

        bar = GenericSystem().translate_resource_bar(actor, "attributes.luck")

        assert (bar.value, bar.max) == (3, 3)

    def test_null_fields_become_zero(self):
        actor = Actor(id="a", name="A", system={"attributes": {"hp": {"value": None, "max": "12"}}})

        bar = GenericSystem().translate_resource_bar(actor, "attributes.hp")

        assert (bar.value, bar.max) == (0, 12)


class TestGenericPartyActor:
    """Test GenericSystem.translate_party_actor."""

    def test_defaults_to_attributes_hp_without_secondary(self, hero):
        entry = GenericSystem().translate_party_actor(hero)

        assert entry.id == "hero"
        assert entry.name == "Hero"
        assert entry.image == "icons/hero.webp"
        assert entry.primary.value == 10
        assert entry.secondary is None
        assert entry.level is None

    def test_uses_prototype_token_bars(self):
        actor = Actor(
            id="a",
            name="A",
            system={"stats": {"life": {"value": 4, "max": 8}, "mana": {"value": 1, "max": 5}}},
            prototype_token=PrototypeToken(
                bar1=BarAttribute(attribute="stats.life"),
                bar2=BarAttribute(attribute="stats.mana"),
            ),
        )

        entry = GenericSystem().translate_party_actor(actor)

        assert entry.primary.name == "Life"
        assert entry.primary.value == 4
        assert entry.secondary.name == "Mana"
        assert entry.secondary.max == 5

    def test_effects_classification(self):
        actor = make_actor("a", effects=[
            ActiveEffect(name="Blessed", icon="b.png", type="buff"),
            ActiveEffect(name="Poisoned", icon="p.png", type="debuff"),
            ActiveEffect(name="Marked", icon="m.png"),
            ActiveEffect(name="Expired", icon="x.png", type="buff", disabled=True),
        ])

        effects = GenericSystem().translate_party_actor(actor).effects

        assert [e.name for e in effects] == ["Blessed", "Poisoned", "Marked"]
        assert effects[0].is_buff and not effects[0].is_debuff
        assert effects[1].is_debuff and not effects[1].is_buff
        assert effects[2].is_buff is None and effects[2].is_debuff is None


class TestGenericEnemyToken:
    """Test GenericSystem.translate_enemy_token."""

    def test_token_identity_and_actor_data(self, goblin):
        token = Token(id="t1", name="Goblin Boss", actor_id="goblin", texture="gob.png")

        entry = GenericSystem().translate_enemy_token(token, goblin)

        assert entry.id == "t1"
        assert entry.name == "Goblin Boss"
        assert entry.image == "gob.png"
        assert entry.primary.value == 5
        assert entry.primary.temp == 6
        assert entry.secondary is None

    def test_falls_back_to_actor_name_and_image(self, goblin):
        token = Token(id="t1", actor_id="goblin")

        entry = GenericSystem().translate_enemy_token(token, goblin)

        assert entry.name == "Goblin"
        assert entry.image == "icons/goblin.webp"

    def test_token_bar_overrides_prototype(self):
        actor = Actor(id="a", name="A", system={"x": {"value": 1, "max": 2}, "y": {"value": 3, "max": 4}})
        token = Token(id="t", actor_id="a", bar1=BarAttribute(attribute="y"))

        entry = GenericSystem().translate_enemy_token(token, actor)

        assert entry.primary.value == 3

    def test_missing_actor(self):
        entry = GenericSystem().translate_enemy_token(Token(id="t", name="Shade"), None)

        assert entry.name == "Shade"
        assert entry.primary.max == 0
        assert entry.effects == []

    def test_generic_set_initiatives_is_identity(self, hero, combat):
        entries = [GenericSystem().translate_party_actor(hero)]

        assert GenericSystem().set_initiatives(entries, combat) is entries


class TestFabulaSystem:
    def test_names_and_level(self):
        actor = Actor(id="f", name="Fabula", system={
            "resources": {"hp": {"value": 30, "max": 40}, "mp": {"value": 10, "max": 20}},
            "level": {"value": 7},
        })

        entry = FabulaSystem().translate_party_actor(actor)

        assert entry.primary.name == "HP"
        assert entry.secondary.name == "MP"
        assert entry.primary.value == 30
        assert entry.secondary.value == 10
        assert entry.level == 7

    def test_other_paths_keep_generic_name(self):
        actor = Actor(id="f", name="F", system={"resources": {"ip": {"value": 2, "max": 6}}})

        assert FabulaSystem().translate_resource_bar(actor, "resources.ip").name == "Ip"


class TestDnD5eSystem:
    def test_hp_with_temp_and_level(self):
        actor = make_actor("pc", hp=(12, 30), temp=5, details={"level": 4})

        entry = DnD5eSystem().translate_party_actor(actor)

        assert entry.primary.name == "HP"
        assert entry.primary.temp == 5
        assert entry.level == 4

    def test_npc_shows_challenge_rating(self):
        actor = make_actor("npc", details={"cr": 0.5})
        actor.type = "npc"

        assert DnD5eSystem().translate_party_actor(actor).level == 0.5


class TestPF2eSystem:
    def test_focus_and_level(self):
        actor = make_actor("pf", resources={"focus": {"value": 1, "max": 2}}, details={"level": {"value": 3}})

        entry = PF2eSystem().translate_party_actor(actor)

        assert entry.primary.name == "HP"
        assert entry.secondary.name == "Focus"
        assert entry.secondary.max == 2
        assert entry.level == 3

    def test_conditions_are_debuffs_and_effects_buffs(self):
        actor = make_actor("pf", effects=[
            ActiveEffect(name="Frightened", type="condition"),
            ActiveEffect(name="Heroism", type="effect"),
        ])

        effects = PF2eSystem().translate_party_actor(actor).effects

        assert effects[0].is_debuff is True
        assert effects[1].is_buff is True


class TestArchmageSystem:
    def test_health_recoveries_level(self):
        actor = make_actor("am", hp=(10, 18))
        actor.system["attributes"]["recoveries"] = {"value": 3, "max": 8}
        actor.system["attributes"]["level"] = {"value": 5}

        entry = ArchmageSystem().translate_party_actor(actor)

        assert entry.primary.name == "Health"
        assert entry.secondary.name == "Recoveries"
        assert entry.secondary.value == 3
        assert entry.level == 5


class TestSWADESystem:
    def test_wounds_and_fatigue(self):
        actor = Actor(id="s", name="S", system={
            "wounds": {"value": 1, "max": 3},
            "fatigue": {"value": 0, "max": 2},
        })

        entry = SWADESystem().translate_party_actor(actor)

        assert entry.primary.name == "Wounds"
        assert entry.primary.max == 3
        assert entry.secondary.name == "Fatigue"
        assert entry.level is None


class TestInitiativeOrderedSystems:
    """Variants with turn order sort the party by it."""

    def test_dnd5e_sorts_by_turn_order(self, hero, ally, combat):
        adapter = DnD5eSystem()
        entries = [adapter.translate_party_actor(a) for a in (hero, ally)]

        ordered = adapter.set_initiatives(entries, combat)

        assert [e.id for e in ordered] == ["ally", "hero"]
        assert ordered[0].initiative == 15
        assert ordered[1].initiative == 8

    def test_no_combat_keeps_order(self, hero, ally):
        adapter = PF2eSystem()
        entries = [adapter.translate_party_actor(a) for a in (hero, ally)]

        assert adapter.set_initiatives(entries, None) == entries

    def test_fabula_does_not_reorder(self, hero, ally, combat):
        adapter = FabulaSystem()
        entries = [adapter.translate_party_actor(a) for a in (hero, ally)]

        assert [e.id for e in adapter.set_initiatives(entries, combat)] == ["hero", "ally"]
