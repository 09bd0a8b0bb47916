"""Tests for initiative sequencing."""

from mmo_hud.rules.initiative import order_by_turns
from mmo_hud.state.schema import Bar, Combat, Combatant, NormalizedEntry


def entry(entry_id):
    return NormalizedEntry(id=entry_id, name=entry_id, primary=Bar(name="HP"))


class TestCombatTurns:
    """Test Combat.turns ordering."""

    def test_highest_initiative_first(self, combat):
        assert [c.id for c in combat.turns()] == ["c3", "c1", "c2"]

    def test_unrolled_last_and_ties_stable(self):
        combat = Combat(id="c", combatants=[
            Combatant(id="a", initiative=None),
            Combatant(id="b", initiative=10),
            Combatant(id="c", initiative=10),
        ])

        assert [c.id for c in combat.turns()] == ["b", "c", "a"]

    def test_current_combatant(self, combat):
        assert combat.current_combatant.id == "c3"

    def test_current_combatant_out_of_range(self, combat):
        combat.turn = 9

        assert combat.current_combatant is None


class TestOrderByTurns:
    """Test order_by_turns."""

    def test_sorted_and_annotated(self, combat):
        ordered = order_by_turns([entry("hero"), entry("ally")], combat)

        assert [e.id for e in ordered] == ["ally", "hero"]
        assert [e.initiative for e in ordered] == [15, 8]

    def test_current_turn_flag(self, combat):
        combat.turn = 2  # hero acts third

        ordered = order_by_turns([entry("hero"), entry("ally")], combat)

        assert [e.is_current_turn for e in ordered] == [False, True]

    def test_entries_outside_combat_go_last_in_order(self, combat):
        ordered = order_by_turns([entry("mage"), entry("hero"), entry("bard")], combat)

        assert [e.id for e in ordered] == ["hero", "mage", "bard"]
        assert ordered[1].initiative is None

    def test_actor_with_two_combatants_uses_first_turn(self):
        combat = Combat(id="c", combatants=[
            Combatant(id="a", actor_id="wolf", initiative=3),
            Combatant(id="b", actor_id="hero", initiative=10),
            Combatant(id="c", actor_id="wolf", initiative=18),
        ])

        ordered = order_by_turns([entry("hero"), entry("wolf")], combat)

        assert [e.id for e in ordered] == ["wolf", "hero"]
        assert ordered[0].initiative == 18
