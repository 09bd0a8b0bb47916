"""Pathfinder Second Edition adapter."""

from ..state.schema import Actor, ActiveEffect, Bar, Effect, NormalizedEntry
from .base import InitiativeOrderedSystem, get_property


class PF2eSystem(InitiativeOrderedSystem):
    """
    PF2e: hit points with temporary HP, focus points, level.

    Conditions are shown as debuffs and spell/item effects as buffs.
    """

    system_id = "pf2e"

    BAR_NAMES = {
        "attributes.hp": "HP",
        "resources.focus": "Focus",
    }

    def secondary_attribute(self, actor, token=None):
        return super().secondary_attribute(actor, token) or "resources.focus"

    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        data = super().translate_resource_bar(actor, bar_attribute)
        data.name = self.BAR_NAMES.get(bar_attribute, data.name)
        return data

    def translate_effect(self, effect: ActiveEffect) -> Effect | None:
        data = super().translate_effect(effect)
        if data is None:
            return None
        if effect.type == "condition":
            data.is_debuff = True
        elif effect.type == "effect":
            data.is_buff = True
        return data

    def translate_party_actor(self, actor: Actor) -> NormalizedEntry:
        data = super().translate_party_actor(actor)
        data.level = get_property(actor.system, "details.level.value")
        return data
