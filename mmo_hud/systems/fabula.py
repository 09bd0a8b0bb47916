"""Fabula Ultima adapter."""

from ..state.schema import Actor, Bar, NormalizedEntry
from .base import GenericSystem, get_property


class FabulaSystem(GenericSystem):
    """Fabula Ultima: HP and MP resources, level under level.value."""

    system_id = "fabulaultima"

    DEFAULT_PRIMARY = "resources.hp"

    def secondary_attribute(self, actor, token=None):
        return super().secondary_attribute(actor, token) or "resources.mp"

    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        data = super().translate_resource_bar(actor, bar_attribute)
        if bar_attribute == "resources.hp":
            data.name = "HP"
        elif bar_attribute == "resources.mp":
            data.name = "MP"
        return data

    def translate_party_actor(self, actor: Actor) -> NormalizedEntry:
        data = super().translate_party_actor(actor)
        data.level = get_property(actor.system, "level.value")
        return data
