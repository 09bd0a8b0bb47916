"""D&D Fifth Edition adapter."""

from ..state.schema import Actor, Bar, NormalizedEntry
from .base import InitiativeOrderedSystem, get_property


class DnD5eSystem(InitiativeOrderedSystem):
    """
    D&D 5e: hit points with temporary HP, character level.

    Characters keep their level in details.level; NPCs only have a
    challenge rating, which is shown in its place.
    """

    system_id = "dnd5e"

    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        data = super().translate_resource_bar(actor, bar_attribute)
        if bar_attribute == "attributes.hp":
            data.name = "HP"
        return data

    def translate_party_actor(self, actor: Actor) -> NormalizedEntry:
        data = super().translate_party_actor(actor)
        if actor.type == "npc":
            data.level = get_property(actor.system, "details.cr")
        else:
            data.level = get_property(actor.system, "details.level")
        return data
