"""13th Age (Archmage) adapter."""

from ..state.schema import Actor, Bar, NormalizedEntry
from .base import InitiativeOrderedSystem, get_property


class ArchmageSystem(InitiativeOrderedSystem):
    """13th Age: health and recoveries, level under attributes.level."""

    system_id = "archmage"

    BAR_NAMES = {
        "attributes.hp": "Health",
        "attributes.recoveries": "Recoveries",
    }

    def secondary_attribute(self, actor, token=None):
        return super().secondary_attribute(actor, token) or "attributes.recoveries"

    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        data = super().translate_resource_bar(actor, bar_attribute)
        data.name = self.BAR_NAMES.get(bar_attribute, data.name)
        return data

    def translate_party_actor(self, actor: Actor) -> NormalizedEntry:
        data = super().translate_party_actor(actor)
        data.level = get_property(actor.system, "attributes.level.value")
        return data
