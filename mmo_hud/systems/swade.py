"""Savage Worlds Adventure Edition adapter."""

from ..state.schema import Actor, Bar
from .base import InitiativeOrderedSystem


class SWADESystem(InitiativeOrderedSystem):
    """
    SWADE: wounds and fatigue instead of hit points.

    Both count damage taken, so the bars fill as a character gets worse.
    There is no level.
    """

    system_id = "swade"

    DEFAULT_PRIMARY = "wounds"

    BAR_NAMES = {
        "wounds": "Wounds",
        "fatigue": "Fatigue",
    }

    def secondary_attribute(self, actor, token=None):
        return super().secondary_attribute(actor, token) or "fatigue"

    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        data = super().translate_resource_bar(actor, bar_attribute)
        data.name = self.BAR_NAMES.get(bar_attribute, data.name)
        return data
