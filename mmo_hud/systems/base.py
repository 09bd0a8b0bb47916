"""
Game-system adapter abstraction.

Defines the interface every game-system adapter implements, plus the
generic default. Actor data differs per game system (attribute names,
resource paths, level fields); adapters translate it into the uniform
display schema.

System variants subclass GenericSystem, call the parent implementation and
patch only the fields they customize.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..rules.initiative import order_by_turns
from ..state.schema import (
    Actor,
    ActiveEffect,
    Bar,
    Combat,
    Effect,
    NormalizedEntry,
    Token,
)

logger = logging.getLogger(__name__)


def get_property(data: dict[str, Any], path: str) -> Any:
    """
    Walk a dotted path through nested dicts.

    Returns None when any segment is missing.
    """
    node: Any = data
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def to_number(value: Any, default: int | float | None = 0) -> int | float | None:
    """Coerce host values (numbers, numeric strings, None) to a number."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return default
        return int(number) if number.is_integer() else number
    return default


class SystemAdapter(ABC):
    """
    Abstract base class for game-system adapters.

    All adapters must implement:
    - translate_resource_bar(): one attribute path to a Bar
    - translate_party_actor(): an Actor to a party entry
    - translate_enemy_token(): a Token to an enemy entry
    - set_initiatives(): order party entries by combat turn order
    """

    system_id: str = ""

    @abstractmethod
    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        """Resolve an attribute path on the actor into a Bar."""
        pass

    @abstractmethod
    def translate_party_actor(self, actor: Actor) -> NormalizedEntry:
        """Translate a party member."""
        pass

    @abstractmethod
    def translate_enemy_token(self, token: Token, actor: Actor | None) -> NormalizedEntry:
        """Translate an enemy token; actor is the token's resolved actor."""
        pass

    @abstractmethod
    def set_initiatives(
        self, entries: list[NormalizedEntry], combat: Combat | None
    ) -> list[NormalizedEntry]:
        """Annotate and reorder party entries by turn order."""
        pass


class GenericSystem(SystemAdapter):
    """
    Default adapter for systems without a dedicated one.

    Reads the token's configured resource bars (bar1 as primary, bar2 as
    secondary), falling back to attributes.hp for the primary bar.
    """

    system_id = "generic"

    DEFAULT_PRIMARY = "attributes.hp"
    PRIMARY_THEME = "rpg-t-hp"
    SECONDARY_THEME = "rpg-t-mp"
    HEALTH_KEYS = frozenset({"hp", "health", "wounds"})

    # -------------------------------------------------------------------------
    # Attribute selection
    # -------------------------------------------------------------------------

    def primary_attribute(self, actor: Actor | None, token: Token | None = None) -> str:
        if token is not None and token.bar1.attribute:
            return token.bar1.attribute
        if actor is not None and actor.prototype_token.bar1.attribute:
            return actor.prototype_token.bar1.attribute
        return self.DEFAULT_PRIMARY

    def secondary_attribute(self, actor: Actor | None, token: Token | None = None) -> str | None:
        if token is not None and token.bar2.attribute:
            return token.bar2.attribute
        if actor is not None and actor.prototype_token.bar2.attribute:
            return actor.prototype_token.bar2.attribute
        return None

    # -------------------------------------------------------------------------
    # Translation
    # -------------------------------------------------------------------------

    def bar_name(self, bar_attribute: str) -> str:
        return bar_attribute.split(".")[-1].capitalize()

    def bar_theme(self, bar_attribute: str) -> str:
        if bar_attribute.split(".")[-1].lower() in self.HEALTH_KEYS:
            return self.PRIMARY_THEME
        return self.SECONDARY_THEME

    def translate_resource_bar(self, actor: Actor | None, bar_attribute: str) -> Bar:
        bar = Bar(
            name=self.bar_name(bar_attribute),
            theme=self.bar_theme(bar_attribute),
        )
        node = get_property(actor.system, bar_attribute) if actor is not None else None

        if isinstance(node, dict):
            bar.value = to_number(node.get("value"))
            bar.max = to_number(node.get("max"))
            bar.temp = to_number(node.get("temp"), default=None)
        elif to_number(node, default=None) is not None:
            # Value-only attribute: the bar is always full
            bar.value = bar.max = to_number(node)
        else:
            logger.debug(
                f"Attribute {bar_attribute} not found on "
                f"{actor.name if actor else 'missing actor'}, using an empty bar"
            )
        return bar

    def translate_effect(self, effect: ActiveEffect) -> Effect | None:
        """Translate one active effect. Returns None to hide it."""
        if effect.disabled:
            return None
        data = Effect(name=effect.name, icon=effect.icon)
        if effect.type == "buff":
            data.is_buff = True
        elif effect.type == "debuff":
            data.is_debuff = True
        return data

    def translate_effects(self, actor: Actor | None) -> list[Effect]:
        if actor is None:
            return []
        effects = (self.translate_effect(e) for e in actor.effects)
        return [e for e in effects if e is not None]

    def translate_party_actor(self, actor: Actor) -> NormalizedEntry:
        data = NormalizedEntry(
            id=actor.id,
            name=actor.name,
            image=actor.img,
            primary=self.translate_resource_bar(actor, self.primary_attribute(actor)),
            effects=self.translate_effects(actor),
        )
        secondary = self.secondary_attribute(actor)
        if secondary:
            data.secondary = self.translate_resource_bar(actor, secondary)
        return data

    def translate_enemy_token(self, token: Token, actor: Actor | None) -> NormalizedEntry:
        return NormalizedEntry(
            id=token.id,
            name=token.name or (actor.name if actor else ""),
            image=token.texture or (actor.img if actor else ""),
            primary=self.translate_resource_bar(actor, self.primary_attribute(actor, token)),
            effects=self.translate_effects(actor),
        )

    def set_initiatives(
        self, entries: list[NormalizedEntry], combat: Combat | None
    ) -> list[NormalizedEntry]:
        return entries


class InitiativeOrderedSystem(GenericSystem):
    """Generic adapter that also sorts the party by combat turn order."""

    def set_initiatives(
        self, entries: list[NormalizedEntry], combat: Combat | None
    ) -> list[NormalizedEntry]:
        if combat is None:
            return entries
        return order_by_turns(entries, combat)
