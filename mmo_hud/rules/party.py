"""
Party resolution as pure functions.

The party is every character assigned to a user (only logged-in users when
party_setup is "loggedin"), plus every friendly combatant while a combat is
active. Inputs are explicit snapshots, never host globals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ..state.schema import Disposition
from .percentages import apply_party_percentages

if TYPE_CHECKING:
    from ..state.schema import Actor, Combat, HostSnapshot, NormalizedEntry, User
    from ..systems.base import SystemAdapter

logger = logging.getLogger(__name__)


# Upper bounds, checked in order
PARTY_SIZES: list[tuple[int, str]] = [
    (1, "Solo"),
    (2, "Duo"),
    (4, "Light Party"),
    (8, "Full Party"),
]
ALLIANCE = "Alliance"


def get_party_size(size: int) -> str:
    """Label for a party of the given size."""
    for limit, label in PARTY_SIZES:
        if size <= limit:
            return label
    return ALLIANCE


def is_friendly(actor: "Actor") -> bool:
    """Friendly by its placed token if it has one, else by its prototype token."""
    return actor.disposition == Disposition.FRIENDLY


def resolve_party_actors(
    users: list["User"],
    get_actor: Callable[[str | None], "Actor | None"],
    combat: "Combat | None" = None,
    party_setup: str = "loggedin",
    combatant_actor: Callable[..., "Actor | None"] | None = None,
) -> list["Actor"]:
    """
    Compute the party member set.

    Args:
        users: All host users
        get_actor: Actor lookup by id
        combat: The active combat, if any
        party_setup: "loggedin" restricts characters to active users
        combatant_actor: Resolves a combatant to its actor; defaults to
            looking up the combatant's actor_id

    Returns:
        Actors in first-seen order, one per actor id
    """
    if party_setup == "loggedin":
        users = [u for u in users if u.active]

    candidates: list["Actor"] = []
    for user in users:
        if user.character is None:
            continue
        actor = get_actor(user.character)
        if actor is None:
            logger.debug(f"User {user.name} has a character ({user.character}) that is not loaded")
            continue
        candidates.append(actor)

    if combat is not None:
        resolve = combatant_actor or (lambda c: get_actor(c.actor_id))
        for combatant in combat.combatants:
            actor = resolve(combatant)
            if actor is not None and is_friendly(actor):
                candidates.append(actor)

    party: dict[str, "Actor"] = {}
    for actor in candidates:
        party.setdefault(actor.id, actor)
    return list(party.values())


def set_show_effects(entries: list["NormalizedEntry"]) -> list["NormalizedEntry"]:
    """Show the effects row on every entry if any entry has an effect."""
    show = any(e.effects for e in entries)
    for entry in entries:
        entry.show_effects = show
    return entries


def build_party(
    snapshot: "HostSnapshot",
    adapter: "SystemAdapter",
    party_setup: str = "loggedin",
) -> list["NormalizedEntry"]:
    """
    Resolve and translate the party for one refresh.

    Percentages are applied here; the size label is left to the caller.
    """
    actors = resolve_party_actors(
        snapshot.users,
        snapshot.get_actor,
        combat=snapshot.combat,
        party_setup=party_setup,
        combatant_actor=snapshot.combatant_actor,
    )
    entries = [apply_party_percentages(adapter.translate_party_actor(a)) for a in actors]

    if snapshot.combat is not None:
        entries = adapter.set_initiatives(entries, snapshot.combat)

    return set_show_effects(entries)
