"""
Initiative sequencing as pure functions.

Party entries are matched to combatants by actor id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..state.schema import Combat, NormalizedEntry


def order_by_turns(entries: list["NormalizedEntry"], combat: "Combat") -> list["NormalizedEntry"]:
    """
    Sort party entries into combat turn order.

    Mutates each entry's initiative and is_current_turn fields.
    Entries without a combatant keep their relative order after those with one.

    Args:
        entries: Party entries, ids are actor ids
        combat: The active combat

    Returns:
        A new list in turn order
    """
    turns = combat.turns()
    current = combat.current_combatant

    # First combatant wins when an actor has several tokens in the fight
    position: dict[str, int] = {}
    initiative: dict[str, float | None] = {}
    current_actor = current.actor_id if current is not None else None
    for index, combatant in enumerate(turns):
        if combatant.actor_id is None or combatant.actor_id in position:
            continue
        position[combatant.actor_id] = index
        initiative[combatant.actor_id] = combatant.initiative

    for entry in entries:
        entry.initiative = initiative.get(entry.id)
        entry.is_current_turn = current_actor is not None and entry.id == current_actor

    ranked = sorted(
        enumerate(entries),
        key=lambda pair: (pair[1].id not in position, position.get(pair[1].id, pair[0]), pair[0]),
    )
    return [entry for _, entry in ranked]
