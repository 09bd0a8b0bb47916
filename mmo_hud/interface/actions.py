"""
User actions on party portraits.

Clicking a portrait targets the actor's tokens; shift-click toggles them in
the current selection. Double-clicking opens the actor's sheet. These
compute what the host should do; applying it is up to the host glue.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from ..state.schema import Actor, HostSnapshot, User

logger = logging.getLogger(__name__)


@dataclass
class TargetUpdate:
    """New target selection for the acting user."""
    token_ids: list[str] = field(default_factory=list)
    release_others: bool = False


def target_actor(snapshot: HostSnapshot, actor_id: str, additive: bool = False) -> TargetUpdate | None:
    """
    Target an actor's tokens on the current scene.

    Args:
        snapshot: Host state at click time
        actor_id: Actor id carried by the portrait
        additive: True for shift-click (toggle within the current selection)

    Returns:
        The target update, or None if the actor no longer exists
    """
    actor = snapshot.get_actor(actor_id)
    if actor is None:
        logger.warning(f"Cannot target actor {actor_id}: not found")
        return None

    active_ids = [t.id for t in snapshot.active_tokens_for(actor_id)]
    user = snapshot.current_user
    current = list(user.targets) if user is not None else []

    if not additive:
        return TargetUpdate(token_ids=active_ids, release_others=True)

    if active_ids and active_ids[0] in current:
        return TargetUpdate(token_ids=[t for t in current if t != active_ids[0]])

    combined = list(dict.fromkeys(current + active_ids))
    return TargetUpdate(token_ids=combined)


def open_actor_sheet(
    snapshot: HostSnapshot,
    actor_id: str | None,
    opener: Callable[[Actor], None],
) -> bool:
    """
    Open an actor's sheet through the host.

    Returns:
        True if the sheet was requested, False if the actor could not be found
    """
    if not actor_id:
        logger.error("Actor ID not found.")
        return False

    actor = snapshot.get_actor(actor_id)
    if actor is None:
        logger.error(f"Actor with ID {actor_id} not found.")
        return False

    opener(actor)
    logger.debug(f"Character sheet requested for {actor.name}")
    return True


def can_toggle_hud(user: User | None) -> bool:
    """The scene control that toggles the HUD is only offered to GMs."""
    return user is not None and user.is_gm
