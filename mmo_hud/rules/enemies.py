"""
Enemy resolution as pure functions.

Enemies are the acting user's targets that are not party members, plus
every scene token flagged as a boss. No disposition filter applies here:
targeting and the boss flag are explicit signals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..state.schema import HostSnapshot, NormalizedEntry, Token
    from ..systems.base import SystemAdapter

from .percentages import apply_enemy_percentages

logger = logging.getLogger(__name__)


def resolve_enemy_tokens(
    targets: Iterable["Token"],
    scene_tokens: Iterable["Token"],
    party_ids: Iterable[str],
) -> list["Token"]:
    """
    Compute the enemy token set.

    Args:
        targets: Tokens the acting user currently targets
        scene_tokens: All tokens of the active scene
        party_ids: Actor ids to leave out of the targets

    Returns:
        Targeted tokens first, then bosses, one per token id
    """
    excluded = set(party_ids)
    enemies: dict[str, "Token"] = {}

    for token in targets:
        if token.actor_id in excluded:
            continue
        enemies.setdefault(token.id, token)

    for token in scene_tokens:
        if token.is_boss:
            enemies.setdefault(token.id, token)

    return list(enemies.values())


def targeted_tokens(snapshot: "HostSnapshot") -> list["Token"]:
    """The acting user's targets, resolved against the active scene."""
    user = snapshot.current_user
    if user is None:
        return []

    tokens = []
    for token_id in user.targets:
        token = snapshot.get_token(token_id)
        if token is None:
            logger.info(f"Ignoring target {token_id}: not on the current scene")
            continue
        tokens.append(token)
    return tokens


def build_enemies(
    snapshot: "HostSnapshot",
    adapter: "SystemAdapter",
    party_ids: Iterable[str] = (),
) -> list["NormalizedEntry"]:
    """Resolve and translate the enemies for one refresh."""
    if snapshot.scene is None:
        return []

    tokens = resolve_enemy_tokens(targeted_tokens(snapshot), snapshot.scene.tokens, party_ids)
    return [
        apply_enemy_percentages(adapter.translate_enemy_token(t, snapshot.token_actor(t)))
        for t in tokens
    ]
