"""
HUD rules as pure functions.

Separates resolution and derived-stat logic from data models for easier testing.
"""

from .percentages import (
    round_percent,
    apply_party_primary,
    apply_enemy_primary,
    apply_secondary,
    apply_party_percentages,
    apply_enemy_percentages,
)
from .initiative import order_by_turns
from .party import (
    get_party_size,
    is_friendly,
    resolve_party_actors,
    set_show_effects,
    build_party,
)
from .enemies import (
    resolve_enemy_tokens,
    targeted_tokens,
    build_enemies,
)

__all__ = [
    # Derived stats
    "round_percent",
    "apply_party_primary",
    "apply_enemy_primary",
    "apply_secondary",
    "apply_party_percentages",
    "apply_enemy_percentages",
    # Initiative
    "order_by_turns",
    # Party
    "get_party_size",
    "is_friendly",
    "resolve_party_actors",
    "set_show_effects",
    "build_party",
    # Enemies
    "resolve_enemy_tokens",
    "targeted_tokens",
    "build_enemies",
]
