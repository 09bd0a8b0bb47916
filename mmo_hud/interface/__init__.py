"""HUD controller, user actions and terminal rendering."""

from .hud import MmoHud, PanelAnchor, init_hud, get_hud, reset_hud, party_visible
from .actions import TargetUpdate, target_actor, open_actor_sheet, can_toggle_hud

__all__ = [
    "MmoHud",
    "PanelAnchor",
    "init_hud",
    "get_hud",
    "reset_hud",
    "party_visible",
    "TargetUpdate",
    "target_actor",
    "open_actor_sheet",
    "can_toggle_hud",
]
