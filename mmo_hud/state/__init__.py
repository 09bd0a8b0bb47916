"""State models, settings and events for MMO HUD."""

from .schema import (
    MODULE_ID,
    Disposition,
    ActiveEffect,
    BarAttribute,
    PrototypeToken,
    PlacedToken,
    Actor,
    Token,
    User,
    Combatant,
    Combat,
    Scene,
    HostSnapshot,
    Effect,
    Bar,
    NormalizedEntry,
    HudView,
)
from .settings import (
    HudSettings,
    HudSettingsError,
    Position,
    SettingsStore,
    JsonSettingsStore,
    MemorySettingsStore,
    load_settings,
    save_settings,
    update_settings,
)
from .event_bus import (
    EventBus,
    HudEventType,
    HudEvent,
    get_event_bus,
    reset_event_bus,
)

__all__ = [
    # Schema
    "MODULE_ID",
    "Disposition",
    "ActiveEffect",
    "BarAttribute",
    "PrototypeToken",
    "PlacedToken",
    "Actor",
    "Token",
    "User",
    "Combatant",
    "Combat",
    "Scene",
    "HostSnapshot",
    "Effect",
    "Bar",
    "NormalizedEntry",
    "HudView",
    # Settings
    "HudSettings",
    "HudSettingsError",
    "Position",
    "SettingsStore",
    "JsonSettingsStore",
    "MemorySettingsStore",
    "load_settings",
    "save_settings",
    "update_settings",
    # Event Bus
    "EventBus",
    "HudEventType",
    "HudEvent",
    "get_event_bus",
    "reset_event_bus",
]
