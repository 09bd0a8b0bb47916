"""
Event bus for MMO HUD refresh triggers.

Provides decoupled communication between the host integration and the HUD.
The host glue emits an event whenever something the panel shows may have
changed; the HUD subscribes and recomputes.

Usage:
    from .event_bus import get_event_bus, HudEventType

    # Subscribe (typically in MmoHud.attach)
    bus = get_event_bus()
    bus.on(HudEventType.TARGETS_CHANGED, my_handler)

    # Emit (in host glue when the user targets a token)
    bus.emit(HudEventType.TARGETS_CHANGED, user_id="u1", token_id="t3")

    # Handler receives event
    def my_handler(event: HudEvent):
        print(f"Targets changed: {event.data['token_id']}")
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class HudEventType(Enum):
    """Host state changes that require a refresh."""

    # Combat events
    COMBAT_STARTED = "combat.started"
    COMBAT_TURN = "combat.turn"
    COMBAT_ENDED = "combat.ended"

    # User events
    TARGETS_CHANGED = "targets.changed"
    USER_ACTIVITY = "user.activity"

    # Document events
    TOKEN_UPDATED = "token.updated"
    ACTOR_UPDATED = "actor.updated"

    # Configuration
    SETTINGS_CHANGED = "settings.changed"


@dataclass
class HudEvent:
    """
    Event payload for the event bus.

    Attributes:
        type: The event type (from HudEventType enum)
        data: Event-specific payload as dict
    """

    type: HudEventType
    data: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.data}"


# Type alias for event handlers
EventHandler = Callable[[HudEvent], None]


class EventBus:
    """
    Synchronous event bus.

    Listeners are called immediately on emit(), in subscription order.
    """

    def __init__(self):
        self._listeners: dict[HudEventType, list[EventHandler]] = {}

    def on(self, event_type: HudEventType, handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The type of event to listen for
            handler: Callback function that receives HudEvent
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        if handler not in self._listeners[event_type]:
            self._listeners[event_type].append(handler)

    def off(self, event_type: HudEventType, handler: EventHandler) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._listeners and handler in self._listeners[event_type]:
            self._listeners[event_type].remove(handler)

    def emit(self, event_type: HudEventType, **data) -> HudEvent:
        """
        Emit an event to all subscribers.

        Args:
            event_type: The type of event
            **data: Event-specific data

        Returns:
            The emitted HudEvent (for chaining/testing)
        """
        event = HudEvent(type=event_type, data=data)

        for handler in list(self._listeners.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                # One bad listener shouldn't break the others
                logger.exception(f"Error in handler for {event_type.value}")

        return event

    def clear(self) -> None:
        """Clear all listeners. Useful for testing."""
        self._listeners.clear()

    def listener_count(self, event_type: HudEventType) -> int:
        """Get number of listeners for an event type."""
        return len(self._listeners.get(event_type, []))


# Global singleton instance
_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """
    Get the global event bus instance.

    Returns the same instance across all calls (singleton pattern).
    """
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus. Useful for testing."""
    global _event_bus
    _event_bus = None
