"""
The MMO HUD controller.

Owns the adapter chosen at startup, the settings store and the transient
party id list, and turns a HostSnapshot into a HudView on every refresh.

Usage:
    hud = init_hud("dnd5e", JsonSettingsStore("."))
    hud.attach(get_event_bus(), host.snapshot, on_render=draw)
    hud.render(host.snapshot())
"""

import logging
import threading
from typing import Callable, Protocol, runtime_checkable

from ..rules.enemies import build_enemies
from ..rules.party import build_party, get_party_size
from ..state.event_bus import EventBus, HudEvent, HudEventType
from ..state.schema import Combat, HostSnapshot, HudView
from ..state.settings import MemorySettingsStore, Position, SettingsStore
from ..systems import SystemAdapter, create_system_adapter

logger = logging.getLogger(__name__)


SnapshotProvider = Callable[[], HostSnapshot]
RenderCallback = Callable[[HudView], None]


@runtime_checkable
class PanelAnchor(Protocol):
    """The element the party panel is mounted on."""

    def move(self, left: int, top: int) -> None:
        """Place the panel at the given pixel offsets."""
        ...


def party_visible(show_mode: str, combat: Combat | None) -> bool:
    """Whether the party panel runs under the given show mode."""
    return show_mode == "always" or (show_mode == "combat" and combat is not None)


class MmoHud:
    """
    Party and enemy overlay.

    Refreshes are serialized: if one is already running in another thread,
    the new snapshot is queued and the running refresh computes it next.
    Only the latest queued snapshot is kept.
    """

    DEFAULT_LEFT = 130
    DEFAULT_TOP = 90

    def __init__(
        self,
        system_id: str = "generic",
        settings_store: SettingsStore | None = None,
        anchor: PanelAnchor | None = None,
        on_render: RenderCallback | None = None,
    ):
        self.system_id = system_id
        self.adapter: SystemAdapter = create_system_adapter(system_id)
        self.settings_store = settings_store or MemorySettingsStore()
        self.anchor = anchor
        self.on_render = on_render

        self.party_ids: list[str] = []
        self.rendered = False
        self.last_view: HudView | None = None

        self._refresh_lock = threading.Lock()
        self._pending_lock = threading.Lock()
        self._pending: HostSnapshot | None = None
        self._subscriptions: list[tuple[EventBus, HudEventType, Callable[[HudEvent], None]]] = []

    @property
    def settings(self):
        return self.settings_store.get()

    # -------------------------------------------------------------------------
    # Data
    # -------------------------------------------------------------------------

    def get_data(self, snapshot: HostSnapshot) -> HudView:
        """Compute one refresh from a snapshot."""
        settings = self.settings
        view = HudView(hud_size=settings.size, box_class=settings.box_class)

        party_ids: list[str] = []
        if party_visible(settings.show_mode, snapshot.combat):
            view.party = build_party(snapshot, self.adapter, settings.party_setup)
            if view.party:
                view.party_size = get_party_size(len(view.party))
            party_ids = [p.id for p in view.party]
        self.party_ids = party_ids

        view.enemies = build_enemies(snapshot, self.adapter, party_ids)
        return view

    def refresh(self, snapshot: HostSnapshot) -> HudView | None:
        """
        Recompute and hand the view to on_render.

        Returns the computed view, or None if the snapshot was queued for a
        refresh already running in another thread.
        """
        with self._pending_lock:
            self._pending = snapshot

        view = None
        while True:
            if not self._refresh_lock.acquire(blocking=False):
                return view
            try:
                while True:
                    with self._pending_lock:
                        current, self._pending = self._pending, None
                    if current is None:
                        break
                    view = self.get_data(current)
                    self.last_view = view
                    if self.on_render is not None:
                        self.on_render(view)
            finally:
                self._refresh_lock.release()

            # A snapshot may have been queued between draining and releasing
            with self._pending_lock:
                if self._pending is None:
                    return view

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def render(self, snapshot: HostSnapshot) -> HudView | None:
        self.rendered = True
        return self.refresh(snapshot)

    def close(self) -> None:
        self.rendered = False

    def toggle(self, snapshot: HostSnapshot) -> bool:
        """Open the panel if closed, close it if open. Returns the new state."""
        if self.rendered:
            self.close()
        else:
            self.render(snapshot)
        return self.rendered

    def attach(
        self,
        bus: EventBus,
        snapshot_provider: SnapshotProvider,
        on_render: RenderCallback | None = None,
    ) -> None:
        """Refresh on every host state change while the panel is shown."""
        if on_render is not None:
            self.on_render = on_render

        def handle(event: HudEvent) -> None:
            if not self.rendered:
                return
            logger.debug(f"Refreshing on {event}")
            self.refresh(snapshot_provider())

        for event_type in HudEventType:
            bus.on(event_type, handle)
            self._subscriptions.append((bus, event_type, handle))

    def detach(self) -> None:
        for bus, event_type, handle in self._subscriptions:
            bus.off(event_type, handle)
        self._subscriptions.clear()

    # -------------------------------------------------------------------------
    # Position
    # -------------------------------------------------------------------------

    def set_position(self, position: Position | None = None) -> Position:
        """
        Place the party panel and store its location.

        Without explicit left/top the saved position is used. When the panel
        is not popped out, missing coordinates fall back to the saved ones,
        then to 130/90.
        """
        settings = self.settings
        saved = settings.position

        if position is None or (not position.left and not position.top):
            position = saved.model_copy()
        else:
            position = position.model_copy()

        if not settings.pop_out:
            position.left = position.left or saved.left or self.DEFAULT_LEFT
            position.top = position.top or saved.top or self.DEFAULT_TOP

        if self.anchor is None:
            logger.error("Child element mmo-hud-party not found.")
        elif position.left is not None and position.top is not None:
            self.anchor.move(position.left, position.top)

        self.settings_store.set(settings.model_copy(update={"position": position}))
        return position


# -----------------------------------------------------------------------------
# Process-wide instance
# -----------------------------------------------------------------------------

_hud: MmoHud | None = None


def init_hud(
    system_id: str = "generic",
    settings_store: SettingsStore | None = None,
    anchor: PanelAnchor | None = None,
    snapshot: HostSnapshot | None = None,
) -> MmoHud:
    """
    Create the HUD once and place it.

    Later calls return the existing instance unchanged.
    """
    global _hud
    if _hud is None:
        _hud = MmoHud(system_id, settings_store, anchor)
        _hud.set_position()
        if snapshot is not None:
            _hud.render(snapshot)
        logger.info("MMO HUD | Initialized")
    return _hud


def get_hud() -> MmoHud | None:
    """The initialized HUD, if any."""
    return _hud


def reset_hud() -> None:
    """Drop the HUD instance. Useful for testing."""
    global _hud
    if _hud is not None:
        _hud.detach()
    _hud = None
