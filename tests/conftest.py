"""
Pytest fixtures for MMO HUD tests.

Provides snapshot builders, in-memory settings and a clean event bus.
"""

import pytest
from pathlib import Path

# Add project root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from mmo_hud.state import (
    Actor,
    ActiveEffect,
    Combat,
    Combatant,
    Disposition,
    HostSnapshot,
    HudSettings,
    MemorySettingsStore,
    PlacedToken,
    PrototypeToken,
    Scene,
    Token,
    User,
    reset_event_bus,
)
from mmo_hud.interface import reset_hud


def make_actor(
    actor_id: str,
    name: str | None = None,
    hp: tuple = (10, 18),
    temp=None,
    disposition: Disposition = Disposition.FRIENDLY,
    effects: list[ActiveEffect] | None = None,
    **system,
) -> Actor:
    """Actor with attributes.hp set to (value, max) and optional temp."""
    value, maximum = hp
    hp_node = {"value": value, "max": maximum}
    if temp is not None:
        hp_node["temp"] = temp
    tree = {"attributes": {"hp": hp_node}}
    tree.update(system)
    return Actor(
        id=actor_id,
        name=name or actor_id.title(),
        img=f"icons/{actor_id}.webp",
        system=tree,
        prototype_token=PrototypeToken(disposition=disposition),
        effects=effects or [],
    )


def make_token(
    token_id: str,
    actor_id: str | None = None,
    name: str | None = None,
    boss: bool = False,
    disposition: Disposition = Disposition.HOSTILE,
) -> Token:
    flags = {"mmo-hud": {"boss": True}} if boss else {}
    return Token(
        id=token_id,
        name=name or token_id.title(),
        actor_id=actor_id,
        disposition=disposition,
        flags=flags,
    )


@pytest.fixture
def hero():
    return make_actor("hero", "Hero", hp=(10, 18))


@pytest.fixture
def mage():
    return make_actor(
        "mage",
        "Mage",
        hp=(6, 12),
        effects=[ActiveEffect(id="e1", name="Blessed", icon="bless.webp", type="buff")],
    )


@pytest.fixture
def goblin():
    return make_actor("goblin", "Goblin", hp=(5, 10), temp=6, disposition=Disposition.HOSTILE)


@pytest.fixture
def ally():
    """An NPC fighting alongside the party."""
    return make_actor("ally", "Ally", hp=(20, 20))


@pytest.fixture
def users():
    return [
        User(id="gm", name="GM", active=True, is_gm=True),
        User(id="u1", name="Alice", active=True, character="hero"),
        User(id="u2", name="Bob", active=False, character="mage"),
    ]


@pytest.fixture
def scene():
    return Scene(
        id="scene",
        name="Crypt",
        tokens=[
            make_token("t-hero", "hero", disposition=Disposition.FRIENDLY),
            make_token("t-goblin", "goblin"),
            make_token("t-ogre", "goblin", name="Ogre", boss=True),
            make_token("t-ally", "ally", disposition=Disposition.FRIENDLY),
        ],
    )


@pytest.fixture
def snapshot(users, hero, mage, goblin, ally, scene):
    """Peaceful scene: no combat, the GM targets nothing."""
    return HostSnapshot(
        system_id="generic",
        user_id="gm",
        users=users,
        actors=[hero, mage, goblin, ally],
        scene=scene,
    )


@pytest.fixture
def combat():
    return Combat(
        id="combat",
        round=1,
        turn=0,
        combatants=[
            Combatant(id="c1", actor_id="goblin", token_id="t-goblin", initiative=12),
            Combatant(id="c2", actor_id="hero", token_id="t-hero", initiative=8),
            Combatant(id="c3", actor_id="ally", token_id="t-ally", initiative=15),
        ],
    )


@pytest.fixture
def combat_snapshot(snapshot, combat):
    return snapshot.model_copy(update={"combat": combat})


@pytest.fixture
def settings_store():
    return MemorySettingsStore(HudSettings())


@pytest.fixture(autouse=True)
def clean_globals():
    """Fresh event bus and HUD instance for every test."""
    reset_event_bus()
    reset_hud()
    yield
    reset_event_bus()
    reset_hud()
