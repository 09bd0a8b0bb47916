"""
Game-system adapters for MMO HUD.

The adapter is chosen once at startup from the host's system id. Unknown
systems fall back to the generic adapter.
"""

import logging

from .base import (
    SystemAdapter,
    GenericSystem,
    InitiativeOrderedSystem,
    get_property,
    to_number,
)
from .archmage import ArchmageSystem
from .dnd5e import DnD5eSystem
from .pf2e import PF2eSystem
from .swade import SWADESystem
from .fabula import FabulaSystem

__all__ = [
    "SystemAdapter",
    "GenericSystem",
    "InitiativeOrderedSystem",
    "ArchmageSystem",
    "DnD5eSystem",
    "PF2eSystem",
    "SWADESystem",
    "FabulaSystem",
    "SYSTEM_ADAPTERS",
    "create_system_adapter",
    "get_property",
    "to_number",
]

logger = logging.getLogger(__name__)


SYSTEM_ADAPTERS: dict[str, type[SystemAdapter]] = {
    cls.system_id: cls
    for cls in (ArchmageSystem, DnD5eSystem, PF2eSystem, SWADESystem, FabulaSystem)
}


def create_system_adapter(system_id: str) -> SystemAdapter:
    """
    Create the adapter for a game system.

    Args:
        system_id: The host's game system identifier (e.g. "dnd5e")

    Returns:
        The matching adapter, or GenericSystem if none matches.
    """
    adapter_cls = SYSTEM_ADAPTERS.get(system_id)
    if adapter_cls is None:
        logger.info(
            f"MMO HUD | No specific system converter found for {system_id}, using the Generic one."
        )
        return GenericSystem()
    return adapter_cls()
