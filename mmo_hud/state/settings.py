"""
HUD settings and their persistence.

Stores settings like show mode, party setup and panel position in a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class HudSettingsError(ValueError):
    """Raised when a settings update carries an invalid value."""


class Position(BaseModel):
    """Saved panel position, in pixels."""
    left: int | None = None
    top: int | None = None
    width: int | None = None
    height: int | None = None
    scale: float | None = None


class HudSettings(BaseModel):
    """User-facing HUD configuration."""
    show_mode: str = "always"  # always, combat, anything else hides the party
    party_setup: str = "loggedin"  # loggedin, anything else uses every user
    size: str = "normal"
    transparent_version: bool = False
    pop_out: bool = False
    position: Position = Field(default_factory=Position)

    @property
    def box_class(self) -> str:
        return "rpg-title-box" if self.transparent_version else "rpg-box"


SETTINGS_FILENAME = ".mmo_hud_settings.json"


def get_settings_path(settings_dir: Path | str = ".") -> Path:
    """Get path to settings file."""
    return Path(settings_dir) / SETTINGS_FILENAME


def load_settings(settings_dir: Path | str = ".") -> HudSettings:
    """Load settings from file, or return defaults if not found."""
    path = get_settings_path(settings_dir)

    if not path.exists():
        return HudSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
        # Merge with defaults to handle missing keys
        return HudSettings.model_validate({**HudSettings().model_dump(), **saved})
    except (json.JSONDecodeError, IOError, ValidationError, TypeError) as e:
        logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return HudSettings()


def save_settings(settings: HudSettings, settings_dir: Path | str = ".") -> bool:
    """Save settings to file. Returns True on success."""
    path = get_settings_path(settings_dir)

    # Ensure directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(settings.model_dump_json(indent=2))
        return True
    except IOError as e:
        logger.error(f"Could not save settings to {path}: {e}")
        return False


def update_settings(settings: HudSettings, **changes) -> HudSettings:
    """
    Return a copy of settings with changes applied and validated.

    Raises:
        HudSettingsError: If a key is unknown or a value is invalid.
    """
    unknown = set(changes) - set(HudSettings.model_fields)
    if unknown:
        raise HudSettingsError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    try:
        return HudSettings.model_validate({**settings.model_dump(), **changes})
    except ValidationError as e:
        raise HudSettingsError(str(e)) from e


# -----------------------------------------------------------------------------
# Stores
# -----------------------------------------------------------------------------

@runtime_checkable
class SettingsStore(Protocol):
    """
    Storage interface for HUD settings.

    Implementations:
    - JsonSettingsStore: File-based persistence (production)
    - MemorySettingsStore: In-memory storage (testing)
    """

    def get(self) -> HudSettings:
        """Current settings."""
        ...

    def set(self, settings: HudSettings) -> None:
        """Replace and persist settings."""
        ...


class JsonSettingsStore:
    """Settings kept in a JSON file inside settings_dir."""

    def __init__(self, settings_dir: Path | str = "."):
        self.settings_dir = Path(settings_dir)
        self._settings = load_settings(self.settings_dir)

    def get(self) -> HudSettings:
        return self._settings

    def set(self, settings: HudSettings) -> None:
        self._settings = settings
        save_settings(settings, self.settings_dir)


class MemorySettingsStore:
    """Settings kept in memory. Useful for testing."""

    def __init__(self, settings: HudSettings | None = None):
        self._settings = settings or HudSettings()
        self.writes = 0

    def get(self) -> HudSettings:
        return self._settings

    def set(self, settings: HudSettings) -> None:
        self._settings = settings
        self.writes += 1
