"""
Pydantic models for MMO HUD.

Two families of models live here:
- Host snapshot models (Actor, Token, User, Combat, Scene, HostSnapshot),
  read-only copies of the tabletop host's documents taken once per refresh.
- Display models (Bar, Effect, NormalizedEntry, HudView), the uniform shape
  the rendering layer consumes. These are rebuilt on every refresh.
"""

from enum import IntEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


MODULE_ID = "mmo-hud"


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class Disposition(IntEnum):
    """Token disposition as the host encodes it."""
    HOSTILE = -1
    NEUTRAL = 0
    FRIENDLY = 1

    @classmethod
    def parse(cls, value: Any) -> "Disposition":
        """Accept the host integer or the lowercase name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown disposition: {value!r}")
        return cls(int(value))


DispositionValue = Annotated[Disposition, BeforeValidator(Disposition.parse)]


# -----------------------------------------------------------------------------
# Host Snapshot Models
# -----------------------------------------------------------------------------

class _HostModel(BaseModel):
    """Base for host documents. Accepts both snake_case and camelCase keys."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class ActiveEffect(_HostModel):
    """An effect applied to an actor (condition, spell, blessing...)."""
    id: str = ""
    name: str
    icon: str = ""
    disabled: bool = False
    type: str | None = None  # buff, debuff, condition, effect... system dependent


class BarAttribute(_HostModel):
    """A token resource bar, pointing into the actor's attribute tree."""
    attribute: str | None = None


class PrototypeToken(_HostModel):
    """Default token settings stored on the actor."""
    name: str = ""
    disposition: DispositionValue = Disposition.NEUTRAL
    texture: str = ""
    bar1: BarAttribute = Field(default_factory=BarAttribute)
    bar2: BarAttribute = Field(default_factory=BarAttribute)


class PlacedToken(_HostModel):
    """The placed token an instance (unlinked) actor is bound to."""
    id: str
    disposition: DispositionValue = Disposition.NEUTRAL


class Actor(_HostModel):
    """
    A character or creature document.

    `system` is the game-system specific attribute tree; its layout differs
    per system and is only interpreted by the system adapters.
    """
    id: str
    name: str
    img: str = ""
    type: str = "character"
    system: dict[str, Any] = Field(default_factory=dict)
    token: PlacedToken | None = None
    prototype_token: PrototypeToken = Field(default_factory=PrototypeToken)
    effects: list[ActiveEffect] = Field(default_factory=list)

    @property
    def disposition(self) -> Disposition:
        """Placed token disposition if bound to one, else the prototype's."""
        if self.token is not None:
            return self.token.disposition
        return self.prototype_token.disposition


class Token(_HostModel):
    """A token placed on a scene."""
    id: str
    name: str = ""
    actor_id: str | None = None
    actor: Actor | None = None  # Synthetic actor data for unlinked tokens
    disposition: DispositionValue = Disposition.NEUTRAL
    texture: str = ""
    bar1: BarAttribute = Field(default_factory=BarAttribute)
    bar2: BarAttribute = Field(default_factory=BarAttribute)
    flags: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def get_flag(self, scope: str, key: str, default: Any = None) -> Any:
        """Read a module-scoped flag."""
        return self.flags.get(scope, {}).get(key, default)

    @property
    def is_boss(self) -> bool:
        return self.get_flag(MODULE_ID, "boss") is True


class User(_HostModel):
    """A connected (or known) host user."""
    id: str
    name: str = ""
    active: bool = False
    is_gm: bool = False
    character: str | None = None  # Actor id of the assigned character
    targets: list[str] = Field(default_factory=list)  # Token ids, in targeting order


class Combatant(_HostModel):
    """One participant of a combat encounter."""
    id: str
    actor_id: str | None = None
    token_id: str | None = None
    initiative: float | None = None


class Combat(_HostModel):
    """An active combat encounter."""
    id: str
    round: int = 0
    turn: int | None = 0
    combatants: list[Combatant] = Field(default_factory=list)

    def turns(self) -> list[Combatant]:
        """
        Combatants in turn order.

        Highest initiative first; combatants that have not rolled go last.
        Ties keep their listed order.
        """
        rolled = [c for c in self.combatants if c.initiative is not None]
        unrolled = [c for c in self.combatants if c.initiative is None]
        rolled.sort(key=lambda c: -c.initiative)
        return rolled + unrolled

    @property
    def current_combatant(self) -> Combatant | None:
        order = self.turns()
        if self.turn is None or not 0 <= self.turn < len(order):
            return None
        return order[self.turn]


class Scene(_HostModel):
    """The currently viewed scene."""
    id: str
    name: str = ""
    tokens: list[Token] = Field(default_factory=list)


class HostSnapshot(_HostModel):
    """
    Everything one refresh needs, read from the host at a single moment.

    Resolution functions take this (or pieces of it) as explicit input
    rather than reaching into host globals.
    """
    system_id: str = "generic"
    user_id: str | None = None  # The acting user
    users: list[User] = Field(default_factory=list)
    actors: list[Actor] = Field(default_factory=list)
    scene: Scene | None = None
    combat: Combat | None = None

    def get_actor(self, actor_id: str | None) -> Actor | None:
        if actor_id is None:
            return None
        return next((a for a in self.actors if a.id == actor_id), None)

    def get_token(self, token_id: str | None) -> Token | None:
        if token_id is None or self.scene is None:
            return None
        return next((t for t in self.scene.tokens if t.id == token_id), None)

    @property
    def current_user(self) -> User | None:
        for user in self.users:
            if user.id == self.user_id:
                return user
        return None

    def token_actor(self, token: Token) -> Actor | None:
        """
        The actor a token represents: its synthetic actor, else the world actor.

        A synthetic actor is bound to the token it came from, so its
        disposition is the placed token's.
        """
        if token.actor is None:
            return self.get_actor(token.actor_id)
        if token.actor.token is not None:
            return token.actor
        placed = PlacedToken(id=token.id, disposition=token.disposition)
        return token.actor.model_copy(update={"token": placed})

    def combatant_actor(self, combatant: Combatant) -> Actor | None:
        """The actor behind a combatant, preferring the placed token's instance."""
        token = self.get_token(combatant.token_id)
        if token is not None and token.actor is not None:
            return self.token_actor(token)
        return self.get_actor(combatant.actor_id)

    def active_tokens_for(self, actor_id: str) -> list[Token]:
        """Tokens on the current scene that represent the given actor."""
        if self.scene is None:
            return []
        return [t for t in self.scene.tokens if t.actor_id == actor_id]


# -----------------------------------------------------------------------------
# Display Models
# -----------------------------------------------------------------------------

class _DisplayModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class Effect(_DisplayModel):
    """An effect icon as shown under a portrait."""
    name: str
    icon: str = ""
    is_buff: bool | None = None
    is_debuff: bool | None = None


class Bar(_DisplayModel):
    """A normalized resource gauge."""
    name: str
    value: int | float = 0
    max: int | float = 0
    temp: int | float | None = None
    theme: str | None = None
    percent: int = 0
    bonus_percent: int | None = None


class NormalizedEntry(_DisplayModel):
    """One portrait row: a party member or an enemy."""
    id: str
    name: str
    level: int | float | str | None = None
    image: str = ""
    primary: Bar
    secondary: Bar | None = None
    effects: list[Effect] = Field(default_factory=list)
    show_effects: bool = False
    initiative: float | None = None
    is_current_turn: bool = False


class HudView(_DisplayModel):
    """The complete output of one refresh."""
    party: list[NormalizedEntry] = Field(default_factory=list)
    party_size: str | None = None
    enemies: list[NormalizedEntry] = Field(default_factory=list)
    hud_size: str = "normal"
    box_class: str = "rpg-box"

    def to_template_data(self) -> dict[str, Any]:
        """camelCase dictionary for the template layer."""
        return self.model_dump(by_alias=True, exclude_none=True)
