"""Champion select roster, action and normalized view models."""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional, Union


def as_int(value: Any) -> Optional[int]:
    """Return value if it is a real integer, else None."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class Side(str, Enum):
    """Map side of the local team."""

    BLUE = "Blue"
    RED = "Red"
    UNKNOWN = "Unknown"

    @classmethod
    def from_team_code(cls, code: Optional[int]) -> "Side":
        """Map the client's team code (100 = blue, 200 = red)."""
        if code == 100:
            return cls.BLUE
        if code == 200:
            return cls.RED
        return cls.UNKNOWN


@dataclass(frozen=True)
class Locked:
    """A committed champion pick."""

    champion_id: int


@dataclass(frozen=True)
class Hovered:
    """A champion highlighted but not committed yet."""

    champion_id: int


@dataclass(frozen=True)
class Empty:
    """No champion locked or hovered."""


PickState = Union[Locked, Hovered, Empty]


@dataclass(frozen=True)
class RosterEntry:
    """One player slot of a champion select team."""

    cell_id: Optional[int]
    champion_id: int = 0
    hovered_champion_id: int = 0  # championPickIntent
    assigned_position: Optional[str] = None
    team_side_code: Optional[int] = None
    summoner_id: Optional[int] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "RosterEntry":
        """Build an entry from a raw roster dict, defaulting missing fields."""
        if not isinstance(raw, dict):
            return cls(cell_id=None)
        position = raw.get("assignedPosition")
        return cls(
            cell_id=as_int(raw.get("cellId")),
            champion_id=as_int(raw.get("championId")) or 0,
            hovered_champion_id=as_int(raw.get("championPickIntent")) or 0,
            assigned_position=position if isinstance(position, str) and position else None,
            team_side_code=as_int(raw.get("team")),
            summoner_id=as_int(raw.get("summonerId")),
        )

    @property
    def pick_state(self) -> PickState:
        """Locked pick wins over a hover; otherwise the slot is empty."""
        if self.champion_id > 0:
            return Locked(self.champion_id)
        if self.hovered_champion_id > 0:
            return Hovered(self.hovered_champion_id)
        return Empty()


@dataclass(frozen=True)
class ChampSelectAction:
    """A single flattened entry of the session's action grid."""

    action_id: Optional[int]
    actor_cell_id: Optional[int]
    action_type: str  # "pick", "ban", "ten_bans_reveal", ...
    champion_id: int = 0
    completed: bool = False
    is_in_progress: bool = False

    @classmethod
    def from_raw(cls, raw: dict) -> "ChampSelectAction":
        action_type = raw.get("type")
        return cls(
            action_id=as_int(raw.get("id")),
            actor_cell_id=as_int(raw.get("actorCellId")),
            action_type=action_type if isinstance(action_type, str) else "",
            champion_id=as_int(raw.get("championId")) or 0,
            completed=raw.get("completed") is True,
            is_in_progress=raw.get("isInProgress") is True,
        )


@dataclass(frozen=True)
class ChampionRef:
    """A champion shown in one of the team rosters."""

    champion_id: int
    display_name: str
    position: str = "Unknown"
    is_local_player: bool = False
    is_locked: bool = True
    is_hovered: bool = False  # Only meaningful when not locked


@dataclass(frozen=True)
class BanRef:
    """A banned champion."""

    champion_id: int
    display_name: str


@dataclass(frozen=True)
class NormalizedView:
    """Structured view of one champion select snapshot."""

    allies: tuple[ChampionRef, ...] = ()
    enemies: tuple[ChampionRef, ...] = ()
    bans: tuple[BanRef, ...] = ()
    phase: str = "UNKNOWN"
    is_ban_phase: bool = False
    is_pick_phase: bool = False
    local_role: Optional[str] = None
    local_side: Side = Side.UNKNOWN
    local_champion: Optional[ChampionRef] = None
    local_cell_id: Optional[int] = None

    @property
    def has_team_data(self) -> bool:
        return bool(self.allies or self.enemies)

    def without_local_hover(self) -> "NormalizedView":
        """Copy of the view without the local player's uncommitted hover."""
        allies = tuple(
            champ for champ in self.allies
            if not (champ.is_local_player and not champ.is_locked)
        )
        return replace(self, allies=allies)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        data = asdict(self)
        data["local_side"] = self.local_side.value
        return data


@dataclass(frozen=True)
class TriggerFingerprint:
    """Canonical encoding of the parts of a view that warrant a new trigger.

    Only champion ids are kept, in roster order, so equal inputs compare
    equal regardless of object identity or display names.
    """

    ally_ids: tuple[int, ...] = ()
    enemy_ids: tuple[int, ...] = ()
    ban_ids: tuple[int, ...] = ()
    phase: str = ""
    is_local_turn: bool = False

    def to_dict(self) -> dict:
        return {
            "ally_ids": list(self.ally_ids),
            "enemy_ids": list(self.enemy_ids),
            "ban_ids": list(self.ban_ids),
            "phase": self.phase,
            "is_local_turn": self.is_local_turn,
        }


@dataclass
class SessionLifecycleState:
    """Mutable state of the champion select pipeline.

    Owned by a single SessionLifecycleController; reset when the session ends.
    """

    in_flight: bool = False
    last_fingerprint: Optional[TriggerFingerprint] = None
    last_view: Optional[NormalizedView] = None
    last_snapshot: Optional[dict] = None
    sequence_counter: int = 0
    session_handle: Optional[str] = None

    @property
    def in_session(self) -> bool:
        return self.session_handle is not None
