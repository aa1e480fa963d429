"""Champion select session normalization.

Turns a raw ``/lol-champ-select/v1/session`` payload into a NormalizedView.
Raw payloads are loosely typed: any field may be missing or of the wrong
type, and the local player is only identifiable through the summoner id
embedded in the local team roster. Malformed fields degrade to defaults;
normalization never raises for bad input.
"""

from typing import Any, Optional

from league_gpt.models.champ_select import (
    BanRef,
    ChampionRef,
    Hovered,
    Locked,
    NormalizedView,
    RosterEntry,
    Side,
    as_int,
)
from league_gpt.utils.champion_directory import ChampionDirectory

BAN_PICK_PHASE = "BAN_PICK"
FINALIZATION_PHASE = "FINALIZATION"
UNKNOWN_PHASE = "UNKNOWN"


def _list_of(value: Any) -> list:
    return value if isinstance(value, list) else []


def _dict_of(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def is_ban_phase(phase: str) -> bool:
    return phase == BAN_PICK_PHASE or "BAN" in phase


def is_pick_phase(phase: str) -> bool:
    # Not exclusive with is_ban_phase: "BAN_PICK" satisfies both.
    return "PICK" in phase or phase == FINALIZATION_PHASE


class SessionNormalizer:
    """Builds normalized views of champion select sessions."""

    def __init__(self, directory: Optional[ChampionDirectory] = None):
        self.directory = directory or ChampionDirectory()

    def normalize(
        self,
        raw: Optional[dict],
        local_summoner_id: Optional[int],
    ) -> Optional[NormalizedView]:
        """Normalize one raw session.

        Args:
            raw: Raw champion select session, or None when no session exists
            local_summoner_id: Summoner id of the local player

        Returns:
            NormalizedView, or None if there is no session
        """
        if raw is None:
            return None
        raw = _dict_of(raw)

        my_team = [RosterEntry.from_raw(p) for p in _list_of(raw.get("myTeam"))]
        their_team = [RosterEntry.from_raw(p) for p in _list_of(raw.get("theirTeam"))]

        local_cell_id = None
        local_role = None
        local_side_code = None
        if local_summoner_id is not None:
            for entry in my_team:
                if entry.summoner_id == local_summoner_id:
                    local_cell_id = entry.cell_id
                    local_role = entry.assigned_position
                    local_side_code = entry.team_side_code

        allies = tuple(self._team_refs(my_team, local_cell_id))
        enemies = tuple(self._team_refs(their_team, None))
        bans = tuple(self._ban_refs(_dict_of(raw.get("bans"))))

        phase = _dict_of(raw.get("timer")).get("phase")
        if not isinstance(phase, str) or not phase:
            phase = UNKNOWN_PHASE

        local_champion = next(
            (c for c in allies if c.is_local_player and c.is_locked),
            None,
        )

        return NormalizedView(
            allies=allies,
            enemies=enemies,
            bans=bans,
            phase=phase,
            is_ban_phase=is_ban_phase(phase),
            is_pick_phase=is_pick_phase(phase),
            local_role=local_role,
            local_side=Side.from_team_code(local_side_code),
            local_champion=local_champion,
            local_cell_id=local_cell_id,
        )

    def _team_refs(self, team: list[RosterEntry], local_cell_id: Optional[int]):
        for entry in team:
            state = entry.pick_state
            if not isinstance(state, (Locked, Hovered)):
                continue
            locked = isinstance(state, Locked)
            yield ChampionRef(
                champion_id=state.champion_id,
                display_name=self.directory.resolve_name(state.champion_id),
                position=entry.assigned_position or "Unknown",
                is_local_player=local_cell_id is not None and entry.cell_id == local_cell_id,
                is_locked=locked,
                is_hovered=not locked,
            )

    def _ban_refs(self, bans: dict):
        ban_ids = _list_of(bans.get("myTeamBans")) + _list_of(bans.get("theirTeamBans"))
        for champion_id in ban_ids:
            champion_id = as_int(champion_id)
            if champion_id is None or champion_id <= 0:
                continue
            yield BanRef(
                champion_id=champion_id,
                display_name=self.directory.resolve_name(champion_id),
            )
