"""Data models for the champion select assistant."""

from league_gpt.models.champ_select import (
    BanRef,
    ChampSelectAction,
    ChampionRef,
    Empty,
    Hovered,
    Locked,
    NormalizedView,
    PickState,
    RosterEntry,
    SessionLifecycleState,
    Side,
    TriggerFingerprint,
)
from league_gpt.models.ready_check import ReadyCheckEvent, ReadyCheckState

__all__ = [
    "BanRef",
    "ChampSelectAction",
    "ChampionRef",
    "Empty",
    "Hovered",
    "Locked",
    "NormalizedView",
    "PickState",
    "RosterEntry",
    "SessionLifecycleState",
    "Side",
    "TriggerFingerprint",
    "ReadyCheckEvent",
    "ReadyCheckState",
]
