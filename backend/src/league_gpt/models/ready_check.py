"""Matchmaking ready-check models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ReadyCheckEvent(str, Enum):
    """Outcome of observing one ready-check snapshot."""

    STARTED = "started"  # Accept delay started
    ALREADY_ACCEPTED = "already_accepted"  # Pending accept cancelled, player accepted
    CANCELLED = "cancelled"  # Pending accept cancelled, check over or gone


@dataclass(frozen=True)
class ReadyCheckState:
    """One observed /lol-matchmaking/v1/ready-check payload."""

    state: str = "Invalid"  # "InProgress", "EveryoneReady", "StrangerNotReady", ...
    player_response: str = "None"  # "None", "Accepted", "Declined"

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["ReadyCheckState"]:
        if not isinstance(raw, dict):
            return None
        state = raw.get("state")
        response = raw.get("playerResponse")
        return cls(
            state=state if isinstance(state, str) else "Invalid",
            player_response=response if isinstance(response, str) else "None",
        )

    @property
    def is_in_progress(self) -> bool:
        return self.state == "InProgress"

    @property
    def is_unanswered(self) -> bool:
        return self.player_response == "None"

    @property
    def is_accepted(self) -> bool:
        return self.player_response == "Accepted"
