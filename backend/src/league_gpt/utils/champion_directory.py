"""Champion id to display name lookup."""
from typing import Mapping, Optional

from league_gpt.utils.champion_data import CHAMPION_NAMES


class ChampionDirectory:
    """Resolve champion ids to display names.

    Resolution is total: ids missing from the table resolve to a synthesized
    ``Unknown Champion (<id>)`` name instead of raising.
    """

    def __init__(self, names: Optional[Mapping[int, str]] = None):
        self._names: dict[int, str] = dict(CHAMPION_NAMES if names is None else names)

    def resolve_name(self, champion_id: int) -> str:
        """Get the display name for a champion id."""
        name = self._names.get(champion_id)
        if name:
            return name
        return f"Unknown Champion ({champion_id})"

