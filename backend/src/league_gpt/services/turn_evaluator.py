"""Decides whether the local player currently has an open pick."""

from typing import Any, Iterator, Optional

from league_gpt.models.champ_select import ChampSelectAction

PICK_ACTION = "pick"


def flatten_actions(raw: Optional[dict]) -> list[ChampSelectAction]:
    """Flatten the nested action grid into typed action records.

    Malformed groups or entries are skipped.
    """
    if not isinstance(raw, dict):
        return []
    grid = raw.get("actions")
    if not isinstance(grid, list):
        return []
    return [ChampSelectAction.from_raw(a) for a in _iter_raw_actions(grid)]


def _iter_raw_actions(grid: list) -> Iterator[dict]:
    for group in grid:
        if isinstance(group, dict):
            yield group
        elif isinstance(group, list):
            yield from (a for a in group if isinstance(a, dict))


def is_open_local_pick(action: ChampSelectAction, local_cell_id: int) -> bool:
    """In-progress, uncompleted pick of the local cell with no champion on it yet."""
    return (
        action.actor_cell_id == local_cell_id
        and not action.completed
        and action.is_in_progress
        and action.action_type == PICK_ACTION
        and action.champion_id == 0
    )


def is_local_turn(raw: Any, local_cell_id: Optional[int]) -> bool:
    """Whether the local player has to pick right now."""
    if local_cell_id is None:
        return False
    return any(is_open_local_pick(a, local_cell_id) for a in flatten_actions(raw))
