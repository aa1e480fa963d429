"""Shared fixtures: raw champion select payload builders."""

import pytest

LOCAL_SUMMONER_ID = 4242


@pytest.fixture
def anyio_backend():
    """The services are built on asyncio; run anyio-marked tests on asyncio only."""
    return "asyncio"


def _player(cell_id, champion_id=0, intent=0, position="", summoner_id=None, team=100):
    return {
        "cellId": cell_id,
        "championId": champion_id,
        "championPickIntent": intent,
        "assignedPosition": position,
        "summonerId": summoner_id if summoner_id is not None else 1000 + cell_id,
        "team": team,
    }


def _session(
    my_team=(),
    their_team=(),
    my_bans=(),
    their_bans=(),
    phase="BAN_PICK",
    actions=None,
):
    return {
        "myTeam": list(my_team),
        "theirTeam": list(their_team),
        "bans": {"myTeamBans": list(my_bans), "theirTeamBans": list(their_bans), "numBans": 10},
        "timer": {"phase": phase, "adjustedTimeLeftInPhase": 30000, "isInfinite": False},
        "actions": actions if actions is not None else [],
    }


def _action(actor_cell_id, action_type="pick", champion_id=0, completed=False, in_progress=True, action_id=1):
    return {
        "id": action_id,
        "actorCellId": actor_cell_id,
        "championId": champion_id,
        "completed": completed,
        "isInProgress": in_progress,
        "type": action_type,
    }


@pytest.fixture
def make_player():
    """Factory for raw roster entries."""
    return _player


@pytest.fixture
def make_session():
    """Factory for raw champion select sessions."""
    return _session


@pytest.fixture
def make_action():
    """Factory for raw action grid entries."""
    return _action


@pytest.fixture
def local_summoner_id():
    return LOCAL_SUMMONER_ID


@pytest.fixture
def my_turn_session(make_session, make_player, make_action):
    """Local player (cell 2, MIDDLE) has an open pick; one ally and one enemy locked."""
    return make_session(
        my_team=[
            make_player(0, champion_id=266, position="TOP"),
            make_player(2, position="MIDDLE", summoner_id=LOCAL_SUMMONER_ID),
        ],
        their_team=[make_player(5, champion_id=64, team=200)],
        my_bans=[1],
        phase="BAN_PICK",
        actions=[[make_action(2, "pick", action_id=7)]],
    )
