"""Tests for champion select models."""

import pytest

from league_gpt.models.champ_select import (
    ChampionRef,
    ChampSelectAction,
    Empty,
    Hovered,
    Locked,
    NormalizedView,
    RosterEntry,
    SessionLifecycleState,
    Side,
    as_int,
)


class TestRosterEntry:
    """Tests for RosterEntry parsing and pick state."""

    def test_from_raw(self, make_player):
        entry = RosterEntry.from_raw(make_player(3, champion_id=103, position="MIDDLE", summoner_id=77, team=200))

        assert entry == RosterEntry(
            cell_id=3,
            champion_id=103,
            hovered_champion_id=0,
            assigned_position="MIDDLE",
            team_side_code=200,
            summoner_id=77,
        )

    def test_non_dict_gives_empty_entry(self):
        entry = RosterEntry.from_raw("garbage")

        assert entry.cell_id is None
        assert entry.pick_state == Empty()

    def test_blank_position_is_none(self, make_player):
        assert RosterEntry.from_raw(make_player(0, position="")).assigned_position is None

    @pytest.mark.parametrize(
        "champion_id,intent,expected",
        [
            (103, 0, Locked(103)),
            (103, 64, Locked(103)),
            (0, 64, Hovered(64)),
            (0, 0, Empty()),
            (-1, -5, Empty()),
        ],
    )
    def test_pick_state(self, champion_id, intent, expected):
        entry = RosterEntry(cell_id=0, champion_id=champion_id, hovered_champion_id=intent)

        assert entry.pick_state == expected


class TestChampSelectAction:
    def test_from_raw(self, make_action):
        action = ChampSelectAction.from_raw(make_action(4, "ban", champion_id=17, action_id=12))

        assert action.action_id == 12
        assert action.actor_cell_id == 4
        assert action.action_type == "ban"
        assert action.champion_id == 17
        assert action.completed is False
        assert action.is_in_progress is True

    def test_truthy_non_bool_flags_are_false(self):
        action = ChampSelectAction.from_raw({"completed": 1, "isInProgress": "yes", "type": None})

        assert action.completed is False
        assert action.is_in_progress is False
        assert action.action_type == ""
        assert action.actor_cell_id is None


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [(5, 5), (0, 0), (True, None), ("5", None), (5.0, None), (None, None)])
    def test_as_int(self, value, expected):
        assert as_int(value) == expected

    @pytest.mark.parametrize("code,side", [(100, Side.BLUE), (200, Side.RED), (300, Side.UNKNOWN), (None, Side.UNKNOWN)])
    def test_side_from_team_code(self, code, side):
        assert Side.from_team_code(code) == side


class TestViewAndState:
    def test_view_to_dict(self):
        view = NormalizedView(
            allies=(ChampionRef(103, "Ahri", "MIDDLE", is_local_player=True),),
            phase="BAN_PICK",
            local_side=Side.RED,
        )

        data = view.to_dict()

        assert data["local_side"] == "Red"
        assert data["allies"][0]["display_name"] == "Ahri"
        assert data["allies"][0]["is_local_player"] is True
        assert data["phase"] == "BAN_PICK"

    def test_empty_view_has_no_team_data(self):
        assert NormalizedView().has_team_data is False

    def test_lifecycle_state_in_session(self):
        state = SessionLifecycleState()
        assert state.in_session is False

        state.session_handle = "2026-01-01T10-00-00"
        assert state.in_session is True
