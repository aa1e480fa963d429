"""Tests for wiring the League client, pipelines and pollers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from league_gpt.config import ConfigurationError, Settings
from league_gpt.models.ready_check import ReadyCheckState
from league_gpt.services.assistant import LeagueAssistant
from league_gpt.services.league_client import LeagueClientError

pytestmark = pytest.mark.anyio


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        openai_api_key="",
        use_mock_recommendations=True,
        champ_select_poll_interval=0.01,
        ready_check_poll_interval=0.01,
        ready_check_accept_delay=0.02,
        sessions_dir=str(tmp_path / "sessions"),
    )


@pytest.fixture
def league_client(local_summoner_id):
    client = MagicMock()
    client.connect = AsyncMock(return_value=True)
    client.close = AsyncMock()
    client.get_current_summoner = AsyncMock(return_value={"summonerId": local_summoner_id, "displayName": "me"})
    client.get_champ_select_session = AsyncMock(return_value=None)
    client.get_ready_check = AsyncMock(return_value=None)
    client.accept_ready_check = AsyncMock(return_value=True)
    return client


@pytest.fixture
def recommender():
    mock = MagicMock()
    mock.recommend = AsyncMock(return_value="Recommended Picks: Orianna")
    mock.close = AsyncMock()
    return mock


class TestStart:
    async def test_start_builds_both_pipelines(self, settings, league_client, recommender):
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        await assistant.start()
        try:
            assert assistant.controller is not None
            assert assistant.controller.local_summoner_id == 4242
            assert assistant.automator is not None
            assert len(assistant.pollers) == 2
            assert all(p.is_running for p in assistant.pollers)
        finally:
            await assistant.stop()

        assert not any(p.is_running for p in assistant.pollers)
        league_client.close.assert_awaited_once()
        recommender.close.assert_awaited_once()

    async def test_auto_accept_disabled(self, settings, league_client, recommender):
        settings = settings.model_copy(update={"auto_accept_enabled": False})
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        await assistant.start()
        await assistant.stop()

        assert assistant.automator is None
        assert len(assistant.pollers) == 1

    async def test_client_not_running(self, settings, league_client, recommender):
        league_client.connect.return_value = False
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        with pytest.raises(LeagueClientError, match="Failed to connect"):
            await assistant.start()

    async def test_summoner_unavailable(self, settings, league_client, recommender):
        league_client.get_current_summoner.return_value = {}
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        with pytest.raises(LeagueClientError, match="summoner"):
            await assistant.start()

    def test_missing_api_key_without_mock(self, settings, league_client):
        settings = settings.model_copy(update={"use_mock_recommendations": False})

        with pytest.raises(ConfigurationError):
            LeagueAssistant(settings, league_client=league_client)


class TestPipelines:
    async def test_local_turn_is_recommended_once_and_saved(
        self, settings, league_client, recommender, my_turn_session, tmp_path
    ):
        league_client.get_champ_select_session.return_value = my_turn_session
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        await assistant.start()
        await asyncio.sleep(0.1)
        await assistant.stop()

        recommender.recommend.assert_awaited_once()
        saved = list((tmp_path / "sessions").glob("*/query-01-your-turn.md"))
        assert len(saved) == 1

    async def test_ready_check_is_accepted(self, settings, league_client, recommender):
        league_client.get_ready_check.return_value = ReadyCheckState("InProgress", "None")
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        await assistant.start()
        await asyncio.sleep(0.1)
        await assistant.stop()

        league_client.accept_ready_check.assert_awaited()
        assert assistant.automator.last_result is True

    async def test_failed_recommendation_is_retried_on_unchanged_snapshot(
        self, settings, league_client, recommender, my_turn_session, tmp_path
    ):
        league_client.get_champ_select_session.return_value = my_turn_session
        recommender.recommend.side_effect = [RuntimeError("network blip"), "Recommended Picks: Ahri"]
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)

        await assistant.start()
        await asyncio.sleep(0.2)
        await assistant.stop()

        assert recommender.recommend.await_count == 2
        assert assistant.controller.state.sequence_counter == 1
        assert len(list((tmp_path / "sessions").glob("*/query-01-your-turn.md"))) == 1

    async def test_snapshot_dropped_in_flight_is_redelivered(
        self, settings, league_client, recommender, my_turn_session
    ):
        assistant = LeagueAssistant(settings, league_client=league_client, recommender=recommender)
        await assistant.start()
        await assistant.stop()
        league_client.get_champ_select_session.return_value = my_turn_session
        poller = assistant.champ_select_poller

        assistant.controller.state.in_flight = True
        assert await poller.poll_once() is True
        recommender.recommend.assert_not_awaited()

        assistant.controller.state.in_flight = False
        assert await poller.poll_once() is True
        recommender.recommend.assert_awaited_once()

        assert await poller.poll_once() is False
        recommender.recommend.assert_awaited_once()
