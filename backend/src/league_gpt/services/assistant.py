"""Wires the League client, pipelines and pollers together."""

import logging
from pathlib import Path
from typing import Optional

from league_gpt.config import Settings
from league_gpt.services.league_client import LeagueClient, LeagueClientError
from league_gpt.services.ready_check_automator import ReadyCheckAutomator
from league_gpt.services.recommendation_client import get_recommendation_client
from league_gpt.services.session_controller import PollOutcome, SessionLifecycleController
from league_gpt.services.session_recorder import SessionRecorder
from league_gpt.services.snapshot_poller import SnapshotPoller

logger = logging.getLogger(__name__)


class LeagueAssistant:
    """Runs the champion select and ready check pipelines side by side."""

    def __init__(
        self,
        settings: Settings,
        league_client: Optional[LeagueClient] = None,
        recommender=None,
    ):
        """Initialize the assistant.

        Raises:
            ConfigurationError: if no recommender is given and none can be configured
        """
        self.settings = settings
        self.league_client = league_client or LeagueClient(
            lockfile_path=settings.lockfile_path or None,
            timeout=settings.league_client_timeout,
        )
        self.recommender = recommender or get_recommendation_client(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.recommendation_timeout,
            use_mock=settings.use_mock_recommendations,
        )
        self.recorder = SessionRecorder(Path(settings.sessions_dir), enabled=settings.save_sessions)
        self.controller: Optional[SessionLifecycleController] = None
        self.automator: Optional[ReadyCheckAutomator] = None
        self.champ_select_poller: Optional[SnapshotPoller] = None
        self.pollers: list[SnapshotPoller] = []

    async def start(self):
        """Connect to the League client and start polling.

        Raises:
            LeagueClientError: if the client is not running or the summoner is unavailable
        """
        if not await self.league_client.connect():
            raise LeagueClientError(
                "Failed to connect to League Client. Make sure League of Legends is running and logged in."
            )
        summoner = await self.league_client.get_current_summoner()
        summoner_id = summoner.get("summonerId") if isinstance(summoner, dict) else None
        if summoner_id is None:
            raise LeagueClientError("Failed to get summoner info")

        self.controller = SessionLifecycleController(
            recommender=self.recommender,
            local_summoner_id=summoner_id,
            recorder=self.recorder,
        )
        self.champ_select_poller = SnapshotPoller(
            "champion select",
            fetch=self.league_client.get_champ_select_session,
            deliver=self._deliver_champ_select,
            interval=self.settings.champ_select_poll_interval,
            skip_unchanged=True,
        )
        self.pollers = [self.champ_select_poller]

        if self.settings.auto_accept_enabled:
            self.automator = ReadyCheckAutomator(
                acceptor=self.league_client.accept_ready_check,
                delay=self.settings.ready_check_accept_delay,
            )
            self.pollers.append(
                SnapshotPoller(
                    "ready check",
                    fetch=self.league_client.get_ready_check,
                    deliver=self.automator.observe,
                    interval=self.settings.ready_check_poll_interval,
                )
            )

        for poller in self.pollers:
            poller.start()
        logger.info("Ready! Waiting for champion select...")

    async def _deliver_champ_select(self, raw: Optional[dict]) -> PollOutcome:
        outcome = await self.controller.handle_snapshot(raw)
        # Unprocessed snapshots must reach the controller again even if unchanged
        if outcome in (PollOutcome.FAILED, PollOutcome.DROPPED_IN_FLIGHT):
            self.champ_select_poller.forget()
        return outcome

    async def stop(self):
        """Stop polling and release HTTP clients."""
        for poller in self.pollers:
            await poller.stop()
        if self.automator is not None:
            await self.automator.close()
        await self.league_client.close()
        await self.recommender.close()
