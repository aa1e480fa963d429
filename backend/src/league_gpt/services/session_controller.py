"""Champion select pipeline driver.

Each polled snapshot flows normalizer -> turn evaluator -> fingerprint and,
when the state is actionable, into one recommendation request. At most one
recommendation request is outstanding at a time; snapshots arriving while
one is running are dropped, not queued.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol

from league_gpt.models.champ_select import NormalizedView, SessionLifecycleState
from league_gpt.services.session_normalizer import SessionNormalizer
from league_gpt.services.session_recorder import SessionRecorder
from league_gpt.services.trigger_deduplicator import fingerprint, should_trigger
from league_gpt.services.turn_evaluator import is_local_turn

logger = logging.getLogger(__name__)


class Recommender(Protocol):
    async def recommend(self, view: NormalizedView) -> str: ...


class TriggerReason(str, Enum):
    """Why a recommendation was requested."""

    YOUR_TURN = "Your Turn"
    MANUAL = "Manual Query"


class PollOutcome(str, Enum):
    """What handling one snapshot did."""

    NO_SESSION = "no_session"  # No session before or after
    SESSION_ENDED = "session_ended"  # Session just ended, state cleared
    DROPPED_IN_FLIGHT = "dropped_in_flight"  # A recommendation is already running
    DROPPED_EMPTY = "dropped_empty"  # No champions on either team yet
    SUPPRESSED = "suppressed"  # Nothing new to act on
    TRIGGERED = "triggered"  # Recommendation requested and delivered
    FAILED = "failed"  # Processing raised; reported and recovered


def timestamp_handle() -> str:
    """Session handle used as the saved-session directory name."""
    return datetime.now().strftime("%Y-%m-%dT%H-%M-%S")


class SessionLifecycleController:
    """Drives the champion select pipeline for one local player."""

    def __init__(
        self,
        recommender: Recommender,
        local_summoner_id: Optional[int],
        normalizer: Optional[SessionNormalizer] = None,
        recorder: Optional[SessionRecorder] = None,
        state: Optional[SessionLifecycleState] = None,
        handle_factory: Callable[[], str] = timestamp_handle,
    ):
        """Initialize the controller.

        Args:
            recommender: Recommendation collaborator (``async recommend(view) -> str``)
            local_summoner_id: Summoner id identifying the local player in rosters
            normalizer: Session normalizer (default directory if omitted)
            recorder: Persistence sink for successful recommendations
            state: Prior lifecycle state, mainly for tests
            handle_factory: Allocates a new session handle
        """
        self.recommender = recommender
        self.local_summoner_id = local_summoner_id
        self.normalizer = normalizer or SessionNormalizer()
        self.recorder = recorder
        self.state = state or SessionLifecycleState()
        self.handle_factory = handle_factory

    async def handle_snapshot(self, raw: Optional[dict], manual: bool = False) -> PollOutcome:
        """Process one champion select snapshot.

        Args:
            raw: Raw session, or None when not in champion select
            manual: Whether the user explicitly asked for a recommendation

        Returns:
            PollOutcome describing what was done
        """
        if raw is None:
            return self._end_session()

        if not self.state.in_session:
            self._start_session()
        self.state.last_snapshot = raw

        if self.state.in_flight:
            if manual:
                logger.info("Recommendation already in progress, manual request dropped")
            else:
                logger.debug("Recommendation in progress, snapshot dropped")
            return PollOutcome.DROPPED_IN_FLIGHT

        try:
            return await self._process(raw, manual)
        except Exception as e:
            logger.error(f"Error processing champion select: {e}")
            return PollOutcome.FAILED
        finally:
            self.state.in_flight = False

    async def request_manual(self) -> PollOutcome:
        """Re-run the pipeline on the latest snapshot as a manual request."""
        if self.state.last_snapshot is None:
            logger.warning("No active champion select session")
            return PollOutcome.NO_SESSION
        logger.info("Manual query requested")
        return await self.handle_snapshot(self.state.last_snapshot, manual=True)

    async def _process(self, raw: dict, manual: bool) -> PollOutcome:
        view = self.normalizer.normalize(raw, self.local_summoner_id)
        self.state.last_view = view

        if not view.has_team_data and not manual:
            return PollOutcome.DROPPED_EMPTY

        local_turn = is_local_turn(raw, view.local_cell_id)
        current = fingerprint(view, local_turn)

        # Automatic triggers only fire on the local player's own pick turn
        if not manual and not (local_turn and should_trigger(self.state.last_fingerprint, current)):
            if self.state.last_fingerprint != current:
                self.state.last_fingerprint = current
            return PollOutcome.SUPPRESSED

        reason = TriggerReason.MANUAL if manual else TriggerReason.YOUR_TURN
        handle = self.state.session_handle
        self.state.in_flight = True
        logger.info(f"Champion select update - {reason.value} - Phase: {view.phase}")
        if local_turn and not manual:
            logger.info("It's your turn to pick!")

        recommendation = await self.recommender.recommend(view.without_local_hover())

        if self.state.session_handle != handle:
            logger.warning("Champion select ended while waiting for the recommendation; result not saved")
            logger.info(f"Recommendation:\n{recommendation}")
            return PollOutcome.TRIGGERED

        self.state.sequence_counter += 1
        logger.info(f"Recommendation #{self.state.sequence_counter}:\n{recommendation}")
        if self.recorder is not None:
            self.recorder.record(handle, view, recommendation, reason.value, self.state.sequence_counter)

        # Manual triggers never suppress the next automatic one
        if not manual:
            self.state.last_fingerprint = current
        return PollOutcome.TRIGGERED

    def _start_session(self):
        self.state.session_handle = self.handle_factory()
        self.state.sequence_counter = 0
        self.state.last_fingerprint = None
        self.state.last_view = None
        logger.info(f"Champion select started (session {self.state.session_handle})")

    def _end_session(self) -> PollOutcome:
        if not self.state.in_session:
            return PollOutcome.NO_SESSION

        handle = self.state.session_handle
        logger.info("Champion select ended.")
        if self.recorder is not None and self.recorder.enabled and self.state.sequence_counter:
            logger.info(f"Session saved to: {self.recorder.session_dir(handle)}")

        self.state.session_handle = None
        self.state.last_fingerprint = None
        self.state.last_view = None
        self.state.last_snapshot = None
        return PollOutcome.SESSION_ENDED

    def status(self) -> dict:
        """Current lifecycle state for status reporting."""
        return {
            "in_session": self.state.in_session,
            "session_handle": self.state.session_handle,
            "in_flight": self.state.in_flight,
            "sequence_counter": self.state.sequence_counter,
            "last_fingerprint": (
                self.state.last_fingerprint.to_dict() if self.state.last_fingerprint else None
            ),
            "last_view": self.state.last_view.to_dict() if self.state.last_view else None,
        }
