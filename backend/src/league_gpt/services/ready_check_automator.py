"""Delayed automatic acceptance of matchmaking ready checks."""

import asyncio
import logging
import time
from enum import Enum
from typing import Awaitable, Callable, Optional

from league_gpt.models.ready_check import ReadyCheckEvent, ReadyCheckState

logger = logging.getLogger(__name__)


class AutomatorStatus(str, Enum):
    """State of the ready check automator."""

    IDLE = "idle"
    PENDING_ACCEPT = "pending_accept"  # Accept delay running
    ACCEPTING = "accepting"  # Delay elapsed, accept request outstanding


class ReadyCheckAutomator:
    """Accepts an unanswered ready check after a fixed delay.

    The delay is cancelled as soon as the player answers the check
    themselves or the check disappears.
    """

    def __init__(
        self,
        acceptor: Callable[[], Awaitable[bool]],
        delay: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the automator.

        Args:
            acceptor: Issues the accept action, returns True on success
            delay: Seconds to wait before accepting
            clock: Time source for pending_since
        """
        self.acceptor = acceptor
        self.delay = delay
        self.clock = clock
        self.pending_since: Optional[float] = None
        self.last_result: Optional[bool] = None
        self._accepting = False
        self._task: Optional[asyncio.Task] = None

    @property
    def status(self) -> AutomatorStatus:
        if self._accepting:
            return AutomatorStatus.ACCEPTING
        if self.pending_since is not None:
            return AutomatorStatus.PENDING_ACCEPT
        return AutomatorStatus.IDLE

    async def observe(self, state: Optional[ReadyCheckState]) -> Optional[ReadyCheckEvent]:
        """Feed one ready check snapshot (None when there is no ready check)."""
        status = self.status
        if status == AutomatorStatus.ACCEPTING:
            return None

        if status == AutomatorStatus.IDLE:
            if state is not None and state.is_in_progress and state.is_unanswered:
                self._start()
                return ReadyCheckEvent.STARTED
            return None

        if state is None or not state.is_in_progress:
            self._cancel()
            return ReadyCheckEvent.CANCELLED
        if state.is_accepted:
            self._cancel()
            logger.info("Ready check already accepted")
            return ReadyCheckEvent.ALREADY_ACCEPTED
        if not state.is_unanswered:
            self._cancel()
            logger.info(f"Ready check answered ({state.player_response}), auto accept cancelled")
            return ReadyCheckEvent.CANCELLED
        return None

    def _start(self):
        self.pending_since = self.clock()
        self._task = asyncio.create_task(self._accept_after_delay())
        logger.info(f"Ready check found, accepting in {self.delay:g}s")

    def _cancel(self):
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None
        self.pending_since = None

    async def _accept_after_delay(self):
        await asyncio.sleep(self.delay)

        self._accepting = True
        try:
            accepted = await self.acceptor()
        except Exception as e:
            logger.error(f"Ready check accept failed: {e}")
            accepted = False
        finally:
            self._accepting = False
            self.pending_since = None
            self._task = None

        self.last_result = accepted
        if accepted:
            logger.info("Ready check accepted")
        else:
            logger.warning("Failed to accept ready check")

    async def close(self):
        """Cancel any pending accept."""
        task = self._task
        self._cancel()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
