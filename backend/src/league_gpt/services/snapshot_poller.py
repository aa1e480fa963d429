"""Fixed-interval snapshot polling.

Every tick starts a new fetch without waiting for earlier ones, so a slow
request never delays the cadence. Responses can therefore come back out of
order; only the response of the most recently started request that has
returned is delivered, older ones arriving later are discarded.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class SnapshotPoller:
    """Polls a snapshot source and hands fresh snapshots to a consumer."""

    def __init__(
        self,
        name: str,
        fetch: Callable[[], Awaitable[Any]],
        deliver: Callable[[Any], Awaitable[Any]],
        interval: float,
        skip_unchanged: bool = False,
    ):
        """Initialize the poller.

        Args:
            name: Label used in log messages
            fetch: Returns the current snapshot (None when absent); may raise
            deliver: Consumer of fresh snapshots
            interval: Seconds between ticks
            skip_unchanged: Skip snapshots identical to the last delivered one
        """
        self.name = name
        self.fetch = fetch
        self.deliver = deliver
        self.interval = interval
        self.skip_unchanged = skip_unchanged
        self._issued = 0
        self._applied = 0
        self._last_key: Optional[str] = None
        self._tasks: set[asyncio.Task] = set()
        self._runner: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    async def poll_once(self) -> bool:
        """Run one poll cycle.

        Returns:
            True if a snapshot was delivered
        """
        self._issued += 1
        request_id = self._issued
        try:
            snapshot = await self.fetch()
        except Exception as e:
            logger.error(f"Error polling {self.name}: {e}")
            return False

        if request_id < self._applied:
            logger.debug(f"Discarding stale {self.name} response #{request_id}")
            return False
        self._applied = request_id

        if self.skip_unchanged:
            key = json.dumps(snapshot, sort_keys=True, default=str)
            if key == self._last_key:
                return False
            self._last_key = key

        try:
            await self.deliver(snapshot)
        except Exception as e:
            logger.error(f"Error handling {self.name} snapshot: {e}")
            self.forget()
        return True

    def forget(self):
        """Drop the last delivered snapshot so an identical one is delivered again."""
        self._last_key = None

    def _spawn_tick(self):
        task = asyncio.create_task(self.poll_once())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def run(self):
        """Poll forever at the configured interval."""
        await self.poll_once()
        while True:
            await asyncio.sleep(self.interval)
            self._spawn_tick()

    def start(self) -> asyncio.Task:
        """Start polling in the background."""
        if not self.is_running:
            self._runner = asyncio.create_task(self.run())
            logger.info(f"Polling {self.name} every {self.interval:g}s")
        return self._runner

    async def stop(self):
        """Stop polling and cancel outstanding ticks."""
        tasks = list(self._tasks)
        if self._runner is not None:
            tasks.append(self._runner)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        self._runner = None
