"""Tests for the snapshot poller."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from league_gpt.services.snapshot_poller import SnapshotPoller

pytestmark = pytest.mark.anyio


def make_poller(fetch, skip_unchanged=False, interval=0.01):
    deliver = AsyncMock()
    return SnapshotPoller("test", fetch, deliver, interval, skip_unchanged=skip_unchanged), deliver


class TestPollOnce:
    async def test_delivers_snapshot(self):
        poller, deliver = make_poller(AsyncMock(return_value={"phase": "BAN_PICK"}))

        assert await poller.poll_once() is True
        deliver.assert_awaited_once_with({"phase": "BAN_PICK"})

    async def test_absent_snapshot_is_delivered_as_none(self):
        poller, deliver = make_poller(AsyncMock(return_value=None))

        await poller.poll_once()

        deliver.assert_awaited_once_with(None)

    async def test_without_skip_every_snapshot_is_delivered(self):
        poller, deliver = make_poller(AsyncMock(return_value={"a": 1}))

        await poller.poll_once()
        await poller.poll_once()

        assert deliver.await_count == 2

    async def test_skip_unchanged_drops_identical_snapshots(self):
        fetch = AsyncMock(side_effect=[{"a": 1, "b": 2}, {"b": 2, "a": 1}, {"a": 2}, None, None])
        poller, deliver = make_poller(fetch, skip_unchanged=True)

        results = [await poller.poll_once() for _ in range(5)]

        assert results == [True, False, True, True, False]
        assert [c.args[0] for c in deliver.await_args_list] == [{"a": 1, "b": 2}, {"a": 2}, None]

    async def test_fetch_error_is_logged_and_skipped(self, caplog):
        fetch = AsyncMock(side_effect=[RuntimeError("connection refused"), {"a": 1}])
        poller, deliver = make_poller(fetch)

        assert await poller.poll_once() is False
        assert "Error polling test" in caplog.text
        deliver.assert_not_awaited()

        assert await poller.poll_once() is True
        deliver.assert_awaited_once_with({"a": 1})

    async def test_deliver_error_does_not_propagate(self):
        poller, deliver = make_poller(AsyncMock(return_value={"a": 1}))
        deliver.side_effect = ValueError("boom")

        assert await poller.poll_once() is True

    async def test_deliver_error_allows_redelivery(self):
        poller, deliver = make_poller(AsyncMock(return_value={"a": 1}), skip_unchanged=True)
        deliver.side_effect = [ValueError("boom"), None, None]

        assert await poller.poll_once() is True
        assert await poller.poll_once() is True
        assert await poller.poll_once() is False
        assert deliver.await_count == 2

    async def test_forget_allows_redelivery(self):
        poller, deliver = make_poller(AsyncMock(return_value={"a": 1}), skip_unchanged=True)

        await poller.poll_once()
        poller.forget()

        assert await poller.poll_once() is True
        assert deliver.await_count == 2

    async def test_stale_response_is_discarded(self):
        slow_release = asyncio.Event()
        responses = iter(["slow", "fast"])

        async def fetch():
            label = next(responses)
            if label == "slow":
                await slow_release.wait()
            return {"response": label}

        poller, deliver = make_poller(fetch)

        slow = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)
        assert await poller.poll_once() is True

        slow_release.set()
        assert await slow is False
        deliver.assert_awaited_once_with({"response": "fast"})


class TestRun:
    async def test_start_polls_until_stopped(self):
        fetch = AsyncMock(return_value=None)
        poller, deliver = make_poller(fetch, interval=0.01)

        poller.start()
        assert poller.is_running is True
        await asyncio.sleep(0.08)
        await poller.stop()

        assert poller.is_running is False
        calls = fetch.await_count
        assert calls >= 3
        await asyncio.sleep(0.03)
        assert fetch.await_count == calls

    async def test_slow_fetch_does_not_delay_ticks(self):
        started = 0
        release = asyncio.Event()

        async def fetch():
            nonlocal started
            started += 1
            if started == 2:
                await release.wait()
            return started

        poller, deliver = make_poller(fetch, interval=0.01)

        poller.start()
        await asyncio.sleep(0.08)
        release.set()
        await poller.stop()

        assert started >= 4
