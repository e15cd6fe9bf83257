"""Tests for the async Debouncer."""

from __future__ import annotations

import asyncio

from resume_coach.refresh.debounce import Debouncer


class TestDebouncer:
    async def test_only_last_submission_fires(self):
        loop = asyncio.get_running_loop()
        debouncer = Debouncer(delay=0.05)
        fired: list[tuple[int, float]] = []

        for i in range(4):
            debouncer.submit(lambda i=i: fired.append((i, loop.time())))
            last_submit = loop.time()
            await asyncio.sleep(0.01)

        await asyncio.sleep(0.15)

        assert [i for i, _ in fired] == [3]
        assert fired[0][1] - last_submit >= 0.05 - 0.005

    async def test_cancel_prevents_firing(self):
        debouncer = Debouncer(delay=0.02)
        fired = []
        debouncer.submit(lambda: fired.append(1))
        assert debouncer.pending

        debouncer.cancel()
        await asyncio.sleep(0.06)

        assert fired == []
        assert not debouncer.pending

    async def test_async_trigger_is_awaited(self):
        debouncer = Debouncer(delay=0.01)
        done = asyncio.Event()

        async def trigger():
            await asyncio.sleep(0)
            done.set()

        debouncer.submit(trigger)
        await asyncio.wait_for(done.wait(), timeout=1.0)

    async def test_submit_does_not_cancel_running_trigger(self):
        """Once fired, a trigger runs to completion even if new work is submitted."""
        debouncer = Debouncer(delay=0.01)
        release = asyncio.Event()
        finished: list[str] = []

        async def slow():
            await release.wait()
            finished.append("slow")

        debouncer.submit(slow)
        await asyncio.sleep(0.03)
        assert not debouncer.pending

        debouncer.submit(lambda: finished.append("next"))
        release.set()
        await asyncio.sleep(0.05)

        assert finished == ["slow", "next"]

    async def test_triggers_never_overlap(self):
        debouncer = Debouncer(delay=0.01)
        running = 0
        peak = 0

        async def trigger():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.05)
            running -= 1

        debouncer.submit(trigger)
        await asyncio.sleep(0.02)
        debouncer.submit(trigger)
        await asyncio.sleep(0.15)

        assert peak == 1

    async def test_instances_are_independent(self):
        refresh = Debouncer(delay=0.05)
        layout = Debouncer(delay=0.01)
        fired: list[str] = []

        refresh.submit(lambda: fired.append("refresh"))
        layout.submit(lambda: fired.append("layout"))
        layout.cancel()
        await asyncio.sleep(0.1)

        assert fired == ["refresh"]

    async def test_trigger_exception_is_contained(self, caplog):
        debouncer = Debouncer(delay=0.01)

        def boom():
            raise RuntimeError("render failed")

        debouncer.submit(boom)
        await asyncio.sleep(0.05)

        assert "Debounced trigger failed" in caplog.text
