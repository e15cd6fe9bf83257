"""Tests for CooldownGate."""

from __future__ import annotations

import asyncio

from resume_coach.refresh.cooldown import CooldownGate


class TestCooldownGate:
    def test_inactive_by_default(self):
        gate = CooldownGate()
        assert not gate.active
        assert gate.remaining() == 0.0

    async def test_expires_and_calls_back(self):
        expired = []
        gate = CooldownGate(on_expire=lambda: expired.append(True))

        gate.start(0.03)
        assert gate.active
        assert 0 < gate.remaining() <= 0.03

        await asyncio.sleep(0.08)

        assert not gate.active
        assert expired == [True]

    async def test_clear_skips_callback(self):
        expired = []
        gate = CooldownGate(on_expire=lambda: expired.append(True))

        gate.start(0.02)
        gate.clear()
        await asyncio.sleep(0.05)

        assert not gate.active
        assert expired == []

    async def test_restart_replaces_running_cooldown(self):
        expired = []
        gate = CooldownGate(on_expire=lambda: expired.append(True))

        gate.start(0.02)
        gate.start(0.1)
        await asyncio.sleep(0.05)

        assert gate.active
        assert expired == []
