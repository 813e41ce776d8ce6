from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

import pytest

from peerlobby.runtime.cleanup import CleanupScheduler
from peerlobby.runtime.errors import RoomNotFound


def test_run_once_evicts_expired(registry, clock, caplog):
    scheduler = CleanupScheduler(registry, cleanup_interval=300)
    registry.join("roomB", "p3", {})
    registry.join("roomA", "p1", {})
    clock.advance(1000)
    registry.join("roomA", "p2", {})
    clock.advance(1000)

    with caplog.at_level(logging.INFO, logger="peerlobby.runtime.cleanup"):
        result = scheduler.run_once()

    assert result.evicted_participants == 2
    assert result.removed_rooms == 1
    with pytest.raises(RoomNotFound):
        registry.get("roomB")
    assert [p.peer_id for p in registry.get("roomA").participants] == ["p2"]
    assert "evicted 2 participant(s)" in caplog.text


def test_interval_validation(registry):
    with pytest.raises(ValueError):
        CleanupScheduler(registry, cleanup_interval=0)
    assert CleanupScheduler(registry, cleanup_interval=timedelta(minutes=5)).cleanup_interval == 300


@pytest.mark.anyio
async def test_background_sweep(registry, clock):
    scheduler = CleanupScheduler(registry, cleanup_interval=0.01)
    registry.join("roomB", "p3", {})
    clock.advance(1801)

    scheduler.start()
    try:
        for _ in range(100):
            if "roomB" not in registry:
                break
            await asyncio.sleep(0.01)
    finally:
        await scheduler.stop()

    assert "roomB" not in registry


@pytest.mark.anyio
async def test_stop_cancels_task(registry):
    scheduler = CleanupScheduler(registry, cleanup_interval=60)
    assert not scheduler.running

    scheduler.start()
    assert scheduler.running
    task = scheduler._task
    scheduler.start()  # already running
    assert scheduler._task is task

    await scheduler.stop()
    assert not scheduler.running
    assert task.cancelled()

    # stopping twice is harmless
    await scheduler.stop()


@pytest.mark.anyio
async def test_failed_sweep_keeps_loop_alive(registry, monkeypatch, caplog):
    scheduler = CleanupScheduler(registry, cleanup_interval=0.01)
    calls = []

    def flaky_sweep(now=None):
        calls.append(now)
        if len(calls) == 1:
            raise RuntimeError("boom")
        return type(registry).sweep(registry, now)

    monkeypatch.setattr(registry, "sweep", flaky_sweep)

    with caplog.at_level(logging.ERROR, logger="peerlobby.runtime.cleanup"):
        scheduler.start()
        try:
            for _ in range(100):
                if len(calls) >= 2:
                    break
                await asyncio.sleep(0.01)
        finally:
            await scheduler.stop()

    assert len(calls) >= 2
    assert "Presence sweep failed" in caplog.text
