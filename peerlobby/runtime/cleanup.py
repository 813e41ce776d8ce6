from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from peerlobby.runtime.presence import RoomRegistry, SweepResult


class CleanupScheduler:
    """
    Background task: sweep the registry every ``cleanup_interval`` seconds,
    evicting participants older than the registry's participant timeout.
    """

    def __init__(self, registry: RoomRegistry, *, cleanup_interval: float | timedelta = 300):
        if isinstance(cleanup_interval, timedelta):
            cleanup_interval = cleanup_interval.total_seconds()
        if cleanup_interval <= 0:
            raise ValueError("cleanup_interval must be positive")
        self.registry = registry
        self.cleanup_interval = float(cleanup_interval)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="presence-cleanup")
        self.logger.info(
            "Cleanup scheduler started (interval=%.0fs, participant_timeout=%.0fs)",
            self.cleanup_interval,
            self.registry.participant_timeout.total_seconds(),
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self.logger.info("Cleanup scheduler stopped")

    def run_once(self) -> SweepResult:
        result = self.registry.sweep()
        if result.evicted_participants or result.removed_rooms:
            self.logger.info(
                "Sweep evicted %d participant(s), removed %d empty room(s); %d room(s) remain",
                result.evicted_participants,
                result.removed_rooms,
                len(self.registry),
            )
        else:
            self.logger.debug("Sweep found nothing to evict (%d room(s))", len(self.registry))
        return result

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval)
            try:
                self.run_once()
            except Exception:
                # keep the loop alive; the next sweep retries
                self.logger.exception("Presence sweep failed")
