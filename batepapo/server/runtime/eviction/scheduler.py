# batepapo/server/runtime/eviction/scheduler.py
from __future__ import annotations

import anyio
from anyio.abc import TaskGroup, TaskStatus

from batepapo.server.runtime.limits import (
    DEFAULT_EVICTION_INTERVAL_MS,
    DEFAULT_STALE_THRESHOLD_MS,
)
from batepapo.server.runtime.presence.registry import PresenceRegistry
from batepapo.shared.clock import Clock, now_ms
from batepapo.shared.logging import get_logger

logger = get_logger(__name__)


class EvictionScheduler:
    """
    Periodic staleness scan over the presence registry.

    Ticks never overlap: the loop is sequential, deadlines missed while a tick was
    still running are skipped rather than queued, and a tick requested while another
    one holds the lock is skipped as well.
    """

    def __init__(
        self,
        registry: PresenceRegistry,
        *,
        interval_ms: int = DEFAULT_EVICTION_INTERVAL_MS,
        stale_threshold_ms: int = DEFAULT_STALE_THRESHOLD_MS,
        clock: Clock = now_ms,
    ):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if stale_threshold_ms < 0:
            raise ValueError("stale_threshold_ms must not be negative")
        self._registry = registry
        self.interval_ms = interval_ms
        self.stale_threshold_ms = stale_threshold_ms
        self._clock = clock
        self._lock = anyio.Lock()
        self._cancel_scope: anyio.CancelScope | None = None
        self.ticks = 0
        self.skipped = 0

    @property
    def running(self) -> bool:
        return self._cancel_scope is not None and not self._cancel_scope.cancel_called

    async def tick(self) -> list[str] | None:
        """
        One eviction pass. Returns the evicted names, or None when skipped because a
        previous pass is still in progress. Failures are logged; the next tick retries.
        """
        if self._lock.locked():
            self.skipped += 1
            logger.warning("Eviction tick skipped: previous tick still running")
            return None
        async with self._lock:
            self.ticks += 1
            now = self._clock()
            try:
                return await self._registry.evict_stale_and_announce(self.stale_threshold_ms, now)
            except Exception:
                logger.exception("Eviction tick failed")
                return []

    async def run(self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
        """Tick every `interval_ms` until stop() is called or the caller is cancelled."""
        interval = self.interval_ms / 1000
        with anyio.CancelScope() as scope:
            self._cancel_scope = scope
            task_status.started()
            logger.info(
                "Eviction scheduler started (interval=%d ms, stale threshold=%d ms)",
                self.interval_ms,
                self.stale_threshold_ms,
            )
            deadline = anyio.current_time() + interval
            try:
                while True:
                    await anyio.sleep_until(deadline)
                    await self.tick()
                    deadline += interval
                    behind = anyio.current_time() - deadline
                    if behind >= 0:
                        missed = int(behind // interval) + 1
                        self.skipped += missed
                        deadline += missed * interval
                        logger.warning("Eviction tick overran its period; skipped %d tick(s)", missed)
            finally:
                self._cancel_scope = None
                logger.info("Eviction scheduler stopped")

    async def start(self, task_group: TaskGroup) -> None:
        """Run the loop inside `task_group`; returns once it is scheduled."""
        await task_group.start(self.run)

    def stop(self) -> None:
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()
