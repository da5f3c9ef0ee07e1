"""Refresh cycle: read the registry, fan out one check per address.

The orchestrator never waits for a check. Results reach the API only through
the status store, so the refresh cadence and the request cadence are
independent. Cycles are not guarded against overlap: if checks outlast the
interval, checks from consecutive cycles run side by side and the last one
to finish wins in the store.
"""

import logging
import threading
import time

import redis

from ..store import CHECK_KINDS
from ..utils.reporting import report_exception

logger = logging.getLogger(__name__)


class RefreshOrchestrator:
    def __init__(self, store, dispatcher):
        self.store = store
        self.dispatcher = dispatcher

    def refresh_all(self) -> dict[str, int]:
        """Dispatch one check per registry member; returns dispatch counts by kind."""
        try:
            snapshot = self.store.registry_snapshot()
        except redis.RedisError as e:
            logger.error("could not read server registry: %s", e)
            report_exception(e)
            return {kind: 0 for kind in CHECK_KINDS}

        for kind in CHECK_KINDS:
            logger.info("%d servers in %s database", len(snapshot[kind]), kind)

        counts = {}
        for kind in CHECK_KINDS:
            for address in snapshot[kind]:
                self.dispatcher.submit(kind, address)
            counts[kind] = len(snapshot[kind])
        return counts


class RefreshScheduler:
    """Runs ``refresh_all`` once on start, then every ``interval`` seconds.

    Cycles start on a fixed-rate grid measured from the first cycle, so a
    slow cycle does not push later ones back. Ticks missed while a cycle was
    running are skipped. Lives on its own daemon thread; process exit
    abandons it together with any checks still in flight.
    """

    def __init__(self, orchestrator: RefreshOrchestrator, interval: float = 60):
        self.orchestrator = orchestrator
        self.interval = float(interval)
        if self.interval <= 0:
            raise ValueError(f"refresh interval must be positive, got {interval!r}")
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, name="mcapi-refresh", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout=None) -> None:
        self._thread.join(timeout)

    def _next_run(self, scheduled: float, now: float) -> float:
        """First tick after ``now`` on the grid ``scheduled + k * interval``."""
        missed = int((now - scheduled) // self.interval)
        return scheduled + max(missed + 1, 1) * self.interval

    def _loop(self) -> None:
        next_run = time.monotonic()
        while not self._stop.is_set():
            try:
                self.orchestrator.refresh_all()
            except Exception as e:
                logger.exception("refresh cycle failed")
                report_exception(e)
            next_run = self._next_run(next_run, time.monotonic())
            self._stop.wait(max(0.0, next_run - time.monotonic()))
