"""Periodic flush driver built on SimPy."""

import logging
import time
from typing import Any, Callable, Optional

import simpy
import simpy.rt

from ..orchestration import ZabbixBackend

logger = logging.getLogger(__name__)


class FlushScheduler:
    """Drives ``ZabbixBackend.flush`` once per flush interval.

    The SimPy clock is the Unix clock: it starts at ``start_time`` and each
    flush is stamped with the current simulation time. With ``realtime=True``
    the environment is a ``RealtimeEnvironment`` that follows wall-clock time;
    otherwise cycles run back to back in virtual time (replays and tests).
    """

    def __init__(
        self,
        backend: ZabbixBackend,
        snapshot_provider: Callable[[], Any],
        realtime: bool = True,
        start_time: Optional[float] = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            backend: Backend receiving the flushes
            snapshot_provider: Called once per cycle to obtain the metrics to flush
            realtime: Follow wall-clock time instead of virtual time
            start_time: Unix time of the first tick; defaults to now
        """
        self.backend = backend
        self.snapshot_provider = snapshot_provider
        self.interval_s = backend.config.flush_interval_s
        self.cycles_completed = 0

        if start_time is None:
            start_time = time.time()

        if realtime:
            self.env: simpy.Environment = simpy.rt.RealtimeEnvironment(
                initial_time=start_time, factor=1.0, strict=False
            )
        else:
            self.env = simpy.Environment(initial_time=start_time)

        logger.info(f"FlushScheduler initialized (interval: {self.interval_s}s, realtime: {realtime})")

    def flush_process(self, max_cycles: Optional[int] = None):
        """SimPy process flushing every interval, optionally a bounded number of times."""
        while max_cycles is None or self.cycles_completed < max_cycles:
            yield self.env.timeout(self.interval_s)

            ts = int(self.env.now)
            num_stats = self.backend.flush(ts, self.snapshot_provider())
            self.cycles_completed += 1
            logger.debug(f"Flush cycle {self.cycles_completed} at {ts}: {num_stats} stats")

    def run(self, cycles: Optional[int] = None, until: Optional[float] = None) -> int:
        """Run flush cycles.

        Args:
            cycles: Stop after this many cycles
            until: Stop at this Unix time

        Returns:
            Number of cycles completed

        Raises:
            ValueError: If neither cycles nor until is given
        """
        if cycles is None and until is None:
            raise ValueError("Either cycles or until must be given")

        process = self.env.process(self.flush_process(max_cycles=cycles))

        try:
            if until is not None:
                self.env.run(until=until)
            else:
                self.env.run(until=process)
        except Exception as e:
            logger.error(f"Flush scheduler stopped at {self.env.now}: {e}")
            raise

        logger.info(f"FlushScheduler finished after {self.cycles_completed} cycles")
        return self.cycles_completed

    def now(self) -> float:
        return self.env.now
