"""Interval Scheduler - Imperative Shell.

Runs independent periodic jobs on a single thread. Each job has its own
period; jobs are not synchronized with each other and may interleave in
any order. A failing job is logged and rescheduled, so no error can stop
the loop.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)


@dataclass
class ScheduledJob:
    """A periodic job.

    Attributes:
        name: Job name used in logs
        interval_seconds: Period between runs
        action: Callable invoked on each run
        next_run_at: Clock time of the next run
    """
    name: str
    interval_seconds: float
    action: Callable[[], object]
    next_run_at: float


class IntervalScheduler:
    """Single-threaded scheduler for periodic jobs."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize scheduler.

        Args:
            clock: Monotonic time source in seconds
            sleep: Blocking sleep function
        """
        self.clock = clock
        self.sleep = sleep
        self.jobs: list[ScheduledJob] = []
        self.running = False

    def add_job(
        self,
        name: str,
        interval_seconds: float,
        action: Callable[[], object],
        run_immediately: bool = False,
    ) -> ScheduledJob:
        """Register a periodic job.

        Args:
            name: Job name used in logs
            interval_seconds: Period between runs (must be positive)
            action: Callable invoked on each run
            run_immediately: Run on the first tick instead of after one period

        Returns:
            The registered job
        """
        if interval_seconds <= 0:
            raise ValueError(f"Interval must be positive, got {interval_seconds}")

        now = self.clock()
        job = ScheduledJob(
            name=name,
            interval_seconds=interval_seconds,
            action=action,
            next_run_at=now if run_immediately else now + interval_seconds,
        )
        self.jobs.append(job)
        logger.info("Scheduled %s every %ss", name, interval_seconds)
        return job

    def _run_job(self, job: ScheduledJob) -> None:
        logger.debug("Running %s", job.name)
        try:
            job.action()
        except Exception:
            logger.exception("Job %s failed, will run again in %ss", job.name, job.interval_seconds)

    def run_pending(self) -> int:
        """Run every job that is due, once each.

        Returns:
            Number of jobs run
        """
        ran = 0
        for job in sorted(self.jobs, key=lambda j: j.next_run_at):
            now = self.clock()
            if job.next_run_at > now:
                continue

            self._run_job(job)
            ran += 1

            # Fixed rate; if a run overran whole periods, skip them instead of bursting
            job.next_run_at += job.interval_seconds
            now = self.clock()
            if job.next_run_at <= now:
                job.next_run_at = now + job.interval_seconds

        return ran

    def seconds_until_next(self) -> float:
        """Seconds until the earliest job is due (0 if one is due now)."""
        if not self.jobs:
            raise RuntimeError("No jobs scheduled")
        next_run_at = min(job.next_run_at for job in self.jobs)
        return max(0.0, next_run_at - self.clock())

    def run_forever(self) -> None:
        """Run jobs until stop() is called.

        KeyboardInterrupt propagates to the caller.
        """
        self.running = True
        logger.info("Scheduler started with %d jobs", len(self.jobs))

        while self.running:
            self.run_pending()
            if not self.running:
                break
            self.sleep(self.seconds_until_next())

        logger.info("Scheduler stopped")

    def stop(self) -> None:
        """Stop the loop after the current job finishes."""
        self.running = False
