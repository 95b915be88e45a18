"""Periodic background tasks."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

from apscheduler.schedulers.background import BackgroundScheduler

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodicTask:
    """A handler invoked on a fixed interval."""

    name: str
    interval: timedelta
    handler: Callable[[], object]

    def run(self) -> None:
        """Invoke the handler once, logging instead of raising failures."""
        _logger.info("Running task %s", self.name)
        try:
            result = self.handler()
        except Exception:
            _logger.exception("Task %s failed", self.name)
            return
        _logger.info("Task %s finished: %s", self.name, result)


@dataclass
class TaskScheduler:
    """Runs periodic tasks on a background thread pool."""

    tasks: list[PeriodicTask]
    scheduler: BackgroundScheduler = field(
        default_factory=lambda: BackgroundScheduler(timezone="UTC")
    )

    def __post_init__(self) -> None:
        for task in self.tasks:
            self.scheduler.add_job(
                task.run,
                "interval",
                seconds=task.interval.total_seconds(),
                id=task.name,
                name=task.name,
                max_instances=1,
                coalesce=True,
            )

    @property
    def running(self) -> bool:
        """Return True while the scheduler is started."""
        return self.scheduler.running

    def start(self) -> None:
        """Start triggering tasks."""
        if not self.scheduler.running:
            self.scheduler.start()
            _logger.info("Scheduler started with %s tasks", len(self.tasks))

    def shutdown(self) -> None:
        """Stop triggering tasks without waiting for running ones."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    def describe(self) -> list[dict[str, object]]:
        """Return task names, intervals and next run times."""
        described = []
        for task in self.tasks:
            job = self.scheduler.get_job(task.name)
            next_run = getattr(job, "next_run_time", None) if job else None
            described.append(
                {
                    "name": task.name,
                    "interval_seconds": int(task.interval.total_seconds()),
                    "next_run_at": next_run.isoformat() if next_run else None,
                }
            )
        return described
