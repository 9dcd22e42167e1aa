import asyncio
import logging
from datetime import datetime, timezone

UTC = timezone.utc
logger = logging.getLogger(__name__)


class Scheduler:
    """
    Minimal in-process periodic runner.
    Usage:
        sched = Scheduler()
        sched.every(10, coro, arg1, arg2=...)
        task = asyncio.create_task(sched.run_forever())
        ...
        task.cancel()
    """
    def __init__(self, resolution: float = 1.0):
        self.resolution = resolution
        self.jobs = []  # list[[seconds, coro, args, kwargs, last_run]]
        self._tasks = set()

    def every(self, seconds: int, coro, *args, **kwargs):
        self.jobs.append([seconds, coro, args, kwargs, None])

    async def _guard(self, coro, args, kwargs):
        try:
            await coro(*args, **kwargs)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"[scheduler] {getattr(coro, '__name__', coro)} failed: {e}")

    def run_pending(self, now: datetime | None = None) -> int:
        """Start every job that is due at `now`; returns how many were started."""
        now = now or datetime.now(tz=UTC)
        started = 0
        for job in self.jobs:
            seconds, coro, args, kwargs, last_run = job
            if last_run is None or (now - last_run).total_seconds() >= seconds:
                task = asyncio.create_task(self._guard(coro, args, kwargs))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
                job[4] = now
                started += 1
        return started

    async def run_forever(self):
        try:
            while True:
                self.run_pending()
                await asyncio.sleep(self.resolution)
        finally:
            for t in list(self._tasks):
                t.cancel()
