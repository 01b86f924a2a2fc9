"""Cancellable periodic wake-ups for cooking timers.

A ticker schedules ``callback()`` once per interval and hands back a handle;
``handle.cancel()`` guarantees no further calls reach the callback.

AsyncioTicker drives real timers on the running event loop.
ManualTicker advances simulated seconds on demand.
"""
import asyncio
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class TickHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class AsyncioTickHandle(TickHandle):
    def __init__(self, task: "asyncio.Task"):
        super().__init__()
        self._task = task

    def cancel(self):
        super().cancel()
        self._task.cancel()


class AsyncioTicker:
    def __init__(self, interval: float = 1.0):
        self.interval = interval

    def schedule(self, callback: Callable[[], None]) -> TickHandle:
        loop = asyncio.get_running_loop()
        handle: AsyncioTickHandle

        async def _run():
            while True:
                await asyncio.sleep(self.interval)
                if handle.cancelled:
                    return
                try:
                    callback()
                except Exception:
                    logger.exception("Timer tick failed; stopping ticker")
                    return

        handle = AsyncioTickHandle(loop.create_task(_run()))
        return handle


class ManualTicker:
    def __init__(self):
        self._scheduled: List[tuple] = []

    def schedule(self, callback: Callable[[], None]) -> TickHandle:
        handle = TickHandle()
        self._scheduled.append((handle, callback))
        return handle

    def active(self) -> int:
        return sum(1 for handle, _ in self._scheduled if not handle.cancelled)

    def advance(self, seconds: int = 1):
        """Fire every live callback once per simulated second."""
        for _ in range(seconds):
            live = [(h, cb) for h, cb in self._scheduled if not h.cancelled]
            self._scheduled = live
            for handle, callback in live:
                if not handle.cancelled:
                    callback()
