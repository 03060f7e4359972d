"""Supervised periodic background jobs

Classes:
    PeriodicTask:
        Run a callable every `interval` seconds on a daemon thread until stopped.

Behavior:
    - start() spawns the thread. The first run happens one interval after start.
    - tick() runs the job once on the calling thread (used by tests and by the loop).
    - stop() signals the loop and joins the thread.
    - A failing job is logged and the loop keeps running.

Example:
    >>> task = PeriodicTask('backup', 300, dao.backup)
    >>> task.start()
    >>> task.tick()   # force one run now
    >>> task.stop()
"""

import logging
import threading
from collections.abc import Callable
from typing import Any


logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(self, name: str, interval: float, job: Callable[[], Any]):
        if interval <= 0:
            raise ValueError(f'Interval must be a positive number of seconds (given value: {interval}).')

        self.name = name
        self.interval = interval
        self.job = job
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> 'PeriodicTask':
        if self.running:
            return self

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug('Started periodic task %s.', self.name, extra={'task': self.name, 'interval': self.interval})
        return self

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug('Stopped periodic task %s.', self.name, extra={'task': self.name})

    def tick(self) -> Any:
        """Run the job once and return its result (None if it failed)."""
        try:
            return self.job()
        except Exception:
            logger.exception('Periodic task %s failed.', self.name, extra={'task': self.name})
            return None

    def _run(self) -> None:
        # Event.wait() returns True once stop() is called
        while not self._stop_event.wait(self.interval):
            self.tick()
