"""
Named wall-clock timers for instrumenting loads and queries.
"""

import time
from contextlib import contextmanager
from typing import Dict, Generator, Optional

from util.logging import logger

MILLIS_IN_SECOND = 1000
MILLIS_IN_MINUTE = 60 * MILLIS_IN_SECOND
MILLIS_IN_HOUR = 60 * MILLIS_IN_MINUTE
MILLIS_IN_DAY = 24 * MILLIS_IN_HOUR


def format_elapsed_millis(millis: float) -> str:
    """Render a millisecond count as a human-readable duration."""
    millis = int(millis)
    days, millis = divmod(millis, MILLIS_IN_DAY)
    hours, millis = divmod(millis, MILLIS_IN_HOUR)
    minutes, millis = divmod(millis, MILLIS_IN_MINUTE)

    if days > 0:
        return f"{days:,} days, {hours} hours, {minutes} minutes"
    if hours > 0:
        return f"{hours} hours, {minutes} minutes"
    if minutes > 0:
        return f"{minutes} minutes, {millis / MILLIS_IN_SECOND:.3f} seconds"
    if millis >= MILLIS_IN_SECOND:
        return f"{millis / MILLIS_IN_SECOND:.3f} seconds"
    return f"{millis} ms"


class TimerRegistry:
    """Maps a label to its start timestamp.

    Owned by whoever does the instrumenting; there is no shared instance.
    """

    def __init__(self):
        self._started: Dict[str, float] = {}

    def start(self, label: str) -> None:
        self._started[label] = time.perf_counter()

    def stop(self, label: str) -> Optional[float]:
        """Stop a timer, log it and return elapsed milliseconds (None if never started)."""
        end = time.perf_counter()
        started = self._started.pop(label, None)
        if started is None:
            logger.warning(f"Timer {label} was stopped without being started")
            return None
        elapsed_ms = (end - started) * 1000
        logger.log_timer(label, elapsed_ms, format_elapsed_millis(elapsed_ms))
        return elapsed_ms

    def running(self) -> list:
        return sorted(self._started)

    @contextmanager
    def timed(self, label: str) -> Generator[None, None, None]:
        """Time the enclosed block under `label`."""
        self.start(label)
        try:
            yield
        finally:
            self.stop(label)
