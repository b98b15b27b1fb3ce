"""
Politeness pacing between consecutive requests.

A pacing policy says how long to wait; ``wait()`` blocks for that long.
Tests swap in NoDelay (or a recorder) without changing control flow.
"""

import time
from typing import Callable


class PacingPolicy:
    """Fixed or computed delay between consecutive fetches."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def delay(self) -> float:
        raise NotImplementedError

    def wait(self) -> None:
        seconds = self.delay()
        if seconds > 0:
            self._sleep(seconds)


class FixedDelay(PacingPolicy):
    def __init__(self, seconds: float, sleep: Callable[[float], None] = time.sleep):
        if seconds < 0:
            raise ValueError(f"Delay must be non-negative, got {seconds}")
        super().__init__(sleep=sleep)
        self.seconds = float(seconds)

    def delay(self) -> float:
        return self.seconds

    def __repr__(self):
        return f"FixedDelay({self.seconds})"


class NoDelay(PacingPolicy):
    def delay(self) -> float:
        return 0.0
