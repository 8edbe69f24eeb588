"""manual_ticker.py
Deterministic `Ticker` for countdown tests.
"""
from typing import Callable, Optional

from career_gateway.client.rate_limit import Ticker


class ManualTicker(Ticker):
    """
    Ticker that only fires when the test calls `advance()`.

    Attributes:
        start_count (int): Number of times `start()` was called.
        stop_count (int): Number of times `stop()` was called.
        stale_callbacks (list): Callbacks replaced by a later `start()`, kept so
            tests can fire a cancelled timer on purpose.
    """

    def __init__(self):
        self.callback: Optional[Callable[[], None]] = None
        self.start_count = 0
        self.stop_count = 0
        self.stale_callbacks = []

    @property
    def running(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        if self.callback is not None:
            self.stale_callbacks.append(self.callback)
        self.callback = callback
        self.start_count += 1

    def stop(self) -> None:
        if self.callback is not None:
            self.stale_callbacks.append(self.callback)
        self.callback = None
        self.stop_count += 1

    def advance(self, ticks: int = 1) -> int:
        """Fire up to `ticks` ticks, stopping early once the ticker is stopped.
        Returns the number of ticks actually fired."""
        fired = 0
        for _ in range(ticks):
            if self.callback is None:
                break
            self.callback()
            fired += 1
        return fired
