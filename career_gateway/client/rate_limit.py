"""rate_limit.py
Client-side handling of rate-limited (429) and credits-depleted (402) answers.

`RateLimitCountdown` is an explicit state machine:

    Idle --start(n > 0)--> Counting(n) --tick--> Counting(n-1) ... --tick--> Idle
    Counting(k) --clear()--> Idle
    Counting(k) --start(m)--> Counting(m)   (the previous timer is cancelled)

It does not sleep or schedule anything itself; a `Ticker` calls `tick()` once
per second. `ThreadTicker` is the production driver, tests drive it by hand.
"""
import math
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from career_gateway.config import GATEWAY_DEFAULTS
from career_gateway.exceptions import SubmissionBlockedError
from career_gateway.logging import LoggerFactory
from career_gateway.models import IDLE_RATE_LIMIT_STATE, RateLimitState

logger = LoggerFactory().get_logger(name="rate_limit_countdown", logger_type="default")

FALLBACK_RATE_LIMIT_MESSAGE = "You've reached the request limit. Please try again after a few minutes."
CREDITS_DEPLETED_TITLE = "AI credits depleted"
CREDITS_DEPLETED_MESSAGE = "Please add credits to your workspace to continue using AI features."


def format_wait_time(seconds: int) -> str:
    """
    Human-readable wait time.

    Example:
        >>> format_wait_time(1), format_wait_time(45), format_wait_time(120), format_wait_time(90)
        ('1 second', '45 seconds', '2 minutes', '1m 30s')
    """
    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"

    minutes, remaining_seconds = divmod(seconds, 60)
    if remaining_seconds == 0:
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    return f"{minutes}m {remaining_seconds}s"


def rate_limit_message(retry_after_seconds: int) -> str:
    return f"You've reached the request limit. Please try again in {format_wait_time(retry_after_seconds)}."


def normalize_retry_after(value: Any) -> Optional[int]:
    """Whole seconds from a `retryAfter` body value, or None if it is not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return math.ceil(value)


# --------------------------------------------------------------
# TICKERS
# --------------------------------------------------------------
class Ticker(ABC):
    """Periodic driver for a countdown. Holds at most one callback at a time."""

    @abstractmethod
    def start(self, callback: Callable[[], None]) -> None:
        """Begin calling `callback` once per interval, replacing any prior callback."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop calling the current callback. Safe to call when already stopped."""
        pass


class ThreadTicker(Ticker):
    """
    Calls the callback from a daemon thread every `interval_s` seconds.

    Each `start()` gets its own stop event, so a stopped thread exits on its
    next wake-up even if a newer thread is already running.
    """

    def __init__(self, interval_s: float = 1.0):
        self.interval_s = interval_s
        self._stop_event: Optional[threading.Event] = None

    def start(self, callback: Callable[[], None]) -> None:
        self.stop()
        stop_event = threading.Event()

        def run():
            while not stop_event.wait(self.interval_s):
                callback()

        self._stop_event = stop_event
        threading.Thread(target=run, name="rate-limit-countdown", daemon=True).start()

    def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
            self._stop_event = None


# --------------------------------------------------------------
# COUNTDOWN STATE MACHINE
# --------------------------------------------------------------
class RateLimitCountdown:
    """
    Rate-limit countdown owned by one request flow.

    Args:
        ticker (Optional[Ticker]): Periodic driver; a 1-second `ThreadTicker` if None.
        fallback_seconds (int): Countdown length used when the server gave no
            retry hint. The message stays qualitative in that case.

    Example:
        >>> countdown = RateLimitCountdown()
        >>> countdown.handle_error(429, retry_after=45)
        True
        >>> countdown.remaining_formatted()
        '45 seconds'
    """

    def __init__(
        self,
        ticker: Optional[Ticker] = None,
        fallback_seconds: int = GATEWAY_DEFAULTS.RATE_LIMIT_FALLBACK_SECONDS,
    ):
        self.ticker = ticker or ThreadTicker()
        self.fallback_seconds = fallback_seconds
        self._state = IDLE_RATE_LIMIT_STATE
        # Bumped on every start/clear so ticks from a cancelled timer are ignored
        self._generation = 0
        self._lock = threading.Lock()

    # ---- Queries ----
    @property
    def state(self) -> RateLimitState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state.active

    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    def remaining_formatted(self) -> str:
        return format_wait_time(self._state.remaining_seconds)

    # ---- Transitions ----
    def start(self, retry_after_seconds: Optional[int]) -> RateLimitState:
        """
        Enter Counting, cancelling any countdown already running.

        None uses `fallback_seconds` with a qualitative message. A hint of zero
        or less leaves the countdown Idle.
        """
        with self._lock:
            self._generation += 1
            self.ticker.stop()

            if retry_after_seconds is None:
                seconds, message = self.fallback_seconds, FALLBACK_RATE_LIMIT_MESSAGE
            else:
                seconds, message = retry_after_seconds, rate_limit_message(retry_after_seconds)

            if seconds <= 0:
                self._state = IDLE_RATE_LIMIT_STATE
                return self._state

            self._state = RateLimitState(active=True, remaining_seconds=seconds, message=message)
            generation = self._generation
            self.ticker.start(lambda: self.tick(generation))

        logger.info(f"Rate limit countdown started: {seconds}s")
        return self._state

    def tick(self, generation: Optional[int] = None) -> RateLimitState:
        """
        Advance one second. Reaching zero returns to Idle and stops the ticker.

        Ticks carrying a stale `generation` (from a cancelled timer) are ignored.
        Ticking while Idle is a no-op.
        """
        with self._lock:
            if generation is not None and generation != self._generation:
                return self._state
            if not self._state.active:
                return self._state

            remaining = self._state.remaining_seconds - 1
            if remaining <= 0:
                self._generation += 1
                self.ticker.stop()
                self._state = IDLE_RATE_LIMIT_STATE
            else:
                self._state = RateLimitState(
                    active=True,
                    remaining_seconds=remaining,
                    message=self._state.message,
                )
            return self._state

    def clear(self) -> None:
        """Return to Idle immediately."""
        with self._lock:
            self._generation += 1
            self.ticker.stop()
            self._state = IDLE_RATE_LIMIT_STATE

    # ---- Flow helpers ----
    def handle_error(self, status_code: int, retry_after: Any = None) -> bool:
        """
        React to an endpoint error status.

        Returns:
            bool: True if the status was a 429 (countdown started) or a 402
                (terminal, no countdown); False for anything else.
        """
        if status_code == 429:
            self.start(normalize_retry_after(retry_after))
            return True
        if status_code == 402:
            logger.warning(f"{CREDITS_DEPLETED_TITLE}: {CREDITS_DEPLETED_MESSAGE}")
            return True
        return False

    def ensure_can_submit(self) -> None:
        """
        Raises:
            SubmissionBlockedError: While a countdown is active.
        """
        state = self._state
        if state.active:
            raise SubmissionBlockedError(
                remaining_seconds=state.remaining_seconds,
                message=f"Please wait {format_wait_time(state.remaining_seconds)} before trying again.",
            )
