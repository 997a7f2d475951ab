"""Countdown timer with lazily computed remaining time."""

from __future__ import annotations

import logging
import time
from typing import Callable

from pomato.models import TimerReading

log = logging.getLogger(__name__)

MICROS_PER_SECOND = 1_000_000

Clock = Callable[[], int]


def monotonic_us() -> int:
    """Current reading of the monotonic clock, in microseconds."""
    return time.monotonic_ns() // 1_000


class Timer:
    """A countdown over a fixed length.

    Remaining time is stored as of ``last_updated_at`` and only brought up to
    date when the timer is read, so nothing ticks in the background.
    """

    def __init__(self, length_seconds: int, clock: Clock = monotonic_us) -> None:
        if length_seconds <= 0:
            raise ValueError("Timer length must be positive")
        self.length = length_seconds * MICROS_PER_SECOND
        self._clock = clock
        self.running = False
        self.finished = False
        self.remaining = self.length
        self.last_updated_at = clock()

    @property
    def length_seconds(self) -> int:
        return self.length // MICROS_PER_SECOND

    def start(self) -> None:
        """Start or resume counting down."""
        if self.finished:
            return
        if self.running:
            # Settle what has elapsed so re-stamping does not lose it.
            self.read()
        self.running = True
        self.last_updated_at = self._clock()

    def pause(self) -> None:
        """Stop counting down, keeping the time remaining."""
        if self.running:
            self.read()
        self.running = False

    def reset(self) -> None:
        """Restore the full length and clear the finished flag."""
        self.running = False
        self.finished = False
        self.remaining = self.length
        self.last_updated_at = self._clock()

    def read(self) -> TimerReading:
        """Bring the remaining time up to date and return a reading."""
        if self.running:
            now = self._clock()
            self.remaining -= now - self.last_updated_at
            self.last_updated_at = now
            if self.remaining <= 0:
                self.remaining = 0
                self.running = False
                self.finished = True
                log.debug("Timer of %ds finished", self.length_seconds)

        remaining = self.remaining // MICROS_PER_SECOND
        return TimerReading(
            remaining=remaining,
            elapsed=self.length_seconds - remaining,
            length=self.length_seconds,
            running=self.running,
            finished=self.finished,
        )
