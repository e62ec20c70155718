#!/usr/bin/env python3
"""
Minimum-interval throttle shared by every request a client makes.

Each call to wait() reserves the next dispatch slot, spaced at least
min_interval seconds after the previous one, then sleeps until that slot.
Slots are handed out in arrival order. The lock is only held while
reserving, so response handling is never serialized.

Usage:
    from doublecheck.throttle import Throttle

    throttle = Throttle(min_interval=0.5)
    throttle.wait()  # returns once it is this caller's turn
"""

import threading
import time
from collections import deque
from typing import Callable, Optional


class Throttle:
    """Enforces a minimum spacing between the start of outbound requests."""

    def __init__(
        self,
        min_interval: float = 0.5,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        history: int = 1000,
    ):
        """
        Args:
            min_interval: Seconds between the start of two requests
            clock: Monotonic time source (default: time.monotonic)
            sleep: Sleep function (default: time.sleep)
            history: How many recent dispatch times to keep in `dispatched`
        """
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._lock = threading.Lock()
        self._next_slot: Optional[float] = None
        self.dispatched: deque = deque(maxlen=history)

    def reserve(self) -> float:
        """Claim the next free dispatch slot and return its time."""
        with self._lock:
            now = self._clock()
            if self._next_slot is None or self._next_slot <= now:
                slot = now
            else:
                slot = self._next_slot
            self._next_slot = slot + self.min_interval
            self.dispatched.append(slot)
            return slot

    def wait(self) -> float:
        """Block until this caller may dispatch. Returns the slot time."""
        slot = self.reserve()
        delay = slot - self._clock()
        if delay > 0:
            self._sleep(delay)
        return slot
