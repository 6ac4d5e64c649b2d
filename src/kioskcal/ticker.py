# SPDX-License-Identifier: MIT

import logging
import threading
from typing import Callable, Optional

import pendulum

from kioskcal.time import now_local

logger = logging.getLogger(__name__)

TICK_SECONDS = 60


class Ticker:
    """
    Call a function with the current time on a fixed interval.

    The schedule services are pure, so every tick recomputes the layout
    from scratch. stop() ends the loop from any thread.
    """

    def __init__(
        self,
        on_tick: Callable[[pendulum.DateTime], None],
        interval_seconds: float = TICK_SECONDS,
        clock: Callable[[], pendulum.DateTime] = now_local,
    ) -> None:
        self._on_tick = on_tick
        self._interval_seconds = interval_seconds
        self._clock = clock
        self._stopped = threading.Event()
        self.tick_count = 0

    def run(self, max_ticks: Optional[int] = None) -> None:
        """Tick immediately, then once per interval until stopped."""
        while not self._stopped.is_set():
            self._on_tick(self._clock())
            self.tick_count += 1
            if max_ticks is not None and self.tick_count >= max_ticks:
                break
            if self._stopped.wait(self._interval_seconds):
                break
        logger.debug("Ticker stopped after %d ticks", self.tick_count)

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()
