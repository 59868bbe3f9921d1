"""
UI-only progress ticker shown while media is rendering or being edited.
It is purely illustrative: it never knows how far the real call is and never
gates workflow logic. The workflow listener snaps it to 100 on success.
"""

import random
import threading
from typing import Callable, Optional

TICK_SECONDS = 0.15
CEILING = 95.0
SLOWDOWN_AT = 80.0

ProgressCallback = Callable[[float], None]


class ProgressTicker:
    def __init__(
        self,
        on_tick: Optional[ProgressCallback] = None,
        interval: float = TICK_SECONDS,
        ceiling: float = CEILING,
        rng: Optional[random.Random] = None,
    ):
        self.on_tick = on_tick
        self.interval = interval
        self.ceiling = ceiling
        self.value = 0.0
        self._rng = rng or random.Random()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def advance(self) -> float:
        """One tick: up to 3 points below 80, up to 1 point above, never past the ceiling."""
        if self.value < self.ceiling:
            step = self._rng.random() * (3 if self.value < SLOWDOWN_AT else 1)
            self.value = min(self.value + step, self.ceiling)
        self._emit()
        return self.value

    def start(self) -> None:
        self.stop()
        self.value = 0.0
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, name="progress-ticker", daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            self.advance()
            if self.value >= self.ceiling:
                break

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval * 2)

    def complete(self) -> None:
        """The real call resolved: stop ticking and show 100%."""
        self.stop()
        self.value = 100.0
        self._emit()

    def reset(self) -> None:
        self.stop()
        self.value = 0.0

    def _emit(self) -> None:
        if self.on_tick is not None:
            self.on_tick(self.value)
