import logging
import time
from typing import Callable, Optional


class Countdown:
    """Per-turn countdown driven by a repeating background tick.

    - ``restart()`` resets the budget and schedules a fresh tick loop
    - ``cancel()`` stops any running loop at its next wake-up
    - A generation counter ensures only one loop is live per lobby
    - ``spawn``/``sleep`` are normally ``socketio.start_background_task`` and
      ``socketio.sleep``; when ``spawn`` is None no loop is started and ticks
      must be driven by the caller
    """

    def __init__(
        self,
        on_tick: Callable[[int], bool],
        budget: int = 30,
        interval: float = 1.0,
        spawn: Optional[Callable] = None,
        sleep: Optional[Callable[[float], None]] = None,
        logger: Optional[logging.Logger] = None,
        label: str = '',
    ):
        self.on_tick = on_tick
        self.budget = budget
        self.interval = interval
        self.remaining = budget
        self.generation = 0
        self._spawn = spawn
        self._sleep = sleep or time.sleep
        self._logger = logger or logging.getLogger(__name__)
        self._label = label

    def restart(self) -> int:
        self.generation += 1
        self.remaining = self.budget
        self._logger.debug(f"[timer-set] lobby={self._label} generation={self.generation} budget={self.budget}s")
        if self._spawn is not None:
            self._spawn(self._worker, self.generation)
        return self.generation

    def cancel(self) -> None:
        self.generation += 1
        self._logger.debug(f"[timer-cancel] lobby={self._label} generation={self.generation}")

    def reset(self) -> None:
        """Refill the budget without replacing the running loop."""
        self.remaining = self.budget

    def decrement(self) -> bool:
        """Consume one second; return True when the budget is spent."""
        self.remaining -= 1
        return self.remaining <= 0

    def _worker(self, generation: int) -> None:
        while True:
            self._sleep(self.interval)
            if generation != self.generation:
                self._logger.debug(f"[timer-abort] lobby={self._label} generation={generation} superseded")
                return
            try:
                alive = self.on_tick(generation)
            except Exception:
                self._logger.exception(f"[timer-error] lobby={self._label} generation={generation}")
                return
            if not alive:
                self._logger.debug(f"[timer-abort] lobby={self._label} generation={generation} stale")
                return
