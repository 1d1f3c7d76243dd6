"""Countdown shown between sets."""

from __future__ import annotations

from typing import Callable

from kivy.clock import Clock

from . import DEFAULT_REST_DURATION, REST_TICK_INTERVAL


class RestTimer:
    """Cancellable once-per-second countdown.

    The countdown runs on the Kivy clock.  Whoever starts the timer must
    cancel it when the owning session ends; :meth:`cancel` is safe to call at
    any time and no callback fires after it returns.  The timer can also be
    used as a context manager, which cancels it on exit.
    """

    def __init__(
        self,
        duration: float = DEFAULT_REST_DURATION,
        on_tick: Callable[[int], None] | None = None,
        on_finish: Callable[[], None] | None = None,
        clock=None,
    ) -> None:
        self.duration = duration
        self.on_tick = on_tick
        self.on_finish = on_finish
        self.remaining = 0
        self._clock = clock or Clock
        self._event = None

    @property
    def is_running(self) -> bool:
        return self._event is not None

    def start(self, seconds: float | None = None) -> None:
        """Begin a new countdown, replacing any countdown in progress."""

        self.cancel()
        self.remaining = max(0, int(self.duration if seconds is None else seconds))
        if self.remaining:
            self._event = self._clock.schedule_interval(self._tick, REST_TICK_INTERVAL)

    def adjust(self, seconds: int) -> None:
        """Add ``seconds`` (or remove, if negative) from the running countdown."""

        if not self.is_running:
            return
        self.remaining = max(0, self.remaining + seconds)
        if self.remaining == 0:
            self._finish()

    def skip(self) -> None:
        """Stop resting immediately."""

        self.cancel()

    def cancel(self) -> None:
        if self._event is not None:
            self._event.cancel()
            self._event = None
        self.remaining = 0

    def _finish(self) -> None:
        self.cancel()
        if self.on_finish:
            self.on_finish()

    def _tick(self, dt) -> bool | None:
        if self._event is None:
            return False
        self.remaining = max(0, self.remaining - 1)
        if self.on_tick:
            self.on_tick(self.remaining)
        if self.remaining == 0:
            self._finish()
            return False
        return None

    def __enter__(self) -> "RestTimer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
