from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FlushTicker:
    """Invoke ``callback`` every ``interval`` seconds on a daemon thread.

    ``reset`` pushes the next tick a full interval into the future. The first
    exception raised by ``callback`` is kept in :attr:`error` and stops the
    ticker. The condition is never held while ``callback`` runs.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        name: str = "piper-flush-ticker",
    ) -> None:
        if interval <= 0:
            raise ValueError("ticker interval must be positive")
        self._interval = interval
        self._callback = callback
        self._cond = threading.Condition()
        self._deadline = time.monotonic() + interval
        self._stopped = False
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)

    def start(self) -> "FlushTicker":
        self._thread.start()
        return self

    def reset(self) -> None:
        with self._cond:
            self._deadline = time.monotonic() + self._interval
            self._cond.notify_all()

    def stop(self, timeout: float | None = None) -> None:
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    @property
    def error(self) -> Optional[BaseException]:
        with self._cond:
            return self._error

    @property
    def stopped(self) -> bool:
        with self._cond:
            return self._stopped

    def _loop(self) -> None:
        while True:
            with self._cond:
                while not self._stopped:
                    remaining = self._deadline - time.monotonic()
                    if remaining <= 0:
                        break
                    self._cond.wait(remaining)
                if self._stopped:
                    return
                self._deadline = time.monotonic() + self._interval

            try:
                self._callback()
            except Exception as exc:
                logger.debug("timer flush failed; stopping ticker", exc_info=True)
                with self._cond:
                    self._error = exc
                    self._stopped = True
                return


__all__ = ["FlushTicker"]
