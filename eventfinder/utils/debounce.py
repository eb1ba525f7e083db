"""Debouncing of rapid calls, used for search-as-you-type."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

class Debouncer:
    """
    Delay a callback until calls have stopped for ``wait`` seconds.

    Only the arguments of the last call are used. Each pending call is an
    explicit ``threading.Timer`` that ``cancel()`` stops, so a view being
    torn down can make sure no late callback touches it.
    """

    def __init__(self, wait: float, func: Callable[..., None]):
        self.wait = wait
        self.func = func
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    def __call__(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._args, self._kwargs = args, kwargs
            self._timer = threading.Timer(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the timer."""
        with self._lock:
            if self._timer is None:
                return
            self._timer.cancel()
            self._timer = None
            args, kwargs = self._args, self._kwargs
        self.func(*args, **kwargs)

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None or threading.current_thread() is not self._timer:
                return
            self._timer = None
            args, kwargs = self._args, self._kwargs
        try:
            self.func(*args, **kwargs)
        except Exception:
            logger.exception("Debounced call failed")
