import logging
import threading
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class Debouncer:
    """Run ``action`` once calls to ``trigger`` have been quiet for ``delay`` seconds.

    Only one call is ever pending: each ``trigger`` cancels the previous timer
    and replaces its arguments. Calls to ``action`` never overlap, and each one
    runs with the newest arguments available when it starts.
    """

    def __init__(self, delay: float, action: Callable[..., Any], name: str = "debounce") -> None:
        self.delay = delay
        self._action = action
        self._name = name
        self._lock = threading.Lock()
        self._run_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[Any, ...]] = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def trigger(self, *args: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = args
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.name = self._name
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Run the pending call now, on the calling thread.

        Waits for a call already running on the timer thread first. Returns
        False if nothing was pending.
        """
        with self._run_lock:
            args = self._take()
            if args is None:
                return False
            self._action(*args)
            return True

    def cancel(self) -> None:
        self._take()

    def _take(self) -> Optional[Tuple[Any, ...]]:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            args, self._pending = self._pending, None
            return args

    def _fire(self) -> None:
        with self._run_lock:
            with self._lock:
                # Superseded by a newer trigger or taken by flush() while waiting.
                if threading.current_thread() is not self._timer:
                    return
                self._timer = None
                args, self._pending = self._pending, None
            if args is None:
                return
            try:
                self._action(*args)
            except Exception:
                logger.exception("Debounced call %s failed", self._name)
