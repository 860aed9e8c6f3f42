import threading
import time
from typing import Optional

from actions_inventory.globals.errors import RunCancelled


class CancellationToken:
    """
    Run-wide cancellation flag with an optional deadline.

    Checked before every API request. Once cancelled, or once the deadline
    has passed, every further check raises RunCancelled.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when the run has no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise RunCancelled("Audit run cancelled")

    def request_timeout(self, default: float) -> float:
        """Clamp a per-request timeout so no request outlives the run deadline."""
        self.raise_if_cancelled()
        remaining = self.remaining()
        if remaining is None:
            return default
        return min(default, remaining)
