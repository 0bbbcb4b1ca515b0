import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import OperationCancelledError


@dataclass
class OperationContext:
    """
    Deadline and cancellation signal carried by a single provider operation.

    The deadline is measured from creation on a monotonic clock. Setting ``cancel_event`` interrupts any wait that
    sleeps through :meth:`sleep`.
    """

    timeout: Optional[float] = None
    """Seconds the operation may take, ``None`` for no deadline."""

    cancel_event: threading.Event = field(default_factory=threading.Event)
    """Set by the caller to abandon the operation."""

    started_at: float = field(default_factory=time.monotonic)

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, never negative. ``None`` when there is no deadline."""
        if self.timeout is None:
            return None
        return max(0.0, self.started_at + self.timeout - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelledError("operation was cancelled")

    def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds`` or until cancelled, whichever comes first.

        :raises OperationCancelledError: if the cancel event is set before or during the sleep
        """
        if self.cancel_event.wait(timeout=max(0.0, seconds)):
            raise OperationCancelledError("operation was cancelled")
