# medocr/client/progress.py
import threading
from typing import Iterator, Optional


class ProgressCancelled(Exception):
    """Raised by producers that notice the consumer cancelled the run."""


class ProgressChannel:
    """
    Single-slot progress stream. A producer publishes fractions in [0, 1];
    a newer value overwrites one the consumer has not read yet, so the
    producer never blocks.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._value: Optional[float] = None
        self._pending = False
        self._closed = False
        self._cancelled = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def publish(self, fraction: float) -> None:
        with self._cond:
            if self._closed:
                return
            self._value = max(0.0, min(1.0, float(fraction)))
            self._pending = True
            self._cond.notify_all()

    def latest(self) -> Optional[float]:
        with self._cond:
            self._pending = False
            return self._value

    def wait(self, timeout: float | None = None) -> Optional[float]:
        """Block until an unread value arrives; None when closed or timed out."""
        with self._cond:
            self._cond.wait_for(lambda: self._pending or self._closed, timeout=timeout)
            if not self._pending:
                return None
            self._pending = False
            return self._value

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> None:
        with self._cond:
            self._cancelled = True
            self._closed = True
            self._cond.notify_all()

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise ProgressCancelled("OCR run cancelled")

    def __iter__(self) -> Iterator[float]:
        while True:
            value = self.wait()
            if value is None:
                return
            yield value
