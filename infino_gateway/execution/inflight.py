"""Tracking of pending asynchronous operations."""

import threading
from concurrent.futures import Future, wait
from typing import List, Optional, Set


class InFlightSet:
    """
    Process-wide set of pending futures.

    Futures remove themselves when they complete, fail or are cancelled.
    Used to let the process drain before shutdown.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Set[Future] = set()

    def add(self, future: Future) -> Future:
        with self._lock:
            self._pending.add(future)
        # Runs immediately if the future already finished
        future.add_done_callback(self.discard)
        return future

    def discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def snapshot(self) -> List[Future]:
        with self._lock:
            return list(self._pending)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for pending futures to finish.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            True if nothing is left in flight
        """
        pending = self.snapshot()
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done
