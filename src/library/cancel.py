"""Cooperative cancellation shared by every loop of a scan."""
from __future__ import annotations

import threading

from .errors import ScanCancelled


class CancellationToken:
    """A one-way flag polled at loop boundaries.

    Once cancelled a token stays cancelled. Create a new token per scan.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ScanCancelled()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<CancellationToken {state}>"
