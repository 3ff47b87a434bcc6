"""Per-handle notification callbacks for a remote peripheral."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional

__all__ = ["InvalidLengthError", "Subscriber", "SubscribeFn"]

SubscribeFn = Callable[[bytes, Optional[Exception]], None]


class InvalidLengthError(ValueError):
    """Raised when a response holds records of an unexpected length."""

    def __init__(self, message: str = "invalid length") -> None:
        super().__init__(message)


class Subscriber:
    """A thread-safe map from attribute handle to notification callback."""

    def __init__(self) -> None:
        self._subs: Dict[int, SubscribeFn] = {}
        self._lock = threading.Lock()

    def subscribe(self, handle: int, fn: SubscribeFn) -> None:
        """Register ``fn`` for ``handle``, replacing any earlier one."""
        with self._lock:
            self._subs[handle] = fn

    def unsubscribe(self, handle: int) -> None:
        """Remove the callback for ``handle``, if there is one."""
        with self._lock:
            self._subs.pop(handle, None)

    def lookup(self, handle: int) -> Optional[SubscribeFn]:
        """Return the callback for ``handle``, or ``None``."""
        with self._lock:
            return self._subs.get(handle)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subs)