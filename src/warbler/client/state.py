"""Shared, observable record of the last failed page request.

UI code (or a test) subscribes once and is told about every failure::

    from warbler.client import error_state

    unsubscribe = error_state.subscribe(lambda state: print(state.error_code))
    ...
    unsubscribe()

Thread safety:
    The subscriber list is guarded by a Lock. Callbacks run outside the
    lock, in the thread that recorded the failure.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger("warbler.client")

type Subscriber = Callable[[ErrorState], object]


def error_code_for(response: httpx.Response) -> str:
    """``"error."`` plus the reason phrase, lower-cased, spaces to underscores.

    ``404 Not Found`` -> ``"error.not_found"``
    """
    reason = response.reason_phrase or f"status {response.status_code}"
    return "error." + "_".join(reason.lower().split())


class ErrorState:
    """The last failed response and its derived error code."""

    __slots__ = ("_lock", "_subscribers", "error_code", "last_response")

    def __init__(self) -> None:
        self.error_code: str | None = None
        self.last_response: httpx.Response | None = None
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<ErrorState error_code={self.error_code!r}>"

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call *callback* with this state after every change.

        Returns a function that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def record(self, response: httpx.Response) -> str:
        """Store a failed *response*, notify subscribers, return the error code."""
        self.error_code = error_code_for(response)
        self.last_response = response
        self._notify()
        return self.error_code

    def clear(self) -> None:
        self.error_code = None
        self.last_response = None
        self._notify()

    def _notify(self) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(self)


error_state = ErrorState()
"""Process-wide default state shared by every ``PageClient``."""
