"""Single-slot holder for the server-issued session token."""

import logging
from threading import Lock
from typing import Optional

logger = logging.getLogger(__name__)

SESSION_COOKIE = "BREEZESESSION"


class SessionSlot:
    """Lock-guarded holder of one session token.

    Every read and write takes the lock, so a reader never sees a torn value.
    Two calls that both renew the session race with last-write-wins outcome;
    concurrent logins on one client are not supported.

    Example:
        >>> slot = SessionSlot()
        >>> slot.set("breez1234")
        >>> slot.get()
        'breez1234'
        >>> slot.clear()
        >>> slot.is_set
        False
    """

    def __init__(self) -> None:
        self._token: Optional[str] = None
        self._lock = Lock()

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: Optional[str]) -> None:
        with self._lock:
            if token != self._token:
                logger.debug("Session token %s", "updated" if token else "cleared")
            self._token = token or None

    def clear(self) -> None:
        self.set(None)

    @property
    def is_set(self) -> bool:
        return self.get() is not None
