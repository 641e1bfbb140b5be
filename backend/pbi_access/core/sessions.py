"""
In-memory admin login sessions
"""

import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict

SESSION_COOKIE_NAME = "powerbi_session"
DEFAULT_SESSION_DURATION = timedelta(hours=8)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """
    Maps opaque session tokens to their expiry time

    Expired tokens are removed the first time they are looked up.
    The table is lost on restart.
    """

    def __init__(
        self,
        duration: timedelta = DEFAULT_SESSION_DURATION,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.duration = duration
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, datetime] = {}

    def create(self) -> str:
        """Issue a new random 256-bit token"""
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = self._clock() + self.duration
        return token

    def valid(self, token: str) -> bool:
        with self._lock:
            expiry = self._sessions.get(token)
            if expiry is None:
                return False
            if self._clock() >= expiry:
                del self._sessions[token]
                return False
            return True

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
