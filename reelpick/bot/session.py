"""In-memory per-user session storage with idle TTL."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from reelpick.core import SessionController


@dataclass
class UserSession:
    """A user's session controller plus bot-side bookkeeping."""

    user_id: str
    controller: SessionController
    created_at: float = field(default_factory=time.time)
    last_seen: float = field(default_factory=time.time)
    panel_message_id: int | None = None  # Preferences panel to edit in place


class SessionStore:
    """In-memory session store; sessions idle longer than the TTL are dropped."""

    def __init__(
        self,
        controller_factory: Callable[[], SessionController],
        ttl_seconds: int = 3600,
    ) -> None:
        """Initialize session store.

        Args:
            controller_factory: Builds a fresh controller for a new session
            ttl_seconds: Idle time-to-live for sessions (default 1 hour)
        """
        self._sessions: dict[str, UserSession] = {}
        self._factory = controller_factory
        self._ttl = ttl_seconds

    def get(self, user_id: str) -> UserSession | None:
        """Get session for user, returns None if expired or missing."""
        self._cleanup_expired()
        session = self._sessions.get(user_id)
        if session is not None:
            session.last_seen = time.time()
        return session

    def get_or_create(self, user_id: str) -> UserSession:
        """Get existing session or create a new one."""
        session = self.get(user_id)
        if session is None:
            session = UserSession(user_id=user_id, controller=self._factory())
            self._sessions[user_id] = session
        return session

    def clear(self, user_id: str) -> None:
        """Discard a user's session, including cached results."""
        self._sessions.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def _cleanup_expired(self) -> None:
        """Remove expired sessions."""
        now = time.time()
        expired = [
            uid for uid, s in self._sessions.items()
            if (now - s.last_seen) > self._ttl
        ]
        for uid in expired:
            del self._sessions[uid]
