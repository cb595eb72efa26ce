"""In-memory registry of workflow sessions.

Sessions are never persisted. The registry drops sessions that have been
idle longer than the configured TTL and, once ``max_sessions`` is reached,
evicts the least recently used session that has no transform in flight.
"""

import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable

from rethread.pipeline import WorkflowController

logger = logging.getLogger(__name__)


class SessionLimitError(Exception):
    """Every session slot is held by a transform in flight."""


class SessionRegistry:
    """Least-recently-used map of session id → WorkflowController."""

    def __init__(
        self,
        max_sessions: int = 500,
        idle_ttl: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self._clock = clock
        # Oldest access first
        self._sessions: OrderedDict[str, tuple[WorkflowController, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, controller: WorkflowController) -> str:
        """Register a controller and return its new session id.

        Raises:
            SessionLimitError: If the registry is full and nothing can be evicted
        """
        self.expire_idle()
        while len(self._sessions) >= self.max_sessions:
            if not self._evict_oldest():
                raise SessionLimitError("Too many sessions are busy. Please try again shortly.")

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = (controller, self._clock())
        return session_id

    def get(self, session_id: str) -> WorkflowController | None:
        """Return the session's controller and mark it as recently used."""
        self.expire_idle()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        controller = entry[0]
        self._sessions[session_id] = (controller, self._clock())
        self._sessions.move_to_end(session_id)
        return controller

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def expire_idle(self) -> int:
        """Drop sessions idle longer than the TTL. Returns how many were dropped."""
        cutoff = self._clock() - self.idle_ttl
        expired = [
            session_id
            for session_id, (controller, last_seen) in self._sessions.items()
            if last_seen < cutoff and not controller.in_flight
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info(f"Expired {len(expired)} idle session(s)")
        return len(expired)

    def _evict_oldest(self) -> bool:
        for session_id, (controller, _) in self._sessions.items():
            if not controller.in_flight:
                del self._sessions[session_id]
                logger.info(f"Evicted least recently used session {session_id}")
                return True
        return False
