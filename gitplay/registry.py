"""Per-user session registry."""

import threading
from collections.abc import Callable

from gitplay.config import PlaygroundConfig
from gitplay.logging import get_logger
from gitplay.session import PlaygroundSession

logger = get_logger("sessions")


class SessionRegistry:
    """
    Maps session keys (user IDs, tab IDs) to their own PlaygroundSession.

    The registry is safe to use from several threads. The sessions it hands
    out are not; a host must still send one command at a time per session.
    """

    def __init__(
        self,
        config: PlaygroundConfig | None = None,
        hash_factory: Callable[[], str] | None = None,
    ) -> None:
        self.config = config or PlaygroundConfig()
        self._hash_factory = hash_factory
        self._sessions: dict[str, PlaygroundSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> PlaygroundSession:
        """Return the session for `session_id`, creating it on first use."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = PlaygroundSession(
                    session_id=session_id,
                    config=self.config,
                    hash_factory=self._hash_factory,
                )
                self._sessions[session_id] = session
                logger.info("Created session %s", session_id)
            return session

    def reset(self, session_id: str) -> PlaygroundSession:
        """Start `session_id` over with a fresh repository, keeping its subscribers."""
        session = self.get(session_id)
        session.reset()
        return session

    def discard(self, session_id: str) -> bool:
        """
        Forget a session.

        Returns:
            True if a session was removed
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info("Discarded session %s", session_id)
        return True

    def session_ids(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
