"""
Array Session Store
Stores sessions in memory (for testing only)
"""
from typing import Dict, Optional
from secure_session.session.store import SessionRecord, SessionStore


class ArraySessionStore(SessionStore):
    """
    In-memory session storage

    WARNING: Not suitable for production use.
    Sessions are lost when the application restarts.
    """

    def __init__(self):
        """Initialize array session store"""
        self._sessions: Dict[str, SessionRecord] = {}

    async def read(self, session_id: str) -> Optional[SessionRecord]:
        """Read session from memory"""
        return self._sessions.get(session_id)

    async def write(self, session_id: str, payload: bytes, timestamp: float) -> bool:
        """Write session to memory"""
        self._sessions[session_id] = SessionRecord(session_id, bytes(payload), timestamp)
        return True

    async def destroy(self, session_id: str) -> bool:
        """Delete session from memory"""
        return self._sessions.pop(session_id, None) is not None

    async def gc(self, max_lifetime: int, now: Optional[float] = None) -> int:
        """Remove sessions older than max_lifetime"""
        threshold = self._threshold(max_lifetime, now)
        expired = [
            session_id
            for session_id, record in self._sessions.items()
            if record.last_modified < threshold
        ]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)

    async def exists(self, session_id: str) -> bool:
        """Check if session exists in memory"""
        return session_id in self._sessions

    def clear_all(self):
        """Clear all sessions (useful for testing)"""
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
