"""
Session Store Interface
Base class for all session storage drivers
"""
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionRecord:
    """
    A persisted session

    The payload is opaque to the store (ciphertext when written by the
    session handler).
    """
    session_id: str
    payload: bytes
    last_modified: float


class SessionStore(ABC):
    """
    Base session store interface

    Stores know nothing about encryption; they keep (payload, timestamp)
    pairs keyed by session id. No locking is provided: the host serializes
    access to a single session id. I/O errors propagate to the caller.
    """

    @abstractmethod
    async def read(self, session_id: str) -> Optional[SessionRecord]:
        """
        Read session record from storage

        Args:
            session_id: Session identifier

        Returns:
            Session record, or None if no record exists
        """
        pass

    @abstractmethod
    async def write(self, session_id: str, payload: bytes, timestamp: float) -> bool:
        """
        Create or replace a session record

        Args:
            session_id: Session identifier
            payload: Opaque payload bytes (may be empty)
            timestamp: Last-modified time (epoch seconds)

        Returns:
            True if successful
        """
        pass

    @abstractmethod
    async def destroy(self, session_id: str) -> bool:
        """
        Delete session from storage

        Args:
            session_id: Session identifier

        Returns:
            True if a record existed and was removed
        """
        pass

    @abstractmethod
    async def gc(self, max_lifetime: int, now: Optional[float] = None) -> int:
        """
        Garbage collection - remove expired sessions

        Deletes every record whose last_modified is strictly older than
        ``now - max_lifetime``.

        Args:
            max_lifetime: Maximum session lifetime in seconds
            now: Reference time (default: current time)

        Returns:
            Number of sessions deleted
        """
        pass

    async def exists(self, session_id: str) -> bool:
        """
        Check if session exists

        Args:
            session_id: Session identifier

        Returns:
            True if session exists
        """
        return await self.read(session_id) is not None

    @staticmethod
    def _threshold(max_lifetime: int, now: Optional[float] = None) -> float:
        """Oldest last_modified that survives a gc sweep"""
        if now is None:
            now = time.time()
        return now - max_lifetime
