"""
Database Session Store
Stores sessions in a relational database through Tortoise ORM
"""
from typing import Optional, TYPE_CHECKING
from tortoise import fields
from tortoise.models import Model
from secure_session.session.store import SessionRecord, SessionStore

if TYPE_CHECKING:
    from secure_session.database import DatabaseManager


class SessionRecordModel(Model):
    """Session row: id, opaque payload, last-modified time"""

    id = fields.CharField(pk=True, max_length=255)
    payload = fields.BinaryField()
    last_modified = fields.FloatField(db_index=True)

    class Meta:
        table = "sessions"

    def __str__(self):
        return f"SessionRecordModel({self.id[:8]}...)"


class DatabaseSessionStore(SessionStore):
    """Database-backed session storage"""

    def __init__(self, manager: 'DatabaseManager' = None):
        """
        Initialize database session store

        Args:
            manager: Database manager, initialized lazily on first use.
                When omitted, Tortoise must already be initialized by the host.
        """
        self.manager = manager

    async def _ensure_initialized(self):
        """Initialize Tortoise on first use"""
        if self.manager is not None and not self.manager.is_initialized:
            await self.manager.init()

    async def read(self, session_id: str) -> Optional[SessionRecord]:
        """Read session row"""
        await self._ensure_initialized()

        row = await SessionRecordModel.get_or_none(id=session_id)
        if row is None:
            return None

        return SessionRecord(row.id, bytes(row.payload), row.last_modified)

    async def write(self, session_id: str, payload: bytes, timestamp: float) -> bool:
        """Insert or update session row"""
        await self._ensure_initialized()

        await SessionRecordModel.update_or_create(
            id=session_id,
            defaults={'payload': bytes(payload), 'last_modified': timestamp},
        )
        return True

    async def destroy(self, session_id: str) -> bool:
        """Delete session row"""
        await self._ensure_initialized()

        deleted = await SessionRecordModel.filter(id=session_id).delete()
        return deleted > 0

    async def gc(self, max_lifetime: int, now: Optional[float] = None) -> int:
        """Delete rows older than max_lifetime"""
        await self._ensure_initialized()

        threshold = self._threshold(max_lifetime, now)
        return await SessionRecordModel.filter(last_modified__lt=threshold).delete()

    async def exists(self, session_id: str) -> bool:
        """Check if session row exists"""
        await self._ensure_initialized()

        return await SessionRecordModel.filter(id=session_id).exists()
