"""
Redis Session Store
Stores session payloads in Redis with a sorted-set index for garbage collection
"""
from typing import Any, Optional
from secure_session.session.store import SessionRecord, SessionStore


class RedisSessionStore(SessionStore):
    """
    Redis-backed session storage (``redis.asyncio``)

    Layout:
        <prefix><session_id>   string key holding the payload
        <prefix>index          sorted set, member = session id, score = last_modified
    """

    def __init__(self, redis_url: str = None, prefix: str = None, client: Any = None):
        """
        Initialize Redis session store

        Args:
            redis_url: Redis connection URL (default: DEFAULT_REDIS_URL)
            prefix: Key prefix (default: DEFAULT_REDIS_PREFIX)
            client: Existing redis.asyncio client (takes precedence over redis_url)
        """
        from secure_session.defaults import DEFAULT_REDIS_URL, DEFAULT_REDIS_PREFIX
        from secure_session.exceptions import SessionConfigurationException

        # Payloads are ciphertext; a decoding client would corrupt them
        pool = getattr(client, 'connection_pool', None)
        if getattr(pool, 'connection_kwargs', {}).get('decode_responses'):
            raise SessionConfigurationException(
                "RedisSessionStore needs a client created with decode_responses=False"
            )

        self.redis_url = redis_url or DEFAULT_REDIS_URL
        self.prefix = prefix if prefix is not None else DEFAULT_REDIS_PREFIX
        self.redis = client

    @property
    def index_key(self) -> str:
        return f"{self.prefix}index"

    def _key(self, session_id: str) -> str:
        return f"{self.prefix}{session_id}"

    async def _ensure_connected(self):
        """Ensure connection to Redis"""
        if self.redis is None:
            from redis import asyncio as aioredis
            self.redis = aioredis.from_url(self.redis_url, decode_responses=False)

    async def disconnect(self):
        """Disconnect from Redis"""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None

    async def read(self, session_id: str) -> Optional[SessionRecord]:
        """Read session payload and its timestamp"""
        await self._ensure_connected()

        payload = await self.redis.get(self._key(session_id))
        if payload is None:
            return None

        score = await self.redis.zscore(self.index_key, session_id)
        last_modified = float(score) if score is not None else 0.0

        return SessionRecord(session_id, bytes(payload), last_modified)

    async def write(self, session_id: str, payload: bytes, timestamp: float) -> bool:
        """Write payload and index entry in one MULTI/EXEC"""
        await self._ensure_connected()

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self._key(session_id), bytes(payload))
            pipe.zadd(self.index_key, {session_id: timestamp})
            await pipe.execute()
        return True

    async def destroy(self, session_id: str) -> bool:
        """Delete session key and index entry"""
        await self._ensure_connected()

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(session_id))
            pipe.zrem(self.index_key, session_id)
            deleted, _ = await pipe.execute()
        return deleted > 0

    async def gc(self, max_lifetime: int, now: Optional[float] = None) -> int:
        """Delete sessions whose indexed timestamp is older than max_lifetime"""
        await self._ensure_connected()

        threshold = self._threshold(max_lifetime, now)
        # Exclusive upper bound: records exactly at the threshold survive
        members = await self.redis.zrangebyscore(self.index_key, '-inf', f'({threshold}')
        if not members:
            return 0

        session_ids = [m.decode('utf-8') if isinstance(m, bytes) else m for m in members]
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(*[self._key(sid) for sid in session_ids])
            pipe.zrem(self.index_key, *session_ids)
            deleted, _ = await pipe.execute()
        return deleted

    async def exists(self, session_id: str) -> bool:
        """Check if session key exists"""
        await self._ensure_connected()

        return await self.redis.exists(self._key(session_id)) > 0
